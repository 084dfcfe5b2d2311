"""Pydantic schemas for token lists and responses."""

from logo_proxy.schemas.common import (
    ErrorResponse,
    HealthCheck,
    ResponseBase,
)
from logo_proxy.schemas.token import (
    ChainAsset,
    LogoResolution,
    LogoSource,
    Token,
)

__all__ = [
    "ChainAsset",
    "ErrorResponse",
    "HealthCheck",
    "LogoResolution",
    "LogoSource",
    "ResponseBase",
    "Token",
]
