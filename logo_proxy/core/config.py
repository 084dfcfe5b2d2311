"""
Application Settings

Token list sources and proxy behaviour are configured from the environment.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from logo_proxy.constants import (
    AGGREGATED_TOKEN_LISTS,
    CHAIN_ASSET_LISTS,
    POLYGON_CHAIN_ID,
)


class Settings(BaseSettings):
    """
    Application settings.
    All configuration is loaded from environment variables or `.env`.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ======================
    # Application
    # ======================
    app_name: str = Field(default="Token Logo Proxy", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    env: str = Field(default="development", alias="ENV")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # ======================
    # API
    # ======================
    api_prefix: str = Field(default="/api", alias="API_PREFIX")
    cache_control: str = Field(
        default="s-maxage=360000, stale-while-revalidate",
        alias="CACHE_CONTROL",
    )

    # ======================
    # Token Lists
    # ======================
    aggregated_token_lists: List[str] = Field(
        default_factory=lambda: list(AGGREGATED_TOKEN_LISTS),
        alias="AGGREGATED_TOKEN_LISTS",
        description="Multi-chain token list URLs, fetched concurrently",
    )
    aggregated_chain_ids: List[int] = Field(
        default_factory=lambda: [POLYGON_CHAIN_ID],
        alias="AGGREGATED_CHAIN_IDS",
        description="Chain IDs kept from the aggregated token lists",
    )
    chain_asset_lists: List[str] = Field(
        default_factory=lambda: list(CHAIN_ASSET_LISTS),
        alias="CHAIN_ASSET_LISTS",
        description="Single-chain asset list URLs, searched in order",
    )

    # ======================
    # Fallback Image
    # ======================
    fallback_image_url: str = Field(
        default="https://farm.army/token/{symbol}.webp",
        alias="FALLBACK_IMAGE_URL",
        description="Template receiving the lowercased canonical symbol",
    )

    # ======================
    # HTTP Client
    # ======================
    # None disables the timeout entirely
    http_timeout: Optional[float] = Field(default=None, alias="HTTP_TIMEOUT")

    # ======================
    # Validators
    # ======================
    @field_validator("fallback_image_url")
    @classmethod
    def check_fallback_template(cls, v: str) -> str:
        if "{symbol}" not in v:
            raise ValueError("FALLBACK_IMAGE_URL must contain a {symbol} placeholder")
        return v

    @field_validator("api_prefix")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # ======================
    # Helpers
    # ======================

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env.lower() == "production"


settings = Settings()
