from datetime import datetime

from fastapi import APIRouter

from logo_proxy.core.config import settings
from logo_proxy.schemas.common import HealthCheck

router = APIRouter(tags=["System"])


@router.get("/health", response_model=HealthCheck)
async def health_check():
    """
    Health check endpoint.

    Upstream token lists are not probed; they are fetched per request.
    """
    return HealthCheck(
        name=settings.app_name,
        version=settings.app_version,
        timestamp=datetime.utcnow(),
        aggregated_sources=len(settings.aggregated_token_lists),
        chain_sources=len(settings.chain_asset_lists),
    )
