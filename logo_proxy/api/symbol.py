import httpx
from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import StreamingResponse
from loguru import logger
from starlette.background import BackgroundTask

from logo_proxy.core.config import settings
from logo_proxy.schemas.common import ResponseBase
from logo_proxy.schemas.token import LogoResolution
from logo_proxy.services.image_proxy import ImageProxy, image_proxy
from logo_proxy.services.resolver import SymbolResolver, symbol_resolver

router = APIRouter(prefix="/symbol", tags=["Symbol"])


def get_symbol_resolver() -> SymbolResolver:
    return symbol_resolver


def get_image_proxy() -> ImageProxy:
    return image_proxy


@router.get("/{token}")
async def get_symbol_logo(
    token: str,
    resolver: SymbolResolver = Depends(get_symbol_resolver),
    proxy: ImageProxy = Depends(get_image_proxy),
):
    """
    Stream the logo image of a token symbol.

    Status code and content type are passed through from the image host.

    Args:
        token: Token symbol, e.g. `CAKE`
    """
    resolution = await resolver.resolve(token)

    try:
        upstream = await proxy.open(resolution.logo_uri)
    except (httpx.HTTPError, httpx.InvalidURL):
        raise HTTPException(status_code=502, detail="Image host unavailable")

    return StreamingResponse(
        upstream.aiter_bytes(),
        status_code=upstream.status_code,
        media_type=upstream.headers.get("content-type"),
        headers={"Cache-Control": settings.cache_control},
        background=BackgroundTask(upstream.aclose),
    )


@router.get("/{token}/resolve", response_model=ResponseBase[LogoResolution])
async def resolve_symbol_logo(
    token: str,
    response: Response,
    resolver: SymbolResolver = Depends(get_symbol_resolver),
):
    """Resolve the logo URL of a token symbol without fetching the image."""
    resolution = await resolver.resolve(token)
    logger.debug(f"Resolved {token} via {resolution.source.value}")

    response.headers["Cache-Control"] = settings.cache_control
    return ResponseBase(success=True, data=resolution)
