from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

import logo_proxy.utils.logging  # noqa: F401
from logo_proxy.api import symbol, system
from logo_proxy.core.config import settings
from logo_proxy.schemas.common import ErrorResponse
from logo_proxy.services.image_proxy import image_proxy
from logo_proxy.services.token_lists import TokenListError, token_list_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    Shutdown closes the HTTP clients used for token lists and images.
    """
    logger.info(
        f"Starting {settings.app_name} with "
        f"{len(settings.chain_asset_lists)} asset lists and "
        f"{len(settings.aggregated_token_lists)} aggregated token lists"
    )

    yield

    logger.info("Shutting down application...")
    await token_list_service.close()
    await image_proxy.close()
    logger.info("Application shutdown complete")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Token symbol to logo image proxy",
    lifespan=lifespan,
)

# Logos are embedded from any origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception handlers
@app.exception_handler(TokenListError)
async def token_list_exception_handler(request: Request, exc: TokenListError):
    """Asset list failures surface as a bad gateway."""
    logger.error(f"Resolution failed for {request.url.path}: {exc}")
    error = ErrorResponse(
        error="Upstream token list unavailable",
        detail=str(exc) if settings.debug else None,
    )
    return JSONResponse(status_code=502, content=error.model_dump(mode="json"))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    logger.error(f"Unhandled exception: {exc}")
    error = ErrorResponse(
        error="Internal server error",
        detail=str(exc) if settings.debug else None,
    )
    return JSONResponse(status_code=500, content=error.model_dump(mode="json"))


# Include routers
app.include_router(symbol.router, prefix=settings.api_prefix)
app.include_router(system.router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "status": "running",
        "docs": "/docs",
    }


@app.get("/ping")
async def ping():
    """Simple ping endpoint."""
    return {"status": "pong"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "logo_proxy.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
