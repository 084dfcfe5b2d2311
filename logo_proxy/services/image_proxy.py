from typing import Optional

import httpx
from loguru import logger

from logo_proxy.core.config import settings


class ImageProxy:
    """Opens streaming requests to logo image URLs."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=settings.http_timeout,
                follow_redirects=True,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def open(self, url: str) -> httpx.Response:
        """
        Start fetching an image without reading the body.

        The caller owns the returned response and must close it with
        `aclose()` once the body has been streamed.

        Raises:
            httpx.HTTPError: if the upstream cannot be reached
            httpx.InvalidURL: if the logo URL cannot be requested
        """
        client = await self._get_client()
        try:
            request = client.build_request("GET", url)
            response = await client.send(request, stream=True)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Error fetching image {url}: {e}")
            raise

        if response.status_code >= 400:
            logger.warning(f"Image {url} returned {response.status_code}")
        return response


# Global image proxy instance
image_proxy = ImageProxy()
