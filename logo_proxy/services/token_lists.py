import asyncio
from typing import Any, Iterable, List, Optional, Sequence

import httpx
from loguru import logger
from pydantic import BaseModel, ValidationError

from logo_proxy.core.config import settings
from logo_proxy.schemas.token import ChainAsset, Token


class TokenListError(Exception):
    """Raised when a single-chain asset list cannot be loaded."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Token list {url} unavailable: {reason}")


def _parse_entries(model: type[BaseModel], entries: Iterable[Any]) -> list:
    """Validate list entries, skipping the ones that do not fit the shape."""
    parsed = []
    for entry in entries:
        try:
            parsed.append(model.model_validate(entry))
        except ValidationError:
            continue
    return parsed


def dedupe_tokens(tokens: Iterable[Token]) -> List[Token]:
    """Drop repeated (chainId, address) entries, keeping the first seen."""
    seen: set[tuple[int, str]] = set()
    unique: List[Token] = []
    for token in tokens:
        if token.dedup_key in seen:
            continue
        seen.add(token.dedup_key)
        unique.append(token)
    return unique


class TokenListService:
    """
    Fetches token lists over HTTP.

    Two kinds of sources are supported:
    - single-chain asset lists (Trust Wallet format), where any failure is
      raised as TokenListError
    - aggregated multi-chain token lists, fetched concurrently, where a failing
      source simply contributes no tokens
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        aggregated_urls: Optional[Sequence[str]] = None,
        chain_ids: Optional[Iterable[int]] = None,
    ):
        self._client = client
        self.aggregated_urls: List[str] = list(
            settings.aggregated_token_lists if aggregated_urls is None else aggregated_urls
        )
        self.chain_ids: frozenset[int] = frozenset(
            settings.aggregated_chain_ids if chain_ids is None else chain_ids
        )

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

    async def _get_tokens_array(self, url: str) -> Any:
        client = await self._get_client()
        response = await client.get(url)
        response.raise_for_status()
        data = response.json()
        return data.get("tokens") if isinstance(data, dict) else None

    # ===============================
    # Single-chain asset lists
    # ===============================

    async def fetch_chain_assets(self, url: str) -> List[ChainAsset]:
        """
        Fetch a single-chain asset list.

        Raises:
            TokenListError: on network errors, non-2xx responses or a body
                without a `tokens` array
        """
        try:
            entries = await self._get_tokens_array(url)
        except httpx.HTTPError as e:
            logger.error(f"HTTP error fetching asset list {url}: {e}")
            raise TokenListError(url, str(e)) from e
        except ValueError as e:
            logger.error(f"Invalid JSON in asset list {url}: {e}")
            raise TokenListError(url, "invalid JSON body") from e

        if not isinstance(entries, list):
            logger.error(f"Asset list {url} has no tokens array")
            raise TokenListError(url, "missing tokens array")

        assets = _parse_entries(ChainAsset, entries)
        logger.debug(f"Loaded {len(assets)} assets from {url}")
        return assets

    # ===============================
    # Aggregated token lists
    # ===============================

    async def _fetch_aggregated_source(self, url: str) -> List[Token]:
        try:
            entries = await self._get_tokens_array(url)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Skipping token list {url}: {e}")
            return []

        if not isinstance(entries, list):
            logger.warning(f"Skipping token list {url}: no tokens array")
            return []

        tokens = [
            token
            for token in _parse_entries(Token, entries)
            if token.chain_id in self.chain_ids
        ]
        logger.debug(f"Loaded {len(tokens)} tokens from {url}")
        return tokens

    async def fetch_aggregated_tokens(self) -> List[Token]:
        """
        Fetch every aggregated source concurrently and merge the results.

        Entries outside the chain allow-list are dropped and duplicates are
        collapsed by (chainId, address), preserving source order.
        """
        results = await asyncio.gather(
            *(self._fetch_aggregated_source(url) for url in self.aggregated_urls)
        )
        return dedupe_tokens(token for tokens in results for token in tokens)


# Global token list service instance
token_list_service = TokenListService()
