from typing import Mapping, Optional, Sequence
from urllib.parse import quote

from loguru import logger

from logo_proxy.constants import CUSTOM_IMAGES, TOKEN_REWRITES
from logo_proxy.core.config import settings
from logo_proxy.schemas.token import ChainAsset, LogoResolution, LogoSource
from logo_proxy.services.token_lists import TokenListService, token_list_service


class SymbolResolver:
    """
    Resolves a token symbol to a logo URL.

    Lookup order, first match wins:
    1. custom image table (no network)
    2. single-chain asset lists, in configured order, exact case first,
       then case-insensitive
    3. aggregated token lists, exact symbol match
    4. fallback image URL built from the lowercased symbol

    Failures of the single-chain lists propagate as TokenListError.
    """

    def __init__(
        self,
        token_lists: Optional[TokenListService] = None,
        chain_asset_urls: Optional[Sequence[str]] = None,
        rewrites: Mapping[str, str] = TOKEN_REWRITES,
        custom_images: Mapping[str, str] = CUSTOM_IMAGES,
        fallback_image_url: Optional[str] = None,
    ):
        self.token_lists = token_lists or token_list_service
        self.chain_asset_urls = list(
            settings.chain_asset_lists if chain_asset_urls is None else chain_asset_urls
        )
        self.rewrites = rewrites
        self.custom_images = custom_images
        self.fallback_image_url = fallback_image_url or settings.fallback_image_url

    def canonical_symbol(self, symbol: str) -> str:
        return self.rewrites.get(symbol, symbol)

    def fallback_url(self, canonical: str) -> str:
        return self.fallback_image_url.format(symbol=quote(canonical.lower(), safe=""))

    @staticmethod
    def _find_asset(assets: Sequence[ChainAsset], symbol: str) -> Optional[ChainAsset]:
        # Exact symbol wins over a case-insensitive hit anywhere in the list
        exact = next((a for a in assets if a.symbol == symbol), None)
        return exact or next((a for a in assets if a.matches(symbol)), None)

    async def resolve(self, symbol: str) -> LogoResolution:
        """
        Resolve a requested symbol.

        Args:
            symbol: Symbol as received from the caller

        Returns:
            LogoResolution, never None

        Raises:
            TokenListError: if a single-chain asset list cannot be fetched
        """
        canonical = self.canonical_symbol(symbol)
        if canonical != symbol:
            logger.debug(f"Rewrote {symbol} -> {canonical}")

        custom = self.custom_images.get(canonical)
        if custom:
            logger.info(f"{symbol}: custom image")
            return LogoResolution(
                symbol=symbol,
                canonical_symbol=canonical,
                logo_uri=custom,
                source=LogoSource.CUSTOM,
            )

        for url in self.chain_asset_urls:
            assets = await self.token_lists.fetch_chain_assets(url)
            match = self._find_asset(assets, canonical)
            if match:
                logger.info(f"{symbol}: matched {match.symbol} in {url}")
                return LogoResolution(
                    symbol=symbol,
                    canonical_symbol=canonical,
                    logo_uri=match.logo_uri,
                    source=LogoSource.CHAIN_LIST,
                    source_url=url,
                )

        tokens = await self.token_lists.fetch_aggregated_tokens()
        match = next((t for t in tokens if t.symbol == canonical), None)
        if match:
            logger.info(f"{symbol}: matched {match.address} on chain {match.chain_id}")
            return LogoResolution(
                symbol=symbol,
                canonical_symbol=canonical,
                logo_uri=match.logo_uri,
                source=LogoSource.AGGREGATED_LIST,
            )

        logger.info(f"{symbol}: no match, using fallback image")
        return LogoResolution(
            symbol=symbol,
            canonical_symbol=canonical,
            logo_uri=self.fallback_url(canonical),
            source=LogoSource.FALLBACK,
        )


# Global resolver instance
symbol_resolver = SymbolResolver()
