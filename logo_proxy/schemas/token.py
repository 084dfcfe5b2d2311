from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Token(BaseModel):
    """Entry of an aggregated multi-chain token list."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = ""
    address: str = ""
    symbol: str
    decimals: Optional[int] = None
    chain_id: int = Field(..., alias="chainId")
    logo_uri: str = Field(..., alias="logoURI")

    @property
    def dedup_key(self) -> tuple[int, str]:
        """Same token listed by several sources collapses on this key."""
        return self.chain_id, self.address


class ChainAsset(BaseModel):
    """Entry of a single-chain canonical asset list (Trust Wallet format)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    asset: str = ""
    type: str = ""
    address: str = ""
    name: str = ""
    symbol: str
    decimals: Optional[int] = None
    logo_uri: str = Field(..., alias="logoURI")

    def matches(self, symbol: str) -> bool:
        return self.symbol == symbol or self.symbol.lower() == symbol.lower()


class LogoSource(str, Enum):
    """Resolution stage that produced the logo URL."""

    CUSTOM = "custom"
    CHAIN_LIST = "chain_list"
    AGGREGATED_LIST = "aggregated_list"
    FALLBACK = "fallback"


class LogoResolution(BaseModel):
    """Resolved logo for a requested symbol."""

    symbol: str = Field(..., description="Symbol as requested")
    canonical_symbol: str = Field(..., description="Symbol after rewrites")
    logo_uri: str = Field(..., description="Image URL to proxy")
    source: LogoSource
    source_url: Optional[str] = Field(
        default=None, description="Token list that matched, if any"
    )
