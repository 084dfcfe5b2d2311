import httpx
import pytest

from logo_proxy.schemas.token import ChainAsset, Token
from logo_proxy.services.token_lists import TokenListError

BSC_LIST = "https://assets.test/smartchain/tokenlist.json"
ETH_LIST = "https://assets.test/ethereum/tokenlist.json"


def chain_asset(symbol, address="0x0", logo=None):
    return {
        "asset": f"c20000714_t{address}",
        "type": "BEP20",
        "address": address,
        "name": symbol,
        "symbol": symbol,
        "decimals": 18,
        "logoURI": logo or f"https://assets.test/{symbol}.png",
    }


def list_token(symbol, address, chain_id=137, logo=None):
    return {
        "name": symbol,
        "address": address,
        "symbol": symbol,
        "decimals": 18,
        "chainId": chain_id,
        "logoURI": logo or f"https://lists.test/{chain_id}/{address}.png",
    }


class FakeTokenLists:
    """Token list service double recording every fetch."""

    def __init__(self, chain_assets=None, aggregated=None, failing=()):
        self.chain_assets = chain_assets or {}
        self.aggregated = aggregated or []
        self.failing = set(failing)
        self.chain_calls = []
        self.aggregated_calls = 0

    async def fetch_chain_assets(self, url):
        self.chain_calls.append(url)
        if url in self.failing:
            raise TokenListError(url, "connection refused")
        return [ChainAsset.model_validate(a) for a in self.chain_assets.get(url, [])]

    async def fetch_aggregated_tokens(self):
        self.aggregated_calls += 1
        return [Token.model_validate(t) for t in self.aggregated]


def mock_client(routes):
    """
    AsyncClient answering from a url -> payload mapping.

    Payloads: dict/list are served as JSON, int as a bare status code,
    bytes as a raw body, exceptions are raised. Unknown URLs get a 404.
    """
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        calls.append(url)
        payload = routes.get(url)
        if payload is None:
            return httpx.Response(404)
        if isinstance(payload, Exception):
            raise payload
        if isinstance(payload, int):
            return httpx.Response(payload)
        if isinstance(payload, bytes):
            return httpx.Response(200, content=payload)
        if isinstance(payload, httpx.Response):
            return payload
        return httpx.Response(200, json=payload)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client.calls = calls
    return client


@pytest.fixture
def fake_token_lists():
    return FakeTokenLists
