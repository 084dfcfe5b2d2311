"""
HTTP surface tests.

Run with: pytest tests/
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import BSC_LIST, ETH_LIST, chain_asset, mock_client
from logo_proxy.api.symbol import get_image_proxy, get_symbol_resolver
from logo_proxy.main import app
from logo_proxy.services.image_proxy import ImageProxy
from logo_proxy.services.resolver import SymbolResolver

PNG = b"\x89PNG\r\n\x1a\nfake-image"
WEBP = b"RIFF\x00\x00\x00\x00WEBPfake"


@pytest.fixture
def image_routes():
    return {
        "https://s.belt.fi/info/R4BELT@2x.png": httpx.Response(
            200, content=PNG, headers={"content-type": "image/png"}
        ),
        "https://assets.test/CAKE.png": httpx.Response(
            200, content=PNG, headers={"content-type": "image/png"}
        ),
        "https://farm.army/token/unknowntoken123.webp": httpx.Response(
            200, content=WEBP, headers={"content-type": "image/webp"}
        ),
    }


@pytest.fixture
def token_lists(fake_token_lists):
    return fake_token_lists(chain_assets={BSC_LIST: [chain_asset("CAKE", "0xcake")]})


@pytest.fixture
def client(token_lists, image_routes):
    resolver = SymbolResolver(token_lists=token_lists, chain_asset_urls=[BSC_LIST, ETH_LIST])
    proxy = ImageProxy(client=mock_client(image_routes))

    app.dependency_overrides[get_symbol_resolver] = lambda: resolver
    app.dependency_overrides[get_image_proxy] = lambda: proxy
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_custom_image_is_streamed(client, token_lists):
    response = client.get("/api/symbol/r4Belt")

    assert response.status_code == 200
    assert response.content == PNG
    assert response.headers["content-type"] == "image/png"
    assert response.headers["cache-control"] == "s-maxage=360000, stale-while-revalidate"
    assert token_lists.chain_calls == []


def test_chain_list_logo_is_streamed(client):
    response = client.get("/api/symbol/CAKE")

    assert response.status_code == 200
    assert response.content == PNG


def test_unknown_symbol_streams_fallback(client, token_lists):
    response = client.get("/api/symbol/UNKNOWNTOKEN123")

    assert response.status_code == 200
    assert response.content == WEBP
    assert response.headers["content-type"] == "image/webp"
    assert token_lists.aggregated_calls == 1


def test_upstream_status_is_passed_through(client):
    # no image route for this fallback URL, the mock host answers 404
    response = client.get("/api/symbol/NOPE")

    assert response.status_code == 404


def test_symbol_is_url_decoded(client, image_routes):
    image_routes["https://farm.army/token/usd+.webp"] = httpx.Response(200, content=WEBP)

    response = client.get("/api/symbol/USD%2B")

    assert response.status_code == 200
    assert response.content == WEBP


def test_image_host_failure_is_bad_gateway(client, image_routes):
    image_routes["https://assets.test/CAKE.png"] = httpx.ConnectError("connection refused")

    response = client.get("/api/symbol/CAKE")

    assert response.status_code == 502


def test_token_list_failure_is_bad_gateway(fake_token_lists, image_routes):
    resolver = SymbolResolver(
        token_lists=fake_token_lists(failing=[BSC_LIST]),
        chain_asset_urls=[BSC_LIST, ETH_LIST],
    )
    app.dependency_overrides[get_symbol_resolver] = lambda: resolver
    app.dependency_overrides[get_image_proxy] = lambda: ImageProxy(client=mock_client(image_routes))
    try:
        response = TestClient(app).get("/api/symbol/CAKE")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 502
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Upstream token list unavailable"


def test_resolve_returns_json(client):
    response = client.get("/api/symbol/BTC/resolve")

    assert response.status_code == 200
    assert response.headers["cache-control"] == "s-maxage=360000, stale-while-revalidate"
    body = response.json()
    assert body["success"] is True
    assert body["data"]["symbol"] == "BTC"
    assert body["data"]["canonical_symbol"] == "btcb"
    assert body["data"]["source"] == "fallback"
    assert body["data"]["logo_uri"] == "https://farm.army/token/btcb.webp"


def test_cors_headers_are_permissive(client):
    response = client.get("/api/symbol/r4Belt", headers={"Origin": "https://farm.example"})

    assert response.headers["access-control-allow-origin"] == "*"


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["chain_sources"] == 2
    assert body["aggregated_sources"] == 3


def test_ping(client):
    assert client.get("/ping").json() == {"status": "pong"}


def test_url_delimiters_in_symbol_stay_in_fallback_path(client, image_routes):
    image_routes["https://farm.army/token/a%23b.webp"] = httpx.Response(
        200, content=WEBP, headers={"content-type": "image/webp"}
    )

    response = client.get("/api/symbol/A%23B")

    assert response.status_code == 200
    assert response.content == WEBP


def test_control_character_in_symbol_is_not_a_server_error(client):
    # encoded fallback URL is valid; the mock image host has no route for it
    response = client.get("/api/symbol/FOO%0A")

    assert response.status_code == 404


def test_unrequestable_logo_url_is_bad_gateway(fake_token_lists, image_routes):
    resolver = SymbolResolver(
        token_lists=fake_token_lists(),
        chain_asset_urls=[BSC_LIST, ETH_LIST],
        custom_images={"BAD": "https://img.test/bad\nlogo.png"},
    )
    app.dependency_overrides[get_symbol_resolver] = lambda: resolver
    app.dependency_overrides[get_image_proxy] = lambda: ImageProxy(client=mock_client(image_routes))
    try:
        response = TestClient(app).get("/api/symbol/BAD")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 502
