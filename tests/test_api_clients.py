"""Tests for the CoinGecko price client (with mocked responses)."""
import asyncio
import httpx
import pytest
from pricebot.config import Settings
from pricebot.services.coingecko_client import fetch_token_price, fetch_token_price_sync

ASSET = "scout-protocol-token"
BASE_URL = "https://api.coingecko.test/api/v3"

@pytest.fixture
def settings():
    return Settings(_env_file=None, coingecko_base_url=BASE_URL)

def _fetch(handler, settings):
    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await fetch_token_price(ASSET, client=client, settings=settings)
    return asyncio.run(run())

def test_coingecko_basic(settings):
    """Full payload is mapped onto a snapshot."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        return httpx.Response(200, json={
            ASSET: {"usd": 0.01234, "usd_24h_vol": 1234567.0, "usd_24h_change": -3.5}
        })

    result = _fetch(handler, settings)

    assert result.ok
    assert result.error is None
    assert result.snapshot.asset_id == ASSET
    assert result.snapshot.price == 0.01234
    assert result.snapshot.volume_24h == 1234567.0
    assert result.snapshot.change_24h == -3.5

    assert seen["url"].path == "/api/v3/simple/price"
    assert seen["url"].params["ids"] == ASSET
    assert seen["url"].params["vs_currencies"] == "usd"
    assert seen["url"].params["include_24hr_vol"] == "true"
    assert seen["url"].params["include_24hr_change"] == "true"

def test_coingecko_missing_optional_fields_default_to_zero(settings):
    result = _fetch(lambda request: httpx.Response(200, json={ASSET: {"usd": 123.45}}), settings)

    assert result.ok
    assert result.snapshot.price == 123.45
    assert result.snapshot.volume_24h == 0
    assert result.snapshot.change_24h == 0

def test_coingecko_null_optional_fields_default_to_zero(settings):
    payload = {ASSET: {"usd": 2, "usd_24h_vol": None, "usd_24h_change": None}}
    result = _fetch(lambda request: httpx.Response(200, json=payload), settings)

    assert result.ok
    assert result.snapshot.volume_24h == 0
    assert result.snapshot.change_24h == 0

def test_coingecko_rate_limit(settings):
    """429 is reported as an HTTP status failure, not raised."""
    result = _fetch(lambda request: httpx.Response(429), settings)

    assert not result.ok
    assert result.snapshot is None
    assert result.error == "http_status"
    assert result.detail == "429"

def test_coingecko_server_error(settings):
    result = _fetch(lambda request: httpx.Response(503, text="unavailable"), settings)

    assert result.error == "http_status"

def test_coingecko_transport_error(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    result = _fetch(handler, settings)

    assert not result.ok
    assert result.error == "transport"

def test_coingecko_unknown_asset(settings):
    """CoinGecko answers {} for ids it does not know."""
    result = _fetch(lambda request: httpx.Response(200, json={}), settings)

    assert result.error == "malformed"

def test_coingecko_missing_price(settings):
    result = _fetch(lambda request: httpx.Response(200, json={ASSET: {"usd_24h_vol": 10}}), settings)

    assert result.error == "malformed"

def test_coingecko_non_numeric_price(settings):
    result = _fetch(lambda request: httpx.Response(200, json={ASSET: {"usd": "n/a"}}), settings)

    assert result.error == "malformed"

def test_coingecko_non_json_body(settings):
    result = _fetch(lambda request: httpx.Response(200, text="<html>oops</html>"), settings)

    assert result.error == "malformed"

def test_coingecko_sync_client(settings, monkeypatch):
    """The CLI variant parses the same way."""
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={ASSET: {"usd": 1.5}}))
    real_client = httpx.Client
    monkeypatch.setattr(
        "pricebot.services.coingecko_client.httpx.Client",
        lambda **kwargs: real_client(transport=transport, **kwargs),
    )

    result = fetch_token_price_sync(ASSET, settings)

    assert result.ok
    assert result.snapshot.price == 1.5
