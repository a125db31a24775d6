from typing import Optional
import httpx
import logging
from pricebot.services.types import FetchResult, PriceSnapshot
from pricebot.config import Settings, get_settings

logger = logging.getLogger(__name__)

USER_AGENT = "dev-price-bot/1.0"

async def fetch_token_price(
    asset_id: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
    settings: Optional[Settings] = None,
) -> FetchResult:
    """
    Fetch the current USD price, 24h volume and 24h change for one asset.

    Uses CoinGecko's public simple price endpoint. One request, no retry,
    default httpx timeout. Never raises: every failure comes back as a
    FetchResult with an error kind so the caller decides what to do.

    Args:
        asset_id: CoinGecko coin id (e.g. "scout-protocol-token")
        client: Optional shared AsyncClient; a short-lived one is created otherwise
        settings: Optional settings override (base URL)

    Returns:
        FetchResult holding either a PriceSnapshot or an error kind
    """
    settings = settings or get_settings()
    url = f"{settings.coingecko_base_url.rstrip('/')}/simple/price"

    try:
        if client is not None:
            response = await client.get(url, params=_params(asset_id), headers={"User-Agent": USER_AGENT})
        else:
            async with httpx.AsyncClient() as owned:
                response = await owned.get(url, params=_params(asset_id), headers={"User-Agent": USER_AGENT})
    except httpx.HTTPError as e:
        logger.warning(f"CoinGecko request failed for {asset_id}: {e!r}")
        return FetchResult.failure("transport", str(e))

    return _parse_response(asset_id, response)

def fetch_token_price_sync(asset_id: str, settings: Optional[Settings] = None) -> FetchResult:
    """Blocking variant used by the diagnostic CLI."""
    settings = settings or get_settings()
    url = f"{settings.coingecko_base_url.rstrip('/')}/simple/price"

    try:
        with httpx.Client() as client:
            response = client.get(url, params=_params(asset_id), headers={"User-Agent": USER_AGENT})
    except httpx.HTTPError as e:
        logger.warning(f"CoinGecko request failed for {asset_id}: {e!r}")
        return FetchResult.failure("transport", str(e))

    return _parse_response(asset_id, response)

def _params(asset_id: str) -> dict:
    return {
        "ids": asset_id,
        "vs_currencies": "usd",
        "include_24hr_vol": "true",
        "include_24hr_change": "true",
    }

def _parse_response(asset_id: str, response: httpx.Response) -> FetchResult:
    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        if e.response.status_code == 429:
            logger.warning(f"CoinGecko rate limited for {asset_id}")
        else:
            logger.warning(f"CoinGecko API error for {asset_id}: {e.response.status_code}")
        return FetchResult.failure("http_status", str(e.response.status_code))

    try:
        data = response.json()
    except ValueError as e:
        logger.warning(f"CoinGecko returned non-JSON body for {asset_id}: {e}")
        return FetchResult.failure("malformed", "body is not JSON")

    entry = data.get(asset_id) if isinstance(data, dict) else None
    if not isinstance(entry, dict):
        logger.warning(f"CoinGecko payload has no entry for {asset_id}")
        return FetchResult.failure("malformed", f"missing {asset_id}")

    try:
        price = _to_float(entry["usd"])
        snapshot = PriceSnapshot(
            asset_id=asset_id,
            price=price,
            volume_24h=_to_float(entry.get("usd_24h_vol") or 0),
            change_24h=_to_float(entry.get("usd_24h_change") or 0),
        )
    except (KeyError, TypeError, ValueError) as e:
        logger.warning(f"Failed to parse CoinGecko price for {asset_id}: {e!r}")
        return FetchResult.failure("malformed", str(e))

    return FetchResult.success(snapshot)

def _to_float(value) -> float:
    # bool is an int subclass; a boolean price is a broken payload
    if isinstance(value, bool) or value is None:
        raise TypeError(f"not a number: {value!r}")
    return float(value)
