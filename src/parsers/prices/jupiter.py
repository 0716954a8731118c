"""Jupiter Price API resolver: one batched request with comma-joined ids."""

from decimal import Decimal

import httpx
from loguru import logger

from src.parsers.prices.base import parse_price

BASE_URL = "https://api.jup.ag/price/v2"
MAX_IDS_PER_CALL = 100


class JupiterPriceResolver:
    """Batched lookup. Total failure yields an empty table."""

    def __init__(self, api_key: str = "", base_url: str = BASE_URL, timeout: float = 10.0) -> None:
        self._base_url = base_url
        headers: dict[str, str] = {"Accept": "application/json"}
        if api_key:
            headers["x-api-key"] = api_key
        self._client = httpx.AsyncClient(timeout=timeout, headers=headers)

    async def close(self) -> None:
        await self._client.aclose()

    async def resolve_prices(self, asset_ids: set[str]) -> dict[str, Decimal]:
        if not asset_ids:
            return {}

        mints = sorted(asset_ids)
        prices: dict[str, Decimal] = {}
        for start in range(0, len(mints), MAX_IDS_PER_CALL):
            prices.update(await self._fetch_batch(mints[start : start + MAX_IDS_PER_CALL]))

        logger.debug(f"[PRICES] Jupiter priced {len(prices)}/{len(mints)} assets")
        return prices

    async def _fetch_batch(self, mints: list[str]) -> dict[str, Decimal]:
        try:
            resp = await self._client.get(self._base_url, params={"ids": ",".join(mints)})
        except Exception as e:
            # InvalidURL, StreamError and closed-client RuntimeError are not HTTPError
            logger.warning(f"[PRICES] Jupiter batch failed: {type(e).__name__}: {e}")
            return {}

        if resp.status_code != 200:
            logger.warning(f"[PRICES] Jupiter HTTP {resp.status_code}")
            return {}

        try:
            data = resp.json()
        except ValueError:
            logger.warning("[PRICES] Jupiter returned invalid JSON")
            return {}

        return _parse_prices(data, mints)


def _parse_prices(data: object, mints: list[str]) -> dict[str, Decimal]:
    """Read ``data[<mint>].price`` for each requested mint."""
    if not isinstance(data, dict) or not isinstance(data.get("data"), dict):
        return {}

    prices: dict[str, Decimal] = {}
    for mint in mints:
        token_data = data["data"].get(mint)
        if not isinstance(token_data, dict):
            continue
        price = parse_price(token_data.get("price"))
        if price is not None:
            prices[mint] = price
    return prices
