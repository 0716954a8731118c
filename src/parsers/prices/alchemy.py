"""Alchemy Prices API resolver: one request per mint, issued in parallel."""

import asyncio
from decimal import Decimal

import httpx
from loguru import logger

from src.parsers.prices.base import parse_price

BASE_URL = "https://api.g.alchemy.com/prices/v1"


class AlchemyPriceResolver:
    """Per-asset fan-out against ``/tokens/by-address``.

    A failed or unpriced mint resolves to None and is left out of the table;
    sibling requests are unaffected.
    """

    def __init__(
        self,
        api_key: str,
        network: str = "solana-mainnet",
        timeout: float = 10.0,
        base_url: str = BASE_URL,
    ) -> None:
        self._url = f"{base_url.rstrip('/')}/{api_key}/tokens/by-address"
        self._network = network
        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers={"Accept": "application/json", "Content-Type": "application/json"},
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def resolve_prices(self, asset_ids: set[str]) -> dict[str, Decimal]:
        if not asset_ids:
            return {}

        mints = sorted(asset_ids)
        results = await asyncio.gather(
            *[self._fetch_one(mint) for mint in mints],
            return_exceptions=True,
        )

        prices: dict[str, Decimal] = {}
        for mint, result in zip(mints, results):
            if isinstance(result, BaseException):
                logger.debug(f"[PRICES] Alchemy {mint[:8]} raised: {result}")
                continue
            if result is not None:
                prices[mint] = result

        logger.debug(f"[PRICES] Alchemy priced {len(prices)}/{len(mints)} assets")
        return prices

    async def _fetch_one(self, mint: str) -> Decimal | None:
        payload = {"addresses": [{"network": self._network, "address": mint}]}
        try:
            resp = await self._client.post(self._url, json=payload)
        except httpx.HTTPError as e:
            logger.debug(f"[PRICES] Alchemy {mint[:8]} {type(e).__name__}: {e}")
            return None

        if resp.status_code != 200:
            logger.debug(f"[PRICES] Alchemy HTTP {resp.status_code} for {mint[:8]}")
            return None

        try:
            data = resp.json()
        except ValueError:
            logger.debug(f"[PRICES] Alchemy invalid JSON for {mint[:8]}")
            return None

        return _parse_token_price(data)


def _parse_token_price(data: object) -> Decimal | None:
    """Extract ``data[0].prices[0].value`` from a by-address response."""
    if not isinstance(data, dict):
        return None
    entries = data.get("data")
    if not isinstance(entries, list) or not entries or not isinstance(entries[0], dict):
        return None
    quotes = entries[0].get("prices")
    if not isinstance(quotes, list) or not quotes or not isinstance(quotes[0], dict):
        return None
    return parse_price(quotes[0].get("value"))
