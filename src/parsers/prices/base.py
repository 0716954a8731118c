"""Price resolver interface and provider selection.

Two oracle strategies exist (Alchemy per-mint, Jupiter batched). Exactly one
is wired in at startup via ``settings.price_provider``; there is no fallback
chain between them.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Protocol

# Wrapped SOL mint, used as the price id of the native coin
WSOL_MINT = "So11111111111111111111111111111111111111112"


class PriceResolver(Protocol):
    """Best-effort USD unit prices. Must never raise.

    Ids the oracle cannot price are absent from the result (not zero).
    """

    async def resolve_prices(self, asset_ids: set[str]) -> dict[str, Decimal]: ...

    async def close(self) -> None: ...


def parse_price(raw: Any) -> Decimal | None:
    """Parse an oracle price field. None for missing, non-numeric, negative or non-finite."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        price = Decimal(str(raw))
    except (InvalidOperation, ValueError):
        return None
    if not price.is_finite() or price < 0:
        return None
    return price


def build_price_resolver(settings: Any) -> PriceResolver:
    """Construct the resolver named by ``settings.price_provider``."""
    provider = settings.price_provider.lower()
    if provider == "alchemy":
        from src.parsers.prices.alchemy import AlchemyPriceResolver

        return AlchemyPriceResolver(
            api_key=settings.alchemy_api_key,
            network=settings.alchemy_network,
            timeout=settings.price_timeout_sec,
        )
    if provider == "jupiter":
        from src.parsers.prices.jupiter import JupiterPriceResolver

        return JupiterPriceResolver(
            api_key=settings.jupiter_api_key,
            base_url=settings.jupiter_price_url,
            timeout=settings.price_timeout_sec,
        )
    raise ValueError(f"Unknown price provider: {settings.price_provider!r}")
