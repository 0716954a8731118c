"""Runtime services shared by the API endpoints.

Populated once by the app lifespan. Endpoints reach them through
``src.api.dependencies`` so tests can override each one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from redis.asyncio import Redis

    from src.db.tracked_wallets import TrackedWalletStore
    from src.parsers.prices.base import PriceResolver
    from src.parsers.solana_rpc.client import SolanaRpcClient


class ServiceRegistry:
    """Holds references to runtime objects for API access."""

    rpc: SolanaRpcClient | None = None
    price_resolver: PriceResolver | None = None
    wallet_store: TrackedWalletStore | None = None
    redis: Redis | None = None
    token_symbols: dict[str, str] = {}


registry = ServiceRegistry()
