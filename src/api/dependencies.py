"""FastAPI dependency injection: services from the registry."""

from __future__ import annotations

from fastapi import HTTPException, status

from src.api.registry import registry
from src.db.tracked_wallets import TrackedWalletStore
from src.parsers.prices.base import PriceResolver
from src.parsers.solana_rpc.client import SolanaRpcClient
from src.portfolio.constants import TOKEN_SYMBOLS


def _unavailable(name: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=f"{name} not initialized",
    )


def get_rpc() -> SolanaRpcClient:
    if registry.rpc is None:
        raise _unavailable("RPC client")
    return registry.rpc


def get_price_resolver() -> PriceResolver:
    if registry.price_resolver is None:
        raise _unavailable("Price resolver")
    return registry.price_resolver


def get_wallet_store() -> TrackedWalletStore:
    if registry.wallet_store is None:
        raise _unavailable("Wallet store")
    return registry.wallet_store


def get_token_symbols() -> dict[str, str]:
    return registry.token_symbols or TOKEN_SYMBOLS
