"""Net worth across all tracked wallets."""

import asyncio
from collections.abc import Mapping, Sequence

from loguru import logger

from src.db.tracked_wallets import TrackedWalletStore
from src.parsers.prices.base import PriceResolver
from src.parsers.solana_rpc.client import SolanaRpcClient
from src.portfolio.constants import TOKEN_SYMBOLS
from src.portfolio.models import NetWorthSummary, WalletValuation
from src.portfolio.valuation import value_wallet


async def value_wallets(
    rpc: SolanaRpcClient,
    resolver: PriceResolver,
    addresses: Sequence[str],
    *,
    symbols: Mapping[str, str] = TOKEN_SYMBOLS,
) -> NetWorthSummary:
    """Value every address concurrently. A wallet that fails is omitted, not fatal."""
    if not addresses:
        return NetWorthSummary()

    results = await asyncio.gather(
        *[value_wallet(rpc, resolver, addr, symbols=symbols) for addr in addresses],
        return_exceptions=True,
    )

    wallets: list[WalletValuation] = []
    failed: list[str] = []
    for addr, result in zip(addresses, results):
        if isinstance(result, WalletValuation):
            wallets.append(result)
        else:
            logger.warning(f"[NETWORTH] Omitting {addr[:8]}: {result}")
            failed.append(addr)

    summary = NetWorthSummary(wallets=tuple(wallets), failed=tuple(failed))
    logger.info(
        f"[NETWORTH] {len(wallets)}/{len(addresses)} wallets valued, "
        f"total ${summary.total_usd:.2f}"
    )
    return summary


async def load_net_worth(
    store: TrackedWalletStore,
    rpc: SolanaRpcClient,
    resolver: PriceResolver,
    *,
    symbols: Mapping[str, str] = TOKEN_SYMBOLS,
) -> NetWorthSummary:
    """Read the tracked list and value it."""
    addresses = await store.get_all()
    return await value_wallets(rpc, resolver, addresses, symbols=symbols)
