"""Recent SOL transfers for an address, classified from its own balance delta."""

import asyncio
from decimal import Decimal

from loguru import logger

from src.parsers.solana_rpc.client import SolanaRpcClient
from src.parsers.solana_rpc.models import RpcTransaction
from src.portfolio.constants import DEFAULT_HISTORY_LIMIT, LAMPORTS_PER_SOL, NEGLIGIBLE_DELTA_SOL
from src.portfolio.models import Transaction, TxDirection


def classify_transaction(
    tx: RpcTransaction,
    address: str,
    *,
    negligible_delta: Decimal = NEGLIGIBLE_DELTA_SOL,
) -> Transaction | None:
    """Reduce ``tx`` to ``address``'s perspective.

    None when balances are missing, the address isn't in the account list,
    or the SOL delta is within ``negligible_delta``.
    """
    if tx.pre_balances is None or tx.post_balances is None:
        return None
    try:
        index = tx.account_keys.index(address)
    except ValueError:
        return None
    if index >= len(tx.pre_balances) or index >= len(tx.post_balances):
        return None

    delta = Decimal(tx.post_balances[index] - tx.pre_balances[index]) / LAMPORTS_PER_SOL
    if abs(delta) <= negligible_delta:
        return None

    return Transaction(
        signature=tx.signature,
        timestamp=tx.block_time or 0,
        direction=TxDirection.INBOUND if delta > 0 else TxDirection.OUTBOUND,
        amount=abs(delta),
    )


async def recent_transactions(
    rpc: SolanaRpcClient,
    address: str,
    limit: int = DEFAULT_HISTORY_LIMIT,
    *,
    negligible_delta: Decimal = NEGLIGIBLE_DELTA_SOL,
) -> list[Transaction]:
    """Up to ``limit`` recent transactions touching ``address``, newest first.

    Best effort: returns [] if signatures can't be listed, and drops any
    signature whose record can't be fetched or classified.
    """
    if limit <= 0:
        return []

    try:
        signatures = await rpc.get_signatures_for_address(address, limit=limit)
    except Exception as e:
        logger.warning(f"[HISTORY] {address[:8]}: signature lookup failed: {e}")
        return []

    signatures = signatures[:limit]

    async def _load_one(signature: str) -> Transaction | None:
        try:
            tx = await rpc.get_transaction(signature)
        except Exception as e:
            logger.debug(f"[HISTORY] {signature[:12]}: fetch failed: {e}")
            return None
        if tx is None:
            logger.debug(f"[HISTORY] {signature[:12]}: not available")
            return None
        return classify_transaction(tx, address, negligible_delta=negligible_delta)

    results = await asyncio.gather(*[_load_one(s.signature) for s in signatures])
    transactions = [t for t in results if t is not None]

    logger.debug(
        f"[HISTORY] {address[:8]}: {len(transactions)}/{len(signatures)} transactions kept"
    )
    return transactions
