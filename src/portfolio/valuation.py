"""Wallet valuation: holdings x prices, summed into a USD total."""

from collections.abc import Mapping
from dataclasses import replace
from decimal import Decimal

from loguru import logger

from src.parsers.prices.base import WSOL_MINT, PriceResolver
from src.parsers.solana_rpc.client import SolanaRpcClient
from src.parsers.solana_rpc.exceptions import ProviderError
from src.portfolio.constants import TOKEN_SYMBOLS
from src.portfolio.exceptions import InvalidAddressError, ValuationError
from src.portfolio.holdings import fetch_holdings
from src.portfolio.models import WalletValuation

ZERO = Decimal("0")


async def value_wallet(
    rpc: SolanaRpcClient,
    resolver: PriceResolver,
    address: str,
    *,
    symbols: Mapping[str, str] = TOKEN_SYMBOLS,
) -> WalletValuation:
    """Value one wallet in USD.

    Raises ValuationError if holdings can't be fetched. Missing prices never
    fail the call: an unpriced asset contributes $0.
    """
    try:
        sol_balance, holdings = await fetch_holdings(rpc, address, symbols=symbols)
    except (InvalidAddressError, ProviderError) as e:
        logger.warning(f"[VALUATION] {address[:8]}: holdings fetch failed: {e}")
        raise ValuationError(address, e) from e

    asset_ids = {WSOL_MINT} | {h.mint for h in holdings}
    prices = await resolver.resolve_prices(asset_ids)

    sol_price = prices.get(WSOL_MINT, ZERO)
    sol_usd = sol_balance * sol_price

    priced = tuple(replace(h, usd_value=h.amount * prices.get(h.mint, ZERO)) for h in holdings)
    total = sol_usd + sum((h.usd_value for h in priced), ZERO)

    unpriced = [h.symbol for h in priced if h.mint not in prices]
    if unpriced:
        logger.debug(f"[VALUATION] {address[:8]}: no price for {', '.join(unpriced)}")
    logger.info(
        f"[VALUATION] {address[:8]}: {sol_balance} SOL @ ${sol_price}, "
        f"{len(priced)} tokens, total ${total:.2f}"
    )

    return WalletValuation(
        address=address,
        sol_balance=sol_balance,
        tokens=priced,
        sol_price=sol_price,
        sol_usd_value=sol_usd,
        total_usd=total,
    )
