"""Net-worth report: values wallets and prints a summary.

Values the addresses given on the command line, or every tracked wallet in
Redis when none are given. ``--history N`` adds the N most recent SOL
transfers per wallet.

Usage:
    poetry run python scripts/networth_report.py [ADDRESS ...] [--history 5]
"""

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from loguru import logger  # noqa: E402

from config.settings import settings  # noqa: E402
from src.db.redis import close_redis, create_redis  # noqa: E402
from src.db.tracked_wallets import TrackedWalletStore  # noqa: E402
from src.parsers.prices.base import PriceResolver, build_price_resolver  # noqa: E402
from src.parsers.solana_rpc.client import SolanaRpcClient  # noqa: E402
from src.portfolio.aggregate import value_wallets  # noqa: E402
from src.portfolio.constants import TOKEN_SYMBOLS  # noqa: E402
from src.portfolio.formatting import (  # noqa: E402
    format_amount,
    format_usd,
    pluralize_tokens,
    relative_time,
    truncate_address,
    truncate_signature,
)
from src.portfolio.history import recent_transactions  # noqa: E402
from src.portfolio.models import NetWorthSummary, Transaction, TxDirection  # noqa: E402
from src.utils.logger import setup_logger  # noqa: E402


def render_report(
    summary: NetWorthSummary,
    history: dict[str, list[Transaction]] | None = None,
    now: float | None = None,
) -> str:
    """Plain-text report for a net-worth summary."""
    lines = [f"Total net worth: {format_usd(summary.total_usd)}", ""]

    if not summary.wallets and not summary.failed:
        lines.append("No wallets tracked")

    for wallet in summary.wallets:
        lines.append(
            f"{truncate_address(wallet.address)}  {format_usd(wallet.total_usd)}  "
            f"{format_amount(wallet.sol_balance, 2)} SOL, {pluralize_tokens(len(wallet.tokens))}"
        )
        lines.append(
            f"    SOL    {format_amount(wallet.sol_balance):>16}  {format_usd(wallet.sol_usd_value)}"
        )
        for token in wallet.tokens:
            lines.append(
                f"    {token.symbol:<6} {format_amount(token.amount):>16}  {format_usd(token.usd_value)}"
            )
        for tx in (history or {}).get(wallet.address, []):
            sign = "+" if tx.direction is TxDirection.INBOUND else "-"
            lines.append(
                f"    {truncate_signature(tx.signature)}  {sign}{format_amount(tx.amount)} SOL  "
                f"{relative_time(tx.timestamp, now)}"
            )

    for address in summary.failed:
        lines.append(f"{truncate_address(address)}  unavailable")

    return "\n".join(lines)


async def run(addresses: list[str], history_limit: int) -> str:
    rpc: SolanaRpcClient | None = None
    resolver: PriceResolver | None = None
    redis = None
    try:
        rpc = SolanaRpcClient(settings.rpc_url, timeout=settings.rpc_timeout_sec)
        resolver = build_price_resolver(settings)
        if not addresses:
            redis = create_redis(settings.redis_url)
            addresses = await TrackedWalletStore(redis, settings.tracked_wallets_key).get_all()

        symbols = {**TOKEN_SYMBOLS, **settings.extra_token_symbols}
        summary = await value_wallets(rpc, resolver, addresses, symbols=symbols)

        history: dict[str, list[Transaction]] = {}
        if history_limit > 0:
            results = await asyncio.gather(
                *[
                    recent_transactions(
                        rpc, w.address, history_limit, negligible_delta=settings.negligible_delta_sol
                    )
                    for w in summary.wallets
                ]
            )
            history = {w.address: txs for w, txs in zip(summary.wallets, results)}

        return render_report(summary, history)
    finally:
        if rpc is not None:
            await rpc.close()
        if resolver is not None:
            await resolver.close()
        await close_redis(redis)


def main() -> None:
    parser = argparse.ArgumentParser(description="Print Solana wallet net worth")
    parser.add_argument("addresses", nargs="*", help="Wallet addresses (default: tracked list)")
    parser.add_argument("--history", type=int, default=0, help="Recent transfers per wallet")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    setup_logger(level="DEBUG" if args.verbose else "WARNING")
    try:
        print(asyncio.run(run(args.addresses, args.history)))
    except KeyboardInterrupt:
        logger.info("Interrupted")


if __name__ == "__main__":
    main()
