"""Balance & holdings fetcher: native SOL plus non-zero SPL token balances."""

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation

from loguru import logger

from src.parsers.solana_rpc.client import TOKEN_PROGRAM_ID, SolanaRpcClient
from src.parsers.solana_rpc.models import RpcTokenAccount
from src.portfolio.address import validate_address
from src.portfolio.constants import LAMPORTS_PER_SOL, TOKEN_SYMBOLS
from src.portfolio.models import TokenHolding


def resolve_symbol(mint: str, symbols: Mapping[str, str] = TOKEN_SYMBOLS) -> str:
    """Known symbol for ``mint``, else its first 4 characters uppercased."""
    return symbols.get(mint) or mint[:4].upper()


def _parse_amount(raw: str | None) -> Decimal | None:
    if raw is None:
        return None
    try:
        amount = Decimal(raw)
    except (InvalidOperation, ValueError):
        return None
    if not amount.is_finite() or amount <= 0:
        return None
    return amount


def _to_holding(account: RpcTokenAccount, symbols: Mapping[str, str]) -> TokenHolding | None:
    amount = _parse_amount(account.ui_amount)
    if amount is None or not account.mint:
        return None
    return TokenHolding(
        mint=account.mint,
        symbol=resolve_symbol(account.mint, symbols),
        amount=amount,
        decimals=account.decimals,
    )


async def fetch_holdings(
    rpc: SolanaRpcClient,
    address: str,
    *,
    symbols: Mapping[str, str] = TOKEN_SYMBOLS,
) -> tuple[Decimal, list[TokenHolding]]:
    """Fetch SOL balance and token holdings for ``address``.

    Raises InvalidAddressError for a malformed address and ProviderError if
    either RPC call fails. No partial result is returned.
    """
    validate_address(address)

    lamports = await rpc.get_balance(address)
    sol_balance = Decimal(lamports) / LAMPORTS_PER_SOL

    accounts = await rpc.get_token_accounts_by_owner(address, TOKEN_PROGRAM_ID)
    holdings = [h for h in (_to_holding(a, symbols) for a in accounts) if h is not None]

    logger.debug(
        f"[HOLDINGS] {address[:8]}: {sol_balance} SOL, "
        f"{len(holdings)}/{len(accounts)} token accounts with balance"
    )
    return sol_balance, holdings
