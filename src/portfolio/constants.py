"""Chain constants and the static mint -> symbol table."""

from decimal import Decimal

from src.parsers.prices.base import WSOL_MINT

LAMPORTS_PER_SOL = Decimal(1_000_000_000)

# Balance changes at or below this (in SOL) are treated as fee-only / no-op entries
NEGLIGIBLE_DELTA_SOL = Decimal("0.000001")

DEFAULT_HISTORY_LIMIT = 10

# Unknown mints fall back to the first 4 characters, uppercased
TOKEN_SYMBOLS: dict[str, str] = {
    "JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN": "JUP",
    WSOL_MINT: "SOL",
    "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v": "USDC",
    "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB": "USDT",
}
