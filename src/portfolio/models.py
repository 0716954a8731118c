"""Value objects returned by the portfolio operations.

All frozen: every call builds fresh instances, nothing is updated in place.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum


@dataclass(frozen=True)
class TokenHolding:
    """A non-zero SPL token balance. ``amount`` is already decimal-adjusted."""

    mint: str
    symbol: str
    amount: Decimal
    decimals: int
    usd_value: Decimal = Decimal("0")


@dataclass(frozen=True)
class WalletValuation:
    address: str
    sol_balance: Decimal
    tokens: tuple[TokenHolding, ...] = ()
    sol_price: Decimal = Decimal("0")
    sol_usd_value: Decimal = Decimal("0")
    total_usd: Decimal = Decimal("0")

    @property
    def tokens_usd_value(self) -> Decimal:
        return sum((t.usd_value for t in self.tokens), Decimal("0"))


class TxDirection(StrEnum):
    INBOUND = "inbound"
    OUTBOUND = "outbound"


@dataclass(frozen=True)
class Transaction:
    """SOL movement for one address within one transaction."""

    signature: str
    timestamp: int  # unix seconds, 0 if the node didn't report blockTime
    direction: TxDirection
    amount: Decimal  # always >= 0


@dataclass(frozen=True)
class NetWorthSummary:
    """Aggregate over tracked wallets. Wallets that failed to value are listed in ``failed``."""

    wallets: tuple[WalletValuation, ...] = ()
    failed: tuple[str, ...] = ()

    @property
    def total_usd(self) -> Decimal:
        return sum((w.total_usd for w in self.wallets), Decimal("0"))
