"""Response/request bodies. Values are unrounded; clients format for display."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from src.portfolio.models import NetWorthSummary, Transaction, WalletValuation


class AddWalletRequest(BaseModel):
    address: str = Field(..., min_length=1, examples=["9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM"])


class TrackedWalletsResponse(BaseModel):
    addresses: list[str]


class TokenHoldingOut(BaseModel):
    mint: str
    symbol: str
    amount: Decimal
    decimals: int
    usd_value: Decimal


class WalletValuationOut(BaseModel):
    address: str
    sol_balance: Decimal
    sol_price: Decimal
    sol_usd_value: Decimal
    tokens: list[TokenHoldingOut]
    token_count: int
    total_usd: Decimal

    @classmethod
    def from_valuation(cls, v: WalletValuation) -> WalletValuationOut:
        return cls(
            address=v.address,
            sol_balance=v.sol_balance,
            sol_price=v.sol_price,
            sol_usd_value=v.sol_usd_value,
            tokens=[
                TokenHoldingOut(
                    mint=t.mint,
                    symbol=t.symbol,
                    amount=t.amount,
                    decimals=t.decimals,
                    usd_value=t.usd_value,
                )
                for t in v.tokens
            ],
            token_count=len(v.tokens),
            total_usd=v.total_usd,
        )


class NetWorthOut(BaseModel):
    total_usd: Decimal
    wallets: list[WalletValuationOut]
    failed: list[str]

    @classmethod
    def from_summary(cls, s: NetWorthSummary) -> NetWorthOut:
        return cls(
            total_usd=s.total_usd,
            wallets=[WalletValuationOut.from_valuation(w) for w in s.wallets],
            failed=list(s.failed),
        )


class TransactionOut(BaseModel):
    signature: str
    timestamp: int
    direction: str
    amount: Decimal

    @classmethod
    def from_transaction(cls, t: Transaction) -> TransactionOut:
        return cls(
            signature=t.signature,
            timestamp=t.timestamp,
            direction=t.direction.value,
            amount=t.amount,
        )


class TransactionsResponse(BaseModel):
    address: str
    transactions: list[TransactionOut]
