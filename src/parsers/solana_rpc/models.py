"""Pydantic models for the Solana JSON-RPC responses we consume."""

from pydantic import BaseModel


class RpcTokenAccount(BaseModel):
    """One SPL token account from getTokenAccountsByOwner (jsonParsed)."""

    pubkey: str = ""
    mint: str = ""
    decimals: int = 0
    ui_amount: str | None = None  # decimal-adjusted, as returned by the node


class RpcSignature(BaseModel):
    """Signature entry from getSignaturesForAddress."""

    signature: str
    slot: int = 0
    block_time: int | None = None
    err: dict | str | None = None  # non-None means the tx failed on-chain


class RpcTransaction(BaseModel):
    """The subset of getTransaction needed to compute SOL balance deltas."""

    signature: str
    block_time: int | None = None
    account_keys: list[str] = []
    pre_balances: list[int] | None = None  # lamports, indexed like account_keys
    post_balances: list[int] | None = None
