"""Solana JSON-RPC client: balances, token accounts, signatures, transactions.

Raw JSON-RPC over httpx. No retries: every failure surfaces as ProviderError
and the caller decides whether it is fatal (holdings) or skippable (history).
"""

from typing import Any

import httpx
from loguru import logger
from pydantic import ValidationError

from src.parsers.solana_rpc.exceptions import ProviderError
from src.parsers.solana_rpc.models import RpcSignature, RpcTokenAccount, RpcTransaction

# SPL Token program (legacy, non-2022)
TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"


class SolanaRpcClient:
    """Async HTTP client for a Solana JSON-RPC endpoint."""

    def __init__(self, rpc_url: str, timeout: float = 15.0) -> None:
        if not rpc_url:
            raise ValueError("RPC URL is empty")
        self._rpc_url = rpc_url
        self._client = httpx.AsyncClient(timeout=timeout)
        self._request_id = 0

    async def close(self) -> None:
        await self._client.aclose()

    async def _call(self, method: str, params: list[Any]) -> Any:
        """POST one JSON-RPC request and return its ``result``."""
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params,
        }
        try:
            resp = await self._client.post(self._rpc_url, json=payload)
        except httpx.HTTPError as e:
            raise ProviderError(f"{method}: {type(e).__name__}: {e}") from e

        if resp.status_code != 200:
            raise ProviderError(f"{method}: HTTP {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as e:
            raise ProviderError(f"{method}: invalid JSON body") from e

        if not isinstance(data, dict):
            raise ProviderError(f"{method}: unexpected response type {type(data).__name__}")
        if data.get("error"):
            raise ProviderError(f"{method}: RPC error {data['error']}")
        if "result" not in data:
            raise ProviderError(f"{method}: response has no result")
        return data["result"]

    async def get_health(self) -> bool:
        """True if the node answers ``getHealth`` with "ok"."""
        try:
            return await self._call("getHealth", []) == "ok"
        except ProviderError as e:
            logger.warning(f"[RPC] Health check failed: {e}")
            return False

    async def get_balance(self, address: str) -> int:
        """Native balance in lamports."""
        result = await self._call("getBalance", [address, {"commitment": "confirmed"}])
        try:
            return int(result["value"])
        except (TypeError, KeyError, ValueError) as e:
            raise ProviderError(f"getBalance: malformed result {result!r}") from e

    async def get_token_accounts_by_owner(
        self, owner: str, program_id: str = TOKEN_PROGRAM_ID
    ) -> list[RpcTokenAccount]:
        """All token accounts owned by ``owner`` under ``program_id``."""
        result = await self._call(
            "getTokenAccountsByOwner",
            [
                owner,
                {"programId": program_id},
                {"encoding": "jsonParsed", "commitment": "confirmed"},
            ],
        )
        value = result.get("value") if isinstance(result, dict) else None
        if not isinstance(value, list):
            raise ProviderError(f"getTokenAccountsByOwner: malformed result {result!r}")

        accounts = [_parse_token_account(entry) for entry in value if isinstance(entry, dict)]
        logger.debug(f"[RPC] {owner[:8]}: {len(accounts)} token accounts")
        return accounts

    async def get_signatures_for_address(
        self, address: str, *, limit: int = 10
    ) -> list[RpcSignature]:
        """Most recent signatures for an address, newest first."""
        result = await self._call(
            "getSignaturesForAddress",
            [address, {"limit": max(1, min(limit, 1000))}],
        )
        if not isinstance(result, list):
            raise ProviderError(f"getSignaturesForAddress: malformed result {result!r}")
        try:
            return [
                RpcSignature(
                    signature=sig["signature"],
                    slot=sig.get("slot") or 0,
                    block_time=sig.get("blockTime"),
                    err=sig.get("err"),
                )
                for sig in result
                if isinstance(sig, dict) and sig.get("signature")
            ]
        except ValidationError as e:
            raise ProviderError("getSignaturesForAddress: malformed signature entry") from e

    async def get_transaction(self, signature: str) -> RpcTransaction | None:
        """Fetch a parsed transaction. Returns None if the node doesn't have it."""
        result = await self._call(
            "getTransaction",
            [
                signature,
                {
                    "encoding": "jsonParsed",
                    "commitment": "confirmed",
                    "maxSupportedTransactionVersion": 0,
                },
            ],
        )
        if result is None:
            return None
        if not isinstance(result, dict):
            raise ProviderError(f"getTransaction: malformed result for {signature[:12]}")
        try:
            return _parse_transaction(signature, result)
        except (ValidationError, AttributeError) as e:
            raise ProviderError(f"getTransaction: malformed result for {signature[:12]}") from e


def _parse_token_account(entry: dict) -> RpcTokenAccount:
    """Parse one jsonParsed token account. Missing fields become empty values."""
    info: Any = entry
    for key in ("account", "data", "parsed", "info"):
        info = info.get(key) if isinstance(info, dict) else None
    if not isinstance(info, dict):
        info = {}
    token_amount = info.get("tokenAmount")
    if not isinstance(token_amount, dict):
        token_amount = {}

    ui_amount = token_amount.get("uiAmountString")
    if ui_amount is None and token_amount.get("uiAmount") is not None:
        ui_amount = token_amount["uiAmount"]
    if ui_amount is not None:
        ui_amount = str(ui_amount)

    try:
        decimals = int(token_amount.get("decimals", 0))
    except (TypeError, ValueError):
        decimals = 0

    return RpcTokenAccount(
        pubkey=str(entry.get("pubkey") or ""),
        mint=str(info.get("mint") or ""),
        decimals=decimals,
        ui_amount=ui_amount,
    )


def _parse_transaction(signature: str, data: dict) -> RpcTransaction:
    """Flatten getTransaction output into account keys + lamport balances.

    jsonParsed returns accountKeys as objects (including lookup-table keys);
    plain json returns strings and lists lookup-table keys in meta.loadedAddresses.
    """
    meta = data.get("meta") or {}
    message = (data.get("transaction") or {}).get("message") or {}

    raw_keys = message.get("accountKeys") or []
    parsed_keys = any(isinstance(k, dict) for k in raw_keys)
    keys = [k.get("pubkey", "") if isinstance(k, dict) else str(k) for k in raw_keys]

    if not parsed_keys:
        loaded = meta.get("loadedAddresses") or {}
        keys.extend(loaded.get("writable") or [])
        keys.extend(loaded.get("readonly") or [])

    return RpcTransaction(
        signature=signature,
        block_time=data.get("blockTime"),
        account_keys=keys,
        pre_balances=meta.get("preBalances"),
        post_balances=meta.get("postBalances"),
    )
