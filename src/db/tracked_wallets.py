"""Tracked wallet list: one Redis key holding a JSON array of addresses."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Protocol

from loguru import logger

from src.portfolio.address import validate_address
from src.portfolio.exceptions import DuplicateAddressError

DEFAULT_KEY = "solana_wallets"


class _KeyValue(Protocol):
    async def get(self, name: str) -> Any: ...

    async def set(self, name: str, value: str) -> Any: ...

    async def delete(self, *names: str) -> Any: ...


class TrackedWalletStore:
    """Ordered list of tracked addresses (insertion order, no duplicates).

    Mutations are read-modify-write on a single key, so they are serialised
    through a per-store lock. One store instance per process.
    """

    def __init__(self, redis: _KeyValue, key: str = DEFAULT_KEY) -> None:
        self._redis = redis
        self._key = key
        self._lock = asyncio.Lock()

    async def get_all(self) -> list[str]:
        raw = await self._redis.get(self._key)
        if not raw:
            return []
        if isinstance(raw, bytes):
            raw = raw.decode()
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"[WALLETS] Corrupt value under {self._key!r}, treating as empty")
            return []
        if not isinstance(data, list):
            return []
        return [a for a in data if isinstance(a, str)]

    async def set_all(self, addresses: list[str]) -> None:
        await self._redis.set(self._key, json.dumps(list(addresses)))

    async def add(self, address: str) -> str:
        """Validate and append. Returns the stored (trimmed) address."""
        address = validate_address(address.strip())
        async with self._lock:
            addresses = await self.get_all()
            if address in addresses:
                raise DuplicateAddressError(address)
            addresses.append(address)
            await self.set_all(addresses)
        logger.info(f"[WALLETS] Tracking {address[:8]} ({len(addresses)} total)")
        return address

    async def remove(self, address: str) -> bool:
        """Drop ``address``. Returns False if it wasn't tracked."""
        async with self._lock:
            addresses = await self.get_all()
            if address not in addresses:
                return False
            await self.set_all([a for a in addresses if a != address])
        logger.info(f"[WALLETS] Stopped tracking {address[:8]}")
        return True

    async def clear(self) -> None:
        async with self._lock:
            await self._redis.delete(self._key)

    async def ping(self) -> bool:
        ping = getattr(self._redis, "ping", None)
        if ping is None:
            return False
        try:
            return bool(await ping())
        except Exception:
            return False
