"""Display helpers. Pure: they format values and never round the stored ones."""

import time
from decimal import Decimal


def format_usd(value: Decimal | float) -> str:
    """``$1,234.57``"""
    return f"${Decimal(str(value)):,.2f}"


def format_amount(value: Decimal | float, places: int = 4) -> str:
    return f"{Decimal(str(value)):.{places}f}"


def truncate_address(address: str) -> str:
    if len(address) <= 8:
        return address
    return f"{address[:4]}...{address[-4:]}"


def truncate_signature(signature: str) -> str:
    if len(signature) <= 12:
        return signature
    return f"{signature[:6]}...{signature[-6:]}"


def pluralize_tokens(count: int) -> str:
    return f"{count} token{'' if count == 1 else 's'}"


def relative_time(timestamp: int, now: float | None = None) -> str:
    """Coarse age like ``3d ago``. A zero timestamp means unknown."""
    if not timestamp:
        return "unknown"
    now = time.time() if now is None else now
    seconds = max(int(now - timestamp), 0)
    minutes, hours, days = seconds // 60, seconds // 3600, seconds // 86400
    if days > 0:
        return f"{days}d ago"
    if hours > 0:
        return f"{hours}h ago"
    if minutes > 0:
        return f"{minutes}m ago"
    return f"{seconds}s ago"
