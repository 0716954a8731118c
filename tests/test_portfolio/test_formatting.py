"""Tests for display helpers."""

from decimal import Decimal

from src.portfolio.formatting import (
    format_amount,
    format_usd,
    pluralize_tokens,
    relative_time,
    truncate_address,
    truncate_signature,
)


def test_format_usd():
    assert format_usd(Decimal("1234.567")) == "$1,234.57"
    assert format_usd(0) == "$0.00"
    assert format_usd(0.5) == "$0.50"


def test_format_amount_does_not_touch_value():
    value = Decimal("1.23456789")
    assert format_amount(value) == "1.2346"
    assert format_amount(value, 2) == "1.23"
    assert value == Decimal("1.23456789")


def test_truncate():
    addr = "9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM"
    assert truncate_address(addr) == "9WzD...AWWM"
    assert truncate_address("short") == "short"
    sig = "5VERv8NMvzbJMEkV8xnrLkEaWRtSz9CosKDYjCJjBRnbJLgp8uirBgmQpjKhoR4tjF3ZpRzrFmBV6UjKdiSZkQUW"
    assert truncate_signature(sig) == "5VERv8...SZkQUW"


def test_pluralize_tokens():
    assert pluralize_tokens(0) == "0 tokens"
    assert pluralize_tokens(1) == "1 token"
    assert pluralize_tokens(3) == "3 tokens"


def test_relative_time():
    now = 1_700_000_000
    assert relative_time(now - 5, now) == "5s ago"
    assert relative_time(now - 125, now) == "2m ago"
    assert relative_time(now - 3 * 3600, now) == "3h ago"
    assert relative_time(now - 2 * 86400 - 10, now) == "2d ago"
    assert relative_time(0, now) == "unknown"
