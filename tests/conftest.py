"""Shared test fixtures."""

import pytest

from tests.fakes import FakeRedis, FakeRpc, new_address


@pytest.fixture
def address() -> str:
    return new_address()


@pytest.fixture
def fake_rpc() -> FakeRpc:
    return FakeRpc()


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()
