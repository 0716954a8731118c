"""Tests for the HTTP API with injected fakes."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.api.dependencies import get_price_resolver, get_rpc, get_token_symbols, get_wallet_store
from src.api.registry import registry
from src.db.tracked_wallets import TrackedWalletStore
from src.parsers.prices.base import WSOL_MINT
from src.parsers.solana_rpc.exceptions import ProviderError
from src.parsers.solana_rpc.models import RpcSignature
from tests.fakes import USDC_MINT, FakeRedis, FakeResolver, FakeRpc, new_address, sol_transfer, token_account


@pytest.fixture
def store(fake_redis: FakeRedis) -> TrackedWalletStore:
    return TrackedWalletStore(fake_redis)


@pytest.fixture
def client(fake_rpc: FakeRpc, store: TrackedWalletStore) -> TestClient:
    app = create_app(manage_services=False)
    resolver = FakeResolver({WSOL_MINT: Decimal("100"), USDC_MINT: Decimal("1")})
    app.dependency_overrides[get_rpc] = lambda: fake_rpc
    app.dependency_overrides[get_price_resolver] = lambda: resolver
    app.dependency_overrides[get_wallet_store] = lambda: store
    app.dependency_overrides[get_token_symbols] = lambda: {USDC_MINT: "USDC"}
    return TestClient(app)


class TestHealth:
    def test_degraded_without_services(self, client: TestClient, monkeypatch):
        monkeypatch.setattr(registry, "rpc", None)
        monkeypatch.setattr(registry, "wallet_store", None)
        r = client.get("/api/v1/health")
        assert r.status_code == 200
        assert r.json()["status"] == "degraded"

    def test_ok_when_wired(self, client: TestClient, fake_rpc, store, monkeypatch):
        monkeypatch.setattr(registry, "rpc", fake_rpc)
        monkeypatch.setattr(registry, "price_resolver", FakeResolver())
        monkeypatch.setattr(registry, "wallet_store", store)
        body = client.get("/api/v1/health").json()
        assert body["status"] == "ok"
        assert body["services_ready"] is True
        assert body["rpc_ok"] is True
        assert body["redis_ok"] is True
        assert ("getHealth", "") in fake_rpc.calls

    def test_unhealthy_node_is_degraded(self, client: TestClient, fake_rpc, store, monkeypatch):
        fake_rpc.healthy = False
        monkeypatch.setattr(registry, "rpc", fake_rpc)
        monkeypatch.setattr(registry, "price_resolver", FakeResolver())
        monkeypatch.setattr(registry, "wallet_store", store)
        body = client.get("/api/v1/health").json()
        assert body["status"] == "degraded"
        assert body["services_ready"] is True
        assert body["rpc_ok"] is False

    def test_security_headers(self, client: TestClient):
        r = client.get("/api/v1/health")
        assert r.headers["X-Content-Type-Options"] == "nosniff"
        assert r.headers["Cache-Control"] == "no-store"


class TestTrackedWallets:
    def test_add_and_remove(self, client: TestClient):
        addr = new_address()

        r = client.post("/api/v1/wallets", json={"address": addr})
        assert r.status_code == 201
        assert r.json()["addresses"] == [addr]

        r = client.delete(f"/api/v1/wallets/{addr}")
        assert r.status_code == 200
        assert r.json()["addresses"] == []

    def test_add_invalid(self, client: TestClient):
        r = client.post("/api/v1/wallets", json={"address": "nope"})
        assert r.status_code == 400

    def test_add_duplicate(self, client: TestClient):
        addr = new_address()
        client.post("/api/v1/wallets", json={"address": addr})
        r = client.post("/api/v1/wallets", json={"address": addr})
        assert r.status_code == 409

    def test_remove_unknown(self, client: TestClient):
        assert client.delete(f"/api/v1/wallets/{new_address()}").status_code == 404


class TestNetWorth:
    def test_summary_omits_failed_wallet(self, client: TestClient, fake_rpc: FakeRpc):
        good, bad = new_address(), new_address()
        fake_rpc.balances[good] = 2_000_000_000
        fake_rpc.token_accounts[good] = [token_account(USDC_MINT, "25.5")]
        fake_rpc.failing_addresses.add(bad)
        client.post("/api/v1/wallets", json={"address": good})
        client.post("/api/v1/wallets", json={"address": bad})

        body = client.get("/api/v1/wallets").json()

        assert Decimal(body["total_usd"]) == Decimal("225.5")
        assert [w["address"] for w in body["wallets"]] == [good]
        assert body["failed"] == [bad]
        assert body["wallets"][0]["tokens"][0]["symbol"] == "USDC"

    def test_empty(self, client: TestClient):
        body = client.get("/api/v1/wallets").json()
        assert Decimal(body["total_usd"]) == 0
        assert body["wallets"] == []


class TestWalletDetails:
    def test_valuation(self, client: TestClient, fake_rpc: FakeRpc):
        addr = new_address()
        fake_rpc.balances[addr] = 1_234_567_890
        fake_rpc.token_accounts[addr] = [token_account("MintUnpriced", "9")]

        body = client.get(f"/api/v1/wallets/{addr}").json()

        assert Decimal(body["sol_balance"]) == Decimal("1.23456789")
        assert Decimal(body["total_usd"]) == Decimal("123.456789")
        assert body["token_count"] == 1
        assert body["tokens"][0]["symbol"] == "MINT"
        assert Decimal(body["tokens"][0]["usd_value"]) == 0

    def test_invalid_address(self, client: TestClient):
        assert client.get("/api/v1/wallets/not-valid").status_code == 400

    def test_provider_failure(self, client: TestClient, fake_rpc: FakeRpc):
        fake_rpc.balance_error = ProviderError("getBalance: HTTP 500")
        assert client.get(f"/api/v1/wallets/{new_address()}").status_code == 502


class TestTransactions:
    def test_history(self, client: TestClient, fake_rpc: FakeRpc):
        addr = new_address()
        fake_rpc.signatures[addr] = [RpcSignature(signature=f"s{i}") for i in range(5)]
        for i in range(5):
            fake_rpc.transactions[f"s{i}"] = sol_transfer(f"s{i}", addr, "5.0", "7.0" if i % 2 else "4.0")

        body = client.get(f"/api/v1/wallets/{addr}/transactions", params={"limit": 3}).json()

        assert [t["signature"] for t in body["transactions"]] == ["s0", "s1", "s2"]
        assert [t["direction"] for t in body["transactions"]] == ["outbound", "inbound", "outbound"]
        assert Decimal(body["transactions"][1]["amount"]) == Decimal("2")

    def test_history_failure_is_empty(self, client: TestClient, fake_rpc: FakeRpc):
        fake_rpc.signatures_error = ProviderError("down")
        body = client.get(f"/api/v1/wallets/{new_address()}/transactions").json()
        assert body["transactions"] == []

    def test_limit_bounds(self, client: TestClient):
        addr = new_address()
        assert client.get(f"/api/v1/wallets/{addr}/transactions", params={"limit": 0}).status_code == 422

    def test_invalid_address(self, client: TestClient):
        assert client.get("/api/v1/wallets/xyz/transactions").status_code == 400
