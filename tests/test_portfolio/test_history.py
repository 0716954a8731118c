"""Tests for transaction history classification and best-effort fetching."""

from decimal import Decimal

from src.parsers.solana_rpc.exceptions import ProviderError
from src.parsers.solana_rpc.models import RpcSignature, RpcTransaction
from src.portfolio.history import classify_transaction, recent_transactions
from src.portfolio.models import TxDirection
from tests.fakes import FakeRpc, new_address, sol_transfer


class TestClassifyTransaction:
    def test_inbound(self, address: str):
        tx = classify_transaction(sol_transfer("sig1", address, "5.0", "7.0"), address)

        assert tx is not None
        assert tx.direction is TxDirection.INBOUND
        assert tx.amount == Decimal("2")
        assert tx.timestamp == 1_700_000_000

    def test_outbound_amount_is_positive(self, address: str):
        tx = classify_transaction(sol_transfer("sig1", address, "3.25", "1.0"), address)

        assert tx is not None
        assert tx.direction is TxDirection.OUTBOUND
        assert tx.amount == Decimal("2.25")

    def test_delta_at_threshold_is_dropped(self, address: str):
        assert classify_transaction(sol_transfer("sig1", address, "10.0", "9.999999"), address) is None

    def test_zero_delta_is_dropped(self, address: str):
        assert classify_transaction(sol_transfer("sig1", address, "4", "4"), address) is None

    def test_just_above_threshold_is_kept(self, address: str):
        tx = classify_transaction(sol_transfer("sig1", address, "10.0", "9.999998"), address)
        assert tx is not None
        assert tx.amount == Decimal("0.000002")

    def test_custom_threshold(self, address: str):
        transfer = sol_transfer("sig1", address, "1.0", "1.01")
        assert classify_transaction(transfer, address, negligible_delta=Decimal("0.1")) is None

    def test_address_not_in_accounts(self, address: str):
        assert classify_transaction(sol_transfer("sig1", new_address(), "1", "2"), address) is None

    def test_missing_balances(self, address: str):
        tx = RpcTransaction(signature="sig1", account_keys=[address], pre_balances=None, post_balances=[1])
        assert classify_transaction(tx, address) is None

    def test_unknown_block_time_is_zero(self, address: str):
        tx = classify_transaction(sol_transfer("sig1", address, "1", "2", block_time=None), address)
        assert tx is not None
        assert tx.timestamp == 0


def _seed(rpc: FakeRpc, address: str, count: int) -> list[str]:
    sigs = [f"sig{i}" for i in range(count)]
    rpc.signatures[address] = [RpcSignature(signature=s, slot=count - i) for i, s in enumerate(sigs)]
    for i, sig in enumerate(sigs):
        rpc.transactions[sig] = sol_transfer(sig, address, "1", str(2 + i), block_time=2_000 - i)
    return sigs


class TestRecentTransactions:
    async def test_respects_limit_and_order(self, fake_rpc: FakeRpc, address: str):
        sigs = _seed(fake_rpc, address, 6)

        txs = await recent_transactions(fake_rpc, address, limit=3)

        assert [t.signature for t in txs] == sigs[:3]
        assert [t.timestamp for t in txs] == [2_000, 1_999, 1_998]

    async def test_provider_returning_extra_signatures_is_capped(self, address: str):
        class OverEagerRpc(FakeRpc):
            async def get_signatures_for_address(self, address: str, *, limit: int = 10):
                return self.signatures.get(address, [])

        rpc = OverEagerRpc()
        _seed(rpc, address, 5)

        assert len(await recent_transactions(rpc, address, limit=2)) == 2

    async def test_default_limit_is_ten(self, fake_rpc: FakeRpc, address: str):
        _seed(fake_rpc, address, 15)
        assert len(await recent_transactions(fake_rpc, address)) == 10

    async def test_failed_and_missing_records_are_skipped(self, fake_rpc: FakeRpc, address: str):
        sigs = _seed(fake_rpc, address, 4)
        fake_rpc.failing_signatures.add(sigs[1])
        fake_rpc.transactions[sigs[2]] = None

        txs = await recent_transactions(fake_rpc, address, limit=4)

        assert [t.signature for t in txs] == [sigs[0], sigs[3]]

    async def test_fee_only_entries_are_excluded(self, fake_rpc: FakeRpc, address: str):
        sigs = _seed(fake_rpc, address, 2)
        fake_rpc.transactions[sigs[0]] = sol_transfer(sigs[0], address, "10.0", "9.9999995")

        txs = await recent_transactions(fake_rpc, address)

        assert [t.signature for t in txs] == [sigs[1]]

    async def test_signature_lookup_failure_returns_empty(self, fake_rpc: FakeRpc, address: str):
        fake_rpc.signatures_error = ProviderError("getSignaturesForAddress: HTTP 429")
        assert await recent_transactions(fake_rpc, address) == []

    async def test_non_positive_limit(self, fake_rpc: FakeRpc, address: str):
        _seed(fake_rpc, address, 3)
        assert await recent_transactions(fake_rpc, address, limit=0) == []
        assert fake_rpc.calls == []
