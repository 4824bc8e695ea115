"""Unit tests for the transaction ledger."""

import threading

import pytest

from sepolia_wallet.features.history.ledger import (
    TransactionLedger,
    TransactionRecord,
    TransactionStatus,
)


def make_record(n: int, status: TransactionStatus = TransactionStatus.PENDING) -> TransactionRecord:
    return TransactionRecord(
        hash=f"0x{n:064x}",
        from_address="0x2c7536E3605D9C16a7a3D7b1898e529396a65c23",
        to_address="0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed",
        value=f"0.{n}",
        status=status,
    )


@pytest.mark.unit
class TestAppend:
    def test_new_records_start_pending(self):
        record = TransactionRecord(hash="0x01", from_address="a", to_address="b", value="1")
        assert record.status == TransactionStatus.PENDING
        assert record.timestamp.tzinfo is not None

    def test_newest_first(self):
        ledger = TransactionLedger()
        for n in range(1, 4):
            ledger.append(make_record(n))

        assert [r.hash for r in ledger.get_all()] == [
            make_record(3).hash,
            make_record(2).hash,
            make_record(1).hash,
        ]

    def test_duplicate_hash_replaces_in_place(self):
        ledger = TransactionLedger()
        ledger.append(make_record(1))
        ledger.append(make_record(2))

        replacement = make_record(1, TransactionStatus.CONFIRMED)
        ledger.append(replacement)

        records = ledger.get_all()
        assert ledger.count() == 2
        assert records[1].hash == replacement.hash
        assert records[1].status == TransactionStatus.CONFIRMED

    def test_get_all_returns_copies(self):
        ledger = TransactionLedger()
        ledger.append(make_record(1))

        ledger.get_all()[0].status = TransactionStatus.FAILED

        assert ledger.get(make_record(1).hash).status == TransactionStatus.PENDING


@pytest.mark.unit
class TestUpdateStatus:
    def test_updates_matching_record(self):
        ledger = TransactionLedger()
        ledger.append(make_record(1))

        assert ledger.update_status(make_record(1).hash, TransactionStatus.CONFIRMED) is True
        assert ledger.get(make_record(1).hash).status == TransactionStatus.CONFIRMED

    def test_repeated_update_is_idempotent(self):
        ledger = TransactionLedger()
        ledger.append(make_record(1))

        ledger.update_status(make_record(1).hash, TransactionStatus.FAILED)
        ledger.update_status(make_record(1).hash, TransactionStatus.FAILED)

        assert ledger.get(make_record(1).hash).status == TransactionStatus.FAILED
        assert ledger.count() == 1

    def test_unknown_hash_is_silent_noop(self):
        ledger = TransactionLedger()
        ledger.append(make_record(1))
        before = ledger.get_all()

        assert ledger.update_status("0xdeadbeef", TransactionStatus.CONFIRMED) is False
        assert ledger.get_all() == before

    def test_accepts_status_strings(self):
        ledger = TransactionLedger()
        ledger.append(make_record(1))

        ledger.update_status(make_record(1).hash, "confirmed")

        assert ledger.get(make_record(1).hash).status is TransactionStatus.CONFIRMED

    def test_order_is_preserved(self):
        ledger = TransactionLedger()
        for n in range(1, 4):
            ledger.append(make_record(n))

        ledger.update_status(make_record(2).hash, TransactionStatus.CONFIRMED)

        assert [r.value for r in ledger.get_all()] == ["0.3", "0.2", "0.1"]


@pytest.mark.unit
class TestQueries:
    def test_pending_filters_by_status(self):
        ledger = TransactionLedger()
        ledger.append(make_record(1, TransactionStatus.CONFIRMED))
        ledger.append(make_record(2))
        ledger.append(make_record(3, TransactionStatus.FAILED))

        assert [r.hash for r in ledger.pending()] == [make_record(2).hash]

    def test_clear_empties_ledger(self):
        ledger = TransactionLedger()
        ledger.append(make_record(1))
        ledger.append(make_record(2))

        assert ledger.clear() == 2
        assert ledger.is_empty()
        assert ledger.get_all() == []

    def test_get_unknown_returns_none(self):
        assert TransactionLedger().get("0x00") is None

    def test_to_dict(self):
        data = make_record(1).to_dict()
        assert data["status"] == "pending"
        assert data["hash"] == make_record(1).hash
        assert "timestamp" in data


@pytest.mark.unit
def test_concurrent_appends_are_all_recorded():
    ledger = TransactionLedger()

    def worker(offset: int) -> None:
        for n in range(50):
            ledger.append(make_record(offset * 100 + n))

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(1, 5)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert ledger.count() == 200
