"""In-memory ledger of transactions submitted during this session."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class TransactionStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"


@dataclass
class TransactionRecord:
    hash: str
    from_address: str
    to_address: str
    value: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    status: TransactionStatus = TransactionStatus.PENDING

    def to_dict(self) -> dict[str, Any]:
        return {
            "hash": self.hash,
            "from": self.from_address,
            "to": self.to_address,
            "value": self.value,
            "timestamp": self.timestamp.isoformat(),
            "status": self.status.value,
        }


class TransactionLedger:
    """Newest-first list of records keyed by transaction hash.

    Appending a hash that is already present replaces the stored record in
    place. All methods hand out copies, so callers never mutate the ledger
    behind its lock.
    """

    def __init__(self):
        self._records: list[TransactionRecord] = []
        self._lock = threading.Lock()

    def _index_of(self, tx_hash: str) -> int | None:
        for i, record in enumerate(self._records):
            if record.hash == tx_hash:
                return i
        return None

    def append(self, record: TransactionRecord) -> None:
        with self._lock:
            index = self._index_of(record.hash)
            if index is not None:
                self._records[index] = replace(record)
                logger.info("Replaced ledger record %s", record.hash)
                return
            self._records.insert(0, replace(record))
        logger.info("Added %s to ledger (%s)", record.hash, record.status.value)

    def update_status(self, tx_hash: str, status: TransactionStatus) -> bool:
        with self._lock:
            index = self._index_of(tx_hash)
            if index is None:
                return False
            self._records[index].status = TransactionStatus(status)
        logger.info("Transaction %s is now %s", tx_hash, TransactionStatus(status).value)
        return True

    def clear(self) -> int:
        with self._lock:
            count = len(self._records)
            self._records = []
        logger.info("Cleared transaction ledger (%d items)", count)
        return count

    def get_all(self) -> list[TransactionRecord]:
        with self._lock:
            return [replace(record) for record in self._records]

    def get(self, tx_hash: str) -> TransactionRecord | None:
        with self._lock:
            index = self._index_of(tx_hash)
            return replace(self._records[index]) if index is not None else None

    def pending(self) -> list[TransactionRecord]:
        with self._lock:
            return [
                replace(record)
                for record in self._records
                if record.status == TransactionStatus.PENDING
            ]

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def is_empty(self) -> bool:
        return self.count() == 0
