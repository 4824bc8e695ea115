"""Moves pending ledger records to confirmed or failed from their receipts."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from sepolia_wallet.features.history.ledger import TransactionLedger, TransactionStatus
from sepolia_wallet.shared.errors import WalletError

logger = logging.getLogger(__name__)


class ReceiptSource(Protocol):
    def fetch_receipt(self, tx_hash: str) -> dict[str, Any] | None: ...


def status_from_receipt(receipt: dict[str, Any] | None) -> TransactionStatus:
    if not receipt:
        return TransactionStatus.PENDING
    status = receipt.get("status")
    if status is None:
        return TransactionStatus.PENDING
    return TransactionStatus.CONFIRMED if int(status) == 1 else TransactionStatus.FAILED


class ReceiptReconciler:
    def __init__(self, chain: ReceiptSource, ledger: TransactionLedger):
        self.chain = chain
        self.ledger = ledger

    def has_pending(self) -> bool:
        return bool(self.ledger.pending())

    def reconcile(self) -> dict[str, TransactionStatus]:
        """Check every pending record once and return the ones that changed.

        A receipt lookup that fails on every endpoint leaves the record
        pending until the next run.
        """
        changes: dict[str, TransactionStatus] = {}
        for record in self.ledger.pending():
            try:
                receipt = self.chain.fetch_receipt(record.hash)
            except WalletError as e:
                logger.warning("Receipt lookup for %s failed: %s", record.hash, e)
                continue

            status = status_from_receipt(receipt)
            if status == TransactionStatus.PENDING:
                continue
            if self.ledger.update_status(record.hash, status):
                changes[record.hash] = status
        return changes
