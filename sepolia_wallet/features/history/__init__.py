"""Transaction history feature: ledger and receipt reconciliation."""

from sepolia_wallet.features.history.ledger import (
    TransactionLedger,
    TransactionRecord,
    TransactionStatus,
)
from sepolia_wallet.features.history.reconciler import (
    ReceiptReconciler,
    status_from_receipt,
)

__all__ = [
    "TransactionLedger",
    "TransactionRecord",
    "TransactionStatus",
    "ReceiptReconciler",
    "status_from_receipt",
]
