"""Feature modules for Sepolia Quick Wallet.

- history: transaction ledger and receipt reconciliation
- transfer: send flow validation and submission
"""

from sepolia_wallet.features import history
from sepolia_wallet.features import transfer

__all__ = ["history", "transfer"]
