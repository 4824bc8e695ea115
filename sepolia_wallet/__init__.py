"""Sepolia Quick Wallet - A terminal-first TUI wallet for the Ethereum Sepolia testnet.

This package is organized into feature-based modules:
- features.history: Transaction ledger and receipt reconciliation
- features.transfer: Send flow validation and submission
- shared: Shared utilities (network fallback, validation, logging, etc.)
"""

from sepolia_wallet.chain import ChainClient, FeeData, SubmittedTransaction
from sepolia_wallet.keys import Credential, create_new, import_from_key
from sepolia_wallet.storage import WalletStore
from sepolia_wallet.wallet import Wallet
from sepolia_wallet.shared import (
    AddressValidator,
    AllEndpointsExhaustedError,
    AmountValidator,
    EndpointPool,
    NetworkError,
    NetworkErrorType,
    TimeoutConfig,
    ValidationResult,
    WalletConfig,
)

__version__ = "0.1.0"
__all__ = [
    "Wallet",
    "ChainClient",
    "FeeData",
    "SubmittedTransaction",
    "Credential",
    "create_new",
    "import_from_key",
    "WalletStore",
    "EndpointPool",
    "NetworkError",
    "NetworkErrorType",
    "AllEndpointsExhaustedError",
    "TimeoutConfig",
    "WalletConfig",
    "AddressValidator",
    "AmountValidator",
    "ValidationResult",
]
