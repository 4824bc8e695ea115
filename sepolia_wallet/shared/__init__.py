"""Shared utilities for Sepolia Quick Wallet."""

from sepolia_wallet.shared.config import WalletConfig, load_config, resolve_storage_dir
from sepolia_wallet.shared.errors import (
    AllEndpointsExhaustedError,
    InsufficientBalanceError,
    InvalidAmountError,
    InvalidKeyFormatError,
    InvalidRecipientError,
    NetworkError,
    NetworkErrorType,
    StorageError,
    WalletError,
)
from sepolia_wallet.shared.logging import (
    ContextAdapter,
    LoggingConfig,
    LogLevel,
    format_error_for_user,
    get_user_friendly_error,
    sanitize_dict,
    sanitize_message,
    setup_logging,
)
from sepolia_wallet.shared.network import (
    EndpointPool,
    TimeoutConfig,
    execute_with_fallback,
)
from sepolia_wallet.shared.validation import (
    AddressValidator,
    AmountValidator,
    PrivateKeyValidator,
    ValidationResult,
)

__all__ = [
    "WalletConfig",
    "load_config",
    "resolve_storage_dir",
    "AllEndpointsExhaustedError",
    "InsufficientBalanceError",
    "InvalidAmountError",
    "InvalidKeyFormatError",
    "InvalidRecipientError",
    "NetworkError",
    "NetworkErrorType",
    "StorageError",
    "WalletError",
    "EndpointPool",
    "TimeoutConfig",
    "execute_with_fallback",
    "AddressValidator",
    "AmountValidator",
    "PrivateKeyValidator",
    "ValidationResult",
    "ContextAdapter",
    "LoggingConfig",
    "LogLevel",
    "format_error_for_user",
    "get_user_friendly_error",
    "sanitize_dict",
    "sanitize_message",
    "setup_logging",
]
