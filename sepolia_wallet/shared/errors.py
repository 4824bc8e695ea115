"""Error taxonomy for Sepolia Quick Wallet."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class WalletError(Exception):
    """Base class for every error the wallet raises on purpose."""


class NetworkErrorType(Enum):
    TIMEOUT = "timeout"
    CONNECTION_ERROR = "connection_error"
    HTTP_ERROR = "http_error"
    RPC_ERROR = "rpc_error"
    UNKNOWN = "unknown"


@dataclass
class NetworkError(WalletError):
    error_type: NetworkErrorType
    message: str
    endpoint: str | None = None
    original_error: Exception | None = None
    status_code: int | None = None
    response_text: str | None = None

    def __str__(self) -> str:
        return self.message


class AllEndpointsExhaustedError(WalletError):
    """Every endpoint in the pool failed once for the same operation."""

    def __init__(
        self,
        last_error: Exception | None,
        attempts: int,
        context: str = "",
    ):
        self.last_error = last_error
        self.attempts = attempts
        self.context = context
        prefix = f"{context}: " if context else ""
        detail = str(last_error) if last_error else "no endpoint available"
        super().__init__(
            f"{prefix}All {attempts} RPC endpoints failed. Last error: {detail}"
        )


class InvalidRecipientError(WalletError, ValueError):
    pass


class InvalidAmountError(WalletError, ValueError):
    pass


class InvalidKeyFormatError(WalletError, ValueError):
    pass


class InsufficientBalanceError(WalletError, ValueError):
    pass


class StorageError(WalletError):
    pass


__all__ = [
    "WalletError",
    "NetworkErrorType",
    "NetworkError",
    "AllEndpointsExhaustedError",
    "InvalidRecipientError",
    "InvalidAmountError",
    "InvalidKeyFormatError",
    "InsufficientBalanceError",
    "StorageError",
]
