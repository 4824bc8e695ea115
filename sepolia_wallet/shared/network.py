"""Network utilities for Sepolia Quick Wallet: endpoint rotation and fallback."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Sequence, TypeVar

from requests.exceptions import ConnectionError, HTTPError, RequestException, Timeout
from web3.exceptions import Web3Exception

from sepolia_wallet.shared.errors import (
    AllEndpointsExhaustedError,
    NetworkError,
    NetworkErrorType,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class TimeoutConfig:
    connect_timeout: float = 5.0
    read_timeout: float = 15.0

    @property
    def request_timeout(self) -> tuple[float, float]:
        return (self.connect_timeout, self.read_timeout)


DEFAULT_TIMEOUT_CONFIG = TimeoutConfig()


def classify_error(error: Exception) -> NetworkErrorType:
    if isinstance(error, Timeout):
        return NetworkErrorType.TIMEOUT
    elif isinstance(error, ConnectionError):
        return NetworkErrorType.CONNECTION_ERROR
    elif isinstance(error, HTTPError):
        return NetworkErrorType.HTTP_ERROR
    elif isinstance(error, (Web3Exception, ValueError)):
        return NetworkErrorType.RPC_ERROR
    return NetworkErrorType.UNKNOWN


def is_network_or_rpc_error(error: Exception) -> bool:
    """Errors that are specific to one endpoint and warrant trying the next."""
    return isinstance(
        error, (NetworkError, RequestException, Web3Exception, ValueError)
    )


def create_network_error(
    error: Exception, endpoint: str, context: str = ""
) -> NetworkError:
    if isinstance(error, NetworkError):
        return error

    error_type = classify_error(error)
    context_prefix = f"{context}: " if context else ""

    if error_type == NetworkErrorType.TIMEOUT:
        message = (
            f"{context_prefix}Connection timeout. Node may be unavailable: {endpoint}"
        )
    elif error_type == NetworkErrorType.CONNECTION_ERROR:
        message = (
            f"{context_prefix}Cannot connect to node: {endpoint}. "
            "Check your network connection."
        )
    elif error_type == NetworkErrorType.HTTP_ERROR:
        response = getattr(error, "response", None)
        status_code = getattr(response, "status_code", None)
        response_text = getattr(response, "text", None)
        message = f"{context_prefix}HTTP error {status_code}: {response_text or 'Unknown error'}"
        return NetworkError(
            error_type=error_type,
            message=message,
            endpoint=endpoint,
            original_error=error,
            status_code=status_code,
            response_text=response_text,
        )
    elif error_type == NetworkErrorType.RPC_ERROR:
        message = f"{context_prefix}RPC error from {endpoint}: {error}"
    else:
        message = f"{context_prefix}Network error: {str(error)}"

    return NetworkError(
        error_type=error_type,
        message=message,
        endpoint=endpoint,
        original_error=error,
    )


class EndpointPool:
    """Ordered, fixed list of RPC endpoints with a circular cursor.

    ``current()`` only reads; ``rotate()`` is the single writer. Rotation is
    atomic, but two operations running at once may still interleave their
    rotations in any order.
    """

    def __init__(self, endpoints: Sequence[str], start_index: int = 0):
        if not endpoints:
            raise ValueError("Endpoint pool requires at least one endpoint")
        self._endpoints: tuple[str, ...] = tuple(endpoints)
        self._cursor = start_index % len(self._endpoints)
        self._lock = threading.Lock()

    @property
    def endpoints(self) -> tuple[str, ...]:
        return self._endpoints

    @property
    def size(self) -> int:
        return len(self._endpoints)

    @property
    def cursor(self) -> int:
        with self._lock:
            return self._cursor

    def current(self) -> str:
        with self._lock:
            return self._endpoints[self._cursor]

    def rotate(self) -> str:
        with self._lock:
            self._cursor = (self._cursor + 1) % len(self._endpoints)
            endpoint = self._endpoints[self._cursor]
        logger.info("Rotating to RPC endpoint: %s", endpoint)
        return endpoint


def execute_with_fallback(
    pool: EndpointPool,
    operation: Callable[[str], T],
    context: str = "",
    on_attempt_failed: Callable[[int, str, NetworkError], None] | None = None,
) -> T:
    """Run ``operation(endpoint)`` once per endpoint, starting at the cursor.

    Stops at the first success. Each network or RPC failure rotates the pool;
    after one full pass the last failure is raised inside
    ``AllEndpointsExhaustedError``. Any other exception propagates unchanged.
    """
    last_error: NetworkError | None = None
    attempts = pool.size

    for attempt in range(1, attempts + 1):
        endpoint = pool.current()
        try:
            return operation(endpoint)
        except Exception as e:
            if not is_network_or_rpc_error(e):
                raise
            last_error = create_network_error(e, endpoint, context)
            logger.warning(
                "%s failed on %s (attempt %d/%d): %s",
                context or "RPC operation",
                endpoint,
                attempt,
                attempts,
                last_error.message,
            )
            if on_attempt_failed:
                on_attempt_failed(attempt, endpoint, last_error)
            pool.rotate()

    raise AllEndpointsExhaustedError(last_error, attempts, context)


__all__ = [
    "TimeoutConfig",
    "DEFAULT_TIMEOUT_CONFIG",
    "EndpointPool",
    "classify_error",
    "create_network_error",
    "execute_with_fallback",
    "is_network_or_rpc_error",
]
