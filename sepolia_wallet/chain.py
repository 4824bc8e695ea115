"""Chain client: Sepolia JSON-RPC operations over a rotating endpoint pool."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable

from eth_account import Account
from web3 import Web3
from web3.exceptions import TransactionNotFound

from sepolia_wallet.keys import Credential
from sepolia_wallet.shared.config import SEPOLIA_CHAIN_ID
from sepolia_wallet.shared.errors import (
    InvalidAmountError,
    InvalidRecipientError,
    NetworkError,
)
from sepolia_wallet.shared.network import (
    DEFAULT_TIMEOUT_CONFIG,
    EndpointPool,
    TimeoutConfig,
    execute_with_fallback,
)
from sepolia_wallet.shared.validation import AddressValidator, AmountValidator

logger = logging.getLogger(__name__)

TRANSFER_GAS_LIMIT = 21000

Web3Factory = Callable[[str, TimeoutConfig], Web3]


def default_web3_factory(endpoint: str, timeout_config: TimeoutConfig) -> Web3:
    provider = Web3.HTTPProvider(
        endpoint,
        request_kwargs={"timeout": timeout_config.request_timeout},
        # Retrying is done across endpoints, not against the same one.
        exception_retry_configuration=None,
    )
    return Web3(provider)


def format_units(value: int, decimals: int) -> str:
    """Render an integer amount of base units as a plain decimal string."""
    scaled = Decimal(int(value)).scaleb(-decimals).normalize()
    return format(scaled, "f")


@dataclass
class FeeData:
    gas_price: int | None = None
    max_fee_per_gas: int | None = None
    max_priority_fee_per_gas: int | None = None

    @property
    def supports_eip1559(self) -> bool:
        return self.max_fee_per_gas is not None and self.max_priority_fee_per_gas is not None


@dataclass
class SubmittedTransaction:
    hash: str
    from_address: str
    to_address: str
    value: str


class ChainClient:
    """Balance, fee, send and receipt operations for one account chain.

    Every operation is tried once per endpoint of ``pool`` starting at its
    cursor; see ``execute_with_fallback``.
    """

    def __init__(
        self,
        pool: EndpointPool,
        chain_id: int = SEPOLIA_CHAIN_ID,
        timeout_config: TimeoutConfig | None = None,
        web3_factory: Web3Factory | None = None,
        on_attempt_failed: Callable[[int, str, NetworkError], None] | None = None,
        confirmation_timeout: float = 120,
    ):
        self.pool = pool
        self.chain_id = chain_id
        self.timeout_config = timeout_config or DEFAULT_TIMEOUT_CONFIG
        self._web3_factory = web3_factory or default_web3_factory
        self._clients: dict[str, Web3] = {}
        self.on_attempt_failed = on_attempt_failed
        self.confirmation_timeout = confirmation_timeout

    def _web3(self, endpoint: str) -> Web3:
        client = self._clients.get(endpoint)
        if client is None:
            client = self._web3_factory(endpoint, self.timeout_config)
            self._clients[endpoint] = client
        return client

    def _execute(self, operation: Callable[[Web3], Any], context: str) -> Any:
        return execute_with_fallback(
            self.pool,
            lambda endpoint: operation(self._web3(endpoint)),
            context=context,
            on_attempt_failed=self.on_attempt_failed,
        )

    def fetch_balance(self, address: str) -> str:
        # Malformed addresses go to the node as given; the node rejects them.
        if Web3.is_address(address):
            address = Web3.to_checksum_address(address)
        wei = self._execute(
            lambda w3: w3.eth.get_balance(address), context="Fetch balance"
        )
        return format_units(wei, 18)

    def fetch_block_number(self) -> int:
        return int(self._execute(lambda w3: w3.eth.block_number, context="Fetch block number"))

    @staticmethod
    def _read_fee_data(w3: Web3) -> FeeData:
        block = w3.eth.get_block("latest")
        gas_price = w3.eth.gas_price
        base_fee = block.get("baseFeePerGas")
        if base_fee is None:
            return FeeData(gas_price=gas_price)

        priority_fee = w3.eth.max_priority_fee
        return FeeData(
            gas_price=gas_price,
            max_fee_per_gas=base_fee * 2 + priority_fee,
            max_priority_fee_per_gas=priority_fee,
        )

    def fetch_fee_data(self) -> FeeData:
        return self._execute(self._read_fee_data, context="Fetch fee data")

    def fetch_gas_price(self) -> str:
        """Current gas price in gwei, or ``"0"`` when no endpoint answers."""
        try:
            wei = self._execute(lambda w3: w3.eth.gas_price, context="Fetch gas price")
        except Exception as e:
            logger.warning("Failed to fetch gas price: %s", e)
            return "0"
        return format_units(wei, 9)

    def send_transaction(
        self, credential: Credential, to: str, amount: str | Decimal
    ) -> SubmittedTransaction:
        """Sign and submit a plain value transfer.

        Raises:
            InvalidRecipientError: ``to`` is not an address. Nothing is sent.
            InvalidAmountError: ``amount`` is not a positive ether amount.
            AllEndpointsExhaustedError: every endpoint failed.
        """
        recipient = AddressValidator.validate(to or "")
        if not recipient.is_valid:
            raise InvalidRecipientError(recipient.error_message)

        amount_result = AmountValidator.validate_full(str(amount))
        if not amount_result.is_valid:
            raise InvalidAmountError(amount_result.error_message)

        to_address = recipient.normalized_value
        value_wei = amount_result.normalized_value
        from_address = Account.from_key(credential.private_key).address

        def submit(w3: Web3) -> str:
            nonce = w3.eth.get_transaction_count(from_address, "pending")
            fees = self._read_fee_data(w3)
            tx: dict[str, Any] = {
                "to": to_address,
                "value": value_wei,
                "gas": TRANSFER_GAS_LIMIT,
                "nonce": nonce,
                "chainId": self.chain_id,
            }
            if fees.supports_eip1559:
                tx["type"] = 2
                tx["maxFeePerGas"] = fees.max_fee_per_gas
                tx["maxPriorityFeePerGas"] = fees.max_priority_fee_per_gas
            else:
                tx["gasPrice"] = fees.gas_price

            signed = Account.sign_transaction(tx, credential.private_key)
            tx_hash = w3.eth.send_raw_transaction(signed.raw_transaction)
            return Web3.to_hex(tx_hash)

        tx_hash = self._execute(submit, context="Send transaction")
        logger.info("Transaction submitted: %s -> %s (%s)", from_address, to_address, tx_hash)
        return SubmittedTransaction(
            hash=tx_hash,
            from_address=from_address,
            to_address=to_address,
            value=format_units(value_wei, 18),
        )

    def fetch_receipt(self, tx_hash: str) -> dict[str, Any] | None:
        """Receipt for ``tx_hash``, or ``None`` while it is not mined."""

        def read_receipt(w3: Web3) -> dict[str, Any] | None:
            try:
                receipt = w3.eth.get_transaction_receipt(tx_hash)
            except TransactionNotFound:
                return None
            return dict(receipt) if receipt is not None else None

        return self._execute(read_receipt, context="Fetch receipt")

    def wait_for_confirmation(
        self,
        tx_hash: str,
        confirmations: int = 1,
        timeout: float | None = None,
        poll_interval: float = 2,
    ) -> dict[str, Any] | None:
        """Block until ``tx_hash`` has ``confirmations`` blocks on top.

        ``timeout`` defaults to ``confirmation_timeout``. Returns the receipt,
        or ``None`` on timeout or on any error.
        """
        if timeout is None:
            timeout = self.confirmation_timeout
        deadline = time.monotonic() + timeout
        try:
            while True:
                receipt = self.fetch_receipt(tx_hash)
                if receipt and receipt.get("blockNumber") is not None:
                    latest = self.fetch_block_number()
                    if latest - int(receipt["blockNumber"]) + 1 >= confirmations:
                        return receipt
                if time.monotonic() + poll_interval > deadline:
                    break
                time.sleep(poll_interval)
        except Exception as e:
            logger.warning("Waiting for %s stopped: %s", tx_hash, e)
            return None

        logger.warning("Transaction %s not confirmed within %ss", tx_hash, timeout)
        return None
