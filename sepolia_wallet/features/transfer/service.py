"""Transfer business logic service for Sepolia Quick Wallet."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Protocol

from sepolia_wallet.chain import SubmittedTransaction
from sepolia_wallet.features.history.ledger import (
    TransactionLedger,
    TransactionRecord,
    TransactionStatus,
)
from sepolia_wallet.keys import Credential
from sepolia_wallet.shared.errors import (
    InsufficientBalanceError,
    InvalidAmountError,
    InvalidRecipientError,
)
from sepolia_wallet.shared.logging import ContextAdapter
from sepolia_wallet.shared.validation import AddressValidator, AmountValidator

logger = ContextAdapter(logging.getLogger(__name__), {"feature": "transfer"})


class ChainClientProtocol(Protocol):
    """Protocol defining the chain client interface needed for transfers."""

    def send_transaction(
        self, credential: Credential, to: str, amount: str | Decimal
    ) -> SubmittedTransaction: ...


class TransferService:
    """Validates a send request, submits it and records it as pending."""

    def __init__(self, chain: ChainClientProtocol, ledger: TransactionLedger):
        self.chain = chain
        self.ledger = ledger

    @staticmethod
    def validate_recipient(recipient: str) -> str:
        result = AddressValidator.validate(recipient or "")
        if not result.is_valid:
            raise InvalidRecipientError(result.error_message)
        return result.normalized_value

    @staticmethod
    def validate_amount(amount: str, balance: Decimal | None = None) -> Decimal:
        """Parse an ether amount and, when a balance is given, check it fits.

        Raises:
            InvalidAmountError: not a positive number with at most 18 decimals.
            InsufficientBalanceError: more than ``balance``.
        """
        parse_result = AmountValidator.parse_human_amount(amount or "")
        if not parse_result.is_valid:
            raise InvalidAmountError(parse_result.error_message)

        value: Decimal = parse_result.normalized_value
        decimals_result = AmountValidator.validate_decimal_places(value)
        if not decimals_result.is_valid:
            raise InvalidAmountError(decimals_result.error_message)

        if balance is not None:
            balance_result = AmountValidator.validate_against_balance(value, balance)
            if not balance_result.is_valid:
                raise InsufficientBalanceError(balance_result.error_message)
        return value

    def validate(
        self, recipient: str, amount: str, balance: Decimal | None = None
    ) -> tuple[str, Decimal]:
        return self.validate_recipient(recipient), self.validate_amount(amount, balance)

    def send(
        self,
        credential: Credential,
        recipient: str,
        amount: str,
        balance: Decimal | None = None,
    ) -> TransactionRecord:
        to_address, value = self.validate(recipient, amount, balance)
        log = logger.with_context(to=to_address, amount=str(value))
        log.info("Submitting transfer")

        submitted = self.chain.send_transaction(credential, to_address, value)

        record = TransactionRecord(
            hash=submitted.hash,
            from_address=submitted.from_address,
            to_address=submitted.to_address,
            value=submitted.value,
            status=TransactionStatus.PENDING,
        )
        self.ledger.append(record)
        log.with_context(tx_hash=submitted.hash).info("Transfer recorded as pending")
        return record
