"""Input validation utilities for transfer amounts, addresses and keys."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from web3 import Web3


@dataclass
class ValidationResult:
    is_valid: bool
    error_message: str | None = None
    normalized_value: Any = None


class AmountValidator:
    ETHER_DECIMALS = 18
    MAX_WEI = 2**256 - 1

    @staticmethod
    def parse_human_amount(value: str) -> ValidationResult:
        if not value or not value.strip():
            return ValidationResult(
                is_valid=False,
                error_message="Amount is required",
            )

        raw_amount = value.strip().replace(",", "").replace(" ", "")

        if raw_amount.startswith("-") or raw_amount.startswith("+"):
            return ValidationResult(
                is_valid=False,
                error_message="Amount must be a positive number",
            )

        try:
            amount_decimal = Decimal(raw_amount)
        except (InvalidOperation, ValueError):
            return ValidationResult(
                is_valid=False,
                error_message="Amount must be a valid number",
            )

        if not amount_decimal.is_finite():
            return ValidationResult(
                is_valid=False,
                error_message="Invalid numeric format (special value detected)",
            )

        if amount_decimal < 0:
            return ValidationResult(
                is_valid=False,
                error_message="Amount cannot be negative",
            )

        if amount_decimal == 0:
            return ValidationResult(
                is_valid=False,
                error_message="Amount must be greater than zero",
            )

        return ValidationResult(
            is_valid=True,
            normalized_value=amount_decimal,
        )

    @staticmethod
    def validate_decimal_places(
        amount: Decimal, decimals: int = ETHER_DECIMALS
    ) -> ValidationResult:
        exponent = amount.as_tuple().exponent
        if not isinstance(exponent, int):
            return ValidationResult(
                is_valid=False,
                error_message="Invalid numeric format",
            )

        decimal_places = max(0, -exponent)
        if decimal_places > decimals:
            return ValidationResult(
                is_valid=False,
                error_message=f"Too many decimal places. Maximum {decimals} allowed",
            )

        return ValidationResult(is_valid=True)

    @staticmethod
    def convert_to_wei(amount: Decimal) -> ValidationResult:
        try:
            wei = int(Web3.to_wei(amount, "ether"))
        except (TypeError, ValueError, OverflowError, InvalidOperation):
            return ValidationResult(
                is_valid=False,
                error_message="Failed to convert amount to wei",
            )

        if wei <= 0:
            return ValidationResult(
                is_valid=False,
                error_message="Amount must be greater than zero",
            )

        if wei > AmountValidator.MAX_WEI:
            return ValidationResult(
                is_valid=False,
                error_message="Amount exceeds maximum allowed value",
            )

        return ValidationResult(
            is_valid=True,
            normalized_value=wei,
        )

    @staticmethod
    def validate_against_balance(
        amount: Decimal, balance: Decimal
    ) -> ValidationResult:
        if amount > balance:
            return ValidationResult(
                is_valid=False,
                error_message=f"Insufficient balance. You have {balance} ETH available",
            )

        return ValidationResult(is_valid=True)

    @classmethod
    def validate_full(
        cls,
        value: str,
        balance: Decimal | None = None,
    ) -> ValidationResult:
        """Parse a human ether amount and return it in wei."""
        parse_result = cls.parse_human_amount(value)
        if not parse_result.is_valid:
            return parse_result

        amount = parse_result.normalized_value

        decimal_result = cls.validate_decimal_places(amount)
        if not decimal_result.is_valid:
            return decimal_result

        wei_result = cls.convert_to_wei(amount)
        if not wei_result.is_valid:
            return wei_result

        if balance is not None:
            balance_result = cls.validate_against_balance(amount, balance)
            if not balance_result.is_valid:
                return balance_result

        return wei_result


class AddressValidator:
    @staticmethod
    def validate(value: str) -> ValidationResult:
        if not value or not value.strip():
            return ValidationResult(
                is_valid=False,
                error_message="Address is required",
            )

        candidate = value.strip()

        if not candidate.startswith(("0x", "0X")):
            return ValidationResult(
                is_valid=False,
                error_message="Address must start with 0x",
            )

        if not Web3.is_address(candidate):
            return ValidationResult(
                is_valid=False,
                error_message="Invalid recipient address",
            )

        return ValidationResult(
            is_valid=True,
            normalized_value=Web3.to_checksum_address(candidate),
        )


class PrivateKeyValidator:
    KEY_HEX_LENGTH = 64
    HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

    @classmethod
    def validate(cls, value: str) -> ValidationResult:
        if not value or not value.strip():
            return ValidationResult(
                is_valid=False,
                error_message="Private key is required",
            )

        hex_part = value.strip()
        if hex_part[:2] in ("0x", "0X"):
            hex_part = hex_part[2:]

        if len(hex_part) != cls.KEY_HEX_LENGTH:
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid private key: expected {cls.KEY_HEX_LENGTH} hex characters",
            )

        if not all(c in cls.HEX_DIGITS for c in hex_part):
            return ValidationResult(
                is_valid=False,
                error_message="Invalid private key: must be hexadecimal",
            )

        return ValidationResult(
            is_valid=True,
            normalized_value="0x" + hex_part.lower(),
        )
