"""Key material: create and import secp256k1 keys as wallet credentials."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from eth_account import Account

from sepolia_wallet.shared.errors import InvalidKeyFormatError
from sepolia_wallet.shared.validation import PrivateKeyValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credential:
    address: str
    private_key: str = field(repr=False)

    def __repr__(self) -> str:
        return f"Credential(address={self.address!r}, private_key='***')"


def create_new() -> Credential:
    account = Account.create()
    credential = Credential(
        address=account.address,
        private_key="0x" + account.key.hex().removeprefix("0x"),
    )
    logger.info("New key created for %s", credential.address)
    return credential


def import_from_key(raw_key: str) -> Credential:
    """Build a credential from 64 hex characters, with or without ``0x``.

    Raises:
        InvalidKeyFormatError: the input is not a well-formed private key.
    """
    result = PrivateKeyValidator.validate(raw_key or "")
    if not result.is_valid:
        raise InvalidKeyFormatError(result.error_message)

    private_key = result.normalized_value
    try:
        account = Account.from_key(private_key)
    except Exception as e:
        # Zero and keys at or above the curve order are well-formed hex but unusable.
        raise InvalidKeyFormatError("Invalid private key: out of range") from e

    return Credential(address=account.address, private_key=private_key)
