"""Persistence of the single wallet credential as ``wallet.json``."""

from __future__ import annotations

import base64
import json
import logging
from pathlib import Path

from cryptography.fernet import Fernet, InvalidToken

from sepolia_wallet.keys import Credential, import_from_key
from sepolia_wallet.shared.config import resolve_storage_dir
from sepolia_wallet.shared.errors import InvalidKeyFormatError, StorageError

logger = logging.getLogger(__name__)

WALLET_FILENAME = "wallet.json"


def _derive_key(password: str) -> bytes:
    return base64.urlsafe_b64encode(password.encode().ljust(32)[:32])


def encrypt_private_key(private_key: str, password: str) -> str:
    cipher = Fernet(_derive_key(password))
    return cipher.encrypt(private_key.encode()).decode()


def decrypt_private_key(encrypted_key: str, password: str) -> str:
    cipher = Fernet(_derive_key(password))
    try:
        return cipher.decrypt(encrypted_key.encode()).decode()
    except InvalidToken as e:
        raise StorageError("Failed to decrypt private key: wrong password") from e


class WalletStore:
    """Reads and writes one credential under the storage directory.

    Without a password the key is stored as ``privateKey`` in clear text.
    With a password it is Fernet-encrypted and stored as
    ``encryptedPrivateKey``; loading such a file requires the same password.
    """

    def __init__(self, storage_dir: str | Path | None = None, password: str | None = None):
        self.storage_dir = resolve_storage_dir(storage_dir)
        self.wallet_file = self.storage_dir / WALLET_FILENAME
        self.password = password or None

    def exists(self) -> bool:
        return self.wallet_file.exists()

    def _read(self) -> dict | None:
        if not self.wallet_file.exists():
            return None
        try:
            with open(self.wallet_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Failed to read wallet file: {e}") from e
        if not isinstance(data, dict):
            raise StorageError("Wallet file is corrupted")
        return data

    def is_encrypted(self) -> bool:
        data = self._read()
        return bool(data and data.get("encryptedPrivateKey"))

    def save(self, credential: Credential) -> None:
        data: dict[str, str] = {"address": credential.address}
        if self.password:
            data["encryptedPrivateKey"] = encrypt_private_key(
                credential.private_key, self.password
            )
        else:
            data["privateKey"] = credential.private_key

        try:
            self.storage_dir.mkdir(parents=True, exist_ok=True)
            with open(self.wallet_file, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            raise StorageError(f"Failed to save wallet: {e}") from e
        logger.info(
            "Wallet saved for %s (encrypted=%s)", credential.address, bool(self.password)
        )

    def load(self) -> Credential | None:
        data = self._read()
        if data is None:
            return None

        address = data.get("address")
        if not address or not isinstance(address, str):
            raise StorageError("Wallet file is missing the address")

        encrypted_key = data.get("encryptedPrivateKey")
        if encrypted_key:
            if not self.password:
                raise StorageError("Password is required to unlock this wallet")
            private_key = decrypt_private_key(encrypted_key, self.password)
        else:
            private_key = data.get("privateKey")
            if not private_key or not isinstance(private_key, str):
                raise StorageError("Wallet file is missing the private key")

        try:
            credential = import_from_key(private_key)
        except InvalidKeyFormatError as e:
            raise StorageError(f"Stored private key is invalid: {e}") from e
        if credential.address.lower() != address.lower():
            raise StorageError("Stored address does not match the private key")

        logger.info("Wallet loaded: %s", credential.address)
        return credential

    def remove(self) -> None:
        try:
            self.wallet_file.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to remove wallet: {e}") from e
        logger.info("Wallet file removed")
