import logging
from contextlib import contextmanager
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterator

from sepolia_wallet import keys
from sepolia_wallet.chain import ChainClient
from sepolia_wallet.features.history.ledger import (
    TransactionLedger,
    TransactionRecord,
    TransactionStatus,
)
from sepolia_wallet.features.history.reconciler import ReceiptReconciler
from sepolia_wallet.features.transfer.service import TransferService
from sepolia_wallet.keys import Credential
from sepolia_wallet.shared.config import WalletConfig, load_config, resolve_storage_dir
from sepolia_wallet.shared.errors import WalletError
from sepolia_wallet.shared.network import EndpointPool
from sepolia_wallet.storage import WalletStore

logger = logging.getLogger(__name__)


class Wallet:
    """Session state of the single account: credential, balance and ledger.

    The UI owns one instance. No credential means the setup flow is shown;
    a credential means the main flow. Every method that talks to the chain
    blocks and is meant to run in a worker thread.
    """

    def __init__(
        self,
        storage_dir: str | Path | None = None,
        config: WalletConfig | None = None,
        chain: ChainClient | None = None,
    ):
        self.storage_dir = resolve_storage_dir(storage_dir)
        self.config = config or load_config(self.storage_dir)
        self.pool = EndpointPool(self.config.endpoints)
        self.chain = chain or ChainClient(
            self.pool,
            chain_id=self.config.chain_id,
            timeout_config=self.config.timeout_config,
            confirmation_timeout=self.config.confirmation_timeout,
        )
        self.ledger = TransactionLedger()
        self.transfers = TransferService(self.chain, self.ledger)
        self.reconciler = ReceiptReconciler(self.chain, self.ledger)
        self._store = WalletStore(self.storage_dir)

        self.credential: Credential | None = None
        self.balance = "0"
        self.is_loading = False
        self.last_error: str | None = None

    @property
    def address(self) -> str | None:
        return self.credential.address if self.credential else None

    @property
    def network_name(self) -> str:
        return self.config.network_name

    def has_wallet(self) -> bool:
        return self._store.exists()

    def requires_password(self) -> bool:
        return self._store.is_encrypted()

    @contextmanager
    def _user_action(self) -> Iterator[None]:
        self.is_loading = True
        self.last_error = None
        try:
            yield
        except WalletError as e:
            self.last_error = str(e)
            raise
        finally:
            self.is_loading = False

    def _set_credential(self, credential: Credential, store: WalletStore) -> None:
        self._store = store
        self.credential = credential
        self.balance = "0"
        self.ledger.clear()

    def load_wallet(self, password: str | None = None) -> bool:
        """Load the stored credential. ``False`` when nothing is stored yet."""
        with self._user_action():
            store = WalletStore(self.storage_dir, password)
            credential = store.load()
            if credential is None:
                return False
            self._set_credential(credential, store)
        return True

    def create_wallet(self, password: str | None = None) -> Credential:
        with self._user_action():
            credential = keys.create_new()
            store = WalletStore(self.storage_dir, password)
            store.save(credential)
            self._set_credential(credential, store)
        logger.info("New wallet created: %s", credential.address)
        return credential

    def import_wallet(self, raw_key: str, password: str | None = None) -> Credential:
        with self._user_action():
            credential = keys.import_from_key(raw_key)
            store = WalletStore(self.storage_dir, password)
            store.save(credential)
            self._set_credential(credential, store)
        logger.info("Wallet imported: %s", credential.address)
        return credential

    def logout(self) -> None:
        self._store.remove()
        self.credential = None
        self.balance = "0"
        self.ledger.clear()
        self.last_error = None
        self.is_loading = False
        self._store = WalletStore(self.storage_dir)
        logger.info("Logged out")

    def _require_credential(self) -> Credential:
        if self.credential is None:
            raise WalletError("No wallet loaded")
        return self.credential

    def _fetch_balance(self) -> str:
        credential = self._require_credential()
        balance = self.chain.fetch_balance(credential.address)
        # A logout or switch while the call was in flight makes the reading stale.
        if self.credential is credential:
            self.balance = balance
        return balance

    def refresh_balance(self) -> str:
        with self._user_action():
            return self._fetch_balance()

    def poll_balance(self) -> str | None:
        if self.credential is None:
            return None
        try:
            return self._fetch_balance()
        except WalletError as e:
            logger.warning("Balance poll failed: %s", e)
            return None

    def _balance_decimal(self) -> Decimal:
        try:
            return Decimal(self.balance)
        except InvalidOperation:
            return Decimal(0)

    def validate_send(self, recipient: str, amount: str) -> Decimal:
        """Check a send request against the last known balance, offline.

        Raises:
            InvalidRecipientError, InvalidAmountError, InsufficientBalanceError
        """
        _, value = self.transfers.validate(recipient, amount, self._balance_decimal())
        return value

    def send(self, recipient: str, amount: str) -> TransactionRecord:
        with self._user_action():
            credential = self._require_credential()
            record = self.transfers.send(
                credential, recipient, amount, balance=self._balance_decimal()
            )
        self.poll_balance()
        return record

    def reconcile(self) -> dict[str, TransactionStatus]:
        if self.credential is None:
            return {}
        changes = self.reconciler.reconcile()
        if changes:
            self.poll_balance()
        return changes

    def has_pending(self) -> bool:
        return self.reconciler.has_pending()

    def get_transactions(self) -> list[TransactionRecord]:
        return self.ledger.get_all()

    def explorer_url(self, tx_hash: str) -> str:
        return self.config.explorer_tx_url(tx_hash)

    def fetch_gas_price(self) -> str:
        return self.chain.fetch_gas_price()
