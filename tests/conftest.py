from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from sepolia_wallet.chain import ChainClient, SubmittedTransaction
from sepolia_wallet.keys import Credential
from sepolia_wallet.shared.network import EndpointPool

# Well-known throwaway key from the web3.py documentation. Never funded.
TEST_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
TEST_ADDRESS = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"

RECIPIENT = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"

ENDPOINTS = [
    "https://rpc-a.example",
    "https://rpc-b.example",
    "https://rpc-c.example",
]


@pytest.fixture(autouse=True)
def isolated_storage(tmp_path, monkeypatch):
    """Keep every test away from the real ~/.config/sepolia-quick-wallet."""
    storage_dir = tmp_path / "wallet"
    monkeypatch.setenv("SEPOLIA_WALLET_DIR", str(storage_dir))
    return storage_dir


@pytest.fixture
def private_key():
    return TEST_PRIVATE_KEY


@pytest.fixture
def address():
    return TEST_ADDRESS


@pytest.fixture
def recipient():
    return RECIPIENT


@pytest.fixture
def credential():
    return Credential(address=TEST_ADDRESS, private_key=TEST_PRIVATE_KEY)


@pytest.fixture
def pool():
    return EndpointPool(ENDPOINTS)


@pytest.fixture
def web3_clients():
    """One mocked Web3 instance per endpoint, keyed by URL."""
    return {endpoint: MagicMock(name=endpoint) for endpoint in ENDPOINTS}


@pytest.fixture
def web3_factory(web3_clients):
    return MagicMock(side_effect=lambda endpoint, timeout: web3_clients[endpoint])


@pytest.fixture
def chain_client(pool, web3_factory):
    return ChainClient(pool, web3_factory=web3_factory)


class FakeChain:
    """Stand-in for ChainClient that records calls instead of using the network."""

    def __init__(self, balance: str = "1.5"):
        self.balance = balance
        self.balance_error: Exception | None = None
        self.send_error: Exception | None = None
        self.receipts: dict[str, dict | None] = {}
        self.receipt_errors: dict[str, Exception] = {}
        self.balance_calls: list[str] = []
        self.sent: list[tuple[Credential, str, Decimal]] = []
        self._counter = 0

    def fetch_balance(self, address: str) -> str:
        self.balance_calls.append(address)
        if self.balance_error:
            raise self.balance_error
        return self.balance

    def fetch_gas_price(self) -> str:
        return "1.5"

    def send_transaction(self, credential, to, amount) -> SubmittedTransaction:
        if self.send_error:
            raise self.send_error
        self.sent.append((credential, to, amount))
        self._counter += 1
        return SubmittedTransaction(
            hash="0x" + f"{self._counter:064x}",
            from_address=credential.address,
            to_address=to,
            value=str(amount),
        )

    def fetch_receipt(self, tx_hash: str):
        if tx_hash in self.receipt_errors:
            raise self.receipt_errors[tx_hash]
        return self.receipts.get(tx_hash)


@pytest.fixture
def fake_chain():
    return FakeChain()
