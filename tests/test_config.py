import json
from pathlib import Path

import pytest

from sepolia_wallet.shared.config import (
    DEFAULT_ENDPOINTS,
    WalletConfig,
    load_config,
    resolve_storage_dir,
    save_config,
)


@pytest.mark.unit
class TestResolveStorageDir:
    def test_explicit_argument_wins(self, tmp_path):
        assert resolve_storage_dir(tmp_path / "x") == tmp_path / "x"

    def test_environment_variable(self, isolated_storage):
        assert resolve_storage_dir() == isolated_storage

    def test_default_location(self, monkeypatch):
        monkeypatch.delenv("SEPOLIA_WALLET_DIR")
        assert resolve_storage_dir() == Path.home() / ".config" / "sepolia-quick-wallet"


@pytest.mark.unit
class TestWalletConfig:
    def test_defaults(self):
        config = WalletConfig()
        assert config.endpoints == DEFAULT_ENDPOINTS
        assert config.chain_id == 11155111
        assert config.network_name == "Sepolia Testnet"
        assert config.balance_poll_interval == 30.0
        assert config.reconcile_interval == 15.0
        assert config.timeout_config.request_timeout == (5.0, 15.0)

    def test_default_endpoints_are_not_shared(self):
        config = WalletConfig()
        config.endpoints.append("https://extra.example")
        assert WalletConfig().endpoints == DEFAULT_ENDPOINTS

    def test_explorer_url(self):
        assert WalletConfig().explorer_tx_url("0xabc") == "https://sepolia.etherscan.io/tx/0xabc"

    def test_dict_round_trip(self):
        config = WalletConfig(endpoints=["https://a.example"], balance_poll_interval=10)
        assert WalletConfig.from_dict(config.to_dict()) == config

    def test_empty_endpoint_list_falls_back_to_defaults(self):
        assert WalletConfig.from_dict({"endpoints": []}).endpoints == DEFAULT_ENDPOINTS
        assert WalletConfig.from_dict({"endpoints": ["  "]}).endpoints == DEFAULT_ENDPOINTS


@pytest.mark.unit
class TestLoadConfig:
    def test_missing_file_writes_defaults(self, tmp_path):
        config = load_config(tmp_path)

        assert config == WalletConfig()
        assert json.loads((tmp_path / "config.json").read_text())["chain_id"] == 11155111

    def test_saved_config_is_loaded(self, tmp_path):
        save_config(WalletConfig(endpoints=["https://only.example"]), tmp_path)

        assert load_config(tmp_path).endpoints == ["https://only.example"]

    def test_unreadable_file_uses_defaults(self, tmp_path):
        (tmp_path / "config.json").write_text("not json")

        assert load_config(tmp_path) == WalletConfig()
