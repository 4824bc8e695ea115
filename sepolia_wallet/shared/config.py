"""Configuration for Sepolia Quick Wallet."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from sepolia_wallet.shared.network import TimeoutConfig

logger = logging.getLogger(__name__)

SEPOLIA_CHAIN_ID = 11155111

DEFAULT_ENDPOINTS: list[str] = [
    "https://ethereum-sepolia-rpc.publicnode.com",
    "https://eth-sepolia.g.alchemy.com/v2/demo",
    "https://sepolia.gateway.tenderly.co",
]

CONFIG_FILENAME = "config.json"


def resolve_storage_dir(storage_dir: str | Path | None = None) -> Path:
    if storage_dir:
        return Path(storage_dir).expanduser()

    env_dir = os.getenv("SEPOLIA_WALLET_DIR")
    if env_dir:
        return Path(env_dir).expanduser()

    return Path.home() / ".config" / "sepolia-quick-wallet"


@dataclass
class WalletConfig:
    endpoints: list[str] = field(default_factory=lambda: list(DEFAULT_ENDPOINTS))
    chain_id: int = SEPOLIA_CHAIN_ID
    network_name: str = "Sepolia Testnet"
    explorer_url: str = "https://sepolia.etherscan.io"
    balance_poll_interval: float = 30.0
    reconcile_interval: float = 15.0
    confirmation_timeout: float = 120.0
    timeout_config: TimeoutConfig = field(default_factory=TimeoutConfig)

    def explorer_tx_url(self, tx_hash: str) -> str:
        return f"{self.explorer_url.rstrip('/')}/tx/{tx_hash}"

    def to_dict(self) -> dict:
        return {
            "endpoints": list(self.endpoints),
            "chain_id": self.chain_id,
            "network_name": self.network_name,
            "explorer_url": self.explorer_url,
            "balance_poll_interval": self.balance_poll_interval,
            "reconcile_interval": self.reconcile_interval,
            "confirmation_timeout": self.confirmation_timeout,
            "timeout": {
                "connect_timeout": self.timeout_config.connect_timeout,
                "read_timeout": self.timeout_config.read_timeout,
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WalletConfig":
        defaults = cls()
        endpoints = [
            str(url).strip() for url in data.get("endpoints") or [] if str(url).strip()
        ]
        if not endpoints:
            endpoints = list(DEFAULT_ENDPOINTS)
        timeout_cfg = data.get("timeout", {})
        return cls(
            endpoints=endpoints,
            chain_id=int(data.get("chain_id", defaults.chain_id)),
            network_name=data.get("network_name", defaults.network_name),
            explorer_url=data.get("explorer_url", defaults.explorer_url),
            balance_poll_interval=float(
                data.get("balance_poll_interval", defaults.balance_poll_interval)
            ),
            reconcile_interval=float(
                data.get("reconcile_interval", defaults.reconcile_interval)
            ),
            confirmation_timeout=float(
                data.get("confirmation_timeout", defaults.confirmation_timeout)
            ),
            timeout_config=TimeoutConfig(
                connect_timeout=float(timeout_cfg.get("connect_timeout", 5.0)),
                read_timeout=float(timeout_cfg.get("read_timeout", 15.0)),
            ),
        )


def load_config(storage_dir: str | Path | None = None) -> WalletConfig:
    """Read ``config.json``; write defaults if it does not exist yet."""
    config_dir = resolve_storage_dir(storage_dir)
    config_file = config_dir / CONFIG_FILENAME

    if not config_file.exists():
        config = WalletConfig()
        save_config(config, config_dir)
        return config

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
        return WalletConfig.from_dict(data)
    except (OSError, ValueError, TypeError, AttributeError) as e:
        logger.warning("Config file %s is unreadable, using defaults: %s", config_file, e)
        return WalletConfig()


def save_config(config: WalletConfig, storage_dir: str | Path | None = None) -> None:
    config_dir = resolve_storage_dir(storage_dir)
    try:
        config_dir.mkdir(parents=True, exist_ok=True)
        with open(config_dir / CONFIG_FILENAME, "w", encoding="utf-8") as f:
            json.dump(config.to_dict(), f, indent=2)
    except OSError as e:
        logger.error("Failed to save config: %s", e)
