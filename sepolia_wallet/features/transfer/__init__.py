"""Transfer feature module for Sepolia Quick Wallet."""

from sepolia_wallet.features.transfer.service import TransferService

__all__ = ["TransferService"]
