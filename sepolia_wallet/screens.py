"""Modal screens for the Sepolia Quick Wallet application."""

import logging
from decimal import Decimal
from typing import cast

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from sepolia_wallet.keys import Credential
from sepolia_wallet.shared.clipboard import copy_text
from sepolia_wallet.shared.validation import PrivateKeyValidator

logger = logging.getLogger(__name__)


class BaseModalScreen(ModalScreen):
    """Base modal screen with common key bindings."""

    BINDINGS = [
        ("escape", "cancel", "Close"),
        ("tab", "focus_next", "Next"),
        ("shift+tab", "focus_previous", "Previous"),
    ]

    def action_cancel(self) -> None:
        self.dismiss(None)


class SetupScreen(BaseModalScreen):
    """First screen when no wallet is stored. Dismisses with the action."""

    BINDINGS = [("tab", "focus_next", "Next"), ("shift+tab", "focus_previous", "Previous")]

    def __init__(self, network_name: str):
        super().__init__()
        self.network_name = network_name

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label(f"🚀 Wallet Setup - {self.network_name}")
            yield Static("Choose an option:")
            yield Horizontal(
                Button("✨ Create New Wallet", id="create-button", variant="primary"),
                Button("🔑 Import Existing Wallet", id="import-button"),
                Button("❌ Quit", id="quit-button"),
            )
            yield Static(
                "💡 This wallet only talks to the Sepolia test network.",
                classes="hint",
            )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "create-button":
            self.dismiss("create")
        elif event.button.id == "import-button":
            self.dismiss("import")
        elif event.button.id == "quit-button":
            self.app.exit()


class SetPasswordScreen(BaseModalScreen):
    """Optional password for encrypting the stored key.

    Dismisses with ``{"password": str | None}``, or ``None`` when cancelled.
    """

    def __init__(self, action: str):
        super().__init__()
        self.action = action

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label(f"🔐 Protect Wallet - {self.action.capitalize()}")
            yield Label("Password (optional):")
            yield Input(placeholder="Leave empty to store the key unencrypted", id="password-input", password=True)
            yield Label("Confirm Password:")
            yield Input(placeholder="Confirm password", id="confirm-password-input", password=True)
            yield Horizontal(
                Button("✓ Continue", id="set-password-button", variant="primary"),
                Button("✗ Cancel", id="cancel-button"),
            )
            yield Static(
                "⚠️ There is no password recovery. Without a password the key is stored in plain text.",
                classes="warning",
            )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "set-password-button":
            password = cast(Input, self.query_one("#password-input")).value
            confirm = cast(Input, self.query_one("#confirm-password-input")).value
            if password != confirm:
                self.notify("Passwords do not match", severity="error")
                return
            self.dismiss({"password": password or None})
        elif event.button.id == "cancel-button":
            self.dismiss(None)


class ImportWalletScreen(BaseModalScreen):
    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label("📥 Import Wallet")
            yield Input(
                placeholder="Private key (64 hex characters, 0x optional)",
                id="private-key-input",
                password=True,
            )
            yield Label("⚠️ Never share your private key with anyone!")
            yield Horizontal(
                Button("✓ Import", id="import-button", variant="primary"),
                Button("✗ Cancel", id="cancel-button"),
            )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "import-button":
            private_key = cast(Input, self.query_one("#private-key-input")).value
            result = PrivateKeyValidator.validate(private_key)
            if not result.is_valid:
                self.notify(result.error_message or "Invalid private key", severity="error")
                return
            self.dismiss(result.normalized_value)
        elif event.button.id == "cancel-button":
            self.dismiss(None)


class PasswordScreen(BaseModalScreen):
    """Unlock an encrypted wallet. Dismisses with the password, or ``None``."""

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label("🔐 Unlock Wallet")
            yield Input(placeholder="Password", id="password-input", password=True)
            yield Horizontal(
                Button("✓ Unlock", id="unlock-button", variant="primary"),
                Button("✗ Cancel", id="cancel-button"),
            )

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "unlock-button":
            self._submit()
        elif event.button.id == "cancel-button":
            self.dismiss(None)

    def _submit(self) -> None:
        password = cast(Input, self.query_one("#password-input")).value
        if not password:
            self.notify("Password cannot be empty", severity="error")
            return
        self.dismiss(password)


class SecretKeyScreen(BaseModalScreen):
    """Shows a freshly created private key exactly once."""

    BINDINGS = [("tab", "focus_next", "Next"), ("shift+tab", "focus_previous", "Previous")]

    def __init__(self, credential: Credential):
        super().__init__()
        self.credential = credential

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label("🔑 Back Up Your Private Key", id="secret-title")
            yield Label("Address:")
            yield Static(self.credential.address)
            yield Label("Private key:")
            yield Static(self.credential.private_key, id="secret-key-display")
            yield Static(
                "⚠️ This is the only time the key is shown. Anyone with it controls the funds.",
                classes="warning",
            )
            yield Horizontal(
                Button("📋 Copy Key", id="copy-key-button"),
                Button("✓ I Saved It", id="done-button", variant="primary"),
            )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "copy-key-button":
            if copy_text(self.credential.private_key).success:
                self.notify("Private key copied to clipboard", severity="information")
            else:
                self.notify("Clipboard unavailable. Copy the key from the screen.", severity="warning")
        elif event.button.id == "done-button":
            self.dismiss(True)


class ConfirmSendScreen(BaseModalScreen):
    BINDINGS = BaseModalScreen.BINDINGS + [("enter", "confirm", "Confirm")]

    def __init__(self, recipient: str, amount: Decimal, network_name: str, gas_price: str = "0"):
        super().__init__()
        self.recipient = recipient
        self.amount = amount
        self.network_name = network_name
        self.gas_price = gas_price

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label("✅ Confirm Transaction", id="confirm-title")
            yield Static(f"🌐 Network: {self.network_name}")
            yield Static(f"📤 Recipient: {self.recipient}")
            yield Static(f"💰 Amount: {self.amount} ETH")
            gas_text = f"{self.gas_price} gwei" if self.gas_price != "0" else "unavailable"
            yield Static(f"⚡ Gas price: {gas_text} (limit 21000)")
            yield Horizontal(
                Button("✓ Confirm", id="confirm-button", variant="primary"),
                Button("✗ Cancel", id="cancel-button"),
            )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "confirm-button":
            self.dismiss(True)
        elif event.button.id == "cancel-button":
            self.dismiss(False)

    def action_confirm(self) -> None:
        self.dismiss(True)


class LogoutConfirmScreen(BaseModalScreen):
    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label("🚪 Logout")
            yield Static(
                "This removes the wallet from this device. Make sure your private key is backed up.",
                classes="warning",
            )
            yield Horizontal(
                Button("✓ Logout", id="confirm-button", variant="error"),
                Button("✗ Cancel", id="cancel-button"),
            )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "confirm-button")


class TransactionResultScreen(BaseModalScreen):
    def __init__(self, tx_hash: str, explorer_url: str):
        super().__init__()
        self.tx_hash = tx_hash
        self.explorer_url = explorer_url

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label("✅ Transaction Sent!", id="result-title")
            yield Label("Transaction Hash:")
            yield Static(self.tx_hash, id="tx-hash-display")
            yield Label(f"Explorer: {self.explorer_url}")
            yield Static("Status: pending. History updates once it is mined.", classes="hint")
            yield Horizontal(
                Button("📋 Copy Hash", id="copy-hash-button", variant="primary"),
                Button("❌ Close", id="close-button"),
            )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "copy-hash-button":
            if copy_text(self.tx_hash).success:
                self.notify("Transaction hash copied to clipboard!", severity="information")
            else:
                self.notify("Clipboard unavailable", severity="warning")
        elif event.button.id == "close-button":
            self.dismiss(None)
