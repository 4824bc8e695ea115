"""Main application entry point for Sepolia Quick Wallet."""

import logging
import threading
from typing import Any, Callable, cast

from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal
from textual.timer import Timer
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    Label,
    Static,
    Tab,
    Tabs,
)

from sepolia_wallet.features.history.ledger import TransactionRecord, TransactionStatus
from sepolia_wallet.keys import Credential
from sepolia_wallet.screens import (
    ConfirmSendScreen,
    ImportWalletScreen,
    LogoutConfirmScreen,
    PasswordScreen,
    SecretKeyScreen,
    SetPasswordScreen,
    SetupScreen,
    TransactionResultScreen,
)
from sepolia_wallet.shared.clipboard import copy_text
from sepolia_wallet.shared.errors import StorageError, WalletError
from sepolia_wallet.shared.logging import format_error_for_user, setup_logging
from sepolia_wallet.styles import CSS
from sepolia_wallet.wallet import Wallet

logger = logging.getLogger(__name__)

STATUS_GLYPHS = {
    TransactionStatus.PENDING: "[yellow]⏳ pending[/yellow]",
    TransactionStatus.CONFIRMED: "[green]✅ confirmed[/green]",
    TransactionStatus.FAILED: "[red]❌ failed[/red]",
}

TAB_CONTAINERS = ("wallet-tab", "send-tab", "history-tab")


def shorten(value: str, head: int = 10, tail: int = 8) -> str:
    if len(value) <= head + tail + 3:
        return value
    return f"{value[:head]}...{value[-tail:]}"


def describe_error(error: Exception) -> str:
    # Validation messages are already written for the user.
    if isinstance(error, ValueError):
        return str(error)
    return format_error_for_user(error)


class WalletApp(App):
    CSS = CSS
    TITLE = "Sepolia Quick Wallet"

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("r", "refresh", "Refresh"),
        ("c", "copy_address", "Copy address"),
    ]

    wallet: Wallet
    _balance_timer: Timer | None = None
    _reconcile_timer: Timer | None = None
    _poll_in_flight = False
    _reconcile_in_flight = False

    def __init__(self, wallet: Wallet | None = None):
        super().__init__()
        self._injected_wallet = wallet

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("[dim]No wallet loaded[/dim]", id="wallet-header")
        self.tabs = Tabs(
            Tab("Wallet", id="wallet-tab-btn"),
            Tab("Send", id="send-tab-btn"),
            Tab("History", id="history-tab-btn"),
        )
        yield self.tabs

        with Container(id="wallet-tab"):
            yield Label("👛 Wallet", id="wallet-title")
            yield Button("Loading...", id="address-button")
            yield Static("0 ETH", id="balance-display")
            yield Static("", id="gas-price-display")
            yield Horizontal(
                Button("🔄 Refresh", id="refresh-button"),
                Button("📋 Copy Address", id="copy-address-button"),
                Button("🚪 Logout", id="logout-button"),
            )

        with Container(id="send-tab"):
            yield Label("📤 Send", id="send-title")
            yield Static(
                "Send Sepolia ETH. Gas limit is fixed at 21000.",
                id="send-helper",
            )
            yield Label("Recipient Address")
            yield Input(placeholder="0x...", id="recipient-input")
            yield Label("Amount (ETH)")
            yield Input(placeholder="0.01", id="amount-input")
            yield Button("📤 Send Now", id="send-button", variant="primary")
            yield Static(id="transfer-result")

        with Container(id="history-tab"):
            yield Label("📜 Transaction History", id="history-title")
            yield DataTable(id="history-table", cursor_type="row")
            yield Static("Select a transaction to see its explorer link.", id="history-explorer")
            yield Button("🔄 Check Status", id="refresh-history-button")

        yield Footer()

    def on_mount(self) -> None:
        self.wallet = self._injected_wallet or Wallet()
        logger.info("Storage directory: %s", self.wallet.storage_dir)
        self._show_main(False)

        table = cast(DataTable, self.query_one("#history-table"))
        table.add_column("Status", key="status")
        table.add_column("To", key="to")
        table.add_column("Hash", key="hash")
        table.add_column("Value", key="value")
        table.add_column("Time", key="time")

        try:
            has_wallet = self.wallet.has_wallet()
            needs_password = has_wallet and self.wallet.requires_password()
        except StorageError as e:
            logger.error("Stored wallet is unreadable: %s", e)
            self.notify(f"Stored wallet is unreadable: {e}", severity="error")
            has_wallet = needs_password = False

        if needs_password:
            self.push_screen(PasswordScreen(), self._on_password_entered)
        elif has_wallet:
            self._load_stored_wallet(None)
        else:
            self._show_setup()

    def on_unmount(self) -> None:
        self._stop_timers()

    # Setup flow

    def _show_setup(self) -> None:
        self._show_main(False)
        self.push_screen(SetupScreen(self.wallet.network_name), self._on_setup_action)

    def _on_password_entered(self, password: str | None) -> None:
        if password is None:
            self.exit()
            return
        self._load_stored_wallet(password)

    def _load_stored_wallet(self, password: str | None) -> None:
        try:
            loaded = self.wallet.load_wallet(password)
        except WalletError as e:
            self.notify(describe_error(e), severity="error")
            if password is not None:
                self.push_screen(PasswordScreen(), self._on_password_entered)
            else:
                self._show_setup()
            return
        if loaded:
            self._enter_main_flow()
        else:
            self._show_setup()

    def _on_setup_action(self, action: str | None) -> None:
        if action == "create":
            self.push_screen(SetPasswordScreen("create"), self._on_create_password)
        elif action == "import":
            self.push_screen(ImportWalletScreen(), self._on_import_key)
        else:
            self._show_setup()

    def _on_create_password(self, result: dict[str, Any] | None) -> None:
        if result is None:
            self._show_setup()
            return
        try:
            credential = self.wallet.create_wallet(result["password"])
        except WalletError as e:
            logger.error("Failed to create wallet: %s", e)
            self.notify(f"Failed to create wallet: {describe_error(e)}", severity="error")
            self._show_setup()
            return
        self.push_screen(SecretKeyScreen(credential), lambda _: self._enter_main_flow())

    def _on_import_key(self, private_key: str | None) -> None:
        if private_key is None:
            self._show_setup()
            return

        def on_password(result: dict[str, Any] | None) -> None:
            if result is None:
                self._show_setup()
                return
            self._import_wallet(private_key, result["password"])

        self.push_screen(SetPasswordScreen("import"), on_password)

    def _import_wallet(self, private_key: str, password: str | None) -> None:
        try:
            credential: Credential = self.wallet.import_wallet(private_key, password)
        except WalletError as e:
            self.notify(f"Error importing wallet: {describe_error(e)}", severity="error")
            self._show_setup()
            return
        self.notify(f"Wallet imported: {shorten(credential.address)}", severity="information")
        self._enter_main_flow()

    # Main flow

    def _show_main(self, visible: bool) -> None:
        self.tabs.display = visible
        for container_id in TAB_CONTAINERS:
            self.query_one(f"#{container_id}").display = False
        if visible:
            self.action_switch_tab("wallet")

    def _enter_main_flow(self) -> None:
        self._show_main(True)
        self.update_header()
        self.update_history()
        self._start_timers()
        self.refresh_wallet_async(notify_errors=True)

    def action_switch_tab(self, tab_name: str) -> None:
        for container_id in TAB_CONTAINERS:
            self.query_one(f"#{container_id}").display = container_id == f"{tab_name}-tab"
        if tab_name == "history":
            self.update_history()

    def on_tabs_tab_activated(self, event: Tabs.TabActivated) -> None:
        if not event.tab or self.wallet.credential is None:
            return
        self.action_switch_tab(event.tab.id.replace("-tab-btn", ""))

    def _start_timers(self) -> None:
        self._stop_timers()
        self._balance_timer = self.set_interval(
            self.wallet.config.balance_poll_interval, self.poll_balance
        )
        self._reconcile_timer = self.set_interval(
            self.wallet.config.reconcile_interval, self.reconcile_pending
        )

    def _stop_timers(self) -> None:
        for timer in (self._balance_timer, self._reconcile_timer):
            if timer is not None:
                timer.stop()
        self._balance_timer = None
        self._reconcile_timer = None

    def update_header(self) -> None:
        header = cast(Static, self.query_one("#wallet-header"))
        address_button = cast(Button, self.query_one("#address-button"))
        balance_display = cast(Static, self.query_one("#balance-display"))

        if self.wallet.address is None:
            header.update("[dim]No wallet loaded[/dim]")
            address_button.label = "No wallet"
            balance_display.update("0 ETH")
            return

        loading = " [yellow]⟳[/yellow]" if self.wallet.is_loading else ""
        header.update(
            f"🌐 {self.wallet.network_name} | {shorten(self.wallet.address)} | "
            f"{self.wallet.balance} ETH{loading}"
        )
        address_button.label = f"📋 {self.wallet.address}"
        balance_display.update(f"💰 {self.wallet.balance} ETH")

    def update_history(self) -> None:
        table = cast(DataTable, self.query_one("#history-table"))
        table.clear()
        for record in self.wallet.get_transactions():
            table.add_row(
                STATUS_GLYPHS[record.status],
                shorten(record.to_address),
                f"{record.hash[:12]}...",
                f"{record.value} ETH",
                record.timestamp.astimezone().strftime("%Y-%m-%d %H:%M:%S"),
                key=record.hash,
            )

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        tx_hash = event.row_key.value
        if tx_hash:
            explorer = cast(Static, self.query_one("#history-explorer"))
            explorer.update(f"🔗 {self.wallet.explorer_url(tx_hash)}")

    # Workers

    def _run_in_thread(
        self,
        work: Callable[[], Any],
        on_done: Callable[[Any, Exception | None], None],
    ) -> None:
        def worker() -> None:
            try:
                result = work()
            except Exception as e:
                logger.error("Background task failed: %s", e, exc_info=True)
                self.call_from_thread(on_done, None, e)
            else:
                self.call_from_thread(on_done, result, None)

        threading.Thread(target=worker, daemon=True).start()

    def refresh_wallet_async(self, notify_errors: bool = True) -> None:
        if self.wallet.credential is None:
            return

        def work() -> str:
            gas_price = self.wallet.fetch_gas_price()
            self.wallet.refresh_balance()
            return gas_price

        def done(gas_price: str | None, error: Exception | None) -> None:
            self.update_header()
            if gas_price is not None:
                gas_display = cast(Static, self.query_one("#gas-price-display"))
                gas_display.update(f"⚡ Gas price: {gas_price} gwei")
            if error and notify_errors:
                self.notify(describe_error(error), severity="error")

        self.update_header()
        self._run_in_thread(work, done)

    def poll_balance(self) -> None:
        if self.wallet.credential is None or self._poll_in_flight:
            return
        self._poll_in_flight = True

        def done(_: Any, error: Exception | None) -> None:
            self._poll_in_flight = False
            self.update_header()

        self._run_in_thread(self.wallet.poll_balance, done)

    def reconcile_pending(self) -> None:
        if self._reconcile_in_flight or not self.wallet.has_pending():
            return
        self._reconcile_in_flight = True

        def done(changes: dict[str, TransactionStatus] | None, error: Exception | None) -> None:
            self._reconcile_in_flight = False
            if not changes:
                return
            for tx_hash, status in changes.items():
                severity = "information" if status == TransactionStatus.CONFIRMED else "error"
                self.notify(f"Transaction {tx_hash[:12]}... {status.value}", severity=severity)
            self.update_history()
            self.update_header()

        self._run_in_thread(self.wallet.reconcile, done)

    # Send flow

    def send_transaction(self) -> None:
        recipient = cast(Input, self.query_one("#recipient-input")).value.strip()
        amount = cast(Input, self.query_one("#amount-input")).value.strip()
        try:
            value = self.wallet.validate_send(recipient, amount)
        except WalletError as e:
            self.notify(describe_error(e), severity="error")
            return

        def fetched(gas_price: str | None, _: Exception | None) -> None:
            self.push_screen(
                ConfirmSendScreen(recipient, value, self.wallet.network_name, gas_price or "0"),
                lambda confirmed: self._submit_transaction(recipient, amount, confirmed),
            )

        self._run_in_thread(self.wallet.fetch_gas_price, fetched)

    def _submit_transaction(self, recipient: str, amount: str, confirmed: bool | None) -> None:
        if not confirmed:
            return
        result = cast(Static, self.query_one("#transfer-result"))
        result.update("[yellow]Submitting transaction...[/yellow]")
        cast(Button, self.query_one("#send-button")).disabled = True
        self._run_in_thread(lambda: self.wallet.send(recipient, amount), self._on_send_finished)

    def _on_send_finished(self, record: TransactionRecord | None, error: Exception | None) -> None:
        cast(Button, self.query_one("#send-button")).disabled = False
        result = cast(Static, self.query_one("#transfer-result"))
        if error or record is None:
            message = describe_error(error) if error else "Transaction failed"
            result.update(f"[red]{message}[/red]")
            self.notify(message, severity="error")
            return

        result.update(f"[green]Sent {record.value} ETH ({record.hash[:12]}...)[/green]")
        cast(Input, self.query_one("#recipient-input")).value = ""
        cast(Input, self.query_one("#amount-input")).value = ""
        self.update_header()
        self.update_history()
        self.push_screen(
            TransactionResultScreen(record.hash, self.wallet.explorer_url(record.hash))
        )

    # Actions

    def action_refresh(self) -> None:
        self.refresh_wallet_async(notify_errors=True)

    def action_copy_address(self) -> None:
        address = self.wallet.address
        if not address:
            self.notify("No wallet address to copy", severity="warning")
            return
        copy_result = copy_text(address, prefer_osc52=True)
        if copy_result.success:
            logger.info("Address copied using %s", copy_result.method)
            self.notify("Address copied to clipboard!", severity="information")
        else:
            self.notify("Clipboard unavailable. Address is shown on screen.", severity="warning")

    def confirm_logout(self) -> None:
        self.push_screen(LogoutConfirmScreen(), self._on_logout_confirmed)

    def _on_logout_confirmed(self, confirmed: bool | None) -> None:
        if not confirmed:
            return
        self._stop_timers()
        try:
            self.wallet.logout()
        except StorageError as e:
            self.notify(f"Logout failed: {e}", severity="error")
            self._start_timers()
            return
        cast(Static, self.query_one("#gas-price-display")).update("")
        cast(Static, self.query_one("#transfer-result")).update("")
        self.update_header()
        self.update_history()
        self._show_setup()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id
        logger.debug("Button pressed: %s", button_id)
        if button_id == "send-button":
            self.send_transaction()
        elif button_id == "refresh-button":
            self.refresh_wallet_async(notify_errors=True)
        elif button_id in ("copy-address-button", "address-button"):
            self.action_copy_address()
        elif button_id == "logout-button":
            self.confirm_logout()
        elif button_id == "refresh-history-button":
            self.reconcile_pending()
            self.update_history()


def main():
    """Entry point for the application."""
    setup_logging()
    app = WalletApp()
    app.run()


if __name__ == "__main__":
    main()
