"""CSS styles for the Sepolia Quick Wallet application."""

CSS = """
Screen {
    background: #1e1e2e;
}

Header {
    background: #181825;
    text-style: bold;
    padding: 0 1;
    height: 3;
}

#wallet-header {
    background: #181825;
    color: #a6adc8;
    padding: 0 2;
    height: 1;
    dock: top;
}

Footer {
    background: #181825;
    height: 2;
}

Tabs {
    background: #181825;
    height: 3;
}

Tab {
    background: #1e1e2e;
    text-style: bold;
    padding: 0 1;
    min-height: 1;
}

Tab.active {
    background: #22d3ee;
    color: #0f172a;
    text-style: bold reverse;
}

DataTable {
    background: #1e1e2e;
    border: solid #3b82f6;
}

Button {
    background: transparent;
    color: #3b82f6;
    border: none;
    height: 3;
    min-height: 3;
    min-width: 20;
    padding: 0 1;
    margin: 0;
    content-align: center middle;
}

Button:hover {
    background: #3b82f6;
    color: #ffffff;
    text-style: underline;
}

Button:focus {
    background: #3b82f6;
    color: #ffffff;
    text-style: bold underline reverse;
}

Button.primary {
    background: #22d3ee;
    color: #0f172a;
    border: solid #22d3ee;
    text-style: bold;
}

#logout-button {
    border: solid #f43f5e;
    color: #f43f5e;
}

#logout-button:hover {
    background: #f43f5e;
    color: #0f172a;
}

Horizontal {
    height: auto;
    margin: 0 0 1 0;
    padding: 0 1;
}

#wallet-tab, #send-tab, #history-tab {
    padding: 1 2;
}

#wallet-title, #send-title, #history-title, #confirm-title, #result-title, #secret-title {
    text-style: bold;
    color: #67e8f9;
    margin-bottom: 1;
    border-bottom: solid #22d3ee;
    padding-bottom: 0;
}

#balance-display {
    padding: 0 1;
    background: #181825;
    border: solid #3b82f6;
    color: #f8fafc;
    text-style: bold;
    margin: 0 0 1 0;
}

#gas-price-display, #send-helper, #history-explorer {
    color: #94a3b8;
    margin-bottom: 1;
}

#transfer-result {
    min-height: 2;
    margin-top: 1;
    color: #f8fafc;
}

#tx-hash-display, #secret-key-display {
    background: #181825;
    border: solid #3b82f6;
    padding: 0 1;
    margin: 0 0 1 0;
    color: #e2e8f0;
}

Label {
    color: #e2e8f0;
}

Input {
    background: #181825;
    border: solid #3b82f6;
    color: #e2e8f0;
    padding: 0 1;
    min-height: 1;
}

Static {
    color: #a6adc8;
}

.warning {
    color: #fbbf24;
}

.hint {
    color: #94a3b8;
}

.hidden {
    display: none;
}

ModalScreen {
    align: center middle;
}

ModalScreen > Vertical {
    border: solid #22d3ee;
    background: #181825;
    padding: 1 2;
    width: 80;
    height: auto;
}
"""
