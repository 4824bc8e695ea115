import sys
from io import StringIO
from types import SimpleNamespace

import pytest

from sepolia_wallet.shared.clipboard import (
    CopyResult,
    copy_text,
    copy_with_osc52,
    copy_with_pyperclip,
)

ADDRESS = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"


@pytest.mark.unit
def test_copy_with_osc52_writes_escape_sequence(monkeypatch):
    monkeypatch.delenv("TMUX", raising=False)
    stream = StringIO()
    assert copy_with_osc52("ABC", stream=stream)

    value = stream.getvalue()
    assert value == "\x1b]52;c;QUJD\x07"


@pytest.mark.unit
def test_copy_with_osc52_wraps_for_tmux(monkeypatch):
    monkeypatch.setenv("TMUX", "/tmp/tmux-1000/default,1,0")
    stream = StringIO()
    copy_with_osc52("ABC", stream=stream)

    assert stream.getvalue().startswith("\x1bPtmux;")


@pytest.mark.unit
def test_copy_with_osc52_rejects_empty_text():
    assert copy_with_osc52("", stream=StringIO()) is False


@pytest.mark.unit
def test_copy_with_pyperclip_success(monkeypatch):
    state = {"value": ""}

    def fake_copy(text):
        state["value"] = text

    monkeypatch.setitem(sys.modules, "pyperclip", SimpleNamespace(copy=fake_copy))

    assert copy_with_pyperclip(ADDRESS)
    assert state["value"] == ADDRESS


@pytest.mark.unit
def test_copy_with_pyperclip_failure(monkeypatch):
    def broken_copy(text):
        raise RuntimeError("no clipboard mechanism")

    monkeypatch.setitem(sys.modules, "pyperclip", SimpleNamespace(copy=broken_copy))

    assert copy_with_pyperclip(ADDRESS) is False


@pytest.mark.unit
def test_copy_text_falls_back_to_osc52(monkeypatch):
    monkeypatch.setattr("sepolia_wallet.shared.clipboard.copy_with_pyperclip", lambda text: False)
    monkeypatch.setattr("sepolia_wallet.shared.clipboard.copy_with_osc52", lambda text: True)

    assert copy_text("ABC") == CopyResult(success=True, method="osc52")


@pytest.mark.unit
def test_copy_text_prefers_osc52_when_asked(monkeypatch):
    monkeypatch.setattr("sepolia_wallet.shared.clipboard.copy_with_pyperclip", lambda text: True)
    monkeypatch.setattr("sepolia_wallet.shared.clipboard.copy_with_osc52", lambda text: True)

    assert copy_text("ABC", prefer_osc52=True).method == "osc52"


@pytest.mark.unit
def test_copy_text_reports_failure(monkeypatch):
    monkeypatch.setattr("sepolia_wallet.shared.clipboard.copy_with_pyperclip", lambda text: False)
    monkeypatch.setattr("sepolia_wallet.shared.clipboard.copy_with_osc52", lambda text: False)

    assert copy_text("ABC") == CopyResult(success=False)
