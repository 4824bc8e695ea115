"""Clipboard helpers for copying the wallet address out of the TUI."""

from __future__ import annotations

import base64
import os
import sys
from dataclasses import dataclass
from typing import Callable, TextIO


@dataclass
class CopyResult:
    success: bool
    method: str | None = None


def _terminal_streams(stream: TextIO | None) -> list[TextIO]:
    streams: list[TextIO] = []
    if stream is not None:
        streams.append(stream)
    # The TUI replaces sys.stdout; __stdout__ still points at the terminal.
    if sys.__stdout__ is not None:
        streams.append(sys.__stdout__)
    streams.append(sys.stdout)
    return streams


def copy_with_osc52(text: str, stream: TextIO | None = None) -> bool:
    if not text:
        return False

    payload = base64.b64encode(text.encode("utf-8")).decode("ascii")
    sequence = f"\x1b]52;c;{payload}\x07"
    if os.getenv("TMUX"):
        sequence = f"\x1bPtmux;\x1b{sequence}\x1b\\"

    for output in _terminal_streams(stream):
        try:
            output.write(sequence)
            output.flush()
            return True
        except (OSError, ValueError):
            continue
    return False


def copy_with_pyperclip(text: str) -> bool:
    if not text:
        return False

    try:
        import pyperclip
    except ImportError:
        return False

    try:
        pyperclip.copy(text)
    except Exception:
        return False
    return True


def copy_text(text: str, prefer_osc52: bool = False) -> CopyResult:
    methods: list[tuple[str, Callable[[str], bool]]] = [
        ("pyperclip", copy_with_pyperclip),
        ("osc52", copy_with_osc52),
    ]
    if prefer_osc52:
        methods.reverse()

    for method_name, method in methods:
        if method(text):
            return CopyResult(success=True, method=method_name)

    return CopyResult(success=False)
