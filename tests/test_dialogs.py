"""Tests for the Qt dialog providers."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from PySide6.QtGui import QFont

import textpad.ui.dialogs as dialogs
from textpad.editor.document_model import FontSpec

pytestmark = pytest.mark.usefixtures("qapp")


def test_open_prompt_uses_text_filter_and_start_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    captured: dict[str, Any] = {}

    def _fake_open(parent, caption, directory, file_filter):  # type: ignore[no-untyped-def]
        captured.update(parent=parent, caption=caption, directory=directory, filter=file_filter)
        return str(tmp_path / "notes.md"), file_filter

    monkeypatch.setattr(dialogs.QFileDialog, "getOpenFileName", staticmethod(_fake_open))
    provider = dialogs.FileDialogProvider(start_dir_resolver=lambda: tmp_path)

    assert provider.prompt_open_path() == tmp_path / "notes.md"
    assert captured["caption"] == "Open"
    assert captured["directory"] == str(tmp_path)
    assert captured["filter"] == "Text Files (*.txt);;All Files (*)"
    assert captured["parent"] is None


def test_save_prompt_returns_none_when_cancelled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(dialogs.QFileDialog, "getSaveFileName", staticmethod(lambda *args: ("", "")))
    provider = dialogs.FileDialogProvider()

    assert provider.prompt_save_path() is None


def test_font_prompt_converts_accepted_font(monkeypatch: pytest.MonkeyPatch) -> None:
    seeds: list[QFont] = []

    def _fake_get_font(initial, parent, title):  # type: ignore[no-untyped-def]
        seeds.append(initial)
        chosen = QFont("Courier New")
        chosen.setPointSize(18)
        chosen.setItalic(True)
        return True, chosen

    monkeypatch.setattr(dialogs.QFontDialog, "getFont", staticmethod(_fake_get_font))
    provider = dialogs.FontDialogProvider()

    result = provider.prompt_font(FontSpec(family="Arial", size=14))

    assert seeds[0].pointSize() == 14
    assert result == FontSpec(family="Courier New", size=18, bold=False, italic=True)


def test_font_prompt_returns_none_when_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(dialogs.QFontDialog, "getFont", staticmethod(lambda *args: (False, QFont())))

    assert dialogs.FontDialogProvider().prompt_font(FontSpec()) is None


def test_unpack_font_result_accepts_either_order() -> None:
    font = QFont("Serif")

    assert dialogs._unpack_font_result((True, font)) == (True, font)
    assert dialogs._unpack_font_result((font, False)) == (False, font)


def test_show_error_uses_critical_box(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[Any, str, str]] = []
    monkeypatch.setattr(
        dialogs.QMessageBox,
        "critical",
        staticmethod(lambda parent, title, text: calls.append((parent, title, text))),
    )

    dialogs.show_error(None, "Error opening file: denied")

    assert calls == [(None, "Error", "Error opening file: denied")]
