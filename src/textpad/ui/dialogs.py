"""Qt dialog providers consumed by the editor session.

These classes satisfy the session's ``DialogProvider`` and ``FontProvider``
protocols so the session itself never touches Qt.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

from PySide6.QtGui import QFont
from PySide6.QtWidgets import QFileDialog, QFontDialog, QMessageBox, QWidget

from ..editor.document_model import FontSpec
from ..editor.editor_widget import font_from_spec, spec_from_font

LOGGER = logging.getLogger(__name__)

TEXT_FILE_FILTER = "Text Files (*.txt);;All Files (*)"
ERROR_TITLE = "Error"

ParentProvider = Callable[[], "QWidget | None"]
ErrorReporter = Callable[["QWidget | None", str], Any]


class FileDialogProvider:
    """Provider for the open and save file dialogs.

    Example:
        provider = FileDialogProvider(
            parent_provider=lambda: main_window,
            start_dir_resolver=lambda: Path.home(),
        )

        path = provider.prompt_open_path()
        if path:
            # User selected a file
            ...
    """

    __slots__ = ("_parent_provider", "_start_dir_resolver")

    def __init__(
        self,
        *,
        parent_provider: ParentProvider | None = None,
        start_dir_resolver: Callable[[], Path | None] | None = None,
    ) -> None:
        self._parent_provider = parent_provider
        self._start_dir_resolver = start_dir_resolver

    def prompt_open_path(self) -> Path | None:
        """Prompt user to select a file to open; ``None`` if canceled."""

        selected, _ = QFileDialog.getOpenFileName(
            self._parent(), "Open", self._start_dir(), TEXT_FILE_FILTER
        )
        return Path(selected) if selected else None

    def prompt_save_path(self) -> Path | None:
        """Prompt user to select a save location; ``None`` if canceled."""

        selected, _ = QFileDialog.getSaveFileName(
            self._parent(), "Save As", self._start_dir(), TEXT_FILE_FILTER
        )
        return Path(selected) if selected else None

    def _parent(self) -> QWidget | None:
        return self._parent_provider() if self._parent_provider else None

    def _start_dir(self) -> str:
        start_dir = self._start_dir_resolver() if self._start_dir_resolver else None
        return str(start_dir) if start_dir else ""


class FontDialogProvider:
    """Provider for the font chooser."""

    __slots__ = ("_parent_provider",)

    def __init__(self, *, parent_provider: ParentProvider | None = None) -> None:
        self._parent_provider = parent_provider

    def prompt_font(self, current: FontSpec) -> FontSpec | None:
        """Show the font dialog seeded with ``current``; ``None`` if canceled."""

        parent = self._parent_provider() if self._parent_provider else None
        result = QFontDialog.getFont(font_from_spec(current), parent, "Font Chooser")
        accepted, font = _unpack_font_result(result)
        if not accepted or font is None:
            return None
        return spec_from_font(font, fallback_size=current.size)


def show_error(parent: QWidget | None, message: str) -> None:
    """Display a modal error report."""

    LOGGER.debug("Showing error dialog: %s", message)
    QMessageBox.critical(parent, ERROR_TITLE, message)


def _unpack_font_result(result: Any) -> tuple[bool, QFont | None]:
    # PySide6 returns (ok, font); other bindings return (font, ok).
    accepted = False
    font: QFont | None = None
    for item in result:
        if isinstance(item, QFont):
            font = item
        elif isinstance(item, bool):
            accepted = item
    return accepted, font


__all__ = [
    "ERROR_TITLE",
    "ErrorReporter",
    "FileDialogProvider",
    "FontDialogProvider",
    "TEXT_FILE_FILTER",
    "show_error",
]
