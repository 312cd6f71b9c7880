"""Main window binding the menu chrome to the editor session."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from PySide6.QtWidgets import QMainWindow, QWidget

from .editor.document_model import WindowGeometry
from .editor.editor_widget import EditorWidget
from .editor.session import (
    CommandResult,
    DialogProvider,
    EditorSession,
    FontProvider,
    SessionEvent,
)
from .services.settings import PreferenceStore, Preferences
from .ui.dialogs import ErrorReporter, FileDialogProvider, FontDialogProvider, show_error
from .ui.window_chrome import WindowChrome, WindowChromeState

_LOGGER = logging.getLogger(__name__)

WINDOW_APP_NAME = "Text Editor"


@dataclass(slots=True)
class WindowContext:
    """Shared context passed to the main window when constructing the UI."""

    settings_store: PreferenceStore
    preferences: Preferences | None = None
    dialogs: DialogProvider | None = None
    fonts: FontProvider | None = None
    error_reporter: ErrorReporter | None = None


class MainWindow(QMainWindow):
    """Single-document editor window."""

    def __init__(self, context: WindowContext, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._context = context
        self._syncing_text = False
        self._error_reporter: ErrorReporter = context.error_reporter or show_error
        dialogs = context.dialogs or FileDialogProvider(
            parent_provider=lambda: self,
            start_dir_resolver=self._resolve_start_dir,
        )
        fonts = context.fonts or FontDialogProvider(parent_provider=lambda: self)
        self._session = EditorSession(
            context.settings_store,
            preferences=context.preferences,
            dialogs=dialogs,
            fonts=fonts,
        )
        self._editor = EditorWidget(self, zoom_handler=self._session.adjust_font_size)
        self._editor.textChanged.connect(self._handle_text_changed)
        self._chrome: WindowChromeState = WindowChrome(
            window=self,
            editor=self._editor,
            action_callbacks={
                "file_open": self._handle_open,
                "file_save": self._handle_save,
                "file_save_as": self._handle_save_as,
                "settings_dark_mode": self._handle_dark_mode_toggled,
                "settings_change_font": self._handle_change_font,
            },
        ).assemble()
        self._session.add_listener(self._handle_session_event)

        self._restore_geometry()
        self._render_theme()
        self._render_font()
        self._render_title()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def session(self) -> EditorSession:
        return self._session

    @property
    def editor(self) -> EditorWidget:
        return self._editor

    @property
    def qt_actions(self) -> dict[str, Any]:
        return dict(self._chrome.qt_actions)

    def open_startup_file(self, path: Path | str) -> CommandResult:
        """Open a file supplied on the command line, if it exists."""

        result = self._session.open(Path(path))
        self._report(result)
        return result

    # ------------------------------------------------------------------
    # Action handlers
    # ------------------------------------------------------------------
    def _handle_open(self) -> None:
        self._report(self._session.open())

    def _handle_save(self) -> None:
        self._report(self._session.save())

    def _handle_save_as(self) -> None:
        self._report(self._session.save_as())

    def _handle_dark_mode_toggled(self) -> None:
        checked = self._chrome.qt_actions["settings_dark_mode"].isChecked()
        self._session.toggle_dark_mode(checked)

    def _handle_change_font(self) -> None:
        self._session.change_font()

    def _handle_text_changed(self) -> None:
        if self._syncing_text:
            return
        self._session.set_text(self._editor.toPlainText())

    def _report(self, result: CommandResult) -> None:
        if result.failed:
            self._error_reporter(self, result.message)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def _handle_session_event(self, event: SessionEvent) -> None:
        if event is SessionEvent.DOCUMENT:
            self._render_document()
        elif event is SessionEvent.FILE:
            self._render_title()
        elif event is SessionEvent.THEME:
            self._render_theme()
        elif event is SessionEvent.FONT:
            self._render_font()

    def _render_document(self) -> None:
        self._syncing_text = True
        try:
            self._editor.setPlainText(self._session.text)
        finally:
            self._syncing_text = False

    def _render_title(self) -> None:
        document = self._session.document
        title = WINDOW_APP_NAME if document.untitled else f"{WINDOW_APP_NAME} - {document.display_name}"
        self.setWindowTitle(title)

    def _render_theme(self) -> None:
        self._editor.apply_theme(self._session.theme)
        dark_mode_action = self._chrome.qt_actions["settings_dark_mode"]
        if dark_mode_action.isChecked() != self._session.dark_mode:
            dark_mode_action.setChecked(self._session.dark_mode)

    def _render_font(self) -> None:
        self._editor.apply_font(self._session.font)

    def _restore_geometry(self) -> None:
        geometry = self._session.geometry
        self.move(geometry.x, geometry.y)
        self.resize(geometry.width, geometry.height)

    def _resolve_start_dir(self) -> Path | None:
        path = self._session.path
        return path.parent if path is not None else None

    # ------------------------------------------------------------------
    # Qt lifecycle hooks
    # ------------------------------------------------------------------
    def current_geometry(self) -> WindowGeometry:
        return WindowGeometry(x=self.x(), y=self.y(), width=self.width(), height=self.height())

    def closeEvent(self, event: Any) -> None:  # noqa: N802 - Qt naming
        """Persist window geometry before the window closes."""

        self._session.on_close(self.current_geometry())
        _LOGGER.debug("Window closed; geometry persisted.")
        super().closeEvent(event)


__all__ = ["MainWindow", "WindowContext", "WINDOW_APP_NAME"]
