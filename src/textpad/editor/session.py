"""Editor session: the document buffer, its file and presentation commands.

The session is toolkit-free. The main window binds menu actions to the
command methods below and re-renders whenever a listener fires. Every
command returns a :class:`CommandResult`; I/O problems are reported as
``FAILED`` results carrying an :class:`IOFailure` rather than raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Protocol

from ..services.settings import PreferenceStore, Preferences
from ..theme import Theme
from ..utils import file_io
from .document_model import (
    FONT_SIZE_STEP,
    DocumentState,
    FontSpec,
    PresentationSettings,
    WindowGeometry,
)

LOGGER = logging.getLogger(__name__)

_FAILURE_PREFIXES = {
    "open": "Error opening file",
    "save": "Error saving file",
}


class DialogProvider(Protocol):
    """Protocol for the open/save path prompts."""

    def prompt_open_path(self) -> Path | None:
        """Prompt for a file to open; ``None`` when canceled."""
        ...

    def prompt_save_path(self) -> Path | None:
        """Prompt for a save destination; ``None`` when canceled."""
        ...


class FontProvider(Protocol):
    """Protocol for the font chooser."""

    def prompt_font(self, current: FontSpec) -> FontSpec | None:
        """Prompt for a font seeded with ``current``; ``None`` when canceled."""
        ...


class SessionEvent(str, Enum):
    """State categories announced to session listeners."""

    DOCUMENT = "document"
    FILE = "file"
    THEME = "theme"
    FONT = "font"


class CommandStatus(str, Enum):
    OK = "ok"
    CANCELLED = "cancelled"
    FAILED = "failed"


class IOFailure(Exception):
    """A read or write error raised while executing a file command."""

    def __init__(self, operation: str, path: Path, reason: str) -> None:
        self.operation = operation
        self.path = path
        self.reason = reason
        super().__init__(f"{_FAILURE_PREFIXES.get(operation, 'Error')}: {reason}")

    @classmethod
    def from_exception(cls, operation: str, path: Path, exc: BaseException) -> "IOFailure":
        reason = getattr(exc, "strerror", None) or str(exc) or exc.__class__.__name__
        if isinstance(exc, OSError) and exc.filename and str(exc.filename) not in reason:
            reason = f"{exc.filename} ({reason})"
        return cls(operation, path, reason)


@dataclass(slots=True, frozen=True)
class CommandResult:
    """Outcome of a session command."""

    status: CommandStatus
    path: Path | None = None
    error: IOFailure | None = None

    @property
    def ok(self) -> bool:
        return self.status is CommandStatus.OK

    @property
    def cancelled(self) -> bool:
        return self.status is CommandStatus.CANCELLED

    @property
    def failed(self) -> bool:
        return self.status is CommandStatus.FAILED

    @property
    def message(self) -> str:
        return str(self.error) if self.error is not None else ""


SessionListener = Callable[[SessionEvent], None]


class EditorSession:
    """Owns the document buffer, the file reference and presentation settings."""

    def __init__(
        self,
        store: PreferenceStore,
        *,
        preferences: Preferences | None = None,
        dialogs: DialogProvider | None = None,
        fonts: FontProvider | None = None,
        file_reader: Callable[[Path], str] | None = None,
        file_writer: Callable[[Path, str], Any] | None = None,
    ) -> None:
        self._store = store
        self._dialogs = dialogs
        self._fonts = fonts
        self._file_reader = file_reader or file_io.read_text
        self._file_writer = file_writer or file_io.write_text
        self._document = DocumentState()
        self._listeners: list[SessionListener] = []

        if preferences is None:
            preferences = store.load()
        self._presentation = PresentationSettings(
            font=FontSpec(
                family=preferences.font_family,
                size=preferences.font_size,
                bold=preferences.font_bold,
                italic=preferences.font_italic,
            ).clamped(),
            dark_mode=bool(preferences.dark_mode),
        )
        self._geometry = WindowGeometry(
            x=preferences.window_x,
            y=preferences.window_y,
            width=preferences.window_width,
            height=preferences.window_height,
        )

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------
    @property
    def text(self) -> str:
        return self._document.text

    @property
    def path(self) -> Path | None:
        return self._document.path

    @property
    def document(self) -> DocumentState:
        return replace(self._document)

    @property
    def font(self) -> FontSpec:
        return self._presentation.font

    @property
    def dark_mode(self) -> bool:
        return self._presentation.dark_mode

    @property
    def theme(self) -> Theme:
        return self._presentation.theme

    @property
    def geometry(self) -> WindowGeometry:
        return replace(self._geometry)

    def add_listener(self, listener: SessionListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: SessionListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def set_text(self, text: str) -> None:
        """Replace the buffer with ``text`` as typed into the surface."""

        self._document.text = text

    # ------------------------------------------------------------------
    # File commands
    # ------------------------------------------------------------------
    def open(self, path: Path | str | None = None) -> CommandResult:
        """Replace the buffer with the contents of ``path`` (prompting when omitted)."""

        if path is None:
            target = self._dialogs.prompt_open_path() if self._dialogs is not None else None
            if target is None:
                return CommandResult(CommandStatus.CANCELLED)
        else:
            target = Path(path)
            if not file_io.is_regular_file(target):
                LOGGER.warning("Skipping open of %s: not an existing regular file", target)
                return CommandResult(CommandStatus.CANCELLED, path=target)

        target = Path(target)
        try:
            text = self._file_reader(target)
        except (OSError, UnicodeError) as exc:
            failure = IOFailure.from_exception("open", target, exc)
            failure.__cause__ = exc
            LOGGER.warning("Open failed for %s: %s", target, failure.reason)
            return CommandResult(CommandStatus.FAILED, path=target, error=failure)

        self._document.text = text
        self._document.path = target
        LOGGER.info("Opened %s (%d chars)", target, len(text))
        self._notify(SessionEvent.DOCUMENT)
        self._notify(SessionEvent.FILE)
        return CommandResult(CommandStatus.OK, path=target)

    def save(self) -> CommandResult:
        """Write the buffer to the file reference, or fall back to :meth:`save_as`."""

        if self._document.path is None:
            return self.save_as()
        return self._write(self._document.path)

    def save_as(self) -> CommandResult:
        """Prompt for a destination, enforce ``.txt`` and write the buffer there."""

        chosen = self._dialogs.prompt_save_path() if self._dialogs is not None else None
        if chosen is None:
            return CommandResult(CommandStatus.CANCELLED)
        target = file_io.ensure_text_extension(chosen)
        result = self._write(target)
        if result.ok and self._document.path != target:
            self._document.path = target
            self._notify(SessionEvent.FILE)
        return result

    def _write(self, target: Path) -> CommandResult:
        try:
            self._file_writer(target, self._document.text)
        except (OSError, UnicodeError) as exc:
            failure = IOFailure.from_exception("save", target, exc)
            failure.__cause__ = exc
            LOGGER.warning("Save failed for %s: %s", target, failure.reason)
            return CommandResult(CommandStatus.FAILED, path=target, error=failure)
        LOGGER.info("Saved %s (%d chars)", target, len(self._document.text))
        return CommandResult(CommandStatus.OK, path=target)

    # ------------------------------------------------------------------
    # Presentation commands
    # ------------------------------------------------------------------
    def toggle_dark_mode(self, enabled: bool) -> CommandResult:
        """Switch the color scheme and persist the flag immediately."""

        self._presentation.dark_mode = bool(enabled)
        self._notify(SessionEvent.THEME)
        self._persist(darkMode=self._presentation.dark_mode)
        return CommandResult(CommandStatus.OK)

    def change_font(self) -> CommandResult:
        """Prompt for a new font seeded with the current one."""

        chosen = self._fonts.prompt_font(self._presentation.font) if self._fonts is not None else None
        if chosen is None:
            return CommandResult(CommandStatus.CANCELLED)
        self._presentation.font = chosen.clamped()
        self._notify(SessionEvent.FONT)
        self._persist(**_font_payload(self._presentation.font))
        return CommandResult(CommandStatus.OK)

    def adjust_font_size(self, notches: int) -> FontSpec:
        """Grow (positive ``notches``) or shrink the font by ``FONT_SIZE_STEP`` per notch."""

        current = self._presentation.font
        updated = current.with_size(current.size + int(notches) * FONT_SIZE_STEP)
        if updated != current:
            self._presentation.font = updated
            self._notify(SessionEvent.FONT)
        return updated

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def on_close(self, geometry: WindowGeometry) -> None:
        """Persist window geometry and the current font; the buffer is discarded."""

        self._geometry = replace(geometry)
        self._persist(
            windowX=geometry.x,
            windowY=geometry.y,
            windowWidth=geometry.width,
            windowHeight=geometry.height,
            **_font_payload(self._presentation.font),
        )

    def _persist(self, **values: Any) -> None:
        update = getattr(self._store, "update", None)
        if callable(update):
            try:
                update(values)
            except (OSError, ValueError) as exc:
                LOGGER.warning("Unable to persist preferences %s: %s", sorted(values), exc)
            return
        for key, value in values.items():
            try:
                self._store.save(key, value)
            except (OSError, ValueError) as exc:
                LOGGER.warning("Unable to persist preference %s: %s", key, exc)

    def _notify(self, event: SessionEvent) -> None:
        for listener in list(self._listeners):
            listener(event)


def _font_payload(font: FontSpec) -> dict[str, Any]:
    return {
        "fontFamily": font.family,
        "fontSize": font.size,
        "fontBold": font.bold,
        "fontItalic": font.italic,
    }


__all__ = [
    "CommandResult",
    "CommandStatus",
    "DialogProvider",
    "EditorSession",
    "FontProvider",
    "IOFailure",
    "SessionEvent",
    "SessionListener",
]
