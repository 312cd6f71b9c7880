"""Plain-text editing surface with wheel zoom and themed colors.

The widget only renders; font size changes requested through the wheel are
routed to a zoom handler (normally :meth:`EditorSession.adjust_font_size`) and
come back through :meth:`EditorWidget.apply_font`.
"""

from __future__ import annotations

from typing import Any, Callable

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QFont, QPalette
from PySide6.QtWidgets import QApplication, QPlainTextEdit, QWidget

from ..theme import ColorTuple, Theme
from .document_model import FontSpec, clamp_font_size

SCROLL_MULTIPLIER = 15
_WHEEL_NOTCH = 120

ZoomHandler = Callable[[int], Any]


def scroll_delta(
    notches: int,
    lines_per_notch: int,
    unit_step: int,
    multiplier: int = SCROLL_MULTIPLIER,
) -> int:
    """Return the scrollbar offset for ``notches`` wheel steps.

    Positive ``notches`` (wheel rotated away from the user) scroll towards the
    top of the document, so the offset is negative.
    """

    return -int(notches) * int(lines_per_notch) * int(unit_step) * int(multiplier)


def font_from_spec(spec: FontSpec) -> QFont:
    font = QFont(spec.family)
    font.setPointSize(clamp_font_size(spec.size))
    font.setBold(spec.bold)
    font.setItalic(spec.italic)
    return font


def spec_from_font(font: QFont, *, fallback_size: int = 14) -> FontSpec:
    size = font.pointSize()
    if size <= 0:
        size = round(font.pointSizeF()) if font.pointSizeF() > 0 else fallback_size
    return FontSpec(
        family=font.family(),
        size=clamp_font_size(size),
        bold=font.bold(),
        italic=font.italic(),
    )


class EditorWidget(QPlainTextEdit):
    """Scrollable text surface bound to the editor session."""

    def __init__(self, parent: QWidget | None = None, *, zoom_handler: ZoomHandler | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("editor_surface")
        self._zoom_handler = zoom_handler
        self._pending_angle = 0

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def apply_theme(self, theme: Theme) -> None:
        palette = self.palette()
        palette.setColor(QPalette.ColorRole.Base, QColor(*theme.background))
        palette.setColor(QPalette.ColorRole.Text, QColor(*theme.foreground))
        self.setPalette(palette)

    def apply_font(self, spec: FontSpec) -> None:
        self.setFont(font_from_spec(spec))

    def background_color(self) -> ColorTuple:
        color = self.palette().color(QPalette.ColorRole.Base)
        return (color.red(), color.green(), color.blue())

    def foreground_color(self) -> ColorTuple:
        color = self.palette().color(QPalette.ColorRole.Text)
        return (color.red(), color.green(), color.blue())

    # ------------------------------------------------------------------
    # Wheel handling
    # ------------------------------------------------------------------
    def wheelEvent(self, event: Any) -> None:  # noqa: N802 - Qt naming
        zoom = bool(event.modifiers() & Qt.KeyboardModifier.ControlModifier)
        if self.handle_wheel(event.angleDelta().y(), zoom=zoom):
            event.accept()
            return
        super().wheelEvent(event)

    def handle_wheel(self, angle_delta: int, *, zoom: bool) -> bool:
        """Apply a vertical wheel rotation; returns ``False`` for purely horizontal events.

        Rotations smaller than a notch are consumed and accumulate until a
        full notch is reached.
        """

        if angle_delta == 0:
            return False
        self._pending_angle += int(angle_delta)
        notches = int(self._pending_angle / _WHEEL_NOTCH)
        if notches == 0:
            return True
        self._pending_angle -= notches * _WHEEL_NOTCH

        if zoom:
            if self._zoom_handler is not None:
                self._zoom_handler(notches)
            return True

        bar = self.verticalScrollBar()
        bar.setValue(bar.value() + scroll_delta(notches, QApplication.wheelScrollLines(), bar.singleStep()))
        return True


__all__ = [
    "EditorWidget",
    "SCROLL_MULTIPLIER",
    "ZoomHandler",
    "font_from_spec",
    "scroll_delta",
    "spec_from_font",
]
