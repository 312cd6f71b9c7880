"""Dataclasses representing editor document and presentation state."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

from ..theme import Theme, theme_for

MIN_FONT_SIZE = 1
MAX_FONT_SIZE = 400
FONT_SIZE_STEP = 2


def clamp_font_size(size: int) -> int:
    """Clamp ``size`` into ``[MIN_FONT_SIZE, MAX_FONT_SIZE]``."""

    return max(MIN_FONT_SIZE, min(int(size), MAX_FONT_SIZE))


@dataclass(slots=True, frozen=True)
class FontSpec:
    """Toolkit-neutral font description."""

    family: str = "Arial"
    size: int = 14
    bold: bool = False
    italic: bool = False

    def with_size(self, size: int) -> "FontSpec":
        return replace(self, size=clamp_font_size(size))

    def clamped(self) -> "FontSpec":
        return self.with_size(self.size)


@dataclass(slots=True)
class WindowGeometry:
    """Window position and size in screen coordinates."""

    x: int = 100
    y: int = 100
    width: int = 800
    height: int = 600


@dataclass(slots=True)
class PresentationSettings:
    """Active font and color scheme of the text surface."""

    font: FontSpec = field(default_factory=FontSpec)
    dark_mode: bool = False

    @property
    def theme(self) -> Theme:
        return theme_for(self.dark_mode)


@dataclass(slots=True)
class DocumentState:
    """In-memory buffer plus the file it was last opened from or saved to."""

    text: str = ""
    path: Optional[Path] = None

    @property
    def untitled(self) -> bool:
        return self.path is None

    @property
    def display_name(self) -> str:
        return self.path.name if self.path is not None else "Untitled"


__all__ = [
    "DocumentState",
    "FONT_SIZE_STEP",
    "FontSpec",
    "MAX_FONT_SIZE",
    "MIN_FONT_SIZE",
    "PresentationSettings",
    "WindowGeometry",
    "clamp_font_size",
]
