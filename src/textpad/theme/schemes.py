"""The two built-in color schemes."""

from __future__ import annotations

from .models import Theme

LIGHT_THEME = Theme(
    name="light",
    title="Light",
    background=(255, 255, 255),
    foreground=(0, 0, 0),
)

DARK_THEME = Theme(
    name="dark",
    title="Dark",
    background=(64, 64, 64),
    foreground=(255, 255, 255),
    dark=True,
)


def theme_for(dark_mode: bool) -> Theme:
    """Return the scheme matching the dark-mode flag."""

    return DARK_THEME if dark_mode else LIGHT_THEME


__all__ = ["DARK_THEME", "LIGHT_THEME", "theme_for"]
