"""Theme module holding the editor color schemes."""

from .models import ColorTuple, Theme
from .schemes import DARK_THEME, LIGHT_THEME, theme_for

__all__ = ["ColorTuple", "DARK_THEME", "LIGHT_THEME", "Theme", "theme_for"]
