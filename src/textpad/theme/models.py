"""Data structures describing editor color schemes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

ColorTuple = Tuple[int, int, int]


@dataclass(frozen=True, slots=True)
class Theme:
    """Named color scheme applied to the text surface."""

    name: str
    title: str
    background: ColorTuple
    foreground: ColorTuple
    dark: bool = False


__all__ = ["ColorTuple", "Theme"]
