"""UI action and menu data structures used by the main window."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable


@dataclass(slots=True)
class WindowAction:
    """Represents a high-level action exposed through menus."""

    name: str
    text: str
    shortcut: str | None = None
    status_tip: str | None = None
    checkable: bool = False
    callback: Callable[[], Any] | None = None

    def trigger(self) -> None:
        """Invoke the registered callback, if available."""

        if self.callback is not None:
            self.callback()


@dataclass(slots=True)
class MenuSpec:
    """Declarative menu definition."""

    name: str
    title: str
    actions: tuple[str, ...]


__all__ = ["WindowAction", "MenuSpec"]
