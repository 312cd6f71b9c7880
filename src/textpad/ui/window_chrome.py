"""Menu bar and central widget wiring for the editor window."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Mapping, Tuple

from PySide6.QtGui import QAction
from PySide6.QtWidgets import QMainWindow, QWidget

from .actions import MenuSpec, WindowAction

# Callbacks are attached per window in WindowChrome.assemble.
ACTION_TEMPLATES: Tuple[WindowAction, ...] = (
    WindowAction("file_open", "Open", "Ctrl+O", "Open a text file from disk"),
    WindowAction("file_save", "Save", "Ctrl+S", "Write the buffer to its file"),
    WindowAction("file_save_as", "Save As", "Ctrl+Shift+S", "Write the buffer to a new .txt file"),
    WindowAction(
        "settings_dark_mode",
        "Dark Mode",
        "Ctrl+D",
        "Switch between the dark and light color schemes",
        checkable=True,
    ),
    WindowAction("settings_change_font", "Change Font...", "Ctrl+F", "Choose the editor font"),
)

MENUS: Tuple[MenuSpec, ...] = (
    MenuSpec("file", "&File", ("file_open", "file_save", "file_save_as")),
    MenuSpec("settings", "&Settings", ("settings_dark_mode", "settings_change_font")),
)


@dataclass(slots=True)
class WindowChromeState:
    """Actions and menus installed on a window, keyed by name."""

    actions: Dict[str, WindowAction]
    menus: Dict[str, MenuSpec]
    qt_actions: Dict[str, QAction]


class WindowChrome:
    """Installs the editor surface and the File/Settings menus on a window."""

    def __init__(
        self,
        *,
        window: QMainWindow,
        editor: QWidget,
        action_callbacks: Mapping[str, Callable[[], Any]],
    ) -> None:
        self._window = window
        self._editor = editor
        self._callbacks = action_callbacks

    def assemble(self) -> WindowChromeState:
        self._window.setCentralWidget(self._editor)
        actions = {template.name: self._bind(template) for template in ACTION_TEMPLATES}
        qt_actions = {name: self._to_qaction(action) for name, action in actions.items()}

        menubar = self._window.menuBar()
        menubar.clear()
        for spec in MENUS:
            menu = menubar.addMenu(spec.title)
            menu.setObjectName(f"{spec.name}_menu")
            for name in spec.actions:
                menu.addAction(qt_actions[name])

        return WindowChromeState(
            actions=actions,
            menus={spec.name: spec for spec in MENUS},
            qt_actions=qt_actions,
        )

    def _bind(self, template: WindowAction) -> WindowAction:
        try:
            callback = self._callbacks[template.name]
        except KeyError:
            raise KeyError(f"Missing callback for action '{template.name}'") from None
        return replace(template, callback=callback)

    def _to_qaction(self, action: WindowAction) -> QAction:
        qt_action = QAction(action.text, self._window)
        qt_action.setObjectName(action.name)
        qt_action.setCheckable(action.checkable)
        if action.shortcut:
            qt_action.setShortcut(action.shortcut)
        if action.status_tip:
            qt_action.setStatusTip(action.status_tip)
        qt_action.triggered.connect(action.trigger)
        return qt_action


__all__ = ["ACTION_TEMPLATES", "MENUS", "WindowChrome", "WindowChromeState"]
