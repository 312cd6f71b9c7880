"""UI package holding the window chrome, actions and dialog providers."""

from .actions import MenuSpec, WindowAction
from .window_chrome import WindowChrome, WindowChromeState

__all__ = ["MenuSpec", "WindowAction", "WindowChrome", "WindowChromeState"]
