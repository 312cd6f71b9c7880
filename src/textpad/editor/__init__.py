"""Editor package containing the document model, session and surface widget."""

from importlib import import_module
from typing import Any

from . import document_model, session

__all__ = ["document_model", "session", "editor_widget"]


def __getattr__(name: str) -> Any:
	if name == "editor_widget":
		module = import_module(f"{__name__}.{name}")
		globals()[name] = module
		return module
	raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
