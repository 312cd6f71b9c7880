"""Shared test stubs for the dialog, font and error-report seams."""

from __future__ import annotations

from collections import deque
from pathlib import Path
from typing import Iterable

from textpad.editor.document_model import FontSpec


class StubDialogs:
    """Scripted stand-in for the open/save file dialogs."""

    def __init__(self, open_paths: Iterable[Path | None] = (), save_paths: Iterable[Path | None] = ()) -> None:
        self.open_paths = deque(open_paths)
        self.save_paths = deque(save_paths)
        self.open_prompts = 0
        self.save_prompts = 0

    def prompt_open_path(self) -> Path | None:
        self.open_prompts += 1
        return self.open_paths.popleft() if self.open_paths else None

    def prompt_save_path(self) -> Path | None:
        self.save_prompts += 1
        return self.save_paths.popleft() if self.save_paths else None


class StubFonts:
    """Scripted stand-in for the font chooser."""

    def __init__(self, choice: FontSpec | None = None) -> None:
        self.choice = choice
        self.seeds: list[FontSpec] = []

    def prompt_font(self, current: FontSpec) -> FontSpec | None:
        self.seeds.append(current)
        return self.choice


class StubErrorReporter:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def __call__(self, parent, message: str) -> None:  # type: ignore[no-untyped-def]
        del parent
        self.messages.append(message)
