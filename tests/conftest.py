"""Shared pytest fixtures."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from helpers import StubDialogs, StubErrorReporter, StubFonts
from textpad.services.settings import SettingsStore


@pytest.fixture(autouse=True)
def _clear_textpad_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith("TEXTPAD_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings_path(tmp_path: Path) -> Path:
    return tmp_path / "prefs" / "settings.json"


@pytest.fixture
def settings_store(settings_path: Path) -> SettingsStore:
    return SettingsStore(settings_path)


@pytest.fixture
def stub_dialogs() -> StubDialogs:
    return StubDialogs()


@pytest.fixture
def stub_fonts() -> StubFonts:
    return StubFonts()


@pytest.fixture
def error_reporter() -> StubErrorReporter:
    return StubErrorReporter()
