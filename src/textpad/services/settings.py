"""Preference dataclasses and persistence helpers."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Protocol

from jsonschema import Draft7Validator

__all__ = [
    "Preferences",
    "PreferenceStore",
    "SettingsStore",
    "PREFERENCE_KEYS",
    "PREFERENCES_SCHEMA",
    "preferences_to_payload",
]

LOGGER = logging.getLogger(__name__)
_SETTINGS_DIR = Path.home() / ".textpad"
_DEFAULT_SETTINGS_PATH = _SETTINGS_DIR / "settings.json"
_SETTINGS_VERSION = 1
_TRUE_VALUES = {"1", "true", "yes", "on"}

# Persisted key -> Preferences field.
PREFERENCE_KEYS: Mapping[str, str] = {
    "windowX": "window_x",
    "windowY": "window_y",
    "windowWidth": "window_width",
    "windowHeight": "window_height",
    "darkMode": "dark_mode",
    "fontFamily": "font_family",
    "fontSize": "font_size",
    "fontBold": "font_bold",
    "fontItalic": "font_italic",
}
_FIELD_KEYS: Mapping[str, str] = {field: key for key, field in PREFERENCE_KEYS.items()}

PREFERENCES_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "windowX": {"type": "integer"},
        "windowY": {"type": "integer"},
        "windowWidth": {"type": "integer", "minimum": 1},
        "windowHeight": {"type": "integer", "minimum": 1},
        "darkMode": {"type": "boolean"},
        "fontFamily": {"type": "string", "minLength": 1},
        "fontSize": {"type": "integer", "minimum": 1},
        "fontBold": {"type": "boolean"},
        "fontItalic": {"type": "boolean"},
    },
}
_VALIDATOR = Draft7Validator(PREFERENCES_SCHEMA)

_ENV_OVERRIDES: Mapping[str, str] = {
    "TEXTPAD_FONT_FAMILY": "font_family",
}
_BOOL_ENV_OVERRIDES: Mapping[str, str] = {
    "TEXTPAD_DARK_MODE": "dark_mode",
}
_INT_ENV_OVERRIDES: Mapping[str, str] = {
    "TEXTPAD_FONT_SIZE": "font_size",
}


@dataclass(slots=True)
class Preferences:
    """User preferences persisted between sessions."""

    window_x: int = 100
    window_y: int = 100
    window_width: int = 800
    window_height: int = 600
    dark_mode: bool = False
    font_family: str = "Arial"
    font_size: int = 14
    font_bold: bool = False
    font_italic: bool = False


class PreferenceStore(Protocol):
    """Keyed preference persistence consumed by the editor session."""

    def load(self) -> Preferences:
        """Return the persisted preferences, falling back to defaults."""
        ...

    def save(self, key: str, value: Any) -> None:
        """Persist a single preference ``key`` (one of :data:`PREFERENCE_KEYS`)."""
        ...


class SettingsStore:
    """JSON file persistence adapter for :class:`Preferences`."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or _DEFAULT_SETTINGS_PATH

    @property
    def path(self) -> Path:
        """Return the resolved path backing this store."""

        return self._path

    def load(self, *, overrides: Mapping[str, Any] | None = None) -> Preferences:
        """Load preferences from disk, applying CLI/environment overrides when present."""

        payload = self._read_payload()
        data: Dict[str, Any] = {}
        for key, value in _valid_entries(payload, source=self._path).items():
            data[PREFERENCE_KEYS[key]] = value
        preferences = Preferences(**data)
        LOGGER.debug("Preferences loaded from %s: %s", self._path, sorted(data))

        if overrides:
            preferences = self._apply_overrides(preferences, overrides, source="CLI")
        return self._apply_env_overrides(preferences)

    def save(self, key: str, value: Any) -> None:
        """Persist a single preference key."""

        self.update({key: value})

    def update(self, values: Mapping[str, Any]) -> Path:
        """Merge ``values`` into the persisted payload with an atomic rewrite."""

        unknown = sorted(set(values) - set(PREFERENCE_KEYS))
        if unknown:
            raise KeyError(f"Unknown preference key(s): {', '.join(unknown)}")
        errors = sorted(_VALIDATOR.iter_errors(dict(values)), key=lambda error: list(error.path))
        if errors:
            raise ValueError(f"Invalid preference value: {errors[0].message}")

        payload = _valid_entries(self._read_payload(), source=self._path)
        payload.update(values)
        payload["version"] = _SETTINGS_VERSION
        body = json.dumps(payload, indent=2, sort_keys=True)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(".tmp")
        try:
            tmp_path.write_text(body, encoding="utf-8")
            tmp_path.replace(self._path)
        finally:
            tmp_path.unlink(missing_ok=True)
        LOGGER.debug("Preferences saved to %s: %s", self._path, sorted(values))
        return self._path

    def _read_payload(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            text = self._path.read_text(encoding="utf-8")
            payload = json.loads(text)
        except FileNotFoundError:
            return {}
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            LOGGER.warning("Settings file %s is not valid JSON: %s", self._path, exc)
            return {}
        if not isinstance(payload, dict):
            LOGGER.warning("Settings file %s does not contain a JSON object", self._path)
            return {}
        return payload

    def _apply_overrides(
        self,
        preferences: Preferences,
        overrides: Mapping[str, Any],
        *,
        source: str = "runtime",
    ) -> Preferences:
        allowed = {field.name for field in fields(Preferences)}
        filtered = {
            key: value for key, value in overrides.items() if key in allowed and value is not None
        }
        if filtered:
            LOGGER.debug("Applying %s preference overrides: %s", source, sorted(filtered))
            preferences = replace(preferences, **filtered)
        return preferences

    def _apply_env_overrides(self, preferences: Preferences) -> Preferences:
        overrides: Dict[str, Any] = {}
        for env_name, field_name in _ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value:
                overrides[field_name] = value
        for env_name, field_name in _BOOL_ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is not None:
                overrides[field_name] = value.strip().lower() in _TRUE_VALUES
        for env_name, field_name in _INT_ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is None:
                continue
            try:
                overrides[field_name] = int(value, 10)
            except ValueError:
                LOGGER.warning(
                    "Environment override %s=%s is not a valid integer",
                    env_name,
                    value,
                )
        if overrides:
            preferences = self._apply_overrides(preferences, overrides, source="environment")
        return preferences


def preferences_to_payload(preferences: Preferences) -> Dict[str, Any]:
    """Return ``preferences`` keyed by their persisted names."""

    return {_FIELD_KEYS[name]: value for name, value in asdict(preferences).items()}


def _valid_entries(payload: Mapping[str, Any], *, source: Path) -> Dict[str, Any]:
    """Return the known keys of ``payload`` whose values satisfy the schema."""

    rejected: set[str] = set()
    for error in _VALIDATOR.iter_errors(dict(payload)):
        if error.path:
            rejected.add(str(error.path[0]))
    for key in sorted(rejected):
        LOGGER.warning("Ignoring invalid preference %s=%r in %s", key, payload.get(key), source)
    return {
        key: value
        for key, value in payload.items()
        if key in PREFERENCE_KEYS and key not in rejected
    }
