"""Service layer helpers (preferences persistence)."""

from .settings import PREFERENCE_KEYS, PreferenceStore, Preferences, SettingsStore

__all__ = ["PREFERENCE_KEYS", "PreferenceStore", "Preferences", "SettingsStore"]
