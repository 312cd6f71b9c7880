"""Textpad: a small plain-text desktop editor."""

__version__ = "0.1.0"
