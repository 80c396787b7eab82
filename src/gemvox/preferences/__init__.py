"""Preference storage module for gemvox.

Provides durable key-value flags (currently the dark-mode theme flag).
"""

from .base import PreferenceStore
from .factory import create_preference_store

THEME_KEY = "is_dark_mode"

__all__ = [
    "PreferenceStore",
    "THEME_KEY",
    "create_preference_store",
]
