"""Configuration sources and the validated settings model."""

from __future__ import annotations

from .legacy import load_legacy_settings
from .loader import LoadedSettings, SettingsLoader, default_global_settings_path
from .settings import SpellSettings
from .store import SettingsStore

__all__ = [
    "LoadedSettings",
    "SettingsLoader",
    "SettingsStore",
    "SpellSettings",
    "default_global_settings_path",
    "load_legacy_settings",
]
