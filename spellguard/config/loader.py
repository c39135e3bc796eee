"""Derive the effective settings from every configuration source.

Precedence, lowest first:

1. built-in defaults (``SpellSettings``)
2. global settings file (``~/.config/spellguard/settings.json``)
3. workspace settings file (``<root>/.spellguard/settings.json``)
4. environment variables (optionally loaded from a ``.env`` file)
5. explicit overrides (CLI flags)

Ignore word lists are the exception: the global, workspace and legacy lists
are unioned rather than overridden. Every ``load()`` returns a fresh,
immutable ``SpellSettings``; nothing is mutated in place.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping

from dotenv import load_dotenv

from spellguard.errors import ConfigError
from spellguard.models import IgnoreScope

from .legacy import load_legacy_settings
from .settings import SpellSettings
from .store import IGNORE_WORDS_KEY, SettingsStore

LOGGER = logging.getLogger(__name__)

GLOBAL_SETTINGS_ENV = "SPELLGUARD_GLOBAL_SETTINGS"
WORKSPACE_SETTINGS_PATH = Path(".spellguard") / "settings.json"

# environment variable -> settings key
ENV_OVERRIDES = {
    "SPELLGUARD_LANGUAGE": "language",
    "SPELLGUARD_DICTIONARY_PATH": "dictionaryPath",
    "SPELLGUARD_DICTIONARY_BACKEND": "dictionaryBackend",
}

REGEXP_KEY = "ignoreRegExp"


def default_global_settings_path() -> Path:
    configured = os.environ.get(GLOBAL_SETTINGS_ENV)
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".config" / "spellguard" / "settings.json"


def _unique(*lists: Iterable[Any]) -> list[str]:
    merged: list[str] = []
    for values in lists:
        for value in values or []:
            if isinstance(value, str) and value not in merged:
                merged.append(value)
    return merged


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


@dataclass
class LoadedSettings:
    """Effective settings plus the per-scope ignore words they came from."""

    settings: SpellSettings
    global_ignore_words: list[str] = field(default_factory=list)
    workspace_ignore_words: list[str] = field(default_factory=list)
    legacy_ignore_words: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class SettingsLoader:
    """Configuration source for a checking session."""

    def __init__(
        self,
        workspace_root: Path | None = None,
        *,
        global_path: Path | None = None,
        dotenv_path: Path | str | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> None:
        self.workspace_root = workspace_root
        self.global_store = SettingsStore(
            global_path or default_global_settings_path(), IgnoreScope.GLOBAL
        )
        self.workspace_store = (
            SettingsStore(workspace_root / WORKSPACE_SETTINGS_PATH, IgnoreScope.WORKSPACE)
            if workspace_root is not None
            else None
        )
        self.dotenv_path = dotenv_path
        self.overrides = dict(overrides or {})

    def load(self) -> LoadedSettings:
        warnings: list[str] = []

        if self.dotenv_path is not None:
            # Existing environment variables win over .env values
            load_dotenv(dotenv_path=str(self.dotenv_path), override=False)

        global_raw = self._read(self.global_store, warnings)
        workspace_raw = self._read(self.workspace_store, warnings)

        merged: dict[str, Any] = {**global_raw, **workspace_raw}
        global_words = _string_list(global_raw.get(IGNORE_WORDS_KEY))
        workspace_words = _string_list(workspace_raw.get(IGNORE_WORDS_KEY))
        merged[IGNORE_WORDS_KEY] = _unique(global_words, workspace_words)

        for env_name, key in ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value:
                merged[key] = value
        merged.update(self.overrides)

        legacy_words: list[str] = []
        try:
            legacy = load_legacy_settings(self.workspace_root)
        except ConfigError as exc:
            warnings.append(str(exc))
            legacy = None
        if legacy:
            legacy_words = legacy.get(IGNORE_WORDS_KEY, [])
            merged[IGNORE_WORDS_KEY] = _unique(merged.get(IGNORE_WORDS_KEY), legacy_words)
            merged[REGEXP_KEY] = _unique(_string_list(merged.get(REGEXP_KEY)), legacy.get(REGEXP_KEY, []))

        # warnings are returned for the caller to report, not logged here
        settings = SpellSettings.model_validate(merged, context={"warnings": warnings})

        return LoadedSettings(
            settings=settings,
            global_ignore_words=global_words,
            workspace_ignore_words=workspace_words,
            legacy_ignore_words=list(legacy_words),
            warnings=warnings,
        )

    def persist_ignore_word(self, word: str, scope: IgnoreScope) -> None:
        """Write ``word`` to the settings file for ``scope``.

        Raises:
                ConfigError: for the workspace scope when no workspace is open,
                or when the existing file cannot be read
        """
        if scope is IgnoreScope.GLOBAL:
            store = self.global_store
        elif scope is IgnoreScope.WORKSPACE:
            if self.workspace_store is None:
                raise ConfigError("No workspace folder is open; cannot store workspace settings")
            store = self.workspace_store
        else:
            return
        if store.append_ignore_word(word):
            LOGGER.info("Added '%s' to %s", word, store.path)

    @staticmethod
    def _read(store: SettingsStore | None, warnings: list[str]) -> dict[str, Any]:
        if store is None:
            return {}
        try:
            return store.read()
        except ConfigError as exc:
            warnings.append(str(exc))
            return {}
