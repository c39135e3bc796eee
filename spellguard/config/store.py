"""JSON settings files for the workspace and global scopes.

The file holds a flat object of camelCase options, for example::

    {
        "language": "en_GB-ise",
        "ignoreWordsList": ["spellguard", "hunspell"]
    }

Writes go to a temporary file that is then renamed over the original so a
crash never leaves a half-written settings file behind.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from spellguard.errors import ConfigError
from spellguard.models import IgnoreScope

IGNORE_WORDS_KEY = "ignoreWordsList"


class SettingsStore:
    """Reads and updates one settings file."""

    def __init__(self, path: Path, scope: IgnoreScope) -> None:
        self.path = path
        self.scope = scope

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> dict[str, Any]:
        """Return the stored options (empty when the file does not exist).

        Raises:
                ConfigError: if the file is unreadable or not a JSON object
        """
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                loaded = json.load(f)
        except (json.JSONDecodeError, OSError) as exc:
            raise ConfigError(f"Could not load {self.scope.value} settings {self.path}: {exc}") from exc
        if not isinstance(loaded, dict):
            raise ConfigError(f"Could not load {self.scope.value} settings {self.path}: expected a JSON object")
        return loaded

    def write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_file = self.path.with_suffix(".tmp")
        try:
            with open(temp_file, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.write("\n")
            temp_file.replace(self.path)
        except OSError:
            if temp_file.exists():
                temp_file.unlink()
            raise

    def ignore_words(self) -> list[str]:
        value = self.read().get(IGNORE_WORDS_KEY)
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, str)]

    def append_ignore_word(self, word: str) -> bool:
        """Add ``word`` to the stored ignore list. False if already present."""
        data = self.read()
        current = data.get(IGNORE_WORDS_KEY)
        words = [item for item in current if isinstance(item, str)] if isinstance(current, list) else []
        if word in words:
            return False
        words.append(word)
        data[IGNORE_WORDS_KEY] = list(dict.fromkeys(words))
        self.write(data)
        return True
