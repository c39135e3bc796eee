from __future__ import annotations

import json
from pathlib import Path

import pytest

from spellguard.config import SettingsStore
from spellguard.errors import ConfigError
from spellguard.models import IgnoreScope


def test_missing_file_reads_empty(tmp_path: Path) -> None:
    store = SettingsStore(tmp_path / "settings.json", IgnoreScope.WORKSPACE)
    assert not store.exists()
    assert store.read() == {}
    assert store.ignore_words() == []


def test_append_ignore_word_keeps_other_settings(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "settings.json"
    path.parent.mkdir()
    path.write_text(json.dumps({"language": "fr", "ignoreWordsList": ["alpha"]}), encoding="utf-8")
    store = SettingsStore(path, IgnoreScope.GLOBAL)

    assert store.append_ignore_word("beta") is True
    assert store.append_ignore_word("alpha") is False

    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved == {"language": "fr", "ignoreWordsList": ["alpha", "beta"]}
    assert not path.with_suffix(".tmp").exists()


def test_write_creates_parent_directories(tmp_path: Path) -> None:
    store = SettingsStore(tmp_path / ".spellguard" / "settings.json", IgnoreScope.WORKSPACE)
    store.append_ignore_word("spellguard")
    assert store.ignore_words() == ["spellguard"]


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_invalid_file_raises(tmp_path: Path, content: str) -> None:
    path = tmp_path / "settings.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        SettingsStore(path, IgnoreScope.WORKSPACE).read()
