from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

FIXTURE_DICTIONARIES = Path(__file__).resolve().parent / "fixtures" / "dictionaries"

ENV_VARS = (
    "SPELLGUARD_LANGUAGE",
    "SPELLGUARD_DICTIONARY_PATH",
    "SPELLGUARD_DICTIONARY_BACKEND",
    "SPELLGUARD_GLOBAL_SETTINGS",
)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's own spellguard settings out of the tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fixture_dictionaries() -> Path:
    return FIXTURE_DICTIONARIES
