"""Read-only support for the legacy project-local ``spellchecker.json``.

Older projects keep ignore words and ignore patterns in
``.vscode/spellchecker.json``, a JSON file that may contain comments. Only
``ignoreWordsList`` and ``ignoreRegExp`` are taken from it; the file is never
written.
"""

from __future__ import annotations

from pathlib import Path

from json_repair import repair_json

from spellguard.errors import ConfigError

LEGACY_RELATIVE_PATH = Path(".vscode") / "spellchecker.json"
LEGACY_KEYS = ("ignoreWordsList", "ignoreRegExp")


def legacy_settings_path(workspace_root: Path) -> Path:
    return workspace_root / LEGACY_RELATIVE_PATH


def load_legacy_settings(workspace_root: Path | None) -> dict[str, list[str]] | None:
    """Return the legacy ignore settings, or None when there is no file.

    Raises:
            ConfigError: if the file exists but cannot be read as a JSON object
    """
    if workspace_root is None:
        return None
    path = legacy_settings_path(workspace_root)
    if not path.is_file():
        return None

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Could not read legacy spellchecker.json: {exc}") from exc

    # json_repair tolerates the comments and trailing commas hand-edited
    # files tend to contain.
    parsed = repair_json(raw, return_objects=True)
    if not isinstance(parsed, dict):
        raise ConfigError(
            f"Could not read legacy spellchecker.json: expected a JSON object in {path}"
        )

    legacy: dict[str, list[str]] = {}
    for key in LEGACY_KEYS:
        value = parsed.get(key)
        if isinstance(value, list):
            legacy[key] = [item for item in value if isinstance(item, str)]
    return legacy
