"""Validated, immutable spell checker settings.

Settings keep the camelCase option names used in settings files. Invalid
values never abort loading: each field falls back to its default and a
warning is recorded in the ``warnings`` list passed through the validation
context (see ``SettingsLoader``).
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from spellguard.models import DictionaryCode, Severity
from spellguard.spelling.dictionary import HUNSPELL_BACKEND, available_backends

LOGGER = logging.getLogger(__name__)

DEFAULT_LANGUAGE = DictionaryCode.EN_US
DEFAULT_DOCUMENT_TYPES = ("markdown", "latex", "plaintext")
DEFAULT_CHECK_INTERVAL = 3000
DEFAULT_SEVERITY = Severity.WARNING
DEFAULT_MAX_DIAGNOSTICS = 250
DEFAULT_SUGGESTION_LIMIT = 5
DEFAULT_DICTIONARY_PATH = Path("/usr/share/hunspell")


def _record_warning(info: ValidationInfo, message: str) -> None:
    LOGGER.debug("Settings warning: %s", message)
    if info.context and isinstance(info.context.get("warnings"), list):
        info.context["warnings"].append(message)


def _invalid(info: ValidationInfo, value: object, default: object) -> None:
    shown = default.value if hasattr(default, "value") else default
    _record_warning(info, f"Invalid {info.field_name} value {value!r}; using {shown!r}")


def _is_number(value: object) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


class SpellSettings(BaseModel):
    """Effective configuration for one checking session."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    language: DictionaryCode = DEFAULT_LANGUAGE
    ignore_words_list: tuple[str, ...] = Field(default=(), alias="ignoreWordsList")
    document_types: tuple[str, ...] = Field(default=DEFAULT_DOCUMENT_TYPES, alias="documentTypes")
    ignore_regexp: tuple[str, ...] = Field(default=(), alias="ignoreRegExp")
    ignore_file_extensions: tuple[str, ...] = Field(default=(), alias="ignoreFileExtensions")
    ignore_filenames: tuple[str, ...] = Field(default=(), alias="ignoreFilenames")
    check_interval: int = Field(default=DEFAULT_CHECK_INTERVAL, alias="checkInterval")
    suggestion_severity: Severity = Field(default=DEFAULT_SEVERITY, alias="suggestionSeverity")
    auto_check: bool = Field(default=True, alias="autoCheck")
    max_diagnostics: int = Field(default=DEFAULT_MAX_DIAGNOSTICS, alias="maxDiagnostics")
    suggestion_limit: int = Field(default=DEFAULT_SUGGESTION_LIMIT, alias="suggestionLimit")
    dictionary_path: Path = Field(default=DEFAULT_DICTIONARY_PATH, alias="dictionaryPath")
    dictionary_backend: str = Field(default=HUNSPELL_BACKEND, alias="dictionaryBackend")

    @field_validator("language", mode="before")
    @classmethod
    def _normalise_language(cls, value: Any, info: ValidationInfo) -> DictionaryCode:
        if isinstance(value, DictionaryCode):
            return value
        if isinstance(value, str) and value.strip() in DictionaryCode.all_values():
            return DictionaryCode(value.strip())
        _invalid(info, value, DEFAULT_LANGUAGE)
        return DEFAULT_LANGUAGE

    @field_validator("suggestion_severity", mode="before")
    @classmethod
    def _normalise_severity(cls, value: Any, info: ValidationInfo) -> Severity:
        if isinstance(value, Severity):
            return value
        if isinstance(value, str) and value.strip() in Severity.all_values():
            return Severity(value.strip())
        _invalid(info, value, DEFAULT_SEVERITY)
        return DEFAULT_SEVERITY

    @field_validator(
        "ignore_words_list",
        "document_types",
        "ignore_regexp",
        "ignore_file_extensions",
        "ignore_filenames",
        mode="before",
    )
    @classmethod
    def _ensure_string_list(cls, value: Any, info: ValidationInfo) -> tuple[str, ...]:
        if value is None:
            return ()
        if not isinstance(value, (list, tuple)):
            _invalid(info, value, [])
            return ()
        return tuple(item for item in value if isinstance(item, str))

    @field_validator("check_interval", mode="before")
    @classmethod
    def _normalise_interval(cls, value: Any, info: ValidationInfo) -> int:
        if _is_number(value):
            return int(value)
        _invalid(info, value, DEFAULT_CHECK_INTERVAL)
        return DEFAULT_CHECK_INTERVAL

    @field_validator("max_diagnostics", mode="before")
    @classmethod
    def _normalise_max_diagnostics(cls, value: Any, info: ValidationInfo) -> int:
        if _is_number(value) and value >= 1:
            return int(value)
        _invalid(info, value, DEFAULT_MAX_DIAGNOSTICS)
        return DEFAULT_MAX_DIAGNOSTICS

    @field_validator("suggestion_limit", mode="before")
    @classmethod
    def _normalise_suggestion_limit(cls, value: Any, info: ValidationInfo) -> int:
        if _is_number(value) and value >= 0:
            return int(value)
        _invalid(info, value, DEFAULT_SUGGESTION_LIMIT)
        return DEFAULT_SUGGESTION_LIMIT

    @field_validator("auto_check", mode="before")
    @classmethod
    def _normalise_auto_check(cls, value: Any, info: ValidationInfo) -> bool:
        if isinstance(value, bool):
            return value
        _invalid(info, value, True)
        return True

    @field_validator("dictionary_path", mode="before")
    @classmethod
    def _normalise_dictionary_path(cls, value: Any, info: ValidationInfo) -> Path:
        if isinstance(value, Path):
            return value.expanduser()
        if isinstance(value, str) and value.strip():
            return Path(value.strip()).expanduser()
        _invalid(info, value, str(DEFAULT_DICTIONARY_PATH))
        return DEFAULT_DICTIONARY_PATH

    @field_validator("dictionary_backend", mode="before")
    @classmethod
    def _normalise_backend(cls, value: Any, info: ValidationInfo) -> str:
        if isinstance(value, str) and value.strip().lower() in available_backends():
            return value.strip().lower()
        _invalid(info, value, HUNSPELL_BACKEND)
        return HUNSPELL_BACKEND

    def to_json_dict(self) -> dict[str, Any]:
        """Serialise using the camelCase names found in settings files."""
        return self.model_dump(mode="json", by_alias=True)
