"""Enumerations shared by the spelling pipeline and its hosts.

Values are human-readable strings so they can be stored in JSON settings
files and compared directly with user input.
"""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Severity attached to every spelling diagnostic."""

    ERROR = "Error"
    WARNING = "Warning"
    INFORMATION = "Information"
    HINT = "Hint"

    @property
    def lsp_value(self) -> int:
        """Numeric severity as used by the Language Server Protocol."""
        return _LSP_SEVERITY[self]

    @classmethod
    def all_values(cls) -> list[str]:
        return [m.value for m in cls]


_LSP_SEVERITY = {
    Severity.ERROR: 1,
    Severity.WARNING: 2,
    Severity.INFORMATION: 3,
    Severity.HINT: 4,
}


class IgnoreScope(str, Enum):
    """Where an ignored word lives.

    Values:
        SESSION: in memory for the lifetime of the checking session
        WORKSPACE: persisted in the workspace settings file
        GLOBAL: persisted in the user's global settings file
    """

    SESSION = "session"
    WORKSPACE = "workspace"
    GLOBAL = "global"


class ActionKind(str, Enum):
    REPLACE = "replace"
    IGNORE = "ignore"
    ALWAYS_IGNORE = "always_ignore"


class DictionaryCode(str, Enum):
    """Dictionaries the checker knows how to load."""

    EN_US = "en_US"
    EN_GB_IZE = "en_GB-ize"
    EN_GB_ISE = "en_GB-ise"
    ES_ANY = "es_ANY"
    FR = "fr"
    EL_GR = "el_GR"
    SV_SE = "sv_SE"

    @property
    def label(self) -> str:
        return _DICTIONARY_LABELS[self]

    @classmethod
    def all_values(cls) -> list[str]:
        return [m.value for m in cls]


_DICTIONARY_LABELS = {
    DictionaryCode.EN_US: "English US",
    DictionaryCode.EN_GB_IZE: "English UK (-ize/Oxford)",
    DictionaryCode.EN_GB_ISE: "English UK (-ise)",
    DictionaryCode.ES_ANY: "Spanish",
    DictionaryCode.FR: "French",
    DictionaryCode.EL_GR: "Greek",
    DictionaryCode.SV_SE: "Swedish",
}


class SchedulerDecision(str, Enum):
    """Outcome of routing a document change through the debounce scheduler."""

    IMMEDIATE = "immediate"
    DEFERRED = "deferred"
    SKIPPED = "skipped"
