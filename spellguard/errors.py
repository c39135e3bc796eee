"""Exception hierarchy for spellguard.

Reaching the diagnostic cap is deliberately absent: it is a bounded-work
policy reported through ``CheckResult.overflowed``, not an error.
"""

from __future__ import annotations


class SpellGuardError(Exception):
    """Base class for all spellguard failures."""


class ConfigError(SpellGuardError):
    """Raised when a settings or legacy configuration file cannot be used.

    Callers recover by falling back to defaults and warning the user.
    """


class DictionaryLoadError(SpellGuardError):
    """Raised when dictionary files are missing, unreadable or corrupt."""

    def __init__(self, language: str, reason: str) -> None:
        super().__init__(f"Failed to load dictionary {language}: {reason}")
        self.language = language
        self.reason = reason


class PreconditionError(SpellGuardError, RuntimeError):
    """Raised when the dictionary is queried before a successful load."""


class PatternError(SpellGuardError, ValueError):
    """Raised for an invalid user-supplied ignore pattern."""

    def __init__(self, value: str, reason: str) -> None:
        super().__init__(f"Invalid ignoreRegExp entry {value!r}: {reason}")
        self.value = value
        self.reason = reason
