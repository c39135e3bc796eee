"""Spelling pipeline exports.

This package exposes the diagnostic pipeline so callers can import from
``spellguard.spelling``. Submodules are imported lazily because the
dictionary module pulls in the third-party dictionary libraries.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .actions import SuggestionMapper, apply_replacement
    from .dictionary import DictionaryBackend, DictionaryOracle
    from .engine import DiagnosticEngine, overflow_notice
    from .ignore_policy import IgnorePolicy
    from .sanitizer import DEFAULT_REMOVAL_PATTERNS, compile_user_patterns, sanitize_text
    from .scheduler import DebounceScheduler
    from .tokenizer import normalize_word, tokenize

__all__ = [
    "DEFAULT_REMOVAL_PATTERNS",
    "DebounceScheduler",
    "DiagnosticEngine",
    "DictionaryBackend",
    "DictionaryOracle",
    "IgnorePolicy",
    "SuggestionMapper",
    "apply_replacement",
    "compile_user_patterns",
    "normalize_word",
    "overflow_notice",
    "sanitize_text",
    "tokenize",
]

_LAZY_EXPORTS = {
    # attribute -> (module, attribute)
    "DEFAULT_REMOVAL_PATTERNS": (".sanitizer", "DEFAULT_REMOVAL_PATTERNS"),
    "DebounceScheduler": (".scheduler", "DebounceScheduler"),
    "DiagnosticEngine": (".engine", "DiagnosticEngine"),
    "DictionaryBackend": (".dictionary", "DictionaryBackend"),
    "DictionaryOracle": (".dictionary", "DictionaryOracle"),
    "IgnorePolicy": (".ignore_policy", "IgnorePolicy"),
    "SuggestionMapper": (".actions", "SuggestionMapper"),
    "apply_replacement": (".actions", "apply_replacement"),
    "compile_user_patterns": (".sanitizer", "compile_user_patterns"),
    "normalize_word": (".tokenizer", "normalize_word"),
    "overflow_notice": (".engine", "overflow_notice"),
    "sanitize_text": (".sanitizer", "sanitize_text"),
    "tokenize": (".tokenizer", "tokenize"),
}


def __getattr__(name: str):
    """Lazily import and return exported attributes."""

    if name in _LAZY_EXPORTS:
        module_name, attr = _LAZY_EXPORTS[name]
        from importlib import import_module

        mod = import_module(f"spellguard.spelling{module_name}")
        value = getattr(mod, attr)
        globals()[name] = value
        return value
    raise AttributeError(name)
