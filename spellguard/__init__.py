"""Spell checking for prose documents with offset-preserving sanitization."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = [
    "cli",
    "config",
    "models",
    "report_utils",
    "session",
    "spelling",
]
