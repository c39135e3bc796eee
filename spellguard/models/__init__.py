"""Public model exports for the project.

Other modules and tests should import ``from spellguard.models import ...``.
"""

from __future__ import annotations

from .diagnostic import DIAGNOSTIC_SOURCE, CheckResult, CodeAction, Diagnostic, Token
from .document import DocumentSnapshot, known_extensions, language_id_for
from .enums import ActionKind, DictionaryCode, IgnoreScope, SchedulerDecision, Severity

__all__ = [
    "ActionKind",
    "CheckResult",
    "CodeAction",
    "DIAGNOSTIC_SOURCE",
    "Diagnostic",
    "DictionaryCode",
    "DocumentSnapshot",
    "IgnoreScope",
    "SchedulerDecision",
    "Severity",
    "Token",
    "known_extensions",
    "language_id_for",
]
