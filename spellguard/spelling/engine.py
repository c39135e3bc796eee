"""Turn a document snapshot into spelling diagnostics.

A pass sanitizes the whole text, tokenizes it and looks every remaining
token up in the dictionary. Two counters bound the work done on a single
pass:

- diagnostics stop at ``max_diagnostics`` (the pass is marked as overflowed)
- tokens stop at ``max_diagnostics * TOKEN_BUDGET_FACTOR`` (the rest of the
  document is skipped)

The result always describes the complete diagnostic set for the document;
callers replace whatever they held before.
"""

from __future__ import annotations

import logging
import re
from typing import Sequence

from spellguard.models import CheckResult, Diagnostic, DocumentSnapshot, Severity

from .dictionary import DictionaryOracle
from .ignore_policy import IgnorePolicy
from .sanitizer import sanitize_text
from .tokenizer import contains_digit, normalize_word, tokenize

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_DIAGNOSTICS = 250
TOKEN_BUDGET_FACTOR = 20


def overflow_notice(max_diagnostics: int) -> str:
    return f"Over {max_diagnostics} spelling errors found!"


class DiagnosticEngine:
    """Sanitize, tokenize, filter and look up the words of a document."""

    def __init__(
        self,
        oracle: DictionaryOracle,
        ignore_policy: IgnorePolicy,
        *,
        severity: Severity = Severity.WARNING,
        max_diagnostics: int = DEFAULT_MAX_DIAGNOSTICS,
        user_patterns: Sequence[re.Pattern[str]] = (),
    ) -> None:
        if max_diagnostics < 1:
            raise ValueError("max_diagnostics must be at least 1")
        self.oracle = oracle
        self.ignore_policy = ignore_policy
        self.severity = severity
        self.max_diagnostics = max_diagnostics
        self.user_patterns = tuple(user_patterns)

    @property
    def token_budget(self) -> int:
        return self.max_diagnostics * TOKEN_BUDGET_FACTOR

    def check(self, document: DocumentSnapshot) -> CheckResult:
        """Run one complete pass over ``document``.

        Raises:
                PreconditionError: if the oracle has no dictionary loaded.
        """
        sanitized = sanitize_text(document.text, user_patterns=self.user_patterns)
        result = CheckResult(uri=document.uri)
        token_budget = self.token_budget

        for token in tokenize(sanitized):
            result.tokens_scanned += 1
            word = normalize_word(token.text)

            if (
                not contains_digit(word)
                and not self.ignore_policy.is_ignored(word)
                and not self.oracle.check(word)
            ):
                # overflow means a misspelling exists beyond the cap
                if len(result.diagnostics) >= self.max_diagnostics:
                    result.overflowed = True
                    LOGGER.info(
                        "%s (%s)", overflow_notice(self.max_diagnostics), document.uri
                    )
                    break
                result.diagnostics.append(
                    Diagnostic(
                        start=token.start,
                        end=token.end,
                        word=word,
                        severity=self.severity,
                    )
                )

            if result.tokens_scanned >= token_budget:
                result.truncated = True
                LOGGER.debug(
                    "Stopped checking %s after %d token(s)",
                    document.uri,
                    result.tokens_scanned,
                )
                break

        LOGGER.debug(
            "Checked %s: %d token(s), %d diagnostic(s)",
            document.uri,
            result.tokens_scanned,
            len(result.diagnostics),
        )
        return result
