"""Map a spelling diagnostic to the quick fixes offered for it."""

from __future__ import annotations

import logging

from spellguard.errors import SpellGuardError
from spellguard.models import ActionKind, CodeAction, Diagnostic, IgnoreScope

from .dictionary import DictionaryOracle

LOGGER = logging.getLogger(__name__)

DEFAULT_SUGGESTION_LIMIT = 5


class SuggestionMapper:
    """Build replace / ignore / always-ignore actions for a diagnostic."""

    def __init__(
        self,
        oracle: DictionaryOracle,
        *,
        suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT,
    ) -> None:
        self.oracle = oracle
        self.suggestion_limit = suggestion_limit

    def suggestions_for(self, word: str) -> list[str]:
        try:
            return self.oracle.suggest(word, self.suggestion_limit)
        except SpellGuardError as exc:
            LOGGER.warning("No suggestions for '%s': %s", word, exc)
            return []

    def actions_for(self, diagnostic: Diagnostic) -> list[CodeAction]:
        """Return replacements (best first, first one preferred) then ignores."""
        word = diagnostic.code or diagnostic.word
        actions = [
            CodeAction(
                kind=ActionKind.REPLACE,
                title=f"Replace with '{suggestion}'",
                word=word,
                diagnostic=diagnostic,
                replacement=suggestion,
                is_preferred=index == 0,
            )
            for index, suggestion in enumerate(self.suggestions_for(word))
        ]
        actions.append(
            CodeAction(
                kind=ActionKind.IGNORE,
                title=f"Ignore '{word}'",
                word=word,
                diagnostic=diagnostic,
                scope=IgnoreScope.WORKSPACE,
            )
        )
        actions.append(
            CodeAction(
                kind=ActionKind.ALWAYS_IGNORE,
                title=f"Always ignore '{word}'",
                word=word,
                diagnostic=diagnostic,
                scope=IgnoreScope.GLOBAL,
            )
        )
        return actions


def apply_replacement(text: str, diagnostic: Diagnostic, replacement: str) -> str:
    """Return ``text`` with the diagnostic's range replaced by ``replacement``."""
    if diagnostic.end > len(text):
        raise ValueError(
            f"Diagnostic range {diagnostic.range} is outside a text of length {len(text)}"
        )
    return text[: diagnostic.start] + replacement + text[diagnostic.end :]
