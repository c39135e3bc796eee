"""Words exempt from spell checking, partitioned by persistence scope."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from spellguard.models import IgnoreScope

LOGGER = logging.getLogger(__name__)

PersistCallback = Callable[[str, IgnoreScope], None]


class IgnorePolicy:
    """Case-sensitive ignore set.

    Lookups consult the union of all scopes. Words are only ever added;
    adding a word that is already ignored in any scope is a no-op so the same
    word is never persisted twice. Persisting workspace and global words is
    left to the ``persist`` callback supplied by the host.
    """

    def __init__(self, *, persist: PersistCallback | None = None) -> None:
        self._scopes: dict[IgnoreScope, set[str]] = {scope: set() for scope in IgnoreScope}
        # words inserted through add(), as opposed to seeded from configuration
        self._added: dict[IgnoreScope, set[str]] = {scope: set() for scope in IgnoreScope}
        self._persist = persist

    def seed(self, words: Iterable[str], scope: IgnoreScope = IgnoreScope.SESSION) -> None:
        """Populate ``scope`` from already persisted configuration."""
        for word in words:
            cleaned = word.strip() if isinstance(word, str) else ""
            if cleaned:
                self._scopes[scope].add(cleaned)

    def is_ignored(self, word: str) -> bool:
        return any(word in words for words in self._scopes.values())

    def add(self, word: str, scope: IgnoreScope = IgnoreScope.SESSION) -> bool:
        """Ignore ``word`` in ``scope``.

        Returns:
                True when the word was inserted, False when it was already
                ignored in any scope (nothing is changed or persisted).
        """
        word = word.strip()
        if not word or self.is_ignored(word):
            return False

        if scope is not IgnoreScope.SESSION and self._persist is not None:
            self._persist(word, scope)
        self._scopes[scope].add(word)
        self._added[scope].add(word)
        LOGGER.info("Ignoring '%s' (%s scope)", word, scope.value)
        return True

    def added(self, scope: IgnoreScope) -> set[str]:
        """Words inserted into ``scope`` through ``add`` rather than ``seed``."""
        return set(self._added[scope])

    def adopt(self, other: "IgnorePolicy", scope: IgnoreScope = IgnoreScope.SESSION) -> None:
        """Carry over the words ``other`` had added to ``scope``.

        Seeded words are left behind; they are re-derived from configuration.
        """
        words = other.added(scope)
        self._scopes[scope].update(words)
        self._added[scope].update(words)

    def words(self, scope: IgnoreScope | None = None) -> set[str]:
        if scope is not None:
            return set(self._scopes[scope])
        merged: set[str] = set()
        for words in self._scopes.values():
            merged.update(words)
        return merged

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.is_ignored(word)

    def __len__(self) -> int:
        return len(self.words())
