from __future__ import annotations

import pytest

from spellguard.models import IgnoreScope
from spellguard.spelling.ignore_policy import IgnorePolicy


def test_union_of_scopes_is_consulted() -> None:
    policy = IgnorePolicy()
    policy.seed(["kubectl"], IgnoreScope.GLOBAL)
    policy.seed(["spellguard"], IgnoreScope.WORKSPACE)
    policy.add("Pandoc")

    for word in ("kubectl", "spellguard", "Pandoc"):
        assert policy.is_ignored(word)
        assert word in policy
    assert len(policy) == 3


def test_lookup_is_case_sensitive() -> None:
    policy = IgnorePolicy()
    policy.add("Pandoc")
    assert not policy.is_ignored("pandoc")


def test_add_deduplicates_across_scopes() -> None:
    persisted: list[tuple[str, IgnoreScope]] = []
    policy = IgnorePolicy(persist=lambda word, scope: persisted.append((word, scope)))
    policy.seed(["kubectl"], IgnoreScope.GLOBAL)

    assert policy.add("kubectl", IgnoreScope.WORKSPACE) is False
    assert persisted == []
    assert policy.words(IgnoreScope.WORKSPACE) == set()


def test_add_persists_non_session_scopes() -> None:
    persisted: list[tuple[str, IgnoreScope]] = []
    policy = IgnorePolicy(persist=lambda word, scope: persisted.append((word, scope)))

    assert policy.add("teh", IgnoreScope.SESSION) is True
    assert policy.add(" wrold ", IgnoreScope.WORKSPACE) is True
    assert policy.add("helo", IgnoreScope.GLOBAL) is True

    assert persisted == [("wrold", IgnoreScope.WORKSPACE), ("helo", IgnoreScope.GLOBAL)]
    assert policy.words(IgnoreScope.WORKSPACE) == {"wrold"}


def test_failed_persist_leaves_word_unignored() -> None:
    def fail(word: str, scope: IgnoreScope) -> None:
        raise OSError("read-only")

    policy = IgnorePolicy(persist=fail)
    with pytest.raises(OSError):
        policy.add("wrold", IgnoreScope.GLOBAL)
    assert not policy.is_ignored("wrold")


def test_blank_words_are_rejected() -> None:
    policy = IgnorePolicy()
    assert policy.add("   ") is False
    policy.seed(["", "  "])
    assert len(policy) == 0


def test_adopt_carries_only_added_words() -> None:
    previous = IgnorePolicy()
    previous.seed(["kubectl"], IgnoreScope.SESSION)
    previous.add("Helo")
    previous.add("wrold", IgnoreScope.GLOBAL)

    policy = IgnorePolicy()
    policy.adopt(previous)

    assert policy.words() == {"Helo"}
    assert policy.added(IgnoreScope.SESSION) == {"Helo"}
