from __future__ import annotations

import re
from pathlib import Path

import pytest

from dummies import DummyBackend, DummyBackendFactory
from spellguard.errors import PreconditionError
from spellguard.models import DocumentSnapshot, Severity
from spellguard.spelling.dictionary import DictionaryOracle
from spellguard.spelling.engine import DiagnosticEngine, overflow_notice
from spellguard.spelling.ignore_policy import IgnorePolicy

VOCABULARY = ["visit", "today", "hello", "world", "this", "text", "some", "prose", "around", "block"]


def make_engine(words=VOCABULARY, **kwargs) -> tuple[DiagnosticEngine, DummyBackend]:
    backend = DummyBackend(words)
    oracle = DictionaryOracle(Path("/dictionaries"), backend_factory=DummyBackendFactory(backend))
    oracle.load("en_US")
    return DiagnosticEngine(oracle, kwargs.pop("ignore_policy", IgnorePolicy()), **kwargs), backend


def snapshot(text: str) -> DocumentSnapshot:
    return DocumentSnapshot(uri="file:///notes.md", text=text, language_id="markdown", file_name="/notes.md")


def test_misspellings_outside_urls_are_reported() -> None:
    engine, _ = make_engine()
    text = "Helo wrold, visit http://example.com today."

    result = engine.check(snapshot(text))

    assert [diagnostic.word for diagnostic in result.diagnostics] == ["Helo", "wrold"]
    for diagnostic in result.diagnostics:
        assert text[diagnostic.start : diagnostic.end] == diagnostic.word
        assert diagnostic.message == f"Spelling: {diagnostic.word}"
        assert diagnostic.code == diagnostic.word
    assert not result.overflowed
    assert not result.truncated


def test_hunspell_dictionary_scenario(fixture_dictionaries: Path) -> None:
    oracle = DictionaryOracle(fixture_dictionaries)
    oracle.load("en_US")
    engine = DiagnosticEngine(oracle, IgnorePolicy())

    result = engine.check(snapshot("Helo wrold, visit http://example.com today."))

    assert [diagnostic.word for diagnostic in result.diagnostics] == ["Helo", "wrold"]


def test_fenced_code_produces_no_diagnostics() -> None:
    engine, _ = make_engine()
    text = "Some prose around\n```\nfooBarBaz qwertyuiop zxcvbnm\n```\nthis block tekst"

    result = engine.check(snapshot(text))

    assert [diagnostic.word for diagnostic in result.diagnostics] == ["tekst"]
    assert result.diagnostics[0].start > text.index("```\nthis")


def test_diagnostic_cap_sets_overflow(caplog: pytest.LogCaptureFixture) -> None:
    engine, _ = make_engine(max_diagnostics=2)

    with caplog.at_level("INFO"):
        result = engine.check(snapshot("aaaa bbbb cccc dddd eeee"))

    assert [diagnostic.word for diagnostic in result.diagnostics] == ["aaaa", "bbbb"]
    assert result.overflowed
    assert result.total_issues == 2
    assert caplog.text.count(overflow_notice(2)) == 1


def test_exactly_max_diagnostics_is_not_an_overflow(caplog: pytest.LogCaptureFixture) -> None:
    engine, _ = make_engine(max_diagnostics=2)

    with caplog.at_level("INFO"):
        result = engine.check(snapshot("Helo wrold, visit today"))

    assert [diagnostic.word for diagnostic in result.diagnostics] == ["Helo", "wrold"]
    assert not result.overflowed
    assert overflow_notice(2) not in caplog.text


def test_token_budget_stops_the_pass() -> None:
    engine, backend = make_engine(max_diagnostics=1)
    text = " ".join(["hello"] * 30)

    result = engine.check(snapshot(text))

    assert engine.token_budget == 20
    assert result.truncated
    assert result.tokens_scanned == 20
    assert len(backend.checked) == 20
    assert result.diagnostics == []


def test_short_and_numeric_words_are_never_flagged() -> None:
    engine, backend = make_engine(words=[])

    result = engine.check(snapshot("xyz qq 1234 a1b2 h2o"))

    assert result.diagnostics == []
    assert backend.checked == []


def test_ignored_words_are_skipped() -> None:
    policy = IgnorePolicy()
    policy.add("wrold")
    engine, backend = make_engine(ignore_policy=policy)

    result = engine.check(snapshot("Helo wrold"))

    assert [diagnostic.word for diagnostic in result.diagnostics] == ["Helo"]
    assert "wrold" not in backend.checked


def test_curly_apostrophes_are_normalized_before_lookup() -> None:
    engine, backend = make_engine(words=["isn't", "doesn't"])

    result = engine.check(snapshot("Isn’t it? It doesn’tt."))

    assert backend.checked == ["Isn't", "doesn'tt"]
    assert [diagnostic.word for diagnostic in result.diagnostics] == ["doesn'tt"]
    diagnostic = result.diagnostics[0]
    assert diagnostic.end - diagnostic.start == len("doesn’tt")


def test_user_patterns_and_severity_are_applied() -> None:
    engine, _ = make_engine(
        severity=Severity.ERROR,
        user_patterns=[re.compile(r"JIRA-\w+")],
    )

    result = engine.check(snapshot("See JIRA-abcdef and wrold"))

    assert [diagnostic.word for diagnostic in result.diagnostics] == ["wrold"]
    assert result.diagnostics[0].severity is Severity.ERROR


def test_check_before_load_raises() -> None:
    oracle = DictionaryOracle(Path("/dictionaries"), backend_factory=DummyBackendFactory(DummyBackend([])))
    engine = DiagnosticEngine(oracle, IgnorePolicy())
    with pytest.raises(PreconditionError):
        engine.check(snapshot("Helo wrold"))


def test_invalid_cap_is_rejected() -> None:
    with pytest.raises(ValueError):
        make_engine(max_diagnostics=0)
