from __future__ import annotations

import re

import pytest

from spellguard.errors import PatternError
from spellguard.spelling.sanitizer import (
    DEFAULT_REMOVAL_PATTERNS,
    compile_user_patterns,
    parse_user_pattern,
    replace_with_spaces,
    sanitize_text,
)

SAMPLES = [
    "",
    "Plain prose without anything special.",
    "---\ntitle: Notes\nauthor: Someone\n---\nBody text here.",
    "Visit https://example.com/path?q=1 or mail someone@example.org now.",
    "See [@doe99] and [-@smith2001] for details {#sec:intro}.",
    "Inline `codez` and\n```python\ndef fnuction():\n    pass\n```\nafter.",
    "![diagram](images/figure-one.png) and a\ttabbed\tline &nbsp; end",
    "Unicode façade naïve ’quotes’ 😀 emoji",
]


@pytest.mark.parametrize("text", SAMPLES)
def test_sanitize_preserves_length(text: str) -> None:
    assert len(sanitize_text(text)) == len(text)


@pytest.mark.parametrize("text", SAMPLES)
def test_sanitize_is_idempotent(text: str) -> None:
    once = sanitize_text(text)
    assert sanitize_text(once) == once


@pytest.mark.parametrize("text", SAMPLES)
def test_characters_outside_removed_spans_are_unchanged(text: str) -> None:
    sanitized = sanitize_text(text)
    for original, cleaned in zip(text, sanitized):
        assert cleaned == original or cleaned == " "


def test_fenced_code_is_blanked() -> None:
    text = "Before\n```\nmispeled identifeir\n```\nAfter"
    sanitized = sanitize_text(text)
    assert "mispeled" not in sanitized
    assert "identifeir" not in sanitized
    assert sanitized.startswith("Before")
    assert sanitized.endswith("After")


def test_urls_and_emails_are_blanked() -> None:
    sanitized = sanitize_text("Helo http://example.com and bob@example.com today")
    assert "example" not in sanitized
    assert "bob" not in sanitized
    assert sanitized.index("today") == len("Helo http://example.com and bob@example.com ")


def test_front_matter_is_blanked() -> None:
    text = "---\ntitle: Wrold\n---\nHello"
    sanitized = sanitize_text(text)
    assert "Wrold" not in sanitized
    assert sanitized.endswith("Hello")


def test_tabs_become_single_spaces() -> None:
    assert sanitize_text("a\tb") == "a b"


def test_user_patterns_run_after_builtins() -> None:
    calls: list[str] = []

    class RecordingPattern:
        def sub(self, repl, text):
            calls.append(text)
            return text

    text = "Visit http://example.com please"
    sanitize_text(text, user_patterns=[RecordingPattern()])  # type: ignore[list-item]
    # the user pattern sees text the URL pattern already blanked
    assert calls == [replace_with_spaces(text, DEFAULT_REMOVAL_PATTERNS[7])]


def test_user_pattern_blanks_matches() -> None:
    pattern = parse_user_pattern("/TODO\\\\(\\\\w+\\\\)/g")
    sanitized = sanitize_text("Fix TODO(alice) soon", user_patterns=[pattern])
    assert sanitized == "Fix             soon"


def test_parse_user_pattern_flags() -> None:
    pattern = parse_user_pattern("/latex/i")
    assert pattern.flags & re.IGNORECASE
    assert pattern.search("LaTeX")


def test_parse_user_pattern_without_slashes() -> None:
    assert parse_user_pattern("foo+").pattern == "foo+"


@pytest.mark.parametrize("value", ["/(unclosed/", "//", "/abc/q"])
def test_parse_user_pattern_rejects_invalid(value: str) -> None:
    with pytest.raises(PatternError):
        parse_user_pattern(value)


def test_compile_user_patterns_skips_invalid(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("WARNING"):
        patterns = compile_user_patterns(["/ok/", "/(bad/", "/fine/i"])
    assert [pattern.pattern for pattern in patterns] == ["ok", "fine"]
    assert "Invalid ignoreRegExp entry" in caplog.text
