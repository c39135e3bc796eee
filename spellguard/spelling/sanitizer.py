"""Strip non-prose spans from text without moving any other character.

Every removal replaces the matched span with the same number of spaces, so
offsets found in the sanitized text are valid offsets into the original
document. Patterns are chained: each one runs on the output of the previous
one, built-ins first, then user patterns, then a final tab pass.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Sequence

from spellguard.errors import PatternError

LOGGER = logging.getLogger(__name__)

DEFAULT_REMOVAL_PATTERNS: tuple[re.Pattern[str], ...] = (
    # YAML/Pandoc front matter
    re.compile(r"-{3}[\s\S]*?\n(?:\.{3}|-{3})"),
    re.compile(r"&nbsp;"),
    # Pandoc citations such as [@doe99] or [-@doe99]
    re.compile(r"\[-?@[A-Za-z:0-9-]*\]"),
    # Attribute blocks such as {#sec:intro} or {.class}
    re.compile(r"\{(#|\.)[A-Za-z:0-9]+\}"),
    re.compile(r"```[\s\S]*?```"),
    re.compile(r"`[^`]+`"),
    re.compile(r"\(.*\.(jpg|jpeg|png|md|gif|pdf|svg)\)", re.IGNORECASE),
    re.compile(r"(http|https|ftp|git)\S*"),
    re.compile(r"[a-zA-Z.\-0-9]+@[a-z.]+"),
)

_FLAG_MAP = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    # global/unicode/sticky have no meaning for a whole-text substitution
    "g": 0,
    "u": 0,
    "y": 0,
}

_SLASHED_PATTERN = re.compile(r"^/(?P<body>.*)/(?P<flags>[a-z]*)$", re.DOTALL)


def replace_with_spaces(text: str, pattern: re.Pattern[str]) -> str:
    """Replace every match of ``pattern`` with equal-length whitespace."""
    return pattern.sub(lambda match: " " * len(match.group(0)), text)


def sanitize_text(
    text: str,
    *,
    removal_patterns: Sequence[re.Pattern[str]] | None = None,
    user_patterns: Iterable[re.Pattern[str]] = (),
) -> str:
    """Return ``text`` with non-prose spans blanked out.

    Args:
            text: Raw document text
            removal_patterns: Built-in patterns (default: DEFAULT_REMOVAL_PATTERNS)
            user_patterns: Already compiled user patterns, applied after built-ins

    Returns:
            A string of the same length where only removed spans differ
    """
    processed = text
    for pattern in DEFAULT_REMOVAL_PATTERNS if removal_patterns is None else removal_patterns:
        processed = replace_with_spaces(processed, pattern)

    for pattern in user_patterns:
        processed = replace_with_spaces(processed, pattern)

    return processed.replace("\t", " ")


def parse_user_pattern(value: str) -> re.Pattern[str]:
    """Compile a ``/pattern/flags`` setting into a regular expression.

    Settings arrive through JSON, so backslashes are doubled; they are
    collapsed before compiling. Values without surrounding slashes are used
    as a bare pattern.
    """
    match = _SLASHED_PATTERN.match(value)
    if match:
        body = match.group("body")
        flag_letters = match.group("flags")
    else:
        body = value
        flag_letters = ""

    flags = 0
    for letter in flag_letters:
        if letter not in _FLAG_MAP:
            raise PatternError(value, f"unsupported flag '{letter}'")
        flags |= _FLAG_MAP[letter]

    body = body.replace("\\\\", "\\")
    if not body:
        raise PatternError(value, "pattern is empty")

    try:
        return re.compile(body, flags)
    except re.error as exc:
        raise PatternError(value, str(exc)) from exc


def compile_user_patterns(values: Iterable[str]) -> list[re.Pattern[str]]:
    """Compile the configured patterns, skipping (and logging) invalid ones."""
    patterns: list[re.Pattern[str]] = []
    for value in values:
        try:
            patterns.append(parse_user_pattern(value))
        except PatternError as exc:
            LOGGER.warning("Invalid ignoreRegExp entry skipped: %s", exc)
    return patterns
