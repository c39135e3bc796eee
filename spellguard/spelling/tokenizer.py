"""Extract candidate words from sanitized text."""

from __future__ import annotations

import re
from typing import Iterator

from spellguard.models import Token

# A letter followed by three or more letters or apostrophes (straight or curly).
WORD_PATTERN = re.compile(r"[A-Za-z][A-Za-z'’]{3,}")
_DIGIT_PATTERN = re.compile(r"\d")


def tokenize(sanitized: str) -> Iterator[Token]:
    """Yield word tokens from ``sanitized`` in document order."""
    for match in WORD_PATTERN.finditer(sanitized):
        yield Token(text=match.group(0), start=match.start(), end=match.end())


def normalize_word(word: str) -> str:
    """Map curly apostrophes to straight ones so lookups see one form."""
    return word.replace("’", "'")


def contains_digit(word: str) -> bool:
    return _DIGIT_PATTERN.search(word) is not None
