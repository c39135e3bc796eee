"""Tokens, diagnostics and code actions produced by the spelling pipeline.

Diagnostics are validated Pydantic models because hosts serialise them (CLI
reports, JSON output). Tokens and actions are plain dataclasses: they never
leave the process and are created in hot loops.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from .enums import ActionKind, IgnoreScope, Severity

DIAGNOSTIC_SOURCE = "spellguard"


@dataclass(frozen=True)
class Token:
    """A candidate word taken from sanitized text.

    ``text`` is always the literal substring ``sanitized[start:end]`` so the
    range can be used to highlight the original document.
    """

    text: str
    start: int
    end: int


class Diagnostic(BaseModel):
    """A reported spelling issue.

    - start/end: offsets into the document text
    - word: the normalized misspelled word; also the diagnostic's identity
    - message: ``"Spelling: <word>"``
    - code: machine readable code, always equal to ``word``
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    start: int
    end: int
    word: str
    severity: Severity = Severity.WARNING
    source: str = DIAGNOSTIC_SOURCE
    message: str = ""
    code: str = ""

    @field_validator("word", mode="before")
    def _strip_word(cls, value: object) -> str:
        result = str(value or "").strip()
        if not result:
            raise ValueError("word must not be empty")
        return result

    @model_validator(mode="before")
    @classmethod
    def _fill_derived(cls, data: object) -> object:
        if isinstance(data, dict):
            word = str(data.get("word") or "").strip()
            data = dict(data)
            if not data.get("message"):
                data["message"] = f"Spelling: {word}"
            if not data.get("code"):
                data["code"] = word
        return data

    @model_validator(mode="after")
    def _check_range(self) -> "Diagnostic":
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid range ({self.start}, {self.end})")
        return self

    @property
    def range(self) -> tuple[int, int]:
        return (self.start, self.end)


@dataclass
class CheckResult:
    """Outcome of one check pass over a document."""

    uri: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    tokens_scanned: int = 0
    overflowed: bool = False
    truncated: bool = False

    @property
    def total_issues(self) -> int:
        return len(self.diagnostics)


@dataclass(frozen=True)
class CodeAction:
    """An edit the host may apply for a diagnostic. Describes, never mutates."""

    kind: ActionKind
    title: str
    word: str
    diagnostic: Diagnostic
    replacement: str | None = None
    scope: IgnoreScope | None = None
    is_preferred: bool = False
