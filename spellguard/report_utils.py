"""Markdown and CSV report builders for spell check results.

The CLI ``check --report`` option writes both formats side by side. Each
report row is a ``ReportEntry`` so suggestions are looked up once and shared
by both builders.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable

from spellguard.models import CheckResult, Diagnostic, DocumentSnapshot

SuggestionLookup = Callable[[str], list[str]]


@dataclass
class ReportEntry:
    """One flagged word with its location in the original document."""

    line: int
    column: int
    word: str
    severity: str
    suggestions: list[str] = field(default_factory=list)


@dataclass
class DocumentReport:
    """Results for a single checked document."""

    path: Path
    entries: list[ReportEntry] = field(default_factory=list)
    overflowed: bool = False
    truncated: bool = False

    @classmethod
    def from_result(
        cls,
        document: DocumentSnapshot,
        result: CheckResult,
        suggest: SuggestionLookup | None = None,
    ) -> "DocumentReport":
        entries = [_entry_for(document, diagnostic, suggest) for diagnostic in result.diagnostics]
        return cls(
            path=Path(document.file_name or document.uri),
            entries=entries,
            overflowed=result.overflowed,
            truncated=result.truncated,
        )


def _entry_for(
    document: DocumentSnapshot,
    diagnostic: Diagnostic,
    suggest: SuggestionLookup | None,
) -> ReportEntry:
    line, character = document.position_at(diagnostic.start)
    return ReportEntry(
        # reports are read by people, so positions are 1-based
        line=line + 1,
        column=character + 1,
        word=diagnostic.word,
        severity=diagnostic.severity.value,
        suggestions=suggest(diagnostic.word) if suggest else [],
    )


def _format_suggestions(suggestions: list[str] | None, max_suggestions: int = 3) -> str:
    """Return a truncated suggestions string, "-" when there are none."""
    if not suggestions:
        return "-"
    if len(suggestions) <= max_suggestions:
        return ", ".join(suggestions)
    visible = ", ".join(suggestions[:max_suggestions])
    remaining = len(suggestions) - max_suggestions
    return f"{visible} (+{remaining} more)"


def _escape(value: str) -> str:
    return value.replace("|", "\\|")


def build_report_markdown(reports: Iterable[DocumentReport]) -> str:
    """Convert the collected document reports into Markdown output."""

    report_list = sorted(reports, key=lambda item: str(item.path).lower())
    total_documents = len(report_list)
    total_issues = sum(len(report.entries) for report in report_list)

    lines: list[str] = []
    lines.append("# Spell Check Report")
    lines.append("")
    lines.append(f"- Checked {total_documents} document(s)")
    lines.append(f"- Total misspellings found: {total_issues}")

    lines.append("")
    lines.append("---")
    lines.append("")
    lines.append("## Document Details")
    if not report_list:
        lines.append("")
        lines.append("_No documents were checked._")
        return "\n".join(lines)

    for report in report_list:
        lines.append("")
        lines.append(f"### {report.path.name}")
        lines.append("")
        if not report.entries:
            lines.append("_No misspellings found._")
            continue

        lines.append(f"Found {len(report.entries)} misspelling(s).")
        if report.overflowed:
            lines.append(f"Reporting stopped at {len(report.entries)} misspellings.")
        elif report.truncated:
            lines.append("The document was too long to check completely.")
        lines.append("")
        lines.append("| Line | Column | Word | Severity | Suggestions |")
        lines.append("| --- | --- | --- | --- | --- |")
        for entry in report.entries:
            suggestions = _escape(_format_suggestions(entry.suggestions))
            lines.append(
                f"| {entry.line} | {entry.column} | {_escape(entry.word)} | {entry.severity} | {suggestions} |"
            )

    return "\n".join(lines)


def build_report_csv(reports: Iterable[DocumentReport]) -> list[list[str]]:
    """Convert the collected document reports into CSV rows.

    The first row contains the column headers.
    """

    rows: list[list[str]] = [["Document", "Line", "Column", "Word", "Severity", "Suggestions"]]

    for report in sorted(reports, key=lambda item: str(item.path).lower()):
        for entry in report.entries:
            rows.append(
                [
                    str(report.path),
                    str(entry.line),
                    str(entry.column),
                    entry.word,
                    entry.severity,
                    "; ".join(entry.suggestions),
                ]
            )

    return rows
