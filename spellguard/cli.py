"""Command-line host for the spell checker.

Examples::

    spellguard check README.md docs/ --report spelling-report.md
    spellguard suggest helo --limit 3
    spellguard watch notes.md --poll-interval 0.5
    spellguard ignore kubectl --global
    spellguard doctype paper.tex
    spellguard languages

``check`` exits with 0 when no misspellings were found, 1 when some were and
2 when checking could not run at all.
"""

from __future__ import annotations

import argparse
import csv
import logging
import time
from pathlib import Path
from typing import Callable, Iterable, Optional

from spellguard.config import SettingsLoader
from spellguard.models import (
    Diagnostic,
    DictionaryCode,
    DocumentSnapshot,
    IgnoreScope,
    known_extensions,
    language_id_for,
)
from spellguard.report_utils import DocumentReport, build_report_csv, build_report_markdown
from spellguard.session import SpellCheckSession
from spellguard.spelling.dictionary import available_backends

LOGGER = logging.getLogger(__name__)

EXIT_CLEAN = 0
EXIT_MISSPELLINGS = 1
EXIT_FAILURE = 2


class ConsoleNotifier:
    """Prints session messages for the user; errors also go to the log."""

    def info(self, message: str) -> None:
        print(message)

    def warning(self, message: str) -> None:
        print(f"Warning: {message}")

    def error(self, message: str) -> None:
        LOGGER.error("%s", message)


def iter_documents(paths: Iterable[Path]) -> list[Path]:
    """Expand ``paths`` into a sorted, de-duplicated list of files.

    Directories are searched recursively for files with a known document
    extension; explicitly named files are always included.
    """
    extensions = set(known_extensions())
    found: dict[Path, None] = {}
    for path in paths:
        if path.is_dir():
            for candidate in sorted(path.rglob("*")):
                if candidate.is_file() and candidate.suffix.lower() in extensions:
                    found[candidate.resolve()] = None
        elif path.is_file():
            found[path.resolve()] = None
        else:
            LOGGER.warning("Skipping %s: no such file or directory", path)
    return list(found)


def format_diagnostic(document: DocumentSnapshot, diagnostic: Diagnostic) -> str:
    line, character = document.position_at(diagnostic.start)
    return f"{document.file_name}:{line + 1}:{character + 1}: {diagnostic.severity.value}: {diagnostic.message}"


def write_reports(report_path: Path, reports: list[DocumentReport]) -> Path:
    """Write the Markdown report and a CSV twin beside it. Returns the CSV path."""
    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(build_report_markdown(reports), encoding="utf-8")

    csv_path = report_path.with_suffix(".csv")
    with csv_path.open("w", encoding="utf-8", newline="") as csv_file:
        writer = csv.writer(csv_file)
        writer.writerows(build_report_csv(reports))
    return csv_path


def build_loader(args: argparse.Namespace) -> SettingsLoader:
    overrides: dict[str, object] = {}
    if getattr(args, "language", None):
        overrides["language"] = args.language
    if getattr(args, "dictionary_path", None):
        overrides["dictionaryPath"] = str(args.dictionary_path)
    if getattr(args, "backend", None):
        overrides["dictionaryBackend"] = args.backend
    workspace = args.workspace.resolve() if args.workspace else Path.cwd()
    return SettingsLoader(
        workspace,
        global_path=args.global_settings,
        dotenv_path=args.dotenv,
        overrides=overrides,
    )


def build_session(args: argparse.Namespace, **kwargs) -> SpellCheckSession:
    return SpellCheckSession(build_loader(args), notifier=ConsoleNotifier(), **kwargs)


def run_check(args: argparse.Namespace) -> int:
    session = build_session(args)
    try:
        if not session.activate():
            return EXIT_FAILURE

        paths = iter_documents(args.paths)
        if not paths:
            print("No documents found to check.")
            return EXIT_FAILURE

        reports: list[DocumentReport] = []
        total = 0
        for path in paths:
            try:
                document = DocumentSnapshot.from_path(path)
            except (OSError, UnicodeDecodeError) as exc:
                LOGGER.error("Could not read %s: %s", path, exc)
                return EXIT_FAILURE

            result = session.check_document(document)
            if result is None:
                LOGGER.info("Skipping %s (document type '%s')", path, document.language_id)
                continue

            for diagnostic in result.diagnostics:
                print(format_diagnostic(document, diagnostic))
            total += result.total_issues
            if args.report:
                reports.append(DocumentReport.from_result(document, result, session.suggestions))

        if args.report:
            csv_path = write_reports(args.report, reports)
            print(f"Spell check report written to {args.report.resolve()}")
            print(f"CSV report written to {csv_path.resolve()}")

        print(f"Found {total} misspelling(s) in {len(paths)} document(s).")
        return EXIT_MISSPELLINGS if total else EXIT_CLEAN
    finally:
        session.dispose()


def run_suggest(args: argparse.Namespace) -> int:
    session = build_session(args)
    try:
        if not session.activate():
            return EXIT_FAILURE
        if session.oracle is not None and session.oracle.check(args.word):
            print(f"'{args.word}' is spelled correctly.")
            return EXIT_CLEAN
        suggestions = session.suggestions(args.word, args.limit)
        if not suggestions:
            print(f"No suggestions for '{args.word}'.")
        for suggestion in suggestions:
            print(suggestion)
        return EXIT_MISSPELLINGS
    finally:
        session.dispose()


def run_ignore(args: argparse.Namespace) -> int:
    session = build_session(args)
    scope = IgnoreScope.GLOBAL if args.global_scope else IgnoreScope.WORKSPACE
    try:
        session.load_settings()
        if not session.add_ignore_word(args.word, scope):
            return EXIT_MISSPELLINGS
        print(f"Added '{args.word}' to the {scope.value} ignore list.")
        return EXIT_CLEAN
    finally:
        session.dispose()


def run_doctype(args: argparse.Namespace) -> int:
    print(f"The documentType for the current file is '{language_id_for(args.path)}'.")
    return EXIT_CLEAN


def run_languages(args: argparse.Namespace) -> int:
    print("Available languages:")
    for code in DictionaryCode:
        print(f" - {code.value}: {code.label}")
    return EXIT_CLEAN


def watch_paths(
    session: SpellCheckSession,
    paths: list[Path],
    *,
    poll_interval: float = 1.0,
    sleep: Callable[[float], None] = time.sleep,
    max_polls: int | None = None,
) -> int:
    """Poll ``paths`` and feed changes into ``session`` as edit events.

    Returns the number of change events delivered.
    """
    snapshots: dict[Path, DocumentSnapshot] = {}
    for path in paths:
        document = DocumentSnapshot.from_path(path)
        snapshots[path] = document
        session.did_open(document)

    changes = 0
    polls = 0
    while max_polls is None or polls < max_polls:
        sleep(poll_interval)
        polls += 1
        for path, previous in list(snapshots.items()):
            try:
                text = path.read_text(encoding="utf-8")
            except FileNotFoundError:
                LOGGER.info("%s was removed; no longer watching it", path)
                session.did_close(previous)
                del snapshots[path]
                continue
            if text == previous.text:
                continue
            current = previous.with_text(text)
            snapshots[path] = current
            decision = session.did_change(current)
            changes += 1
            LOGGER.debug("Change in %s: %s", path, decision.value)
        if not snapshots:
            break
    return changes


def run_watch(args: argparse.Namespace) -> int:
    session: SpellCheckSession

    def publish(uri: str, diagnostics: list[Diagnostic]) -> None:
        document = next((doc for doc in session.open_documents() if doc.uri == uri), None)
        name = document.file_name if document else uri
        print(f"{name}: {len(diagnostics)} misspelling(s)")
        if document is None:
            return
        for diagnostic in diagnostics:
            print(f"  {format_diagnostic(document, diagnostic)}")

    session = build_session(args, publisher=publish)
    try:
        if not session.activate():
            return EXIT_FAILURE
        paths = iter_documents(args.paths)
        if not paths:
            print("No documents found to watch.")
            return EXIT_FAILURE

        print(f"Watching {len(paths)} document(s); press Ctrl+C to stop.")
        watch_paths(session, paths, poll_interval=args.poll_interval)
    except KeyboardInterrupt:
        print("Stopped watching.")
    finally:
        session.dispose()
    return EXIT_CLEAN


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--workspace",
        type=Path,
        default=None,
        help="Workspace folder holding .spellguard/settings.json (default: current directory)",
    )
    common.add_argument(
        "--global-settings",
        type=Path,
        default=None,
        help="Global settings file (default: ~/.config/spellguard/settings.json)",
    )
    common.add_argument(
        "--language",
        choices=DictionaryCode.all_values(),
        default=None,
        help="Dictionary to check against (overrides settings files)",
    )
    common.add_argument(
        "--dictionary-path",
        type=Path,
        default=None,
        help="Folder containing <language>.aff and <language>.dic",
    )
    common.add_argument(
        "--backend",
        choices=available_backends(),
        default=None,
        help="Dictionary backend to use (default: hunspell)",
    )
    common.add_argument(
        "--dotenv",
        type=Path,
        default=None,
        help="Optional .env file with SPELLGUARD_* variables",
    )
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    parser = argparse.ArgumentParser(
        prog="spellguard",
        description="Find misspelled words in Markdown, LaTeX and plain text documents.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", parents=[common], help="Check documents once")
    check.add_argument("paths", nargs="+", type=Path, metavar="PATH")
    check.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Write a Markdown report (and a CSV beside it) to this path",
    )
    check.set_defaults(handler=run_check)

    suggest = subparsers.add_parser("suggest", parents=[common], help="Suggest corrections for a word")
    suggest.add_argument("word")
    suggest.add_argument("--limit", type=int, default=None, help="Maximum number of suggestions")
    suggest.set_defaults(handler=run_suggest)

    watch = subparsers.add_parser("watch", parents=[common], help="Re-check documents as they change")
    watch.add_argument("paths", nargs="+", type=Path, metavar="PATH")
    watch.add_argument(
        "--poll-interval",
        type=float,
        default=1.0,
        help="Seconds between checks for file changes (default: 1.0)",
    )
    watch.set_defaults(handler=run_watch)

    ignore = subparsers.add_parser("ignore", parents=[common], help="Add a word to an ignore list")
    ignore.add_argument("word")
    ignore.add_argument(
        "--global",
        dest="global_scope",
        action="store_true",
        help="Store the word in the global settings instead of the workspace",
    )
    ignore.set_defaults(handler=run_ignore)

    doctype = subparsers.add_parser("doctype", parents=[common], help="Show the document type of a file")
    doctype.add_argument("path", type=Path)
    doctype.set_defaults(handler=run_doctype)

    languages = subparsers.add_parser("languages", parents=[common], help="List available dictionaries")
    languages.set_defaults(handler=run_languages)

    return parser


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
