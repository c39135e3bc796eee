from __future__ import annotations

import csv
import json
from pathlib import Path

import pytest

from dummies import DummyBackend, DummyBackendFactory, DummyTimerFactory, FakeClock
from spellguard import cli
from spellguard.config import SettingsLoader
from spellguard.session import SpellCheckSession


@pytest.fixture
def common_args(tmp_path: Path, fixture_dictionaries: Path) -> list[str]:
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    return [
        "--workspace",
        str(workspace),
        "--global-settings",
        str(tmp_path / "global.json"),
        "--dictionary-path",
        str(fixture_dictionaries),
    ]


def test_check_clean_document(tmp_path: Path, common_args: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    document = tmp_path / "clean.md"
    document.write_text("Hello world, visit today.", encoding="utf-8")

    assert cli.main(["check", str(document), *common_args]) == 0
    assert "Found 0 misspelling(s) in 1 document(s)." in capsys.readouterr().out


def test_check_reports_misspellings(tmp_path: Path, common_args: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "notes.md").write_text("Helo wrold, visit http://example.com today.", encoding="utf-8")
    (docs / "ignored.py").write_text("wrongg = 1", encoding="utf-8")
    report = tmp_path / "out" / "report.md"

    exit_code = cli.main(["check", str(docs), "--report", str(report), *common_args])

    output = capsys.readouterr().out
    assert exit_code == 1
    assert "notes.md:1:1: Warning: Spelling: Helo" in output
    assert "notes.md:1:6: Warning: Spelling: wrold" in output
    assert "Found 2 misspelling(s) in 1 document(s)." in output

    assert "### notes.md" in report.read_text(encoding="utf-8")
    with report.with_suffix(".csv").open(encoding="utf-8", newline="") as handle:
        rows = list(csv.reader(handle))
    assert [row[3] for row in rows[1:]] == ["Helo", "wrold"]


def test_check_without_dictionary_fails(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    document = tmp_path / "notes.md"
    document.write_text("Helo", encoding="utf-8")
    args = [
        "check",
        str(document),
        "--workspace",
        str(tmp_path),
        "--global-settings",
        str(tmp_path / "global.json"),
        "--dictionary-path",
        str(tmp_path / "missing"),
    ]
    assert cli.main(args) == 2


def test_suggest(common_args: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["suggest", "helo", "--limit", "3", *common_args]) == 1
    lines = capsys.readouterr().out.splitlines()
    assert "hello" in lines
    assert len(lines) <= 3

    assert cli.main(["suggest", "hello", *common_args]) == 0
    assert "'hello' is spelled correctly." in capsys.readouterr().out


def test_ignore_writes_workspace_then_warns(tmp_path: Path, common_args: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["ignore", "kubectl", *common_args]) == 0
    settings_file = tmp_path / "workspace" / ".spellguard" / "settings.json"
    assert json.loads(settings_file.read_text(encoding="utf-8")) == {"ignoreWordsList": ["kubectl"]}

    assert cli.main(["ignore", "kubectl", "--global", *common_args]) == 1
    assert "already been added" in capsys.readouterr().out
    assert not (tmp_path / "global.json").exists()


def test_doctype_and_languages(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["doctype", "paper.tex"]) == 0
    assert "The documentType for the current file is 'latex'." in capsys.readouterr().out

    assert cli.main(["languages"]) == 0
    output = capsys.readouterr().out
    assert "en_GB-ize: English UK (-ize/Oxford)" in output
    assert "sv_SE: Swedish" in output


def test_watch_paths_feeds_changes(tmp_path: Path) -> None:
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    document = workspace / "notes.md"
    document.write_text("hello", encoding="utf-8")
    clock = FakeClock()
    published: list[tuple[str, list]] = []
    session = SpellCheckSession(
        SettingsLoader(workspace, global_path=tmp_path / "global.json"),
        publisher=lambda uri, diagnostics: published.append((uri, diagnostics)),
        clock=clock,
        timer_factory=DummyTimerFactory(),
        backend_factory=DummyBackendFactory(DummyBackend(["hello"])),
    )
    session.activate()
    edits = iter(["helo", "helo", None])

    def fake_sleep(seconds: float) -> None:
        clock.advance(10)
        text = next(edits)
        if text is None:
            document.unlink()
        else:
            document.write_text(text, encoding="utf-8")

    try:
        changes = cli.watch_paths(session, [document], poll_interval=0, sleep=fake_sleep, max_polls=5)
    finally:
        session.dispose()

    assert changes == 1
    assert [[d.word for d in diagnostics] for _, diagnostics in published] == [[], ["helo"], []]
