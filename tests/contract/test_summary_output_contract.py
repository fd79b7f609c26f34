from __future__ import annotations

import re
from pathlib import Path

from csvimport.cli import main as cli_main

"""SUMMARY line contract: exactly one line, fixed key order."""

SUMMARY_RE = re.compile(
    r"^SUMMARY mode=(preview|commit) file=\S+ rows=\d+ columns=\d+ "
    r"scanned=\d+ warnings=\d+ elapsed_sec=\d+(\.\d+)?$"
)


def _summary_lines(out: str) -> list[str]:
    return [line for line in out.splitlines() if line.startswith("SUMMARY")]


def test_summary_line_preview(simple_csv: Path, capsys):
    cli_main(["preview", str(simple_csv)])
    lines = _summary_lines(capsys.readouterr().out)
    assert len(lines) == 1
    assert SUMMARY_RE.match(lines[0]), lines[0]


def test_summary_line_commit(simple_csv: Path, capsys):
    cli_main(["commit", str(simple_csv)])
    lines = _summary_lines(capsys.readouterr().out)
    assert len(lines) == 1
    assert SUMMARY_RE.match(lines[0]), lines[0]
    assert " rows=2 columns=3 scanned=2 " in lines[0]


def test_no_summary_on_fatal(write_csv, capsys):
    path = write_csv("bad.csv", '"x')
    assert cli_main(["commit", str(path)]) == 1
    assert _summary_lines(capsys.readouterr().out) == []
