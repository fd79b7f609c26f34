from __future__ import annotations

import re

import pytest

from csvimport.models.import_result import RowWidthMismatchWarning
from csvimport.models.table import Header, PreviewResult, Table
from csvimport.services.summary import format_number, render_summary_line

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+mode=(preview|commit)\s+file=(\S+)\s+rows=([0-9]+)\s+columns=([0-9]+)\s+"
    r"scanned=([0-9]+)\s+warnings=([0-9]+)\s+elapsed_sec=([0-9]+\.?[0-9]*)$"
)


def test_render_summary_line_commit():
    table = Table(
        name="orders.csv",
        header=Header(("id", "qty", "price")),
        rows=[["1", "2", "3"], ["4", "5", ""]],
        row_indices=[1, 2],
        warnings=[RowWidthMismatchWarning(row_index=2, expected=3, actual=2)],
    )
    line = render_summary_line("orders.csv", table, 2.0)
    match = SUMMARY_PATTERN.match(line)
    assert match, line
    assert match.groups() == ("commit", "orders.csv", "2", "3", "2", "1", "2")


def test_render_summary_line_preview_uses_scanned_count():
    preview = PreviewResult(
        header=Header(("a",)),
        sample_rows=(("x",),),
        total_rows_scanned=4,
    )
    line = render_summary_line("p.csv", preview, 0.25)
    match = SUMMARY_PATTERN.match(line)
    assert match, line
    assert match.group(1) == "preview"
    assert match.group(3) == "1"
    assert match.group(5) == "4"
    assert match.group(7) == "0.25"


@pytest.mark.parametrize(
    "value,expected",
    [(0, "0"), (3.0, "3"), (0.001234, "0.001234"), (1.23456, "1.235"), (0.0000001, "0")],
)
def test_format_number(value: float, expected: str):
    assert format_number(value) == expected
