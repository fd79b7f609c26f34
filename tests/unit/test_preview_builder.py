from __future__ import annotations

from csvimport.models.row_data import RawRow
from csvimport.models.table import Header
from csvimport.parsing.classifier import ClassifiedRows
from csvimport.services.preview import build_preview


def _classified(width: int, rows: list[list[str]], consumed: list[int] | None = None) -> ClassifiedRows:
    def gen():
        for i, r in enumerate(rows, start=1):
            if consumed is not None:
                consumed.append(i)
            yield RawRow(row_index=i, line_number=i + 1, fields=tuple(r))
    return ClassifiedRows(header=Header.synthesize(width), data_rows=gen())


def test_preview_stops_at_limit():
    consumed: list[int] = []
    rows = [[str(i), "x"] for i in range(100)]
    result = build_preview(_classified(2, rows, consumed), limit=5)
    assert len(result.sample_rows) == 5
    assert result.total_rows_scanned == 5
    assert consumed == [1, 2, 3, 4, 5]


def test_preview_fewer_rows_than_limit():
    result = build_preview(_classified(2, [["1", "2"], ["3", "4"]]), limit=50)
    assert result.sample_rows == (("1", "2"), ("3", "4"))
    assert result.total_rows_scanned == 2


def test_preview_zero_limit_reads_nothing():
    consumed: list[int] = []
    result = build_preview(_classified(1, [["a"]], consumed), limit=0)
    assert result.sample_rows == ()
    assert result.total_rows_scanned == 0
    assert consumed == []


def test_preview_pads_and_records_warning():
    result = build_preview(_classified(3, [["1", "2"], ["1", "2", "3", "4"]]), limit=10)
    assert result.sample_rows == (("1", "2", ""), ("1", "2", "3"))
    assert [(w.row_index, w.action) for w in result.warnings] == [(1, "padded"), (2, "truncated")]


def test_preview_blank_rows_count_as_scanned():
    result = build_preview(_classified(1, [["a"], [""], ["b"]]), limit=2)
    assert result.sample_rows == (("a",), ("b",))
    assert result.total_rows_scanned == 3


def test_preview_keeps_blank_rows_when_configured():
    result = build_preview(_classified(1, [["a"], [""]]), limit=5, skip_blank_rows=False)
    assert result.sample_rows == (("a",), ("",))
