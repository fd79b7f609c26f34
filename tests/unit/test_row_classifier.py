from __future__ import annotations

from csvimport.models.row_data import RawRow
from csvimport.parsing.classifier import classify_rows


def _rows(*rows: list[str]) -> list[RawRow]:
    return [RawRow(row_index=i, line_number=i + 1, fields=tuple(r)) for i, r in enumerate(rows)]


def test_header_and_data_positions():
    classified = classify_rows(_rows(["a", "b"], ["1", "2"], ["3", "4"]), 0, 1)
    assert classified.header.names == ("a", "b")
    assert classified.header.synthesized is False
    assert classified.header.source_row_index == 0
    assert [r.row_index for r in classified.data_rows] == [1, 2]


def test_preamble_and_gap_rows_are_discarded():
    rows = _rows(["# exported"], ["title"], ["a", "b"], ["-- units --"], ["1", "2"])
    classified = classify_rows(rows, 2, 4)
    assert classified.header.names == ("a", "b")
    assert [r.fields for r in classified.data_rows] == [("1", "2")]


def test_header_past_end_is_synthesized():
    classified = classify_rows(_rows(["a", "b", "c"], ["1"]), 5, 6)
    assert classified.header.synthesized is True
    assert classified.header.names == ("Column1", "Column2", "Column3")
    assert list(classified.data_rows) == []


def test_data_start_past_end_is_empty():
    classified = classify_rows(_rows(["a", "b"], ["1", "2"]), 0, 10)
    assert classified.header.names == ("a", "b")
    assert list(classified.data_rows) == []


def test_empty_source():
    classified = classify_rows([], 0, 1)
    assert classified.header.names == ()
    assert list(classified.data_rows) == []


def test_no_header_synthesizes_from_first_data_row():
    classified = classify_rows(_rows(["skip"], ["1", "2", "3"], ["4", "5"]), None, 1)
    assert classified.header.names == ("Column1", "Column2", "Column3")
    assert [r.row_index for r in classified.data_rows] == [1, 2]


def test_header_names_are_cleaned():
    classified = classify_rows(_rows([" id ", "", "name", "name"]), 0, 1)
    assert classified.header.names == ("id", "Column2", "name", "name_2")


def test_data_rows_are_lazy():
    consumed: list[int] = []

    def gen():
        for row in _rows(["a"], ["1"], ["2"], ["3"]):
            consumed.append(row.row_index)
            yield row

    classified = classify_rows(gen(), 0, 1)
    assert consumed == [0]
    next(classified.data_rows)
    assert consumed == [0, 1]


def test_duplicate_header_suffix_skips_existing_names():
    classified = classify_rows(_rows(["a", "a_2", "a", "a"]), 0, 1)
    assert classified.header.names == ("a", "a_2", "a_3", "a_4")


def test_blank_header_fallback_does_not_collide():
    classified = classify_rows(_rows(["Column2", ""]), 0, 1)
    assert classified.header.names == ("Column2", "Column2_2")


def test_no_header_skips_leading_blank_rows_when_sizing():
    rows = _rows([""], ["1", "2", "3"], ["4", "5", "6"])
    classified = classify_rows(rows, None, 0)
    assert classified.header.names == ("Column1", "Column2", "Column3")
    # blank rows stay in the data sequence so they are still counted as scanned
    assert [r.row_index for r in classified.data_rows] == [0, 1, 2]


def test_no_header_keeps_blank_width_when_blanks_are_kept():
    rows = _rows([""], ["1", "2", "3"])
    classified = classify_rows(rows, None, 0, skip_blank_rows=False)
    assert classified.header.names == ("Column1",)


def test_no_header_all_blank_rows():
    classified = classify_rows(_rows([""], [""]), None, 0)
    assert classified.header.names == ()
    assert len(list(classified.data_rows)) == 2
