from __future__ import annotations

from unittest.mock import Mock

from csvimport.models.row_data import RawRow
from csvimport.models.table import Header
from csvimport.parsing.classifier import ClassifiedRows
from csvimport.services.table_importer import fit_row, import_table


def _classified(header: tuple[str, ...], rows: list[list[str]]) -> ClassifiedRows:
    data = (RawRow(row_index=i, line_number=i + 1, fields=tuple(r)) for i, r in enumerate(rows, start=1))
    return ClassifiedRows(header=Header(names=header, source_row_index=0), data_rows=data)


def test_import_simple_table():
    table = import_table(_classified(("a", "b", "c"), [["1", "2", "3"], ["4", "5", "6"]]), "simple.csv")
    assert table.name == "simple.csv"
    assert table.columns == ("a", "b", "c")
    assert table.rows == [["1", "2", "3"], ["4", "5", "6"]]
    assert table.row_indices == [1, 2]
    assert table.warnings == []


def test_short_row_is_padded_with_warning():
    table = import_table(_classified(("a", "b", "c"), [["1", "2"]]), "t")
    assert table.rows == [["1", "2", ""]]
    assert len(table.warnings) == 1
    w = table.warnings[0]
    assert (w.row_index, w.expected, w.actual, w.action) == (1, 3, 2, "padded")


def test_long_row_is_truncated_with_warning():
    table = import_table(_classified(("a",), [["1", "2", "3"]]), "t")
    assert table.rows == [["1"]]
    assert table.warnings[0].action == "truncated"


def test_blank_rows_skipped_and_order_preserved():
    rows = [["1"], [""], ["2"], [""], ["3"]]
    table = import_table(_classified(("a",), rows), "t")
    assert table.rows == [["1"], ["2"], ["3"]]
    assert table.row_indices == [1, 3, 5]


def test_blank_rows_kept_when_configured():
    table = import_table(_classified(("a", "b"), [[""]]), "t", skip_blank_rows=False)
    assert table.rows == [["", ""]]
    assert len(table.warnings) == 1


def test_progress_advanced_per_row():
    progress = Mock()
    import_table(_classified(("a",), [["1"], ["2"]]), "t", progress=progress)
    assert progress.advance.call_count == 2


def test_fit_row_exact_width():
    values, warning = fit_row(RawRow(0, 1, ("x", "y")), 2)
    assert values == ["x", "y"]
    assert warning is None


def test_table_helpers_and_dataframe():
    table = import_table(_classified(("id", "name"), [["1", "Alice"], ["2", "Bob"]]), "t")
    assert table.column("name") == ["Alice", "Bob"]
    assert table.to_records() == [{"id": "1", "name": "Alice"}, {"id": "2", "name": "Bob"}]
    df = table.to_dataframe()
    assert list(df.columns) == ["id", "name"]
    assert list(df.index) == [1, 2]
    assert df.loc[2, "name"] == "Bob"
