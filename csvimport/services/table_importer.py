from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..models.import_result import RowWidthMismatchWarning
from ..models.row_data import RawRow
from ..models.table import Table
from ..parsing.classifier import ClassifiedRows

if TYPE_CHECKING:
    from .progress import RowProgress

"""Table importer: materialize every data row into a Table.

Width policy: short rows are padded with "" and long rows truncated to the header
width; each adjustment is recorded as a RowWidthMismatchWarning and processing
continues. Only tokenizer failures (MalformedRowError) propagate.
"""

__all__ = [
    "fit_row",
    "import_table",
]

logger = logging.getLogger(__name__)


def fit_row(row: RawRow, width: int) -> tuple[list[str], RowWidthMismatchWarning | None]:
    """Pad or truncate ``row`` to ``width`` values."""
    actual = len(row.fields)
    if actual == width:
        return list(row.fields), None
    warning = RowWidthMismatchWarning(row_index=row.row_index, expected=width, actual=actual)
    if actual < width:
        return list(row.fields) + [""] * (width - actual), warning
    return list(row.fields[:width]), warning


def import_table(
    classified: ClassifiedRows,
    name: str,
    *,
    skip_blank_rows: bool = True,
    progress: RowProgress | None = None,
) -> Table:
    """Read the whole data sequence into a new Table in source order."""
    header = classified.header
    width = len(header)
    table = Table(name=name, header=header)

    for row in classified.data_rows:
        if skip_blank_rows and row.is_blank:
            continue
        values, warning = fit_row(row, width)
        if warning is not None:
            logger.warning("%s: %s", name, warning)
            table.warnings.append(warning)
        table.rows.append(values)
        table.row_indices.append(row.row_index)
        if progress is not None:
            progress.advance()

    logger.debug(
        "imported table=%s rows=%d columns=%d warnings=%d",
        name, len(table.rows), width, len(table.warnings),
    )
    return table
