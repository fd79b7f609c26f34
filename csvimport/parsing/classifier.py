from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from ..models.row_data import RawRow
from ..models.table import Header

"""Row classifier: split tokenized rows into preamble, header and data.

Rows before the header, and rows strictly between the header and the data start,
are discarded as preamble/comments. Positions past the end of the file are not
errors: the header is synthesized and/or the data sequence is empty.
"""

__all__ = [
    "ClassifiedRows",
    "classify_rows",
]

logger = logging.getLogger(__name__)


@dataclass
class ClassifiedRows:
    header: Header
    data_rows: Iterator[RawRow]  # positioned at data_start_row_index


def _data_from(rows: Iterator[RawRow], data_start_row_index: int) -> Iterator[RawRow]:
    return itertools.dropwhile(lambda r: r.row_index < data_start_row_index, rows)


def classify_rows(
    rows: Iterable[RawRow],
    header_row_index: int | None,
    data_start_row_index: int,
    *,
    skip_blank_rows: bool = True,
) -> ClassifiedRows:
    """Locate the header and position a cursor at the first data row.

    The header is read eagerly (rows before it are consumed); data rows stay lazy.
    With ``header_row_index=None`` data rows are peeked up to the first one that
    will be kept (the first non-blank row when ``skip_blank_rows``) to size a
    synthesized header, then handed back as part of the data sequence.
    """
    it = iter(rows)

    if header_row_index is None:
        data = _data_from(it, data_start_row_index)
        peeked: list[RawRow] = []
        width = 0
        for row in data:
            peeked.append(row)
            if not (skip_blank_rows and row.is_blank):
                width = len(row)
                break
        return ClassifiedRows(
            header=Header.synthesize(width),
            data_rows=itertools.chain(peeked, data),
        )

    widest = 0
    for row in it:
        if row.row_index == header_row_index:
            header = Header.from_fields(row.fields, row.row_index)
            return ClassifiedRows(header=header, data_rows=_data_from(it, data_start_row_index))
        widest = max(widest, len(row))

    # source ended before the header row
    logger.debug(
        "header row %d past end of source, synthesizing %d columns", header_row_index, widest
    )
    return ClassifiedRows(header=Header.synthesize(widest), data_rows=iter(()))
