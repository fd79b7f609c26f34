from __future__ import annotations

import uuid
from collections.abc import Iterator
from dataclasses import dataclass, field

import pandas as pd

from .import_result import RowWidthMismatchWarning

"""Header / Table / PreviewResult models.

A Table is the materialized result of a commit; a PreviewResult is the bounded
sample shown before committing. Both guarantee that every row has exactly
len(header) values.
"""

__all__ = [
    "Header",
    "PreviewResult",
    "Table",
    "synthesize_column_names",
]


def synthesize_column_names(width: int) -> tuple[str, ...]:
    return tuple(f"Column{i}" for i in range(1, width + 1))


@dataclass(frozen=True)
class Header:
    """Ordered column names for a parsed source."""
    names: tuple[str, ...]
    synthesized: bool = False  # True when no header row was available
    source_row_index: int | None = None

    @classmethod
    def from_fields(cls, fields: tuple[str, ...], source_row_index: int) -> Header:
        """Build a header from a raw row, filling blank names and de-duplicating."""
        names: list[str] = []
        used: set[str] = set()
        suffixes: dict[str, int] = {}  # last suffix tried per base name
        for position, raw in enumerate(fields, start=1):
            base = raw.strip() or f"Column{position}"
            name = base
            n = suffixes.get(base, 1)
            # a suffixed name may already be a real column, keep counting
            while name in used:
                n += 1
                name = f"{base}_{n}"
            suffixes[base] = n
            used.add(name)
            names.append(name)
        return cls(names=tuple(names), synthesized=False, source_row_index=source_row_index)

    @classmethod
    def synthesize(cls, width: int) -> Header:
        return cls(names=synthesize_column_names(width), synthesized=True)

    def __len__(self) -> int:
        return len(self.names)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def index_of(self, name: str) -> int:
        try:
            return self.names.index(name)
        except ValueError:
            raise KeyError(name) from None


@dataclass
class Table:
    """Fully imported CSV data, owned by the caller.

    ``row_indices[i]`` is the source record index that produced ``rows[i]``.
    """
    name: str
    header: Header
    rows: list[list[str]] = field(default_factory=list)
    row_indices: list[int] = field(default_factory=list)
    warnings: list[RowWidthMismatchWarning] = field(default_factory=list)
    table_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @property
    def columns(self) -> tuple[str, ...]:
        return self.header.names

    def __len__(self) -> int:
        return len(self.rows)

    def column(self, name: str) -> list[str]:
        """Values of one column in row order."""
        idx = self.header.index_of(name)
        return [row[idx] for row in self.rows]

    def to_records(self) -> list[dict[str, str]]:
        return [dict(zip(self.header.names, row)) for row in self.rows]

    def to_dataframe(self) -> pd.DataFrame:
        """Export as a string-typed DataFrame indexed by source row index."""
        df = pd.DataFrame(
            self.rows,
            columns=list(self.header.names),
            index=pd.Index(self.row_indices, name="source_row"),
            dtype="string",
        )
        return df


@dataclass(frozen=True)
class PreviewResult:
    """Bounded sample of a source for one display cycle."""
    header: Header
    sample_rows: tuple[tuple[str, ...], ...]
    total_rows_scanned: int  # data rows actually read, not the file total
    warnings: tuple[RowWidthMismatchWarning, ...] = ()

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            [list(r) for r in self.sample_rows], columns=list(self.header.names), dtype="string"
        )
