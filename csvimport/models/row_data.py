from __future__ import annotations

from dataclasses import dataclass

"""RawRow model: one tokenized CSV record.

Produced by the tokenizer and consumed immediately by the row classifier;
never retained by a Table.
"""

__all__ = [
    "RawRow",
]


@dataclass(frozen=True)
class RawRow:
    """A single record as split by the tokenizer.

    ``row_index`` counts records (a quoted field spanning several lines is still
    one record); ``line_number`` is the 1-based physical line the record starts on.
    """
    row_index: int  # 0-based record index
    line_number: int  # 1-based physical line
    fields: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.fields)

    @property
    def is_blank(self) -> bool:
        return all(f == "" for f in self.fields)
