from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Config dataclasses for the CSV preview/import engine.

ImportConfig carries the parsing options a caller supplies (delimiter, quoting,
header/data row positions). ValidatedConfig is only produced by
``csvimport.services.session.validate`` and is the sole config type accepted by
preview and commit.
"""

__all__ = [
    "DEFAULT_ENCODING",
    "DEFAULT_PREVIEW_LIMIT",
    "Delimiter",
    "ImportConfig",
    "ImportProfile",
    "ValidatedConfig",
]

DEFAULT_ENCODING = "utf-8-sig"
DEFAULT_PREVIEW_LIMIT = 50


class Delimiter(Enum):
    """Closed set of field separators addressable by symbolic name."""
    COMMA = ","
    TAB = "\t"
    SPACE = " "
    SEMICOLON = ";"
    PIPE = "|"

    @classmethod
    def names(cls) -> list[str]:
        return [member.name.lower() for member in cls]


@dataclass(frozen=True)
class ImportConfig:
    """Parsing options for one CSV source.

    Row indices are 0-based record indices. ``header_row_index=None`` means the
    file has no header row and column names are synthesized.
    """
    delimiter: str = Delimiter.COMMA.value
    quote_character: str = '"'
    escape_character: str | None = "\\"  # None disables escape handling
    header_row_index: int | None = 0
    data_start_row_index: int = 1
    encoding: str = DEFAULT_ENCODING
    skip_blank_rows: bool = True  # drop rows whose fields are all empty

    @property
    def has_header(self) -> bool:
        return self.header_row_index is not None


@dataclass(frozen=True)
class ValidatedConfig:
    """An ImportConfig whose invariants have been checked."""
    config: ImportConfig


@dataclass(frozen=True)
class ImportProfile:
    """Loaded YAML import profile: parsing options plus preview sizing."""
    config: ImportConfig
    preview_limit: int = DEFAULT_PREVIEW_LIMIT
