from __future__ import annotations

from collections.abc import Iterator
from typing import TextIO

from ..models.config_models import ImportConfig
from ..models.row_data import RawRow

"""Streaming CSV tokenizer.

Splits a text stream into RawRow records honoring the configured delimiter, quote
and escape characters. The stream is consumed in fixed-size chunks so memory use
does not grow with file size; a new pass requires reopening the source.

Quoting rules:
- a field that starts with the quote character is quoted; inside it the
  delimiter and line breaks are literal
- inside a quoted field, escape+quote and escape+escape produce the second
  character; escape before anything else is kept as-is
- a doubled quote inside a quoted field is a literal quote
- a quote in the middle of an unquoted field is literal
- text between a closing quote and the next delimiter is appended to the field

Row terminators are \\n, \\r\\n and \\r. A blank line yields a single empty field.
"""

__all__ = [
    "CHUNK_SIZE",
    "MalformedRowError",
    "tokenize",
]

CHUNK_SIZE = 64 * 1024

_FIELD_START = 0
_UNQUOTED = 1
_QUOTED = 2
_QUOTE_IN_QUOTED = 3  # saw a quote inside a quoted field: closing or doubled
_ESCAPE_IN_QUOTED = 4
_AFTER_CR = 5  # row ended on \r, swallow a following \n


class MalformedRowError(Exception):
    """Raised when a quoted field is still open at end of stream."""

    def __init__(self, message: str, row_index: int, line_number: int) -> None:
        super().__init__(message)
        self.row_index = row_index
        self.line_number = line_number


def _read_chars(stream: TextIO, chunk_size: int) -> Iterator[str]:
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            return
        yield from chunk


def tokenize(stream: TextIO, config: ImportConfig, chunk_size: int = CHUNK_SIZE) -> Iterator[RawRow]:
    """Lazily yield RawRow records from ``stream``.

    Args:
        stream: Text stream opened with newline="" so line breaks reach the tokenizer intact
        config: Supplies delimiter, quote_character and escape_character
        chunk_size: Characters read per stream.read call

    Raises:
        MalformedRowError: A quoted field is unterminated at end of stream
    """
    delimiter = config.delimiter
    quote = config.quote_character
    escape = config.escape_character
    if escape == quote:
        # doubled-quote handling already covers this case
        escape = None

    state = _FIELD_START
    fields: list[str] = []
    buf: list[str] = []
    row_index = 0
    line = 1
    row_line = 1
    prev = ""

    for c in _read_chars(stream, chunk_size):
        # physical line accounting, \r\n counts once
        newline = c == "\r" or (c == "\n" and prev != "\r")
        prev = c

        if state == _AFTER_CR:
            state = _FIELD_START
            if c == "\n":
                continue

        if state == _QUOTED:
            if c == escape:
                state = _ESCAPE_IN_QUOTED
            elif c == quote:
                state = _QUOTE_IN_QUOTED
            else:
                buf.append(c)
        elif state == _ESCAPE_IN_QUOTED:
            if c != quote and c != escape:
                buf.append(escape)  # type: ignore[arg-type]
            buf.append(c)
            state = _QUOTED
        elif state == _FIELD_START and c == quote:
            state = _QUOTED
        elif state == _QUOTE_IN_QUOTED and c == quote:
            buf.append(c)
            state = _QUOTED
        elif c == delimiter:
            fields.append("".join(buf))
            buf.clear()
            state = _FIELD_START
        elif c == "\r" or c == "\n":
            fields.append("".join(buf))
            buf.clear()
            yield RawRow(row_index=row_index, line_number=row_line, fields=tuple(fields))
            fields = []
            row_index += 1
            state = _AFTER_CR if c == "\r" else _FIELD_START
        else:
            # plain character, or trailing text after a closing quote
            buf.append(c)
            state = _UNQUOTED

        if newline:
            line += 1
            if state in (_FIELD_START, _AFTER_CR) and not fields and not buf:
                row_line = line

    if state in (_QUOTED, _ESCAPE_IN_QUOTED):
        raise MalformedRowError(
            f"unterminated quoted field starting on line {row_line}",
            row_index=row_index,
            line_number=row_line,
        )
    if state in (_UNQUOTED, _QUOTE_IN_QUOTED) or fields:
        fields.append("".join(buf))
        yield RawRow(row_index=row_index, line_number=row_line, fields=tuple(fields))
