from __future__ import annotations

from collections.abc import Iterable

from ..models.config_models import ImportConfig

"""Render rows with the same delimiter/quote/escape rules the tokenizer reads."""

__all__ = [
    "render_row",
    "render_rows",
]


def _needs_quoting(value: str, config: ImportConfig) -> bool:
    if value == "":
        return False
    special = {config.delimiter, config.quote_character, "\r", "\n"}
    if config.escape_character:
        special.add(config.escape_character)
    return any(ch in special for ch in value)


def _quote(value: str, config: ImportConfig) -> str:
    quote = config.quote_character
    escape = config.escape_character or quote
    out: list[str] = []
    for ch in value:
        if ch == quote or ch == escape:
            out.append(escape)
        out.append(ch)
    return f"{quote}{''.join(out)}{quote}"


def render_row(fields: Iterable[str], config: ImportConfig) -> str:
    """Render one record (without line terminator).

    A row consisting of a single empty field renders as a quoted empty string so
    it is not read back as a blank line.
    """
    values = list(fields)
    if values == [""]:
        return config.quote_character * 2
    return config.delimiter.join(
        _quote(v, config) if _needs_quoting(v, config) else v for v in values
    )


def render_rows(rows: Iterable[Iterable[str]], config: ImportConfig, line_terminator: str = "\n") -> str:
    return "".join(render_row(r, config) + line_terminator for r in rows)
