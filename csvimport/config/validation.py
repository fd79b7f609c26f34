from __future__ import annotations

import codecs

from ..models.config_models import Delimiter, ImportConfig, ValidatedConfig

"""ImportConfig validation and symbolic delimiter resolution.

All checks run before any source is opened. Failures raise InvalidConfigError;
the session layer turns that into an ImportFailure for callers.
"""

__all__ = [
    "InvalidConfigError",
    "parse_row_index",
    "resolve_delimiter",
    "validate_config",
]

_LINE_BREAKS = ("\r", "\n")


class InvalidConfigError(Exception):
    """Raised when an ImportConfig (or its raw input) violates an invariant."""


def resolve_delimiter(value: str) -> str:
    """Map a symbolic delimiter name (or its character) to the character.

    Accepted: comma, tab, space, semicolon, pipe (case-insensitive), or one of
    the characters those names stand for. Anything else is rejected.
    """
    if not isinstance(value, str) or value == "":
        raise InvalidConfigError("delimiter is required")
    try:
        return Delimiter[value.strip().upper()].value
    except KeyError:
        pass
    try:
        return Delimiter(value).value
    except ValueError:
        raise InvalidConfigError(
            f"unknown delimiter {value!r} (expected one of: {', '.join(Delimiter.names())})"
        ) from None


def parse_row_index(raw: str | int | None, field: str, default: int) -> int:
    """Parse a user-supplied row index; blank means ``default``."""
    if raw is None:
        return default
    if isinstance(raw, bool):
        raise InvalidConfigError(f"{field} must be an integer, got {raw!r}")
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    if text == "":
        return default
    try:
        return int(text)
    except ValueError:
        raise InvalidConfigError(f"{field} must be an integer, got {raw!r}") from None


def _check_char(value: object, field: str) -> None:
    if not isinstance(value, str) or len(value) != 1:
        raise InvalidConfigError(f"{field} must be a single character, got {value!r}")
    if value in _LINE_BREAKS:
        raise InvalidConfigError(f"{field} cannot be a line break")


def _check_index(value: object, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigError(f"{field} must be an integer, got {value!r}")
    if value < 0:
        raise InvalidConfigError(f"{field} must be non-negative, got {value}")
    return value


def validate_config(config: ImportConfig) -> ValidatedConfig:
    """Check every ImportConfig invariant.

    Raises:
        InvalidConfigError: On the first violated invariant
    """
    _check_char(config.delimiter, "delimiter")
    _check_char(config.quote_character, "quote_character")
    if config.quote_character == config.delimiter:
        raise InvalidConfigError("quote_character must differ from delimiter")
    if config.escape_character is not None:
        _check_char(config.escape_character, "escape_character")
        if config.escape_character == config.delimiter:
            raise InvalidConfigError("escape_character must differ from delimiter")

    data_start = _check_index(config.data_start_row_index, "data_start_row_index")
    if config.header_row_index is not None:
        header = _check_index(config.header_row_index, "header_row_index")
        if data_start <= header:
            raise InvalidConfigError(
                f"data_start_row_index ({data_start}) must be greater than "
                f"header_row_index ({header})"
            )

    try:
        codecs.lookup(config.encoding)
    except (LookupError, TypeError):
        raise InvalidConfigError(f"unknown encoding {config.encoding!r}") from None

    return ValidatedConfig(config=config)
