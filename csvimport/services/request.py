from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from ..config.validation import InvalidConfigError, parse_row_index, resolve_delimiter
from ..models.config_models import DEFAULT_PREVIEW_LIMIT, ImportConfig
from ..models.import_result import ImportFailure
from ..models.table import PreviewResult, Table
from .session import INVALID_CONFIG, ImportSession
from .source import Source

"""Request parameter marshalling for the CSV import command.

Translates the parameters an interactive front end sends (symbolic delimiter
name, header/data row indices as text, interaction type) into an ImportConfig,
then dispatches to preview or commit. Transport and routing live elsewhere.

Parameters:
- delimiter: comma | tab | space | semicolon | pipe (required)
- CSVHeaderLineIndex: 0-based header row; blank -> 0
- startRowIndex: 0-based first data row; blank -> header row + 1
- quoteCharacter: optional, default '"'
- escapeCharacter: optional, default '\\'; an empty value disables escaping
- interactionType: generatePreview | importTable
"""

__all__ = [
    "ImportRequest",
    "InteractionType",
    "handle_request",
    "parse_request_params",
]

logger = logging.getLogger(__name__)


class InteractionType(Enum):
    GENERATE_PREVIEW = "generatePreview"
    IMPORT_TABLE = "importTable"


@dataclass(frozen=True)
class ImportRequest:
    interaction: InteractionType
    config: ImportConfig


def _optional_char(params: Mapping[str, str], key: str, default: str) -> str:
    value = params.get(key)
    if value is None or value == "":
        return default
    return value


def _escape_char(params: Mapping[str, str]) -> str | None:
    # absent -> backslash, explicitly empty -> no escape character
    value = params.get("escapeCharacter")
    if value is None:
        return "\\"
    return value or None


def parse_request_params(params: Mapping[str, str]) -> ImportRequest:
    """Build an ImportRequest from raw request parameters.

    Raises:
        InvalidConfigError: Unknown delimiter or interaction type, or a
            non-integer row index
    """
    delimiter = resolve_delimiter(params.get("delimiter", ""))
    header_index = parse_row_index(params.get("CSVHeaderLineIndex"), "CSVHeaderLineIndex", 0)
    data_index = parse_row_index(params.get("startRowIndex"), "startRowIndex", header_index + 1)

    raw_type = params.get("interactionType", "")
    try:
        interaction = InteractionType(raw_type)
    except ValueError:
        raise InvalidConfigError(f"unknown interactionType {raw_type!r}") from None

    config = ImportConfig(
        delimiter=delimiter,
        quote_character=_optional_char(params, "quoteCharacter", '"'),
        escape_character=_escape_char(params),
        header_row_index=header_index,
        data_start_row_index=data_index,
    )
    return ImportRequest(interaction=interaction, config=config)


def handle_request(
    params: Mapping[str, str],
    source: Source,
    *,
    limit: int = DEFAULT_PREVIEW_LIMIT,
) -> PreviewResult | Table | ImportFailure:
    """Parse ``params`` and run the requested interaction against ``source``."""
    try:
        request = parse_request_params(params)
    except InvalidConfigError as e:
        logger.debug("rejected request parameters: %s", e)
        return ImportFailure(reason=str(e), error_type=INVALID_CONFIG)

    session = ImportSession(request.config, source)
    if request.interaction is InteractionType.GENERATE_PREVIEW:
        return session.preview(limit)
    return session.commit()
