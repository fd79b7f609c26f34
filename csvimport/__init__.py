"""CSV preview/import engine.

Typical use::

    validated = validate(ImportConfig(delimiter=",", header_row_index=0, data_start_row_index=1))
    result = preview(validated, "data.csv", limit=20)   # PreviewResult | ImportFailure
    table = commit(validated, "data.csv")               # Table | ImportFailure
"""

from .config.validation import InvalidConfigError
from .models import (
    Delimiter,
    Header,
    ImportConfig,
    ImportFailure,
    PreviewResult,
    RawRow,
    RowWidthMismatchWarning,
    SessionState,
    Table,
    ValidatedConfig,
)
from .parsing import MalformedRowError, render_row, tokenize
from .services.request import handle_request, parse_request_params
from .services.session import ImportSession, commit, preview, validate
from .services.source import SourceUnavailableError

__all__ = [
    "Delimiter",
    "Header",
    "ImportConfig",
    "ImportFailure",
    "ImportSession",
    "InvalidConfigError",
    "MalformedRowError",
    "PreviewResult",
    "RawRow",
    "RowWidthMismatchWarning",
    "SessionState",
    "SourceUnavailableError",
    "Table",
    "ValidatedConfig",
    "commit",
    "handle_request",
    "parse_request_params",
    "preview",
    "render_row",
    "tokenize",
    "validate",
]
