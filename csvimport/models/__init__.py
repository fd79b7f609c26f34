"""Domain models for the CSV preview/import engine.

This package contains the configuration, row, table and result types shared by
the parsing and service layers.
"""

from .config_models import (
    DEFAULT_PREVIEW_LIMIT,
    Delimiter,
    ImportConfig,
    ImportProfile,
    ValidatedConfig,
)
from .error_record import ErrorRecord
from .import_result import ImportFailure, RowWidthMismatchWarning, SessionState
from .row_data import RawRow
from .table import Header, PreviewResult, Table

__all__ = [
    # Configuration models
    "DEFAULT_PREVIEW_LIMIT",
    "Delimiter",
    "ImportConfig",
    "ImportProfile",
    "ValidatedConfig",
    # Parsing / result models
    "ErrorRecord",
    "Header",
    "ImportFailure",
    "PreviewResult",
    "RawRow",
    "RowWidthMismatchWarning",
    "SessionState",
    "Table",
]
