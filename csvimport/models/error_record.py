from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

from .import_result import ImportFailure, RowWidthMismatchWarning

"""ErrorRecord model for the JSON Lines error log.

Supports row=-1 as a sentinel for file-level errors where no specific record
can be blamed (unreadable source, invalid configuration).
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: CSV filename being processed
        row: Source record index (0-based). Use -1 for file-level errors
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Description of the problem
    """
    timestamp: str  # ISO8601 UTC
    file: str
    row: int
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, row: int, error_type: str, message: str) -> ErrorRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            row=row,
            error_type=error_type,
            message=message,
        )

    @staticmethod
    def from_failure(file: str, failure: ImportFailure) -> ErrorRecord:
        row = failure.source_row_index if failure.source_row_index is not None else -1
        return ErrorRecord.create(file, row, failure.error_type, failure.reason)

    @staticmethod
    def from_warning(file: str, warning: RowWidthMismatchWarning) -> ErrorRecord:
        return ErrorRecord.create(file, warning.row_index, "ROW_WIDTH_MISMATCH", str(warning))

    def to_json_line(self) -> str:
        """Serialize to one JSON Lines entry (fixed key set)."""
        return json.dumps(asdict(self), ensure_ascii=False)
