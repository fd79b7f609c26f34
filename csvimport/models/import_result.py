from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Session state and result records for preview/commit operations.

ImportFailure is the typed failure returned across the session boundary in place
of raising. RowWidthMismatchWarning is the non-fatal record produced whenever a
data row is padded or truncated to the header width.
"""

__all__ = [
    "ImportFailure",
    "RowWidthMismatchWarning",
    "SessionState",
]


class SessionState(Enum):
    """ImportSession lifecycle.

    State transitions: unvalidated → validated → (previewed | committed)

    - FAILED is terminal: reached on invalid configuration or a failed commit
    - PREVIEWED may be re-entered any number of times
    - COMMITTED is terminal
    """
    UNVALIDATED = "unvalidated"
    VALIDATED = "validated"
    PREVIEWED = "previewed"
    COMMITTED = "committed"
    FAILED = "failed"


@dataclass(frozen=True)
class RowWidthMismatchWarning:
    """A data row whose field count differed from the header width."""
    row_index: int  # source record index
    expected: int
    actual: int

    @property
    def action(self) -> str:
        return "padded" if self.actual < self.expected else "truncated"

    def __str__(self) -> str:
        return (
            f"row {self.row_index}: expected {self.expected} fields, "
            f"got {self.actual} ({self.action})"
        )


@dataclass(frozen=True)
class ImportFailure:
    """Fatal outcome of validate / preview / commit.

    Attributes:
        reason: Human readable description
        error_type: Classification in UPPER_SNAKE_CASE
            (INVALID_CONFIG, MALFORMED_ROW, SOURCE_UNAVAILABLE, SESSION_STATE)
        source_row_index: Offending record index, None when not row specific
    """
    reason: str
    error_type: str
    source_row_index: int | None = None

    def __str__(self) -> str:
        if self.source_row_index is None:
            return f"{self.error_type}: {self.reason}"
        return f"{self.error_type} (row {self.source_row_index}): {self.reason}"
