from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from ..config.validation import InvalidConfigError, validate_config
from ..models.config_models import DEFAULT_PREVIEW_LIMIT, ImportConfig, ValidatedConfig
from ..models.import_result import ImportFailure, SessionState
from ..models.table import PreviewResult, Table
from ..parsing.classifier import ClassifiedRows, classify_rows
from ..parsing.tokenizer import MalformedRowError, tokenize
from .preview import build_preview
from .progress import RowProgress
from .source import Source, SourceUnavailableError, open_source, source_name
from .table_importer import import_table

"""Import session: validate once, then preview (repeatable) or commit (once).

The module-level ``validate`` / ``preview`` / ``commit`` functions are the
boundary of the engine. They never raise for configuration, source or parsing
problems; those come back as ImportFailure values. ``ImportSession`` wraps them
in the unvalidated → validated → (previewed | committed) state machine.

Each preview/commit reopens the source and closes it before returning,
including when tokenization fails.
"""

__all__ = [
    "ImportSession",
    "commit",
    "preview",
    "validate",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")

INVALID_CONFIG = "INVALID_CONFIG"
MALFORMED_ROW = "MALFORMED_ROW"
SOURCE_UNAVAILABLE = "SOURCE_UNAVAILABLE"
SESSION_STATE = "SESSION_STATE"


def validate(config: ImportConfig) -> ValidatedConfig | ImportFailure:
    """Check ``config``; no source is touched."""
    try:
        return validate_config(config)
    except InvalidConfigError as e:
        logger.debug("invalid config: %s", e)
        return ImportFailure(reason=str(e), error_type=INVALID_CONFIG)


def _run(
    validated: ValidatedConfig,
    source: Source,
    consume: Callable[[ClassifiedRows], T],
) -> T | ImportFailure:
    cfg = validated.config
    try:
        with open_source(source, cfg.encoding) as stream:
            rows = tokenize(stream, cfg)
            classified = classify_rows(
                rows,
                cfg.header_row_index,
                cfg.data_start_row_index,
                skip_blank_rows=cfg.skip_blank_rows,
            )
            return consume(classified)
    except MalformedRowError as e:
        logger.debug("malformed row %d (line %d): %s", e.row_index, e.line_number, e)
        return ImportFailure(reason=str(e), error_type=MALFORMED_ROW, source_row_index=e.row_index)
    except SourceUnavailableError as e:
        logger.debug("source unavailable: %s", e)
        return ImportFailure(reason=str(e), error_type=SOURCE_UNAVAILABLE)


def preview(
    validated: ValidatedConfig,
    source: Source,
    limit: int = DEFAULT_PREVIEW_LIMIT,
) -> PreviewResult | ImportFailure:
    """Sample at most ``limit`` data rows from ``source``."""
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
        return ImportFailure(
            reason=f"preview limit must be a non-negative integer, got {limit!r}",
            error_type=INVALID_CONFIG,
        )
    skip_blank = validated.config.skip_blank_rows
    return _run(
        validated,
        source,
        lambda classified: build_preview(classified, limit, skip_blank_rows=skip_blank),
    )


def commit(
    validated: ValidatedConfig,
    source: Source,
    *,
    name: str | None = None,
    progress: RowProgress | None = None,
) -> Table | ImportFailure:
    """Import every data row of ``source`` into a new, independent Table."""
    table_name = name or source_name(source)
    skip_blank = validated.config.skip_blank_rows
    result = _run(
        validated,
        source,
        lambda classified: import_table(
            classified, table_name, skip_blank_rows=skip_blank, progress=progress
        ),
    )
    if isinstance(result, Table):
        logger.info(
            "imported %s: %d rows, %d columns", table_name, len(result), len(result.header)
        )
    return result


class ImportSession:
    """One configuration applied to one source.

    State transitions: unvalidated → validated → (previewed | committed)

    - An invalid configuration moves the session to FAILED (terminal)
    - preview() may run any number of times and reopens the source each time;
      a failed preview leaves the state unchanged
    - commit() runs once; a failed commit moves the session to FAILED
    """

    def __init__(self, config: ImportConfig, source: Source, *, name: str | None = None) -> None:
        self.config = config
        self.source = source
        self.name = name or source_name(source)
        self.state = SessionState.UNVALIDATED
        self.failure: ImportFailure | None = None
        self._validated: ValidatedConfig | None = None

    def _fail(self, failure: ImportFailure) -> ImportFailure:
        self.state = SessionState.FAILED
        self.failure = failure
        self._validated = None
        return failure

    def _state_failure(self, action: str) -> ImportFailure:
        return ImportFailure(
            reason=f"cannot {action} a session in state '{self.state.value}'",
            error_type=SESSION_STATE,
        )

    def validate(self) -> ValidatedConfig | ImportFailure:
        if self.state is SessionState.UNVALIDATED:
            result = validate(self.config)
            if isinstance(result, ImportFailure):
                return self._fail(result)
            self._validated = result
            self.state = SessionState.VALIDATED
            return result
        if self._validated is not None:
            return self._validated
        return self._state_failure("validate")

    def _ready(self, action: str) -> ValidatedConfig | ImportFailure:
        if self.state is SessionState.UNVALIDATED:
            return self.validate()
        if self.state in (SessionState.VALIDATED, SessionState.PREVIEWED) and self._validated is not None:
            return self._validated
        return self._state_failure(action)

    def preview(self, limit: int = DEFAULT_PREVIEW_LIMIT) -> PreviewResult | ImportFailure:
        validated = self._ready("preview")
        if isinstance(validated, ImportFailure):
            return validated
        result = preview(validated, self.source, limit)
        if isinstance(result, PreviewResult):
            self.state = SessionState.PREVIEWED
        return result

    def commit(self, *, progress: RowProgress | None = None) -> Table | ImportFailure:
        validated = self._ready("commit")
        if isinstance(validated, ImportFailure):
            return validated
        result = commit(validated, self.source, name=self.name, progress=progress)
        if isinstance(result, ImportFailure):
            return self._fail(result)
        self.state = SessionState.COMMITTED
        return result
