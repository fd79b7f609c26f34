from __future__ import annotations

import logging

from ..models.config_models import DEFAULT_PREVIEW_LIMIT
from ..models.import_result import RowWidthMismatchWarning
from ..models.table import PreviewResult
from ..parsing.classifier import ClassifiedRows
from .table_importer import fit_row

"""Preview builder: bounded sample of data rows for display before a commit."""

__all__ = [
    "build_preview",
]

logger = logging.getLogger(__name__)


def build_preview(
    classified: ClassifiedRows,
    limit: int = DEFAULT_PREVIEW_LIMIT,
    *,
    skip_blank_rows: bool = True,
) -> PreviewResult:
    """Collect at most ``limit`` data rows, then stop reading.

    ``total_rows_scanned`` counts data rows pulled from the source (blank rows
    included), never the size of the whole file.
    """
    width = len(classified.header)
    sample: list[tuple[str, ...]] = []
    warnings: list[RowWidthMismatchWarning] = []
    scanned = 0

    if limit > 0:
        for row in classified.data_rows:
            scanned += 1
            if skip_blank_rows and row.is_blank:
                continue
            values, warning = fit_row(row, width)
            if warning is not None:
                warnings.append(warning)
            sample.append(tuple(values))
            if len(sample) >= limit:
                break

    logger.debug("preview sample=%d scanned=%d limit=%d", len(sample), scanned, limit)
    return PreviewResult(
        header=classified.header,
        sample_rows=tuple(sample),
        total_rows_scanned=scanned,
        warnings=tuple(warnings),
    )
