from __future__ import annotations

from ..models.table import PreviewResult, Table

"""SUMMARY line rendering for CLI runs.

Format:
SUMMARY mode={preview|commit} file={name} rows={rows} columns={columns}
scanned={scanned} warnings={warnings} elapsed_sec={elapsed}
"""

__all__ = [
    "format_number",
    "render_summary_line",
]


def format_number(value: float) -> str:
    """Integers without decimals, tiny values without scientific notation."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_line(file_name: str, result: Table | PreviewResult, elapsed_seconds: float) -> str:
    """Render a SUMMARY line for a committed Table or a PreviewResult.

    For a Table, ``scanned`` equals the number of imported rows; for a preview
    it is ``total_rows_scanned``.

    Examples:
        >>> from csvimport.models.table import Header, PreviewResult
        >>> p = PreviewResult(Header(("a", "b")), (("1", "2"),), total_rows_scanned=1)
        >>> render_summary_line("data.csv", p, 0.5)
        'SUMMARY mode=preview file=data.csv rows=1 columns=2 scanned=1 warnings=0 elapsed_sec=0.5'
    """
    if isinstance(result, Table):
        mode = "commit"
        rows = len(result.rows)
        scanned = rows
    else:
        mode = "preview"
        rows = len(result.sample_rows)
        scanned = result.total_rows_scanned
    return (
        f"SUMMARY mode={mode} "
        f"file={file_name} "
        f"rows={rows} "
        f"columns={len(result.header)} "
        f"scanned={scanned} "
        f"warnings={len(result.warnings)} "
        f"elapsed_sec={format_number(elapsed_seconds)}"
    )
