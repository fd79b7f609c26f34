from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Row progress display with tqdm (TTY only).

The total row count of a CSV source is unknown until it has been read, so the
bar is an open-ended counter. In non-TTY environments (CI, pipes) no bar is
created to avoid ANSI control sequence spam.
"""

__all__ = [
    "RowProgress",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """Check if stdout is a TTY and progress should be displayed."""
    return sys.stdout.isatty()


class RowProgress:
    """Counter of rows imported during a commit."""

    def __init__(self, *, description: str = "Importing rows", update_every: int = 1000) -> None:
        self.description = description
        self.update_every = update_every
        self.rows = 0
        self._pending = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=None,
                desc=description,
                unit="row",
                disable=False,
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def advance(self, n: int = 1) -> None:
        """Count ``n`` more rows; the bar is refreshed in batches of ``update_every``."""
        self.rows += n
        self._pending += n
        if self._pending >= self.update_every:
            self._flush()

    def _flush(self) -> None:
        if self.enabled and self.pbar is not None and self._pending:
            self.pbar.update(self._pending)
        self._pending = 0

    def set_postfix(self, **kwargs: Any) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.set_postfix(**kwargs)

    def close(self) -> None:
        """Flush pending rows and close the bar."""
        self._flush()
        if self.enabled and self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> RowProgress:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
