from __future__ import annotations

import io
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, TextIO, Union

"""Byte source handling.

A source is a filesystem path, an in-memory ``bytes`` payload, or a seekable
binary stream owned by the caller. ``open_source`` yields a text stream and
releases it on every exit path; caller-owned streams are rewound and detached,
never closed.
"""

__all__ = [
    "Source",
    "SourceUnavailableError",
    "open_source",
    "source_name",
]

Source = Union[str, os.PathLike, bytes, BinaryIO]


class SourceUnavailableError(Exception):
    """Raised when a source cannot be opened, read or decoded."""


def source_name(source: Source) -> str:
    """Display name for a source (file name, stream name, or '<bytes>')."""
    if isinstance(source, (str, os.PathLike)):
        return Path(source).name
    if isinstance(source, (bytes, bytearray)):
        return "<bytes>"
    name = getattr(source, "name", None)
    if isinstance(name, str):
        return Path(name).name
    return "<stream>"


@contextmanager
def open_source(source: Source, encoding: str) -> Iterator[TextIO]:
    """Open ``source`` as text with universal newlines disabled (newline="").

    Raises:
        SourceUnavailableError: Missing/unreadable file, non-seekable stream,
            or content that does not decode with ``encoding``
    """
    if isinstance(source, (str, os.PathLike)):
        try:
            fh = open(source, encoding=encoding, newline="")
        except (OSError, LookupError) as e:
            raise SourceUnavailableError(f"cannot open {source}: {e}") from e
        try:
            yield fh
        except UnicodeDecodeError as e:
            raise SourceUnavailableError(f"cannot decode {source} as {encoding}: {e}") from e
        except OSError as e:
            raise SourceUnavailableError(f"cannot read {source}: {e}") from e
        finally:
            fh.close()
        return

    if isinstance(source, (bytes, bytearray)):
        raw: BinaryIO = io.BytesIO(bytes(source))
        owned = True
    else:
        raw = source
        owned = False
        if not (hasattr(raw, "seekable") and raw.seekable()):
            raise SourceUnavailableError("stream source must be seekable to be reopened")
        try:
            raw.seek(0)
        except OSError as e:
            raise SourceUnavailableError(f"cannot rewind stream: {e}") from e

    try:
        text = io.TextIOWrapper(raw, encoding=encoding, newline="")
    except LookupError as e:
        raise SourceUnavailableError(f"unknown encoding {encoding!r}") from e
    try:
        yield text
    except UnicodeDecodeError as e:
        raise SourceUnavailableError(f"cannot decode source as {encoding}: {e}") from e
    except OSError as e:
        raise SourceUnavailableError(f"cannot read source: {e}") from e
    finally:
        if owned:
            text.close()
        else:
            text.detach()
