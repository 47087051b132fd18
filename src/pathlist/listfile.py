"""Auxiliary list files: extra top-level paths read from files or stdin."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"


@dataclass(frozen=True, slots=True)
class ListFileResult:
    """Paths read from one list file.

    Attributes:
        paths: Non-empty path strings in file order.
        error: Failure description naming the list file, ``None`` on success.
    """

    paths: list[str] = field(default_factory=list)
    error: str | None = None


def split_paths(data: bytes, delimiter: bytes = b"\n") -> list[str]:
    """Split raw list-file content into path strings.

    Empty segments are dropped. Bytes that do not decode are kept via
    ``os.fsdecode`` so they round-trip to the same bytes on output.

    Args:
        data: Raw file content.
        delimiter: Record separator, ``b"\\n"`` or ``b"\\0"``.

    Returns:
        list[str]: Path strings in order.
    """
    return [os.fsdecode(chunk) for chunk in data.split(delimiter) if chunk]


def read_list_file(
    source: str,
    delimiter: bytes = b"\n",
    stdin: BinaryIO | None = None,
) -> ListFileResult:
    """Read a delimiter-separated path list.

    Args:
        source: File path, or ``-`` for standard input.
        delimiter: Record separator.
        stdin: Binary stream used for ``-``. Defaults to ``sys.stdin.buffer``.

    Returns:
        ListFileResult: Paths read, or a ``cannot read list file`` failure.
    """
    try:
        if source == STDIN_MARKER:
            data = (stdin or sys.stdin.buffer).read()
        else:
            data = Path(source).read_bytes()
    except OSError as exc:
        logger.debug("Cannot read list file: %s (%s)", source, exc)
        reason = exc.strerror or str(exc)
        return ListFileResult(error=f"cannot read list file '{source}': {reason}")

    paths = split_paths(data, delimiter)
    logger.debug("Read %d paths from list file %s", len(paths), source)
    return ListFileResult(paths=paths)
