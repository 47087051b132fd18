"""CSV output formatter for pathls.

Columns are defined by ``CsvColumn`` instances, which pair a header name
with an extraction callable. Entries whose probe failed are never
printable, so extractors may rely on ``entry.stat`` being set.
"""

from __future__ import annotations

import csv
import io
import stat as stat_mod
from dataclasses import dataclass, field
from typing import Callable

from pathlist.entry import Entry
from pathlist.sorting import should_print


@dataclass(frozen=True, slots=True)
class CsvColumn:
    """A single CSV output column.

    Attributes:
        name: Header name for this column.
        extract: Callable that takes an entry and returns a string value.
    """

    name: str
    extract: Callable[[Entry], str]


def _extract_path(entry: Entry) -> str:
    return entry.text


def _extract_type(entry: Entry) -> str:
    """Return ``dir``, ``link``, ``file`` or ``other`` from the entry's mode."""
    mode = entry.stat.st_mode if entry.stat is not None else 0
    if stat_mod.S_ISDIR(mode):
        return "dir"
    if stat_mod.S_ISLNK(mode):
        return "link"
    if stat_mod.S_ISREG(mode):
        return "file"
    return "other"


def _extract_size(entry: Entry) -> str:
    return str(entry.stat.st_size) if entry.stat is not None else ""


def _extract_mtime(entry: Entry) -> str:
    return str(entry.stat.st_mtime_ns) if entry.stat is not None else ""


DEFAULT_COLUMNS: list[CsvColumn] = [
    CsvColumn(name="path", extract=_extract_path),
    CsvColumn(name="type", extract=_extract_type),
    CsvColumn(name="size", extract=_extract_size),
    CsvColumn(name="mtime_ns", extract=_extract_mtime),
]


@dataclass(frozen=True, slots=True)
class CsvOptions:
    """Options controlling CSV output.

    Attributes:
        leaves_only: Drop entries that have a visible child.
        columns: Column definitions to use. Defaults to ``DEFAULT_COLUMNS``.
    """

    leaves_only: bool = False
    columns: list[CsvColumn] = field(default_factory=lambda: list(DEFAULT_COLUMNS))


def format_csv(
    entries: list[Entry],
    options: CsvOptions | None = None,
) -> str:
    """Render entries as CSV text.

    Output always starts with a header row. Each subsequent row is one
    printable entry, in the given order.

    Args:
        entries: Entries in final (sorted) order.
        options: Rendering options. Defaults to ``CsvOptions()``.

    Returns:
        str: CSV text with header, using LF line endings (no trailing newline).
    """
    opts = options or CsvOptions()

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow([col.name for col in opts.columns])

    for entry in entries:
        if not should_print(entry, opts.leaves_only):
            continue
        writer.writerow([col.extract(entry) for col in opts.columns])

    # Remove trailing newline that csv.writer appends after the last row
    return buf.getvalue().rstrip("\n")
