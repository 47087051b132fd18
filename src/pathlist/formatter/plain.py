"""Delimiter-terminated path output formatter."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final

from pathlist.entry import Entry
from pathlist.sorting import should_print

_NAMED_ESCAPES: Final[dict[int, bytes]] = {
    ord("\\"): b"\\\\",
    ord("\n"): b"\\n",
    ord("\t"): b"\\t",
    ord("\r"): b"\\r",
    ord("\a"): b"\\a",
    ord("\b"): b"\\b",
    ord("\f"): b"\\f",
    ord("\v"): b"\\v",
}


@dataclass(frozen=True, slots=True)
class PlainOptions:
    """Options for plain path output.

    Attributes:
        null_terminated: End each record with NUL instead of newline.
        escape: Backslash-escape non-printable bytes. Ignored with NUL.
        leaves_only: Drop entries that have a visible child.
    """

    null_terminated: bool = False
    escape: bool = False
    leaves_only: bool = False


def escape_bytes(raw: bytes) -> bytes:
    """Return *raw* with backslash and non-printable bytes C-escaped.

    Printable ASCII passes through; named control characters use their
    short escapes; every other byte becomes a three-digit octal escape.
    """
    out = bytearray()
    for byte in raw:
        named = _NAMED_ESCAPES.get(byte)
        if named is not None:
            out += named
        elif 0x20 <= byte < 0x7F:
            out.append(byte)
        else:
            out += b"\\%03o" % byte
    return bytes(out)


def format_plain(
    entries: list[Entry],
    options: PlainOptions | None = None,
) -> bytes:
    """Render entries as terminated path records.

    Every record, the last one included, is followed by the terminator.

    Args:
        entries: Entries in final (sorted) order.
        options: Rendering options.

    Returns:
        bytes: Concatenated records, empty when nothing is printable.
    """
    opts = options or PlainOptions()
    terminator = b"\0" if opts.null_terminated else b"\n"
    escape = opts.escape and not opts.null_terminated

    chunks: list[bytes] = []
    for entry in entries:
        if not should_print(entry, opts.leaves_only):
            continue
        raw = os.fsencode(entry.text)
        chunks.append(escape_bytes(raw) if escape else raw)
        chunks.append(terminator)
    return b"".join(chunks)
