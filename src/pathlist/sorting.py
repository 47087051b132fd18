"""Sort engine: order the final entry collection."""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import Final

from pathlist.entry import ChildState, Entry
from pathlist.options import ListOptions, SortField

# Stat attribute per numeric sort field.
_STAT_ATTRS: Final[dict[str, str]] = {
    "size": "st_size",
    "atime": "st_atime_ns",
    "ctime": "st_ctime_ns",
    "mtime": "st_mtime_ns",
}


def name_key(entry: Entry) -> bytes:
    """Return the raw bytes of the entry's path for byte-value ordering."""
    return os.fsencode(entry.text)


def numeric_key(field: SortField) -> Callable[[Entry], int]:
    """Return a key function reading *field* from an entry's stat.

    Entries whose probe failed sort as ``0``.

    Raises:
        ValueError: If ``field`` is not a known numeric field.
    """
    try:
        attr = _STAT_ATTRS[field]
    except KeyError:
        known = ", ".join(sorted(_STAT_ATTRS))
        raise ValueError(
            f"Unknown sort field '{field}'. Known fields: {known}"
        ) from None

    def _key(entry: Entry) -> int:
        if entry.stat is None:
            return 0
        return getattr(entry.stat, attr)

    return _key


def sort_entries(
    entries: list[Entry],
    options: ListOptions | None = None,
) -> list[Entry]:
    """Return *entries* ordered per the configured key and direction.

    Names sort ascending by default, numeric fields descending (largest
    or newest first). ``reverse`` flips either default. Ties keep
    discovery order. Suppressed entries are ordered like any other.

    Args:
        entries: Entries from the traversal engine, in discovery order.
        options: Listing options. Defaults to ``ListOptions()``.

    Returns:
        list[Entry]: A new list over the same entry objects.

    Raises:
        ValueError: If the sort key or field is unknown.
    """
    opts = options or ListOptions()

    if opts.sort_key == "none":
        return list(entries)
    if opts.sort_key == "name":
        key: Callable[[Entry], object] = name_key
        descending = False
    elif opts.sort_key == "numeric":
        key = numeric_key(opts.sort_field)
        descending = True
    else:
        raise ValueError(f"Unknown sort key '{opts.sort_key}'")

    # sorted() keeps equal elements in input order even with reverse=True.
    return sorted(entries, key=key, reverse=descending != opts.reverse)


def should_print(entry: Entry, leaves_only: bool = False) -> bool:
    """Return whether an entry belongs in the output.

    Args:
        entry: Entry to test.
        leaves_only: Whether entries with a visible child are dropped.

    Returns:
        bool: ``True`` for visible entries that pass the leaf filter.
    """
    if not entry.visible:
        return False
    return not leaves_only or entry.has_visible_child is not ChildState.YES
