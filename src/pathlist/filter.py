"""Entry exclusion filters: fnmatch patterns and filter composition."""

from __future__ import annotations

from fnmatch import fnmatch
from typing import Protocol


class EntryFilter(Protocol):
    """Protocol for excluding discovered entries.

    Keeps the traversal engine decoupled from matching strategy.
    ``relpath`` is relative to the top-level directory ``root`` and uses
    ``/`` as separator.
    """

    def should_exclude(self, root: str, relpath: str, is_dir: bool) -> bool: ...


class PatternFilter:
    """Filter entries by fnmatch patterns on their basename.

    Implements ``-I PATTERN`` exclusion behavior.
    """

    def __init__(self, patterns: list[str] | None = None) -> None:
        """Initialize pattern filter.

        Args:
            patterns: Optional fnmatch pattern list.
        """
        self._patterns: list[str] = list(patterns) if patterns else []

    def should_exclude(self, root: str, relpath: str, is_dir: bool) -> bool:
        """Return whether an entry should be excluded.

        Args:
            root: Top-level directory the entry was found under.
            relpath: Entry path relative to ``root``.
            is_dir: Whether the entry is a directory.

        Returns:
            bool: ``True`` when any configured pattern matches the basename.
        """
        name = relpath.rsplit("/", 1)[-1]
        return any(fnmatch(name, pat) for pat in self._patterns)


class CombinedFilter:
    """Exclude an entry when any of the wrapped filters excludes it."""

    def __init__(self, filters: list[EntryFilter]) -> None:
        self._filters = list(filters)

    def should_exclude(self, root: str, relpath: str, is_dir: bool) -> bool:
        return any(f.should_exclude(root, relpath, is_dir) for f in self._filters)
