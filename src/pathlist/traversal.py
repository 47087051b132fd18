"""Breadth-first traversal engine over top-level paths."""

from __future__ import annotations

import logging
import os
import stat as stat_mod
from collections.abc import Iterable
from dataclasses import dataclass, field

from pathlist.entry import Entry, EntryArena
from pathlist.filter import EntryFilter
from pathlist.options import ListOptions
from pathlist.policy import basename_of, decide, is_pseudo_entry
from pathlist.probe import list_children, probe

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TraversalResult:
    """Everything a traversal run produced.

    Attributes:
        entries: All entries in discovery order, suppressed ones included.
        failures: Access and directory-read failure messages, in order.
        any_visible: Whether at least one entry ended up visible.
    """

    entries: list[Entry] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)
    any_visible: bool = False


def _relative_to_root(text: str, root_text: str) -> str:
    """Return *text* relative to its top-level ancestor, ``/``-separated."""
    rel = text[len(root_text) :].lstrip(os.sep)
    if os.altsep:
        rel = rel.replace(os.altsep, "/")
    return rel.replace(os.sep, "/")


class _Traversal:
    """State of a single traversal run."""

    def __init__(
        self,
        options: ListOptions,
        entry_filter: EntryFilter | None,
    ) -> None:
        self.options = options
        self.entry_filter = entry_filter
        self.arena = EntryArena()
        self.failures: list[str] = []
        self.top_level_count = 0

    def _is_excluded(self, entry: Entry, name: str, is_dir: bool) -> bool:
        if self.entry_filter is None or entry.is_top_level or is_pseudo_entry(name):
            return False
        root_text = self.arena[entry.root].text
        relpath = _relative_to_root(entry.text, root_text)
        return self.entry_filter.should_exclude(root_text, relpath, is_dir)

    def visit(self, index: int) -> bool:
        """Probe, decide and possibly expand the entry at *index*.

        Children are appended to the arena and so land in the next round.

        Returns:
            bool: The entry's final visibility.
        """
        entry = self.arena[index]
        follow = entry.is_top_level or self.options.follow_links
        result = probe(entry.text, follow_links=follow)
        if not result.ok:
            self.failures.append(result.error)
            entry.suppress()
            return False

        entry.stat = result.stat
        name = basename_of(entry.text)
        is_dir = stat_mod.S_ISDIR(result.stat.st_mode)
        decision = decide(
            name,
            entry.is_top_level,
            result.stat,
            self.options,
            self.top_level_count,
            excluded=self._is_excluded(entry, name, is_dir),
        )
        if not decision.visible:
            entry.suppress()

        if decision.descend:
            listing = list_children(entry.text)
            if listing.ok:
                entry.mark_listed()
                for child_name in listing.names:
                    self.arena.add_child(index, child_name)
            else:
                self.failures.append(listing.error)

        if entry.visible:
            parent = self.arena.parent_of(entry)
            if parent is not None:
                parent.mark_has_visible_child()
        return entry.visible

    def run(self, paths: Iterable[str]) -> TraversalResult:
        for path in paths:
            self.arena.add_top_level(path)
        self.top_level_count = len(self.arena)

        any_visible = False
        depth = 0
        start, end = 0, len(self.arena)
        while start < end:
            logger.debug("Round %d: %d entries", depth, end - start)
            for index in range(start, end):
                if self.visit(index):
                    any_visible = True
            start, end = end, len(self.arena)
            depth += 1

        return TraversalResult(
            entries=self.arena.as_list(),
            failures=self.failures,
            any_visible=any_visible,
        )


def traverse(
    paths: Iterable[str],
    options: ListOptions | None = None,
    entry_filter: EntryFilter | None = None,
) -> TraversalResult:
    """Expand top-level paths breadth-first and apply the visibility policy.

    Every entry of round *k* is visited, and its children discovered,
    before any entry of round *k + 1*. Each round is the contiguous run of
    entries appended to the arena while the previous round was visited.
    Failures never stop the run.

    Args:
        paths: Top-level paths, command-line ones first, then list-file ones.
        options: Listing options. Defaults to ``ListOptions()``.
        entry_filter: Optional exclusion filter for discovered entries.

    Returns:
        TraversalResult: Entries in discovery order, failures and visibility flag.
    """
    return _Traversal(options or ListOptions(), entry_filter).run(paths)
