"""Entry data model: one filesystem path under consideration."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass


class ChildState(enum.Enum):
    """Whether an entry is known to have a visible child.

    ``UNKNOWN`` until the entry is successfully listed, ``NO`` once it has
    children, ``YES`` as soon as one child is visible. ``YES`` is final.
    """

    UNKNOWN = "unknown"
    NO = "no"
    YES = "yes"


@dataclass(slots=True, eq=False)
class Entry:
    """A single path discovered or supplied for listing.

    Attributes:
        text: Path string as supplied, or parent text joined with a child name.
        is_top_level: Whether the path came from the command line or a list file.
        depth: Traversal round the entry was discovered in.
        parent: Arena index of the directory entry this one was found in.
        root: Arena index of the top-level entry this one descends from.
        visible: Whether the entry is printed. Only ever goes from true to false.
        stat: Result of the single probe, ``None`` if it failed.
        has_visible_child: Non-leaf marker propagated from visible children.
    """

    text: str
    is_top_level: bool
    depth: int = 0
    parent: int | None = None
    root: int = 0
    visible: bool = True
    stat: os.stat_result | None = None
    has_visible_child: ChildState = ChildState.UNKNOWN

    def suppress(self) -> None:
        self.visible = False

    def mark_has_visible_child(self) -> None:
        self.has_visible_child = ChildState.YES

    def mark_listed(self) -> None:
        """Record that the entry was listed and so has children."""
        if self.has_visible_child is ChildState.UNKNOWN:
            self.has_visible_child = ChildState.NO


class EntryArena:
    """Append-only collection owning every entry of a traversal run.

    Parent links are indices into this arena, so entries never hold
    references to each other.
    """

    def __init__(self) -> None:
        self._entries: list[Entry] = []

    def add(self, entry: Entry) -> int:
        """Append an entry and return its index."""
        self._entries.append(entry)
        return len(self._entries) - 1

    def add_top_level(self, text: str) -> int:
        index = len(self._entries)
        return self.add(Entry(text=text, is_top_level=True, root=index))

    def add_child(self, parent_index: int, name: str) -> int:
        """Append a child of the entry at *parent_index* named *name*."""
        parent = self._entries[parent_index]
        child = Entry(
            text=os.path.join(parent.text, name),
            is_top_level=False,
            depth=parent.depth + 1,
            parent=parent_index,
            root=parent.root,
        )
        return self.add(child)

    def parent_of(self, entry: Entry) -> Entry | None:
        if entry.parent is None:
            return None
        return self._entries[entry.parent]

    def __getitem__(self, index: int) -> Entry:
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def as_list(self) -> list[Entry]:
        return list(self._entries)
