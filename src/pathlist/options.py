"""Immutable listing configuration shared by traversal, sorting and output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

SortKey = Literal["none", "name", "numeric"]
SortField = Literal["size", "atime", "ctime", "mtime"]


@dataclass(frozen=True, slots=True)
class ListOptions:
    """Options controlling traversal, visibility, ordering and output.

    Built once by the CLI and never mutated afterwards.

    Attributes:
        show_all: Include dot entries, ``.`` and ``..`` included.
        show_almost_all: Include dot entries except ``.`` and ``..``.
        opaque_dirs: List top-level directories themselves, not their contents.
        recurse: Descend into discovered directories.
        leaves_only: Print only entries without a visible child.
        sort_key: ``none`` (discovery order), ``name`` or ``numeric``.
        sort_field: Stat field used when ``sort_key`` is ``numeric``.
        reverse: Invert the default direction of ``sort_key``.
        follow_links: Follow symlinks of discovered entries when probing.
        null_terminated: Terminate output records with NUL instead of newline.
        escape: Backslash-escape non-printable bytes in output.
    """

    show_all: bool = False
    show_almost_all: bool = False
    opaque_dirs: bool = False
    recurse: bool = False
    leaves_only: bool = False
    sort_key: SortKey = "name"
    sort_field: SortField = "size"
    reverse: bool = False
    follow_links: bool = False
    null_terminated: bool = False
    escape: bool = False
