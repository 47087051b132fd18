"""Visibility policy: decide whether an entry is printed and descended."""

from __future__ import annotations

import os
import stat as stat_mod
from dataclasses import dataclass

from pathlist.options import ListOptions

SELF_NAME = "."
PARENT_NAME = ".."


@dataclass(frozen=True, slots=True)
class Decision:
    """Policy outcome for one entry.

    Attributes:
        visible: Whether the entry stays visible.
        descend: Whether the entry's children should be listed.
    """

    visible: bool
    descend: bool


def basename_of(text: str) -> str:
    """Return the last path component of *text*, ignoring trailing separators.

    ``"docs/"`` gives ``"docs"``; a path made only of separators gives itself.
    """
    stripped = text.rstrip(os.sep)
    if os.altsep:
        stripped = stripped.rstrip(os.altsep)
    if not stripped:
        return text
    return os.path.basename(stripped)


def is_pseudo_entry(name: str) -> bool:
    """Return whether *name* is the ``.`` or ``..`` directory pseudo-entry."""
    return name in (SELF_NAME, PARENT_NAME)


def is_wanted(
    name: str,
    is_top_level: bool,
    options: ListOptions,
    excluded: bool = False,
) -> bool:
    """Apply dotfile rules and exclusion filters to one entry name.

    Top-level entries are always wanted: the user named them explicitly.

    Args:
        name: Basename of the entry.
        is_top_level: Whether the entry was supplied by the user.
        options: Listing options.
        excluded: Whether an exclusion filter matched the entry.

    Returns:
        bool: ``True`` when the entry passes dotfile and exclusion rules.
    """
    if is_top_level:
        return True
    if excluded:
        return False
    if not name.startswith("."):
        return True
    if options.show_all:
        return True
    return options.show_almost_all and not is_pseudo_entry(name)


def decide(
    name: str,
    is_top_level: bool,
    st: os.stat_result,
    options: ListOptions,
    top_level_count: int,
    excluded: bool = False,
) -> Decision:
    """Decide visibility and descent for a successfully probed entry.

    Rules:
      1. A sole top-level directory is hidden so its contents stand in for
         it, unless directories are opaque.
      2. Top-level directories are descended unless directories are opaque.
      3. Discovered directories are descended only when recursing, when
         wanted, and never through ``.`` or ``..``.
      4. Everything else is visible iff wanted and is never descended.

    Args:
        name: Basename of the entry.
        is_top_level: Whether the entry was supplied by the user.
        st: Probe result for the entry.
        options: Listing options.
        top_level_count: Number of top-level entries from all sources.
        excluded: Whether an exclusion filter matched the entry.

    Returns:
        Decision: Visibility and descent outcome.
    """
    wanted = is_wanted(name, is_top_level, options, excluded)

    if not stat_mod.S_ISDIR(st.st_mode):
        return Decision(visible=wanted, descend=False)

    if is_top_level:
        hidden = top_level_count == 1 and not options.opaque_dirs
        return Decision(visible=not hidden, descend=not options.opaque_dirs)

    descend = options.recurse and wanted and not is_pseudo_entry(name)
    return Decision(visible=wanted, descend=descend)
