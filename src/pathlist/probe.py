"""Filesystem probe: stat a path and list a directory without raising."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

# Pseudo-entries reported ahead of the real directory contents.
PSEUDO_ENTRIES: tuple[str, ...] = (".", "..")


@dataclass(frozen=True, slots=True)
class ProbeResult:
    """Outcome of probing one path.

    Attributes:
        stat: Metadata on success, ``None`` on failure.
        error: Failure description naming the path, ``None`` on success.
    """

    stat: os.stat_result | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class ListResult:
    """Outcome of listing one directory.

    Attributes:
        names: Child names, pseudo-entries first, then by raw byte value.
        error: Failure description naming the directory, ``None`` on success.
    """

    names: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _reason(exc: OSError) -> str:
    return exc.strerror or str(exc)


def probe(path: str, follow_links: bool = True) -> ProbeResult:
    """Stat *path*, following symlinks unless *follow_links* is false.

    Args:
        path: Path to stat.
        follow_links: Use ``os.stat`` when true, ``os.lstat`` otherwise.

    Returns:
        ProbeResult: Metadata, or a ``cannot access`` failure message.
    """
    try:
        st = os.stat(path) if follow_links else os.lstat(path)
    except OSError as exc:
        logger.debug("Cannot stat: %s (%s)", path, exc)
        return ProbeResult(error=f"cannot access '{path}': {_reason(exc)}")
    return ProbeResult(stat=st)


def list_children(path: str) -> ListResult:
    """List the immediate children of directory *path*.

    The directory is opened, read completely and closed before returning.

    Args:
        path: Directory to list.

    Returns:
        ListResult: Child names, or a ``cannot open directory`` failure message.
    """
    try:
        with os.scandir(path) as it:
            names = [dir_entry.name for dir_entry in it]
    except OSError as exc:
        logger.debug("Cannot open directory: %s (%s)", path, exc)
        return ListResult(error=f"cannot open directory '{path}': {_reason(exc)}")

    names.sort(key=os.fsencode)
    return ListResult(names=[*PSEUDO_ENTRIES, *names])
