"""Gitignore integration — load .gitignore patterns via pathspec."""

from __future__ import annotations

import logging
from pathlib import Path

from pathspec import GitIgnoreSpec

logger = logging.getLogger(__name__)


def load_gitignore_spec(root: Path) -> GitIgnoreSpec | None:
    """Load .gitignore patterns from *root* directory.

    Args:
        root: Directory containing the ``.gitignore`` file.

    Returns:
        A compiled spec when a ``.gitignore`` exists and is readable,
        otherwise ``None``.
    """
    gitignore_path = root / ".gitignore"
    try:
        lines = gitignore_path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError):
        logger.debug("Cannot read .gitignore: %s", gitignore_path)
        return None
    logger.debug("Loaded .gitignore: %s (%d lines)", gitignore_path, len(lines))
    return GitIgnoreSpec.from_lines(lines)


class GitignoreFilter:
    """Exclude entries matched by the ``.gitignore`` of their top-level directory.

    Each top-level directory's ``.gitignore`` is read at most once.
    """

    def __init__(self) -> None:
        self._specs: dict[str, GitIgnoreSpec | None] = {}

    def _spec_for(self, root: str) -> GitIgnoreSpec | None:
        if root not in self._specs:
            self._specs[root] = load_gitignore_spec(Path(root))
        return self._specs[root]

    def should_exclude(self, root: str, relpath: str, is_dir: bool) -> bool:
        """Return whether *relpath* is ignored under *root*.

        Directories are matched with a trailing ``/`` so that
        directory-only patterns such as ``build/`` apply.
        """
        spec = self._spec_for(root)
        if spec is None:
            return False
        return spec.match_file(relpath + "/" if is_dir else relpath)
