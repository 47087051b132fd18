"""Shared fixtures for pathlist tests."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from pathlist.entry import Entry
from pathlist.sorting import should_print


@pytest.fixture
def sample_tree(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a standard test directory tree and chdir into it.

    Structure::

        root/
        ├── .env
        ├── .hidden/
        │   └── h.txt
        ├── README.md
        ├── docs/
        │   ├── a.txt
        │   └── b.txt
        ├── empty/
        └── src/
            ├── main.py
            └── pkg/
                └── mod.py
    """
    (tmp_path / ".env").write_text("SECRET=1")
    (tmp_path / ".hidden").mkdir()
    (tmp_path / ".hidden" / "h.txt").write_text("h")
    (tmp_path / "README.md").write_text("readme")
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "a.txt").write_text("a")
    (tmp_path / "docs" / "b.txt").write_text("bbbbbbbb")
    (tmp_path / "empty").mkdir()
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.py").write_text("main")
    (tmp_path / "src" / "pkg").mkdir()
    (tmp_path / "src" / "pkg" / "mod.py").write_text("mod")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def fake_stat(size: int = 0, mode: int = stat.S_IFREG | 0o644) -> os.stat_result:
    """Return a stat result with the given size and mode, other fields zero."""
    return os.stat_result((mode, 0, 0, 1, 0, 0, size, 0, 0, 0))


def make_entry(
    text: str,
    size: int | None = 0,
    *,
    visible: bool = True,
    is_dir: bool = False,
) -> Entry:
    """Return a top-level entry with a fake stat, or no stat when size is None."""
    mode = (stat.S_IFDIR | 0o755) if is_dir else (stat.S_IFREG | 0o644)
    entry = Entry(text=text, is_top_level=True)
    if size is not None:
        entry.stat = fake_stat(size, mode)
    if not visible:
        entry.suppress()
    return entry


def printed(entries: list[Entry], leaves_only: bool = False) -> list[str]:
    """Return texts of entries that would be printed, in order."""
    return [e.text for e in entries if should_print(e, leaves_only)]


skip_if_root = pytest.mark.skipif(
    os.name == "nt" or (hasattr(os, "geteuid") and os.geteuid() == 0),
    reason="permission bits are not enforced for root or on Windows",
)
