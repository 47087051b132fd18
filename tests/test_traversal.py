"""Tests for pathlist.traversal."""

import os
from pathlib import Path

import pytest
from conftest import printed, skip_if_root

from pathlist.entry import ChildState
from pathlist.filter import PatternFilter
from pathlist.gitignore import GitignoreFilter
from pathlist.options import ListOptions
from pathlist.traversal import traverse


def _by_text(result) -> dict:
    return {e.text: e for e in result.entries}


def _p(*parts: str) -> str:
    return os.path.join(*parts)


class TestTopLevel:
    def test_single_directory_lists_contents(self, sample_tree: Path) -> None:
        result = traverse(["docs"])
        assert result.failures == []
        assert result.any_visible
        assert sorted(printed(result.entries)) == [
            _p("docs", "a.txt"),
            _p("docs", "b.txt"),
        ]
        assert _by_text(result)["docs"].visible is False

    def test_single_directory_opaque(self, sample_tree: Path) -> None:
        result = traverse(["docs"], ListOptions(opaque_dirs=True))
        assert [e.text for e in result.entries] == ["docs"]
        assert printed(result.entries) == ["docs"]

    def test_two_directories_not_recursive(self, sample_tree: Path) -> None:
        result = traverse(["docs", "src"])
        texts = printed(result.entries)
        assert "docs" in texts
        assert "src" in texts
        assert _p("src", "pkg") in texts
        assert _p("src", "main.py") in texts
        assert _p("src", "pkg", "mod.py") not in [e.text for e in result.entries]

    def test_top_level_file(self, sample_tree: Path) -> None:
        result = traverse(["README.md"])
        assert printed(result.entries) == ["README.md"]

    def test_top_level_dotfile_always_shown(self, sample_tree: Path) -> None:
        result = traverse([".env"])
        assert printed(result.entries) == [".env"]

    def test_dot_as_sole_argument(self, sample_tree: Path) -> None:
        result = traverse(["."])
        texts = printed(result.entries)
        assert "." not in texts
        assert _p(".", "README.md") in texts
        assert _p(".", ".env") not in texts

    def test_missing_path(self, sample_tree: Path) -> None:
        result = traverse(["missing"])
        assert len(result.failures) == 1
        assert "'missing'" in result.failures[0]
        assert result.any_visible is False
        assert result.entries[0].visible is False
        assert result.entries[0].stat is None

    def test_missing_path_does_not_stop_others(self, sample_tree: Path) -> None:
        result = traverse(["missing", "README.md"])
        assert len(result.failures) == 1
        assert printed(result.entries) == ["README.md"]
        assert result.any_visible is True

    def test_top_level_count_spans_all_paths(self, sample_tree: Path) -> None:
        # A directory plus any other top-level path is listed itself.
        result = traverse(["docs", "README.md"])
        assert "docs" in printed(result.entries)


class TestDotfiles:
    def test_hidden_entries_suppressed_by_default(self, sample_tree: Path) -> None:
        result = traverse(["."], ListOptions(recurse=True))
        texts = [e.text for e in result.entries]
        assert _p(".", ".hidden") in texts
        assert _p(".", ".hidden", "h.txt") not in texts
        assert _p(".", ".hidden") not in printed(result.entries)

    def test_show_all_includes_pseudo_entries(self, sample_tree: Path) -> None:
        result = traverse(["docs"], ListOptions(show_all=True))
        assert sorted(printed(result.entries)) == [
            _p("docs", "."),
            _p("docs", ".."),
            _p("docs", "a.txt"),
            _p("docs", "b.txt"),
        ]

    def test_show_all_recursive_does_not_descend_pseudo(
        self, sample_tree: Path
    ) -> None:
        result = traverse(["docs"], ListOptions(show_all=True, recurse=True))
        texts = [e.text for e in result.entries]
        assert not any(t.startswith(_p("docs", ".", "")) for t in texts)
        assert len(texts) == 5

    def test_almost_all(self, sample_tree: Path) -> None:
        result = traverse(["."], ListOptions(show_almost_all=True, recurse=True))
        texts = printed(result.entries)
        assert _p(".", ".env") in texts
        assert _p(".", ".hidden", "h.txt") in texts
        assert _p(".", ".") not in texts
        assert _p(".", "..") not in texts


class TestRecursion:
    def test_recursive_reaches_all_levels(self, sample_tree: Path) -> None:
        result = traverse(["src"], ListOptions(recurse=True))
        assert sorted(printed(result.entries)) == [
            _p("src", "main.py"),
            _p("src", "pkg"),
            _p("src", "pkg", "mod.py"),
        ]

    def test_breadth_first_order(self, sample_tree: Path) -> None:
        result = traverse(["."], ListOptions(recurse=True, show_almost_all=True))
        depths = [e.depth for e in result.entries]
        assert depths == sorted(depths)
        for index, entry in enumerate(result.entries):
            if entry.parent is not None:
                parent = result.entries[entry.parent]
                assert entry.parent < index
                assert entry.depth == parent.depth + 1
                assert entry.text.startswith(parent.text)

    def test_closure_of_descended_directories(self, sample_tree: Path) -> None:
        result = traverse(["."], ListOptions(recurse=True))
        texts = {e.text for e in result.entries}
        for entry in result.entries:
            if entry.parent is None:
                continue
            parent = result.entries[entry.parent]
            assert parent.has_visible_child is not ChildState.UNKNOWN
        expected_files = {
            _p(".", "README.md"),
            _p(".", "docs", "a.txt"),
            _p(".", "docs", "b.txt"),
            _p(".", "src", "main.py"),
            _p(".", "src", "pkg", "mod.py"),
        }
        assert expected_files <= texts

    def test_traversal_is_deterministic(self, sample_tree: Path) -> None:
        opts = ListOptions(recurse=True, show_all=True)
        first = [e.text for e in traverse(["."], opts).entries]
        second = [e.text for e in traverse(["."], opts).entries]
        assert first == second


class TestChildState:
    def test_non_leaf_propagation(self, sample_tree: Path) -> None:
        result = traverse(["."], ListOptions(recurse=True))
        entries = _by_text(result)
        assert entries[_p(".", "src")].has_visible_child is ChildState.YES
        assert entries[_p(".", "src", "pkg")].has_visible_child is ChildState.YES
        assert entries[_p(".", "empty")].has_visible_child is ChildState.NO
        assert entries[_p(".", "README.md")].has_visible_child is ChildState.UNKNOWN
        # Hidden directories are never descended.
        assert entries[_p(".", ".hidden")].has_visible_child is ChildState.UNKNOWN

    def test_show_all_makes_every_listed_directory_non_leaf(
        self, sample_tree: Path
    ) -> None:
        result = traverse(["."], ListOptions(recurse=True, show_all=True))
        entries = _by_text(result)
        assert entries[_p(".", "empty")].has_visible_child is ChildState.YES

    def test_leaves_only_is_subset(self, sample_tree: Path) -> None:
        result = traverse(["."], ListOptions(recurse=True))
        leaves = printed(result.entries, leaves_only=True)
        everything = printed(result.entries)
        assert set(leaves) <= set(everything)
        assert _p(".", "src") not in leaves
        assert _p(".", "src", "pkg") not in leaves
        assert _p(".", "empty") in leaves
        assert _p(".", "src", "pkg", "mod.py") in leaves


class TestFailures:
    @skip_if_root
    def test_unreadable_directory_stays_visible(self, sample_tree: Path) -> None:
        locked = sample_tree / "locked"
        locked.mkdir()
        (locked / "inside.txt").write_text("x")
        locked.chmod(0o000)
        try:
            result = traverse(["."], ListOptions(recurse=True))
        finally:
            locked.chmod(0o755)
        assert len(result.failures) == 1
        assert result.failures[0].startswith("cannot open directory ")
        assert _p(".", "locked") in result.failures[0]
        assert _p(".", "locked") in printed(result.entries)
        assert _p(".", "locked", "inside.txt") not in {e.text for e in result.entries}
        assert _p(".", "README.md") in printed(result.entries)

    def test_failures_keep_order(self, sample_tree: Path) -> None:
        result = traverse(["b-missing", "a-missing"])
        assert "b-missing" in result.failures[0]
        assert "a-missing" in result.failures[1]


class TestExclusion:
    def test_pattern_filter_excludes_discovered(self, sample_tree: Path) -> None:
        result = traverse(
            ["."], ListOptions(recurse=True), entry_filter=PatternFilter(["*.txt"])
        )
        texts = printed(result.entries)
        assert _p(".", "docs", "a.txt") not in texts
        assert _p(".", "README.md") in texts

    def test_pattern_filter_prunes_directories(self, sample_tree: Path) -> None:
        result = traverse(
            ["."], ListOptions(recurse=True), entry_filter=PatternFilter(["src"])
        )
        texts = {e.text for e in result.entries}
        assert _p(".", "src", "main.py") not in texts

    def test_pattern_filter_ignores_top_level(self, sample_tree: Path) -> None:
        result = traverse(
            [_p("docs", "a.txt")], entry_filter=PatternFilter(["*.txt"])
        )
        assert printed(result.entries) == [_p("docs", "a.txt")]

    def test_gitignore_relative_to_top_level(self, sample_tree: Path) -> None:
        (sample_tree / ".gitignore").write_text("*.py\ndocs/\n")
        result = traverse(["."], ListOptions(recurse=True), GitignoreFilter())
        texts = {e.text for e in result.entries}
        visible = printed(result.entries)
        assert _p(".", "src", "main.py") not in visible
        assert _p(".", "docs") not in visible
        assert _p(".", "docs", "a.txt") not in texts
        assert _p(".", "README.md") in visible

    def test_gitignore_missing_file_excludes_nothing(self, sample_tree: Path) -> None:
        plain = traverse(["."], ListOptions(recurse=True))
        ignored = traverse(["."], ListOptions(recurse=True), GitignoreFilter())
        assert printed(plain.entries) == printed(ignored.entries)


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
class TestSymlinks:
    def test_symlinked_directory_not_descended_by_default(
        self, sample_tree: Path
    ) -> None:
        (sample_tree / "link").symlink_to(sample_tree / "src")
        result = traverse(["."], ListOptions(recurse=True))
        texts = {e.text for e in result.entries}
        assert _p(".", "link") in texts
        assert _p(".", "link", "main.py") not in texts

    def test_follow_links_descends(self, sample_tree: Path) -> None:
        (sample_tree / "link").symlink_to(sample_tree / "src")
        result = traverse(["."], ListOptions(recurse=True, follow_links=True))
        assert _p(".", "link", "main.py") in {e.text for e in result.entries}

    def test_top_level_link_is_followed(self, sample_tree: Path) -> None:
        (sample_tree / "link").symlink_to(sample_tree / "docs")
        result = traverse(["link"])
        assert sorted(printed(result.entries)) == [
            _p("link", "a.txt"),
            _p("link", "b.txt"),
        ]
