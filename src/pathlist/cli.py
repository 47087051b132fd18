"""CLI entry point for pathls — I/O boundary only."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import dataclass, field

from pathlist import PathlistError, __version__
from pathlist.entry import Entry
from pathlist.filter import CombinedFilter, EntryFilter, PatternFilter
from pathlist.formatter.plain import PlainOptions, format_plain
from pathlist.listfile import read_list_file
from pathlist.options import ListOptions
from pathlist.sorting import sort_entries
from pathlist.traversal import traverse

logger = logging.getLogger(__name__)

_NUMERIC_SORTS = ("size", "atime", "ctime", "mtime")


@dataclass(slots=True)
class RunResult:
    """Output and failures of one pathls run.

    Attributes:
        output: Bytes to write to stdout.
        failures: Messages to write to stderr, one per failure.
    """

    output: bytes = b""
    failures: list[str] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return 1 if self.failures else 0


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser.

    Returns:
        argparse.ArgumentParser: Configured parser for the ``pathls`` command.
    """
    parser = argparse.ArgumentParser(
        prog="pathls",
        description="list paths breadth-first as delimiter-terminated records",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        metavar="PATH",
        help="Paths to list (default: current directory)",
    )

    # visibility options
    parser.add_argument(
        "-a",
        "--all",
        action="store_true",
        dest="show_all",
        help="Include entries starting with ., including . and ..",
    )
    parser.add_argument(
        "-A",
        "--almost-all",
        action="store_true",
        dest="show_almost_all",
        help="Include entries starting with ., except . and ..",
    )
    parser.add_argument(
        "-d",
        "--directory",
        action="store_true",
        dest="opaque_dirs",
        help="List directories themselves, not their contents",
    )
    parser.add_argument(
        "-R",
        "--recursive",
        action="store_true",
        dest="recurse",
        help="List subdirectories recursively",
    )
    parser.add_argument(
        "-l",
        "--leaves",
        action="store_true",
        dest="leaves_only",
        help="Only list entries without a visible child",
    )
    parser.add_argument(
        "-I",
        "--exclude",
        action="append",
        default=[],
        dest="patterns",
        help="Exclude entries matching pattern (can be specified multiple times)",
    )
    parser.add_argument(
        "--gitignore",
        action="store_true",
        help="Exclude entries matched by .gitignore in top-level directories",
    )
    parser.add_argument(
        "-L",
        "--follow",
        action="store_true",
        dest="follow_links",
        help="Follow symbolic links found while descending",
    )

    # ordering options
    parser.add_argument(
        "--sort",
        choices=["none", "name", *_NUMERIC_SORTS],
        default="name",
        help="Sort key (default: name)",
    )
    parser.add_argument(
        "-U",
        action="store_const",
        const="none",
        dest="sort",
        help="Do not sort; list in discovery order",
    )
    parser.add_argument(
        "-S",
        action="store_const",
        const="size",
        dest="sort",
        help="Sort by size, largest first",
    )
    parser.add_argument(
        "-t",
        action="store_const",
        const="mtime",
        dest="sort",
        help="Sort by modification time, newest first",
    )
    parser.add_argument(
        "-r",
        "--reverse",
        action="store_true",
        help="Reverse the sort order",
    )

    # input/output options
    parser.add_argument(
        "-f",
        "--from",
        action="append",
        default=[],
        dest="list_files",
        metavar="FILE",
        help="Read additional paths from FILE, '-' for stdin (repeatable)",
    )
    parser.add_argument(
        "--from0",
        action="store_true",
        dest="list_files_null",
        help="Paths in --from files are separated by NUL, not newline",
    )
    parser.add_argument(
        "-0",
        "--null",
        action="store_true",
        dest="null_terminated",
        help="End each output path with NUL instead of newline",
    )
    parser.add_argument(
        "-b",
        "--escape",
        action="store_true",
        help="Print C-style escapes for non-printable characters",
    )
    parser.add_argument(
        "--csv",
        action="store_true",
        dest="csv_mode",
        help="Output as CSV (path, type, size, mtime_ns)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log traversal details to stderr",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def _validate_option_combinations(args: argparse.Namespace) -> None:
    """Validate incompatible CLI option combinations.

    Args:
        args: Parsed CLI namespace.

    Raises:
        PathlistError: If incompatible options are combined.
    """
    if args.sort == "none" and args.reverse:
        raise PathlistError("cannot reverse an unsorted listing (-U with -r)")
    if args.csv_mode and args.null_terminated:
        raise PathlistError("--csv is incompatible with --null (-0)")
    if args.csv_mode and args.escape:
        raise PathlistError("--csv is incompatible with --escape (-b)")


def _build_options(args: argparse.Namespace) -> ListOptions:
    """Translate parsed arguments into immutable listing options.

    Args:
        args: Parsed CLI namespace.

    Returns:
        ListOptions: Options for traversal, sorting and output.
    """
    if args.sort in _NUMERIC_SORTS:
        sort_key, sort_field = "numeric", args.sort
    else:
        sort_key, sort_field = args.sort, "size"

    return ListOptions(
        show_all=args.show_all,
        show_almost_all=args.show_almost_all,
        opaque_dirs=args.opaque_dirs,
        recurse=args.recurse,
        leaves_only=args.leaves_only,
        sort_key=sort_key,
        sort_field=sort_field,
        reverse=args.reverse,
        follow_links=args.follow_links,
        null_terminated=args.null_terminated,
        escape=args.escape,
    )


def _build_entry_filter(args: argparse.Namespace) -> EntryFilter | None:
    """Build the exclusion filter from CLI options.

    Args:
        args: Parsed CLI namespace.

    Returns:
        EntryFilter | None: Combined filter, or ``None`` when nothing excludes.
    """
    filters: list[EntryFilter] = []
    if args.patterns:
        filters.append(PatternFilter(args.patterns))
    if args.gitignore:
        from pathlist.gitignore import GitignoreFilter

        filters.append(GitignoreFilter())

    if not filters:
        return None
    if len(filters) == 1:
        return filters[0]
    return CombinedFilter(filters)


def _collect_paths(args: argparse.Namespace, failures: list[str]) -> list[str]:
    """Gather top-level paths: command line first, then list files.

    Unreadable list files are appended to *failures*.

    Args:
        args: Parsed CLI namespace.
        failures: Failure list to extend.

    Returns:
        list[str]: Top-level paths, ``["."]`` when none were given at all.
    """
    paths: list[str] = list(args.paths)
    delimiter = b"\0" if args.list_files_null else b"\n"
    for source in args.list_files:
        result = read_list_file(source, delimiter)
        if result.error is not None:
            failures.append(result.error)
        paths.extend(result.paths)

    if not args.paths and not args.list_files:
        paths.append(".")
    return paths


def _format_output(
    args: argparse.Namespace,
    options: ListOptions,
    entries: list[Entry],
) -> bytes:
    """Render sorted entries using the selected formatter.

    Args:
        args: Parsed CLI namespace.
        options: Listing options.
        entries: Entries in final order.

    Returns:
        bytes: Output ready for stdout.
    """
    if args.csv_mode:
        from pathlist.formatter.csv_ import CsvOptions, format_csv

        text = format_csv(entries, CsvOptions(leaves_only=options.leaves_only))
        return os.fsencode(text + "\n")

    plain_opts = PlainOptions(
        null_terminated=options.null_terminated,
        escape=options.escape,
        leaves_only=options.leaves_only,
    )
    return format_plain(entries, plain_opts)


def _run_with_args(args: argparse.Namespace) -> RunResult:
    """Run the traverse/sort/format pipeline for parsed arguments.

    Args:
        args: Parsed CLI namespace.

    Returns:
        RunResult: Output bytes and failure messages.

    Raises:
        PathlistError: On invalid option combinations.
    """
    _validate_option_combinations(args)
    options = _build_options(args)
    entry_filter = _build_entry_filter(args)

    failures: list[str] = []
    paths = _collect_paths(args, failures)

    result = traverse(paths, options, entry_filter)
    failures.extend(result.failures)
    logger.debug(
        "Traversed %d entries, %d failures", len(result.entries), len(failures)
    )

    if not result.any_visible:
        return RunResult(failures=failures)

    try:
        ordered = sort_entries(result.entries, options)
    except ValueError as exc:
        raise PathlistError(str(exc)) from exc
    return RunResult(output=_format_output(args, options, ordered), failures=failures)


def run_pathls(argv: list[str] | None = None) -> RunResult:
    """Run pathls with provided CLI args and return output and failures.

    This function is side-effect free apart from reading list files and is
    the primary test target for CLI behavior.

    Args:
        argv: Command-line argument list without program name. If ``None``,
            uses process arguments via ``argparse`` defaults.

    Returns:
        RunResult: Output bytes and failure messages.

    Raises:
        PathlistError: On any user-facing configuration error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    return _run_with_args(args)


def main() -> None:
    """Run the CLI entry point with process arguments.

    Writes output to stdout and failures to stderr. Exits with code 1
    when any failure was recorded and 2 on configuration errors.
    """
    parser = build_parser()
    args = parser.parse_args()  # single parse

    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(name)s: %(levelname)s: %(message)s",
            stream=sys.stderr,
        )

    try:
        result = _run_with_args(args)
    except PathlistError as exc:
        sys.stderr.write(f"pathls: {exc}\n")
        sys.exit(2)

    sys.stdout.buffer.write(result.output)
    sys.stdout.flush()
    for failure in result.failures:
        sys.stderr.write(f"pathls: {failure}\n")
    sys.exit(result.exit_code)
