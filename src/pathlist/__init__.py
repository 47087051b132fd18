"""pathlist — breadth-first path lister producing delimiter-terminated output."""

__version__ = "0.1.0"


class PathlistError(Exception):
    """User-facing CLI error.

    Raised for invalid option combinations and other configuration
    errors detected before traversal. The message is printed to stderr
    and the process exits with code 2.
    """
