"""Allow ``python -m pathlist``."""

from pathlist.cli import main

main()
