"""Command-line entry point for the dining philosophers simulation."""

from __future__ import annotations

import sys
from typing import Optional, Sequence

from .args import ArgumentError, parse_args
from .table import Table


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the simulation; print ``Error`` and return 1 on bad arguments."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        settings = parse_args(list(argv))
    except ArgumentError:
        sys.stdout.write("Error\n")
        sys.stdout.flush()
        return 1
    Table(settings, sys.stdout).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())