"""Entry-point for launching the Field Friends console game."""
from __future__ import annotations

import sys

from .presentation.cli.app import main as cli_main


def main() -> int:
    """Run the CLI presentation layer and return a process exit code."""
    try:
        cli_main()
    except KeyboardInterrupt:
        print()
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
