"""Application entry point."""

from __future__ import annotations

import sys

from chesslink.ui.bootstrap import run_application


def main() -> None:
    """Launch the chesslink hot-seat board."""
    sys.exit(run_application())


if __name__ == "__main__":
    main()
