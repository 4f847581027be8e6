"""CLI entry point for printing the latest cross-rates."""

from __future__ import annotations

import sys

from fx_glance.cli import main

if __name__ == "__main__":  # pragma: no cover - thin wrapper
    sys.exit(main())
