"""Show the latest EUR/AUD exchange rates, cached for up to an hour."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from fx_glance.config import (
    DEFAULT_API_KEY_PATH,
    DEFAULT_BASE_URL,
    DEFAULT_CACHE_PATH,
    DEFAULT_TIMEOUT,
    STALENESS_SECONDS,
    GlanceConfig,
)
from fx_glance.errors import FxGlanceError
from fx_glance.pipeline import run_pipeline
from fx_glance.utils.logger import get_logger, set_verbosity

LOGGER = get_logger(__name__)

__all__ = ["build_config", "parse_args", "main"]


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--cache-file",
        dest="cache_path",
        type=Path,
        help=f"Where the last response is cached (default: {DEFAULT_CACHE_PATH})",
    )
    parser.add_argument(
        "--api-key-file",
        dest="api_key_path",
        type=Path,
        help=f"File holding the openexchangerates.org App ID (default: {DEFAULT_API_KEY_PATH})",
    )
    parser.add_argument(
        "--base-url",
        dest="base_url",
        help=f"Rates provider base URL (default: {DEFAULT_BASE_URL})",
    )
    parser.add_argument(
        "--timeout",
        dest="timeout",
        type=float,
        help=f"HTTP timeout in seconds (default: {DEFAULT_TIMEOUT:g})",
    )
    parser.add_argument(
        "--max-age",
        dest="max_age_seconds",
        type=int,
        help=f"Seconds before cached data is refetched (default: {STALENESS_SECONDS})",
    )
    parser.add_argument(
        "--no-color",
        dest="color",
        action="store_false",
        help="Print plain text without colours",
    )
    parser.add_argument(
        "--refresh",
        action="store_true",
        help="Ignore the cache and always fetch new data",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.set_defaults(color=True)
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace, base: GlanceConfig | None = None) -> GlanceConfig:
    return (base or GlanceConfig()).with_overrides(
        cache_path=args.cache_path,
        api_key_path=args.api_key_path,
        base_url=args.base_url,
        timeout=args.timeout,
        max_age_seconds=args.max_age_seconds,
        color=args.color,
        refresh=args.refresh or None,
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    set_verbosity(args.verbose)
    try:
        config = build_config(args)
        run_pipeline(config)
    except FxGlanceError as exc:
        print(exc, file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
