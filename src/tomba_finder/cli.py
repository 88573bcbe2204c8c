"""CLI entrypoint for tomba-finder."""

from __future__ import annotations

import argparse
import os
from collections.abc import Sequence

from .config import (
    DEFAULT_HTTP_RETRIES,
    DEFAULT_MAX_RESULTS,
    DEFAULT_REQUEST_TIMEOUT,
    RATE_LIMIT_REQUESTS,
    RATE_LIMIT_WINDOW,
    FinderConfig,
)
from .errors import ConfigError, InputError
from .logging_utils import configure_logging, get_logger
from .pipeline import run_pipeline


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(
        description="Tomba Email Finder - rate-limited batch lookup of professional emails."
    )
    parser.add_argument(
        "--input",
        required=True,
        help="Path to the actor input JSON (tombaApiKey, tombaApiSecret, requests, maxResults).",
    )
    parser.add_argument("--api-key", help="Tomba key (or set TOMBA_API_KEY env var).")
    parser.add_argument("--api-secret", help="Tomba secret (or set TOMBA_API_SECRET env var).")
    parser.add_argument(
        "--max-results",
        type=int,
        help=f"Cap on processed lookups; overrides maxResults (default {DEFAULT_MAX_RESULTS}).",
    )
    parser.add_argument("--output", default="tomba_results.json", help="Output dataset path.")
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=["json", "csv"],
        default="json",
        help="Output dataset format.",
    )
    parser.add_argument(
        "--rate-limit",
        type=int,
        default=RATE_LIMIT_REQUESTS,
        help="Maximum Tomba requests per window.",
    )
    parser.add_argument(
        "--rate-window",
        type=float,
        default=RATE_LIMIT_WINDOW,
        help="Rate limit window in seconds.",
    )
    parser.add_argument(
        "--http-retries",
        type=int,
        default=DEFAULT_HTTP_RETRIES,
        help="Transport retries on 5xx responses.",
    )
    parser.add_argument(
        "--timeout", type=float, default=DEFAULT_REQUEST_TIMEOUT, help="HTTP timeout in seconds."
    )
    parser.add_argument("--no-progress", action="store_true", help="Disable tqdm progress bar.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI input."""
    return build_parser().parse_args(argv)


def namespace_to_config(args: argparse.Namespace) -> FinderConfig:
    """Convert CLI args to validated FinderConfig."""
    return FinderConfig(
        input_path=args.input,
        output=args.output,
        output_format=args.output_format,
        api_key=args.api_key or os.getenv("TOMBA_API_KEY"),
        api_secret=args.api_secret or os.getenv("TOMBA_API_SECRET"),
        max_results=args.max_results,
        rate_limit_requests=args.rate_limit,
        rate_limit_window=args.rate_window,
        http_retries=args.http_retries,
        request_timeout=args.timeout,
        show_progress=not args.no_progress,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint."""
    args = parse_args(argv)
    configure_logging(args.verbose)
    logger = get_logger()
    try:
        config = namespace_to_config(args)
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    try:
        summary = run_pipeline(config, logger=logger)
    except InputError:
        return 2

    if summary.succeeded or summary.failed:
        logger.info("Wrote results to %s", config.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
