"""Logging helpers."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Configure application logging once for CLI usage."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # urllib3 logs every retry at DEBUG; keep it quiet unless asked.
    logging.getLogger("urllib3").setLevel(level if verbose else logging.WARNING)


def get_logger() -> logging.Logger:
    """Return the logger shared across the package."""
    return logging.getLogger("tomba_finder")
