"""Runtime configuration model."""

from __future__ import annotations

from dataclasses import dataclass

from .validation import DEFAULT_MAX_RESULTS, validate_runtime_constraints

DEFAULT_USER_AGENT = "TombaFinder/1.0 (+https://tomba.io)"
DEFAULT_REQUEST_TIMEOUT = 15.0
DEFAULT_HTTP_RETRIES = 0

# Tomba allows 150 email-finder requests per minute.
RATE_LIMIT_REQUESTS = 150
RATE_LIMIT_WINDOW = 60.0

TOMBA_API_BASE = "https://api.tomba.io/v1"


@dataclass(frozen=True)
class FinderConfig:
    """Validated configuration used by the finder pipeline."""

    input_path: str
    output: str
    output_format: str = "json"
    api_key: str | None = None
    api_secret: str | None = None
    max_results: int | None = None
    rate_limit_requests: int = RATE_LIMIT_REQUESTS
    rate_limit_window: float = RATE_LIMIT_WINDOW
    http_retries: int = DEFAULT_HTTP_RETRIES
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    show_progress: bool = True

    def __post_init__(self) -> None:
        validate_runtime_constraints(
            output_format=self.output_format,
            max_results=self.max_results,
            rate_limit_requests=self.rate_limit_requests,
            rate_limit_window=self.rate_limit_window,
            http_retries=self.http_retries,
            request_timeout=self.request_timeout,
        )
