"""Validation and runtime guardrails."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .errors import ConfigError, InputError
from .logging_utils import get_logger
from .models import ActorInput, LookupRequest

DEFAULT_MAX_RESULTS = 50
OUTPUT_FORMATS = ("json", "csv")


def _present(value: object) -> bool:
    return isinstance(value, str) and bool(value.strip())


def is_valid_request(request: LookupRequest) -> bool:
    """Return True when domain, first name and last name are all non-blank strings."""
    return (
        _present(request.domain) and _present(request.first_name) and _present(request.last_name)
    )


def coerce_max_results(value: object, *, logger: logging.Logger | None = None) -> int:
    """Turn an input ``maxResults`` into a positive cap.

    Unset or zero values use the default. Integral floats and numeric strings
    are accepted; anything else logs a warning and uses the default.
    """
    if value in (None, 0, ""):
        return DEFAULT_MAX_RESULTS
    number: float | None = None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            number = None
    if number is not None and number >= 1 and float(number).is_integer():
        return int(number)
    (logger or get_logger()).warning(
        "Ignoring invalid maxResults %r; using %d", value, DEFAULT_MAX_RESULTS
    )
    return DEFAULT_MAX_RESULTS


def parse_actor_input(
    raw: object,
    *,
    api_key: str | None = None,
    api_secret: str | None = None,
    max_results: int | None = None,
    logger: logging.Logger | None = None,
) -> ActorInput:
    """Validate the host input object and raise InputError on fatal problems.

    ``api_key`` and ``api_secret`` fill in credentials missing from the input.
    Credentials are checked before the request list. A ``max_results`` argument
    takes precedence over the input's ``maxResults``, which never aborts the run.
    """
    payload: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
    key = payload.get("tombaApiKey") or api_key
    secret = payload.get("tombaApiSecret") or api_secret
    if not key or not secret:
        raise InputError(
            "Missing required parameters: tombaApiKey and tombaApiSecret are required"
        )

    requests = payload.get("requests")
    if not isinstance(requests, list) or not requests:
        raise InputError(
            "Missing required parameter: requests array is required and must not be empty"
        )

    if max_results is None:
        max_results = coerce_max_results(payload.get("maxResults"), logger=logger)

    return ActorInput(
        api_key=str(key),
        api_secret=str(secret),
        requests=tuple(LookupRequest.from_mapping(item) for item in requests),
        max_results=max_results,
    )


def load_json_file(path: str) -> Any:
    """Load a UTF-8 JSON document and raise InputError when it is unreadable."""
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise InputError(f"Cannot read input file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise InputError(f"Input file {path} is not valid JSON: {exc}") from exc


def validate_runtime_constraints(
    *,
    output_format: str,
    max_results: int | None,
    rate_limit_requests: int,
    rate_limit_window: float,
    http_retries: int,
    request_timeout: float,
) -> None:
    """Validate CLI/runtime configuration and raise ConfigError on invalid values."""
    if output_format not in OUTPUT_FORMATS:
        raise ConfigError(f"--format must be one of: {', '.join(OUTPUT_FORMATS)}.")
    if max_results is not None and max_results < 1:
        raise ConfigError("--max-results must be >= 1.")
    if rate_limit_requests < 1:
        raise ConfigError("--rate-limit must be >= 1.")
    if rate_limit_window <= 0:
        raise ConfigError("--rate-window must be > 0.")
    if http_retries < 0:
        raise ConfigError("--http-retries must be >= 0.")
    if request_timeout <= 0:
        raise ConfigError("--timeout must be > 0.")
