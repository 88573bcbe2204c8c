"""Core orchestration pipeline."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence

from tqdm import tqdm

from .config import FinderConfig
from .errors import FinderError
from .host import LocalActorHost
from .models import (
    ActorHost,
    BatchOutcome,
    Closable,
    BatchSummary,
    EmailFinder,
    ErrorRecord,
    FoundRecord,
    LookupRequest,
    ResultRecord,
)
from .rate_limiter import RateLimiter
from .tomba import TombaClient, make_retry_session
from .validation import DEFAULT_MAX_RESULTS, is_valid_request, parse_actor_input

MISSING_FIELDS_ERROR = "Missing required fields: domain, firstName, and lastName are required"
NOT_FOUND_ERROR = "No email found for this person"
UNKNOWN_ERROR = "Unknown error"

FinderFactory = Callable[[str, str], EmailFinder]


def process_batch(
    requests: Sequence[LookupRequest],
    max_results: int = DEFAULT_MAX_RESULTS,
    *,
    finder: EmailFinder,
    limiter: RateLimiter,
    logger: logging.Logger,
    show_progress: bool = False,
) -> BatchOutcome:
    """Look up every request in order through the limiter, one at a time.

    Invalid requests and failed remote calls become error records without
    consuming the ``max_results`` cap; found and not-found lookups consume it.
    """
    outcome = BatchOutcome()
    iterator: Iterable[LookupRequest] = requests
    if show_progress:
        iterator = tqdm(requests, total=len(requests), desc="finding emails")

    for request in iterator:
        if outcome.processed_count >= max_results:
            logger.info("Reached maximum results limit: %d", max_results)
            break

        if not is_valid_request(request):
            logger.info(
                "Skipping invalid request: domain=%s, firstName=%s, lastName=%s",
                request.domain,
                request.first_name,
                request.last_name,
            )
            outcome.results.append(ErrorRecord(request, MISSING_FIELDS_ERROR))
            continue

        domain, first_name, last_name = request.domain, request.first_name, request.last_name
        logger.info("Finding email for: %s %s at %s", first_name, last_name, domain)
        try:
            payload = limiter.schedule(
                lambda: finder.email_finder(domain, first_name, last_name)
            )
        except Exception as exc:
            logger.warning(
                "Error processing request for %s %s at %s: %s",
                first_name,
                last_name,
                domain,
                exc,
            )
            outcome.results.append(ErrorRecord(request, str(exc) or UNKNOWN_ERROR))
            continue

        data = payload.get("data") if isinstance(payload, Mapping) else None
        if isinstance(data, Mapping) and data:
            found = FoundRecord(request, dict(data))
            logger.info(
                "Found email for: %s %s - %s",
                first_name,
                last_name,
                found.email or "No email found",
            )
            outcome.results.append(found)
        else:
            outcome.results.append(ErrorRecord(request, NOT_FOUND_ERROR))
        outcome.processed_count += 1

    return outcome


def summarize(total_requests: int, results: Sequence[ResultRecord]) -> BatchSummary:
    """Tally records into successes and failures."""
    failed = sum(1 for record in results if record.error is not None)
    return BatchSummary(total=total_requests, succeeded=len(results) - failed, failed=failed)


def log_summary(summary: BatchSummary, logger: logging.Logger) -> None:
    logger.info("=== SUMMARY ===")
    logger.info("Total requests processed: %d", summary.total)
    logger.info("Successful email finds: %d", summary.succeeded)
    logger.info("Failed email finds: %d", summary.failed)


def run_actor(
    host: ActorHost,
    *,
    finder_factory: FinderFactory,
    limiter: RateLimiter,
    logger: logging.Logger,
    api_key: str | None = None,
    api_secret: str | None = None,
    max_results: int | None = None,
    show_progress: bool = False,
) -> BatchSummary:
    """Read input from the host, run the batch, and push the records back.

    Input problems abort the run before any lookup and before any output.
    """
    try:
        actor_input = parse_actor_input(
            host.get_input(),
            api_key=api_key,
            api_secret=api_secret,
            max_results=max_results,
            logger=logger,
        )
    except FinderError as exc:
        logger.error("Actor failed: %s", exc)
        raise

    logger.info("Starting Tomba email finder for %d requests", len(actor_input.requests))
    finder = finder_factory(actor_input.api_key, actor_input.api_secret)
    try:
        outcome = process_batch(
            actor_input.requests,
            actor_input.max_results,
            finder=finder,
            limiter=limiter,
            logger=logger,
            show_progress=show_progress,
        )
    finally:
        if isinstance(finder, Closable):
            finder.close()

    if outcome.results:
        host.push_data(outcome.to_dicts())

    summary = summarize(len(actor_input.requests), outcome.results)
    log_summary(summary, logger)
    return summary


def run_pipeline(config: FinderConfig, *, logger: logging.Logger) -> BatchSummary:
    """Build concrete dependencies, execute the run, and write the dataset."""
    session = make_retry_session(config.user_agent, retries=config.http_retries)
    host = LocalActorHost(
        input_path=config.input_path,
        output=config.output,
        output_format=config.output_format,
    )
    limiter = RateLimiter(
        config.rate_limit_requests, config.rate_limit_window, logger=logger
    )

    def finder_factory(api_key: str, api_secret: str) -> EmailFinder:
        return TombaClient(
            session=session,
            api_key=api_key,
            api_secret=api_secret,
            timeout=config.request_timeout,
            logger=logger,
        )

    return run_actor(
        host,
        finder_factory=finder_factory,
        limiter=limiter,
        logger=logger,
        api_key=config.api_key,
        api_secret=config.api_secret,
        max_results=config.max_results,
        show_progress=config.show_progress,
    )
