"""Tomba API client."""

from __future__ import annotations

import logging
from typing import Any

from requests import Response, Session
from requests.adapters import HTTPAdapter
from requests.exceptions import RequestException
from urllib3.util.retry import Retry

from .config import TOMBA_API_BASE
from .errors import ProviderError


def make_retry_session(user_agent: str, retries: int = 0) -> Session:
    """Create requests session with retry/backoff defaults."""
    session = Session()
    session.headers.update({"User-Agent": user_agent, "Accept": "application/json"})
    retry = Retry(
        total=retries,
        backoff_factor=0.6,
        status_forcelist=[500, 502, 503, 504],
        allowed_methods=frozenset({"GET"}),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def _error_message(response: Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        errors = payload.get("errors") or payload.get("error")
        if isinstance(errors, dict) and errors.get("message"):
            return str(errors["message"])
        if isinstance(errors, str) and errors:
            return errors
        if payload.get("message"):
            return str(payload["message"])
    return f"Tomba API returned HTTP {response.status_code}"


class TombaClient:
    """Lightweight Tomba API wrapper for the email-finder endpoint."""

    def __init__(
        self,
        *,
        session: Session,
        api_key: str,
        api_secret: str,
        timeout: float,
        logger: logging.Logger,
        base_url: str = TOMBA_API_BASE,
    ) -> None:
        self._session = session
        self._timeout = timeout
        self._logger = logger
        self._base_url = base_url.rstrip("/")
        self._headers = {"X-Tomba-Key": api_key, "X-Tomba-Secret": api_secret}

    def email_finder(self, domain: str, first_name: str, last_name: str) -> dict[str, Any]:
        """Find the most likely email for a person at a domain.

        Returns the decoded payload; the person is under ``data`` and is empty
        when Tomba has no match. Raises ProviderError on any failure.
        """
        params = {"domain": domain, "first_name": first_name, "last_name": last_name}
        try:
            response = self._session.get(
                f"{self._base_url}/email-finder",
                params=params,
                headers=self._headers,
                timeout=self._timeout,
            )
        except RequestException as exc:
            self._logger.debug("Tomba email-finder failed for %s: %s", domain, exc)
            raise ProviderError(str(exc)) from exc

        if response.status_code >= 400:
            raise ProviderError(_error_message(response))
        try:
            payload = response.json()
        except ValueError as exc:
            raise ProviderError("Tomba API returned a non-JSON response") from exc
        if not isinstance(payload, dict):
            raise ProviderError("Tomba API returned an unexpected payload")
        return payload

    def close(self) -> None:
        self._session.close()
