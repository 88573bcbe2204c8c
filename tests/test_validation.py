import logging
from pathlib import Path

import pytest

from tomba_finder.errors import ConfigError, InputError
from tomba_finder.models import LookupRequest
from tomba_finder.validation import (
    is_valid_request,
    load_json_file,
    parse_actor_input,
    validate_runtime_constraints,
)


def _valid_constraints(**overrides: object) -> dict[str, object]:
    values: dict[str, object] = {
        "output_format": "json",
        "max_results": None,
        "rate_limit_requests": 150,
        "rate_limit_window": 60.0,
        "http_retries": 0,
        "request_timeout": 15.0,
    }
    values.update(overrides)
    return values


def test_is_valid_request() -> None:
    assert is_valid_request(LookupRequest("example.com", "Jane", "Doe")) is True
    assert is_valid_request(LookupRequest("example.com", "Jane", "")) is False
    assert is_valid_request(LookupRequest("example.com", " ", "Doe")) is False
    assert is_valid_request(LookupRequest(None, "Jane", "Doe")) is False
    assert is_valid_request(LookupRequest("example.com", 42, "Doe")) is False


def test_lookup_request_from_mapping() -> None:
    request = LookupRequest.from_mapping({"domain": "a.com", "firstName": "A", "lastName": "B"})
    assert request == LookupRequest("a.com", "A", "B")
    assert LookupRequest.from_mapping("garbage") == LookupRequest()


def test_parse_actor_input_defaults_max_results() -> None:
    parsed = parse_actor_input(
        {
            "tombaApiKey": "k",
            "tombaApiSecret": "s",
            "requests": [{"domain": "a.com", "firstName": "A", "lastName": "B"}],
            "maxResults": 0,
        }
    )
    assert parsed.max_results == 50
    assert parsed.requests == (LookupRequest("a.com", "A", "B"),)


def test_parse_actor_input_checks_credentials_first() -> None:
    with pytest.raises(InputError, match="tombaApiKey"):
        parse_actor_input({"requests": []})


def test_parse_actor_input_rejects_bad_values() -> None:
    base = {"tombaApiKey": "k", "tombaApiSecret": "s"}
    with pytest.raises(InputError, match="requests array"):
        parse_actor_input(base)
    with pytest.raises(InputError, match="requests array"):
        parse_actor_input({**base, "requests": "not-a-list", "maxResults": 5})


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(10, 10), (10.0, 10), ("10", 10), (" 7 ", 7), ("3.0", 3), (None, 50), (0, 50), ("", 50)],
)
def test_max_results_accepts_integral_values(raw: object, expected: int) -> None:
    parsed = parse_actor_input(
        {"tombaApiKey": "k", "tombaApiSecret": "s", "requests": [{}], "maxResults": raw}
    )
    assert parsed.max_results == expected


@pytest.mark.parametrize("raw", [-1, -3.0, 2.5, "ten", "1e400", True, [5], {"n": 5}])
def test_invalid_max_results_falls_back_with_warning(
    raw: object, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING, logger="tomba_finder"):
        parsed = parse_actor_input(
            {"tombaApiKey": "k", "tombaApiSecret": "s", "requests": [{}], "maxResults": raw}
        )
    assert parsed.max_results == 50
    assert "Ignoring invalid maxResults" in caplog.text


def test_parse_actor_input_credential_fallback() -> None:
    parsed = parse_actor_input(
        {"requests": [{}]}, api_key="env_key", api_secret="env_secret", max_results=7
    )
    assert (parsed.api_key, parsed.api_secret, parsed.max_results) == (
        "env_key",
        "env_secret",
        7,
    )


def test_load_json_file(tmp_path: Path) -> None:
    sample = tmp_path / "input.json"
    sample.write_text('{"requests": []}', encoding="utf-8")
    assert load_json_file(str(sample)) == {"requests": []}

    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")
    with pytest.raises(InputError, match="not valid JSON"):
        load_json_file(str(broken))
    with pytest.raises(InputError, match="Cannot read"):
        load_json_file(str(tmp_path / "missing.json"))


@pytest.mark.parametrize(
    "overrides",
    [
        {"output_format": "xml"},
        {"max_results": 0},
        {"rate_limit_requests": 0},
        {"rate_limit_window": 0},
        {"http_retries": -1},
        {"request_timeout": 0},
    ],
)
def test_validate_runtime_constraints_rejects(overrides: dict[str, object]) -> None:
    with pytest.raises(ConfigError):
        validate_runtime_constraints(**_valid_constraints(**overrides))  # type: ignore[arg-type]


def test_validate_runtime_constraints_accepts_defaults() -> None:
    validate_runtime_constraints(**_valid_constraints())  # type: ignore[arg-type]
