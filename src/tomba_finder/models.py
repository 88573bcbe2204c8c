"""Protocols and lightweight model types."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, Union, runtime_checkable

SOURCE_TAG = "tomba_email_finder"


class EmailFinder(Protocol):
    """Contract for the remote email lookup capability."""

    def email_finder(self, domain: str, first_name: str, last_name: str) -> dict[str, Any]:
        """Return the provider payload; a found person lives under ``data``."""


class ActorHost(Protocol):
    """Contract for the runtime that supplies input and stores output."""

    def get_input(self) -> Any:
        """Return the raw actor input object."""

    def push_data(self, records: list[dict[str, Any]]) -> None:
        """Persist output records."""


@runtime_checkable
class Closable(Protocol):
    """Optional close contract for resources."""

    def close(self) -> None:
        """Release associated resources."""


@dataclass(frozen=True)
class LookupRequest:
    """One (domain, first name, last name) triple from the input batch."""

    domain: Any = None
    first_name: Any = None
    last_name: Any = None

    @classmethod
    def from_mapping(cls, raw: object) -> LookupRequest:
        if not isinstance(raw, Mapping):
            return cls()
        return cls(
            domain=raw.get("domain"),
            first_name=raw.get("firstName"),
            last_name=raw.get("lastName"),
        )

    def identity(self) -> dict[str, Any]:
        return {"domain": self.domain, "firstName": self.first_name, "lastName": self.last_name}


@dataclass(frozen=True)
class FoundRecord:
    """Provider data for a request that returned a person."""

    request: LookupRequest
    data: Mapping[str, Any]

    @property
    def error(self) -> None:
        return None

    @property
    def email(self) -> str | None:
        value = self.data.get("email")
        return value if isinstance(value, str) and value else None

    def to_dict(self) -> dict[str, Any]:
        data = {key: value for key, value in self.data.items() if key != "error"}
        return {**data, **self.request.identity(), "source": SOURCE_TAG}


@dataclass(frozen=True)
class ErrorRecord:
    """Outcome for a request that was invalid, not found, or failed."""

    request: LookupRequest
    error: str

    def to_dict(self) -> dict[str, Any]:
        return {**self.request.identity(), "error": self.error, "source": SOURCE_TAG}


ResultRecord = Union[FoundRecord, ErrorRecord]


@dataclass(frozen=True)
class ActorInput:
    """Validated actor input."""

    api_key: str
    api_secret: str
    requests: tuple[LookupRequest, ...]
    max_results: int


@dataclass
class BatchOutcome:
    """Records accumulated by one batch run."""

    results: list[ResultRecord] = field(default_factory=list)
    processed_count: int = 0

    def to_dicts(self) -> list[dict[str, Any]]:
        return [record.to_dict() for record in self.results]


@dataclass(frozen=True)
class BatchSummary:
    """Operator-facing tally for a finished run."""

    total: int
    succeeded: int
    failed: int
