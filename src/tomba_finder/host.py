"""Local stand-in for the actor runtime: JSON input file in, dataset file out."""

from __future__ import annotations

from typing import Any

from .io_output import WRITERS
from .validation import load_json_file


class LocalActorHost:
    """Reads actor input from disk and writes pushed records to one dataset file.

    Records pushed more than once in a run are appended to the same dataset.
    """

    def __init__(self, *, input_path: str, output: str, output_format: str = "json") -> None:
        self._input_path = input_path
        self._output = output
        self._writer = WRITERS[output_format]
        self._records: list[dict[str, Any]] = []

    @property
    def output(self) -> str:
        return self._output

    @property
    def pushed_count(self) -> int:
        return len(self._records)

    def get_input(self) -> Any:
        return load_json_file(self._input_path)

    def push_data(self, records: list[dict[str, Any]]) -> None:
        self._records.extend(records)
        self._writer(self._output, self._records)
