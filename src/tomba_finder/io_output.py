"""Dataset serialization helpers."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any

LEADING_FIELDS = ["domain", "firstName", "lastName", "source", "error", "email"]


def csv_fields(records: list[dict[str, Any]]) -> list[str]:
    """Return a stable header: identity fields first, provider fields sorted after."""
    seen = {key for record in records for key in record}
    leading = [name for name in LEADING_FIELDS if name in seen]
    return leading + sorted(seen.difference(leading))


def _csv_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, sort_keys=True)
    return str(value)


def write_csv(path: str, records: list[dict[str, Any]]) -> None:
    """Write result records to CSV; nested provider values are JSON-encoded."""
    output_path = Path(path)
    fields = csv_fields(records)
    with output_path.open("w", newline="", encoding="utf-8") as file_obj:
        writer = csv.DictWriter(file_obj, fieldnames=fields)
        writer.writeheader()
        for record in records:
            writer.writerow({key: _csv_value(record.get(key)) for key in fields})


def write_json(path: str, records: list[dict[str, Any]]) -> None:
    """Write result records as a JSON array."""
    output_path = Path(path)
    with output_path.open("w", encoding="utf-8") as file_obj:
        json.dump(records, file_obj, ensure_ascii=False, indent=2)
        file_obj.write("\n")


WRITERS = {"json": write_json, "csv": write_csv}
