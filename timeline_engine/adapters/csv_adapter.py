"""CSV adapter for task and project records."""

from __future__ import annotations

import csv

from timeline_engine.records import records_to_items
from timeline_engine.schema import Item


def _clean_row(row: dict) -> dict:
    cleaned = {}
    for key, value in row.items():
        if key is None:
            continue
        value = value.strip() if isinstance(value, str) else value
        cleaned[key.strip()] = value or None
    return cleaned


def parse(file_path: str, kind: str = "task") -> list[Item]:
    """Parse a CSV file with one record per row into timeline items."""

    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        rows = [_clean_row(row) for row in reader]
    return records_to_items(rows, kind=kind, label="Row", first=2)
