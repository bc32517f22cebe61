"""JSON adapter for task and project records."""

from __future__ import annotations

import json

from timeline_engine.records import records_to_items
from timeline_engine.schema import Item


def parse(file_path: str, kind: str = "task") -> list[Item]:
    """Parse a JSON list of task or project records into timeline items."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    return records_to_items(payload, kind=kind, label="Item", first=1)
