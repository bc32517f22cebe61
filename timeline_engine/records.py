"""Conversion of task and project records into timeline items."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any, Iterable, Optional

from timeline_engine.schema import Granularity, Item

logger = logging.getLogger(__name__)

STATUSES = ("To Do", "Work In Progress", "Under Review", "Completed")
COMPLETED = STATUSES[-1]

_KINDS = ("task", "project")


def parse_instant(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string or datetime into a naive local datetime.

    Returns None for missing or unparsable values; filtering those out is
    the caller's job.
    """

    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _task_progress(record: dict) -> float:
    if record.get("status") == COMPLETED:
        return 100.0

    points = record.get("points")
    if points in (None, ""):
        return 0.0
    try:
        value = float(points)
    except (TypeError, ValueError) as exc:
        raise ValueError("invalid points") from exc
    if not value:
        return 0.0
    return min(value / 10.0 * 100.0, 100.0)


def task_to_item(record: dict) -> Optional[Item]:
    """Build a timeline item from a task record, or None when its dates are unusable."""

    start = parse_instant(record.get("startDate"))
    end = parse_instant(record.get("dueDate"))
    if start is None or end is None:
        return None

    return Item(
        id=f"Task-{record['id']}",
        label=str(record.get("title") or "Untitled Task"),
        start=start,
        end=end,
        progress=_task_progress(record),
    )


def project_to_item(record: dict) -> Optional[Item]:
    """Build a timeline item from a project record; a non-positive range becomes one day."""

    start = parse_instant(record.get("startDate"))
    end = parse_instant(record.get("endDate"))
    if start is None or end is None:
        return None

    if end <= start:
        end = start + timedelta(days=1)

    return Item(
        id=f"Project-{record['id']}",
        label=str(record.get("name") or "Untitled Project"),
        start=start,
        end=end,
        progress=50.0,
    )


def records_to_items(records: Iterable[Any], kind: str = "task", label: str = "Item", first: int = 1) -> list[Item]:
    """Convert raw records, skipping those without usable dates."""

    if kind not in _KINDS:
        raise ValueError(f"Unsupported record kind '{kind}', expected one of {list(_KINDS)}")
    convert = task_to_item if kind == "task" else project_to_item

    items: list[Item] = []
    for index, record in enumerate(records, start=first):
        if not isinstance(record, dict):
            raise ValueError(f"{label} {index}: expected an object")
        if record.get("id") in (None, ""):
            raise ValueError(f"{label} {index}: missing required field 'id'")

        try:
            item = convert(record)
        except ValueError as exc:
            raise ValueError(f"{label} {index}: {exc}") from exc

        if item is None:
            logger.debug("%s %d: skipping %s %s without valid dates", label, index, kind, record.get("id"))
            continue
        items.append(item)
    return items


def suitable_for_day_view(item: Item) -> bool:
    return item.end > item.start


def filter_for_granularity(items: Iterable[Item], granularity: Granularity) -> list[Item]:
    """Drop items the day view cannot show; other views keep everything."""

    items = list(items)
    if Granularity(granularity) is not Granularity.DAY:
        return items
    kept = [item for item in items if suitable_for_day_view(item)]
    if len(kept) != len(items):
        logger.info("Day view hides %d of %d items with no duration", len(items) - len(kept), len(items))
    return kept
