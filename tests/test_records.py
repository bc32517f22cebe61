from datetime import datetime

import pytest

from timeline_engine.records import (
    COMPLETED,
    filter_for_granularity,
    parse_instant,
    project_to_item,
    records_to_items,
    task_to_item,
)
from timeline_engine.schema import Granularity, Item


def test_parse_instant_variants():
    assert parse_instant("2025-01-15") == datetime(2025, 1, 15)
    assert parse_instant("2025-01-15T08:30:00") == datetime(2025, 1, 15, 8, 30)
    assert parse_instant("2025-01-15T08:30:00Z").tzinfo is None
    assert parse_instant(datetime(2025, 1, 15)) == datetime(2025, 1, 15)
    assert parse_instant("not a date") is None
    assert parse_instant("") is None
    assert parse_instant(None) is None


def test_task_to_item_progress_rules():
    base = {"id": 7, "title": "Write docs", "startDate": "2025-01-01", "dueDate": "2025-01-05"}

    assert task_to_item({**base, "status": COMPLETED, "points": 2}).progress == 100.0
    assert task_to_item({**base, "status": "Under Review", "points": 2}).progress == 20.0
    assert task_to_item({**base, "points": 4}).progress == 40.0
    assert task_to_item({**base, "points": 25}).progress == 100.0
    assert task_to_item(base).progress == 0.0

    item = task_to_item(base)
    assert item.id == "Task-7"
    assert item.label == "Write docs"
    assert item.start == datetime(2025, 1, 1)
    assert item.end == datetime(2025, 1, 5)


def test_task_to_item_skips_unusable_dates():
    assert task_to_item({"id": 1, "startDate": "2025-01-01"}) is None
    assert task_to_item({"id": 1, "startDate": "bad", "dueDate": "2025-01-05"}) is None
    assert task_to_item({"id": 1, "startDate": "2025-01-01", "dueDate": "2025-01-02"}).label == "Untitled Task"


def test_task_to_item_rejects_bad_points():
    with pytest.raises(ValueError):
        task_to_item({"id": 1, "startDate": "2025-01-01", "dueDate": "2025-01-02", "points": "many"})


def test_project_to_item_extends_empty_range():
    item = project_to_item({"id": 3, "name": "Apollo", "startDate": "2025-03-01", "endDate": "2025-02-01"})
    assert item.id == "Project-3"
    assert item.end == datetime(2025, 3, 2)
    assert item.progress == 50.0
    assert project_to_item({"id": 3, "name": "Apollo", "startDate": "2025-03-01"}) is None


def test_records_to_items_errors_carry_position():
    records = [
        {"id": 1, "startDate": "2025-01-01", "dueDate": "2025-01-02"},
        {"title": "no id"},
    ]
    with pytest.raises(ValueError, match="Item 2"):
        records_to_items(records)

    with pytest.raises(ValueError, match="Row 2: invalid points"):
        records_to_items([{"id": 1, "startDate": "2025-01-01", "dueDate": "2025-01-02", "points": "x"}], label="Row", first=2)

    with pytest.raises(ValueError):
        records_to_items([], kind="team")


def test_records_to_items_skips_missing_dates():
    records = [
        {"id": 1, "startDate": "2025-01-01", "dueDate": "2025-01-02"},
        {"id": 2, "startDate": None, "dueDate": "2025-01-02"},
    ]
    items = records_to_items(records)
    assert [item.id for item in items] == ["Task-1"]


def test_day_view_filter_is_caller_side():
    items = [
        Item("a", "Span", datetime(2025, 1, 1), datetime(2025, 1, 3)),
        Item("b", "Instant", datetime(2025, 1, 1), datetime(2025, 1, 1)),
        Item("c", "Reversed", datetime(2025, 1, 5), datetime(2025, 1, 1)),
    ]
    assert [item.id for item in filter_for_granularity(items, Granularity.DAY)] == ["a"]
    assert len(filter_for_granularity(items, Granularity.WEEK)) == 3
    assert len(filter_for_granularity(items, "month")) == 3
