# tests/test_normalize.py

from __future__ import annotations

import math

import pytest

from roi_tasks.tasks.normalize import normalize_tasks, to_number
from roi_tasks.tasks.task_models import TaskPriority, TaskStatus

from .fakes import FIXED_NOW


def test_non_list_input_yields_empty() -> None:
    assert normalize_tasks(None) == []
    assert normalize_tasks({"id": "a"}) == []
    assert normalize_tasks("tasks") == []


def test_every_record_maps_to_one_task_with_unique_ids() -> None:
    raw = [{"id": "x"}, {"id": "x"}, {"id": ""}, {"id": 7}, 42, None, {"id": "y"}]
    tasks = normalize_tasks(raw, now=FIXED_NOW)

    assert len(tasks) == len(raw)
    ids = [t.id for t in tasks]
    assert len(set(ids)) == len(ids)
    assert ids[0] == "x"
    assert ids[1] != "x"
    assert ids[-1] == "y"


def test_numeric_fields_are_coerced_to_defaults() -> None:
    raw = [
        {"revenue": -5, "timeTaken": 0},
        {"revenue": "abc", "timeTaken": "-3"},
        {"revenue": "12.5", "timeTaken": "2"},
        {"revenue": None, "timeTaken": None},
        {"revenue": float("inf"), "timeTaken": float("nan")},
        {},
    ]
    tasks = normalize_tasks(raw, now=FIXED_NOW)

    assert [t.revenue for t in tasks] == [0, 0, 12.5, 0, 0, 0]
    assert [t.time_taken for t in tasks] == [1, 1, 2, 1, 1, 1]


def test_titles_priority_notes_defaults() -> None:
    raw = [
        {"title": "  Call Acme  ", "priority": "High", "notes": "hot lead"},
        {"title": "   ", "priority": "high"},
        {"title": 123, "priority": None, "notes": None},
    ]
    tasks = normalize_tasks(raw, now=FIXED_NOW)

    assert [t.title for t in tasks] == ["Call Acme", "Untitled 2", "Untitled 3"]
    assert [t.priority for t in tasks] == [TaskPriority.HIGH, TaskPriority.MEDIUM, TaskPriority.MEDIUM]
    assert [t.notes for t in tasks] == ["hot lead", "", ""]


def test_missing_created_at_is_one_day_older_per_index() -> None:
    tasks = normalize_tasks([{}, {}, {"createdAt": "yesterday"}], now=FIXED_NOW)

    assert tasks[0].created_at == "2024-05-31T12:00:00.000Z"
    assert tasks[1].created_at == "2024-05-30T12:00:00.000Z"
    assert tasks[2].created_at == "2024-05-29T12:00:00.000Z"
    assert tasks[0].created_at > tasks[1].created_at > tasks[2].created_at


def test_explicit_timestamps_are_canonicalized() -> None:
    tasks = normalize_tasks(
        [
            {"createdAt": "2024-01-02T03:04:05Z"},
            {"created_at": 0},
            {"createdAt": "2024-01-02T05:04:05+02:00", "completedAt": "2024-01-03T00:00:00.250Z"},
        ],
        now=FIXED_NOW,
    )

    assert tasks[0].created_at == "2024-01-02T03:04:05.000Z"
    assert tasks[1].created_at == "1970-01-01T00:00:00.000Z"
    assert tasks[2].created_at == "2024-01-02T03:04:05.000Z"
    assert tasks[2].completed_at == "2024-01-03T00:00:00.250Z"


@pytest.mark.parametrize(
    "stamp",
    ["0001-01-01T00:00:00+05:00", "9999-12-31T23:00:00-05:00"],
)
def test_out_of_range_offsets_count_as_missing(stamp: str) -> None:
    tasks = normalize_tasks(
        [
            {"createdAt": stamp},
            {"status": "Done", "createdAt": "2024-01-02T03:04:05Z", "completedAt": stamp},
        ],
        now=FIXED_NOW,
    )

    assert tasks[0].created_at == "2024-05-31T12:00:00.000Z"
    assert tasks[1].completed_at == "2024-01-03T03:04:05.000Z"


def test_done_without_completed_at_gets_created_plus_one_day() -> None:
    tasks = normalize_tasks(
        [
            {"status": "Done", "createdAt": "2024-01-02T03:04:05.000Z"},
            {"status": "Todo"},
        ],
        now=FIXED_NOW,
    )

    assert tasks[0].status == TaskStatus.DONE
    assert tasks[0].completed_at == "2024-01-03T03:04:05.000Z"
    assert tasks[1].completed_at is None


@pytest.mark.parametrize(
    ("raw_status", "strict", "expected"),
    [
        ("InProgress", True, TaskStatus.IN_PROGRESS),
        (None, True, TaskStatus.TODO),
        ("Blocked", True, TaskStatus.TODO),
        ("Blocked", False, "Blocked"),
        (None, False, TaskStatus.TODO),
    ],
)
def test_status_policy(raw_status, strict: bool, expected) -> None:
    (task,) = normalize_tasks([{"status": raw_status}], now=FIXED_NOW, strict_status=strict)
    assert task.status == expected


def test_input_is_not_mutated() -> None:
    raw = [{"id": "a", "title": " padded ", "revenue": "-1"}]
    normalize_tasks(raw, now=FIXED_NOW)
    assert raw == [{"id": "a", "title": " padded ", "revenue": "-1"}]


def test_to_number_loose_coercion() -> None:
    assert to_number(None) == 0
    assert to_number("") == 0
    assert to_number(" 4 ") == 4
    assert to_number(True) == 1
    assert math.isnan(to_number("1_000"))
    assert math.isnan(to_number([1]))


def test_to_number_radix_literals() -> None:
    assert to_number("0x10") == 16
    assert to_number("0B101") == 5
    assert to_number("0o17") == 15
    assert math.isnan(to_number("0x"))
    assert math.isnan(to_number("0x-1"))
    assert math.isnan(to_number("0xZZ"))
