from __future__ import annotations

import pytest
from pydantic import ValidationError

from chronoflow.models import ALL_DAYS, Activity, CompletedSlot, migrate_activity


def test_legacy_record_without_recurrence_fields_becomes_daily() -> None:
    activity = migrate_activity({"id": "1", "name": "Sleep", "icon": "😴", "color": "#8b5cf6", "slots": [0, 1]})

    assert activity.is_recurring is True
    assert activity.days == list(ALL_DAYS)
    assert activity.is_archived is False
    assert activity.specific_date is None


def test_null_fields_take_defaults() -> None:
    activity = migrate_activity({"id": "x", "isRecurring": None, "days": None, "slots": None, "isArchived": None})

    assert activity.is_recurring is True
    assert activity.days == list(ALL_DAYS)
    assert activity.slots == []
    assert activity.is_archived is False


def test_camel_case_single_date_record() -> None:
    activity = migrate_activity({"id": "b", "slots": [20], "isRecurring": False, "specificDate": "2024-03-15"})

    assert activity.is_recurring is False
    assert activity.specific_date == "2024-03-15"


def test_slots_and_days_are_deduplicated_and_sorted() -> None:
    activity = Activity(id="a", slots=[8, 7, 7], days=[5, 1, 1])

    assert activity.slots == [7, 8]
    assert activity.days == [1, 5]


@pytest.mark.parametrize("field,value", [("slots", [24]), ("slots", [-1]), ("days", [7])])
def test_out_of_range_values_are_rejected(field, value) -> None:
    with pytest.raises(ValidationError):
        Activity.model_validate({"id": "a", field: value})


def test_numeric_id_and_non_positive_reminder_are_normalized() -> None:
    activity = migrate_activity({"id": 5, "reminderMinutes": 0})

    assert activity.id == "5"
    assert activity.reminder_minutes is None


def test_migrate_returns_existing_activity_untouched() -> None:
    activity = Activity(id="a")
    assert migrate_activity(activity) is activity


def test_record_uses_stored_camel_case_shape() -> None:
    record = Activity(id="a", slots=[7], is_recurring=False, specific_date="2024-01-01").to_record()

    assert record["isRecurring"] is False
    assert record["specificDate"] == "2024-01-01"
    assert migrate_activity(record) == Activity(id="a", slots=[7], is_recurring=False, specific_date="2024-01-01")


def test_completed_slot_hour_bounds() -> None:
    assert CompletedSlot(date="2024-01-01", hour=23).hour == 23
    with pytest.raises(ValidationError):
        CompletedSlot(date="2024-01-01", hour=24)
