"""Activity catalog edits and completed-slot toggling."""
from __future__ import annotations

import logging
from datetime import date
from typing import List, Sequence, Tuple
from uuid import uuid4

from chronoflow.models.activity import HOURS_PER_DAY, Activity, CompletedSlot
from chronoflow.services.calendar import parse_date_key

logger = logging.getLogger(__name__)


class ActivityNotFoundError(ValueError):
    """Raised when an activity id is not in the catalog."""


class InvalidSlotError(ValueError):
    """Raised for a malformed date key or an hour outside the dial."""


class PastDateLockedError(ValueError):
    """Raised when toggling a slot on a day that is already over."""


def default_activities() -> List[Activity]:
    """Seed catalog for a user who has never saved one."""
    return [
        Activity(id="1", name="Sleep", icon="😴", color="#8b5cf6", slots=[0, 1, 2, 3, 4, 5]),
        Activity(id="2", name="Work", icon="💼", color="#3b82f6", slots=[9, 10, 11, 12, 13, 14, 15, 16]),
        Activity(id="3", name="Sport", icon="🏃", color="#10b981", slots=[17]),
        Activity(id="4", name="Reading", icon="📚", color="#6366f1", slots=[18, 19, 20]),
        Activity(id="5", name="Chores", icon="🧹", color="#64748b", slots=[7, 8]),
        Activity(id="6", name="Faith", icon="🧘", color="#ef4444", slots=[6, 21, 22, 23]),
    ]


def new_activity_id() -> str:
    return uuid4().hex


def find_activity(catalog: Sequence[Activity], activity_id: str) -> Activity:
    for activity in catalog:
        if activity.id == activity_id:
            return activity
    raise ActivityNotFoundError(f"Activity {activity_id} not found")


def save_activity(catalog: Sequence[Activity], activity: Activity) -> List[Activity]:
    """Replace the activity with the same id, or append it."""
    if any(existing.id == activity.id for existing in catalog):
        return [activity if existing.id == activity.id else existing for existing in catalog]
    return [*catalog, activity]


def _set_archived(catalog: Sequence[Activity], activity_id: str, archived: bool) -> List[Activity]:
    find_activity(catalog, activity_id)
    return [
        existing.model_copy(update={"is_archived": archived}) if existing.id == activity_id else existing
        for existing in catalog
    ]


def archive_activity(catalog: Sequence[Activity], activity_id: str) -> List[Activity]:
    return _set_archived(catalog, activity_id, True)


def unarchive_activity(catalog: Sequence[Activity], activity_id: str) -> List[Activity]:
    return _set_archived(catalog, activity_id, False)


def delete_activity(catalog: Sequence[Activity], activity_id: str) -> List[Activity]:
    find_activity(catalog, activity_id)
    return [existing for existing in catalog if existing.id != activity_id]


def toggle_slot(
    log: Sequence[CompletedSlot],
    day_key: str,
    hour: int,
    *,
    today: date,
    allow_past: bool = False,
) -> Tuple[List[CompletedSlot], bool]:
    """Flip one (date, hour) entry in the log.

    Returns the new log and whether the slot is now completed. Every matching
    entry is removed when un-completing, so a log with stray duplicates heals.
    """
    day = parse_date_key(day_key)
    if day is None:
        raise InvalidSlotError(f"Invalid date key {day_key!r}; expected yyyy-MM-dd")
    if not 0 <= hour < HOURS_PER_DAY:
        raise InvalidSlotError(f"Hour {hour} is outside 0..{HOURS_PER_DAY - 1}")
    if day < today and not allow_past:
        raise PastDateLockedError(f"{day_key} is in the past and can no longer be edited")

    remaining = [slot for slot in log if not (slot.date == day_key and slot.hour == hour)]
    if len(remaining) != len(log):
        logger.debug("Slot %s %02dh un-completed", day_key, hour)
        return remaining, False
    logger.debug("Slot %s %02dh completed", day_key, hour)
    return [*log, CompletedSlot(date=day_key, hour=hour)], True
