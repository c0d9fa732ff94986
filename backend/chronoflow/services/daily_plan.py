"""Daily plan builder and historical snapshots."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Mapping, MutableMapping, Optional, Sequence, Tuple

from chronoflow.models.activity import HOURS_PER_DAY, Activity
from chronoflow.services.applicability import activity_for_hour, applicable_activities
from chronoflow.services.calendar import date_key
from chronoflow.services.completion_index import CompletionIndex

logger = logging.getLogger(__name__)

SnapshotStore = MutableMapping[str, List[Activity]]


@dataclass
class DialSlot:
    hour: int
    activity_id: Optional[str]
    completed: bool


def is_past(day: date, today: date) -> bool:
    return day < today


def resolve_candidates(
    catalog: Iterable[Activity],
    day: date,
    today: date,
    snapshots: Mapping[str, List[Activity]],
) -> Tuple[List[Activity], bool]:
    """Activities planned for ``day`` and whether they came from a frozen snapshot."""
    if is_past(day, today):
        frozen = snapshots.get(date_key(day))
        if frozen is not None:
            return list(frozen), True
    return applicable_activities(catalog, day), False


def build_daily_plan(
    catalog: Iterable[Activity],
    day: date,
    today: date,
    snapshots: Mapping[str, List[Activity]],
    index: CompletionIndex,
) -> List[Activity]:
    """Plan for ``day`` with unfinished activities first.

    The sort is stable, so activities with the same status keep their catalog
    (or snapshot) order.
    """
    candidates, _ = resolve_candidates(catalog, day, today, snapshots)
    return sorted(candidates, key=lambda activity: index.is_activity_completed_on(activity, day))


def materialize_snapshot(
    catalog: Iterable[Activity],
    day: date,
    today: date,
    snapshots: SnapshotStore,
) -> bool:
    """Freeze the plan of a past day the first time it is viewed.

    Returns True only when a new snapshot was written. Existing snapshots are
    never replaced and nothing is frozen for today or later.
    """
    if not is_past(day, today):
        return False
    key = date_key(day)
    if key in snapshots:
        return False
    frozen = [activity.model_copy(deep=True) for activity in applicable_activities(catalog, day)]
    snapshots[key] = frozen
    logger.info("Froze plan for %s with %d activities", key, len(frozen))
    return True


def build_dial(plan: Sequence[Activity], day: date, index: CompletionIndex) -> List[DialSlot]:
    """One entry per hour of the 24-hour dial."""
    key = date_key(day)
    dial: List[DialSlot] = []
    for hour in range(HOURS_PER_DAY):
        owner = activity_for_hour(plan, hour)
        dial.append(
            DialSlot(
                hour=hour,
                activity_id=owner.id if owner else None,
                completed=index.is_slot_completed(key, hour),
            )
        )
    return dial


def plan_totals(plan: Sequence[Activity], day: date, index: CompletionIndex) -> Tuple[int, int]:
    """Planned and completed hours for the day's plan."""
    planned = sum(len(activity.slots) for activity in plan)
    completed = sum(len(index.completed_hours(activity, day)) for activity in plan)
    return planned, completed
