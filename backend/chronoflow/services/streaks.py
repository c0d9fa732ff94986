"""Current and longest completion streaks per activity.

A streak counts consecutive *scheduled* days on which every slot of the
activity was completed. Days on which the activity is not scheduled are
transparent: they neither extend nor break a streak. The reference day is
still in progress, so leaving it unfinished does not break the streak either.

Single-date activities have nothing before their date, so the backward walk
stops there instead of skipping on through the lookback window.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Iterable, Mapping

from chronoflow.models.activity import Activity, CompletedSlot
from chronoflow.models.streak import StreakRecord
from chronoflow.services.applicability import is_applicable, specific_day
from chronoflow.services.calendar import add_days
from chronoflow.services.completion_index import CompletionIndex

logger = logging.getLogger(__name__)

DEFAULT_LOOKBACK_DAYS = 365
DEFAULT_HISTORY_DAYS = 3650


def _never_completable(activity: Activity) -> bool:
    return activity.is_archived or not activity.slots


def current_streak(
    activity: Activity,
    index: CompletionIndex,
    reference_date: date,
    lookback_days: int = DEFAULT_LOOKBACK_DAYS,
) -> int:
    """Walk back from ``reference_date`` for at most ``lookback_days`` days."""
    if _never_completable(activity):
        return 0

    floor = None
    if not activity.is_recurring:
        floor = specific_day(activity)
        if floor is None:
            return 0

    streak = 0
    day = reference_date
    for _ in range(max(lookback_days, 0)):
        if floor is not None and day < floor:
            break
        if is_applicable(activity, day):
            if index.is_activity_completed_on(activity, day):
                streak += 1
            elif day != reference_date:
                break
        if day == date.min:
            break
        day = add_days(day, -1)
    return streak


def longest_streak(
    activity: Activity,
    index: CompletionIndex,
    reference_date: date,
    history_days: int = DEFAULT_HISTORY_DAYS,
) -> int:
    """Best run within the last ``history_days`` days up to ``reference_date``."""
    if _never_completable(activity):
        return 0

    if not activity.is_recurring:
        single = specific_day(activity)
        if single is None or single > reference_date:
            return 0
        return 1 if index.is_activity_completed_on(activity, single) else 0

    start = index.earliest_completed_date()
    if start is None or start > reference_date:
        return 0
    # The forward pass never starts more than history_days before the reference day.
    horizon = date.fromordinal(max(reference_date.toordinal() - max(history_days, 1) + 1, 1))

    best = running = 0
    day = max(start, horizon)
    while day <= reference_date:
        if is_applicable(activity, day):
            if index.is_activity_completed_on(activity, day):
                running += 1
                best = max(best, running)
            elif day != reference_date:
                running = 0
        if day == reference_date:
            break
        day = add_days(day, 1)
    return best


def compute_streaks(
    catalog: Iterable[Activity],
    log: CompletionIndex | Iterable[CompletedSlot | Mapping],
    reference_date: date,
    lookback_days: int = DEFAULT_LOOKBACK_DAYS,
    *,
    history_days: int = DEFAULT_HISTORY_DAYS,
) -> Dict[str, StreakRecord]:
    """Streak record for every activity in the catalog, keyed by activity id."""
    index = log if isinstance(log, CompletionIndex) else CompletionIndex.from_log(log)

    records: Dict[str, StreakRecord] = {}
    for activity in catalog:
        current = current_streak(activity, index, reference_date, lookback_days)
        longest = max(longest_streak(activity, index, reference_date, history_days), current)
        records[activity.id] = StreakRecord(
            activity_id=activity.id,
            current_streak=current,
            longest_streak=longest,
        )

    logger.debug(
        "Computed streaks for %d activities as of %s (lookback=%d)",
        len(records),
        reference_date,
        lookback_days,
    )
    return records
