"""Decide which activities are scheduled on a given day."""
from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Optional

from chronoflow.models.activity import Activity
from chronoflow.services.calendar import date_key, parse_date_key, weekday

logger = logging.getLogger(__name__)


def specific_day(activity: Activity) -> Optional[date]:
    """The single date of a non-recurring activity, or None when unusable."""
    if activity.is_recurring:
        return None
    parsed = parse_date_key(activity.specific_date)
    if parsed is None:
        logger.debug("Activity %s has no usable specific date (%r)", activity.id, activity.specific_date)
    return parsed


def is_applicable(activity: Activity, day: date) -> bool:
    if activity.is_archived:
        return False
    if activity.is_recurring:
        return weekday(day) in activity.days
    if parse_date_key(activity.specific_date) is None:
        return False
    return date_key(day) == activity.specific_date


def applicable_activities(catalog: Iterable[Activity], day: date) -> List[Activity]:
    """Activities scheduled on ``day``, in catalog order."""
    return [activity for activity in catalog if is_applicable(activity, day)]


def activity_for_hour(activities: Iterable[Activity], hour: int) -> Optional[Activity]:
    """First activity occupying ``hour``; the dial shows one activity per hour."""
    for activity in activities:
        if hour in activity.slots:
            return activity
    return None
