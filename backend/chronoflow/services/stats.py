"""Planned-versus-completed statistics over a day, week, month or year."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Literal, Mapping, Optional, Tuple

from chronoflow.models.activity import Activity
from chronoflow.services.calendar import date_key, days_between, month_bounds, month_keys, week_bounds, year_bounds
from chronoflow.services.completion_index import CompletionIndex
from chronoflow.services.daily_plan import resolve_candidates

Period = Literal["day", "week", "month", "year"]
PERIODS: Tuple[str, ...] = ("day", "week", "month", "year")


@dataclass
class ActivityPeriodStat:
    activity_id: str
    name: str
    color: str
    planned: int = 0
    completed: int = 0


@dataclass
class TrendPoint:
    label: str
    completed: int


@dataclass
class PeriodStats:
    period: str
    start: date
    end: date
    total_planned: int
    total_completed: int
    overall_completion: int
    most_frequent_activity: Optional[str]
    activities: List[ActivityPeriodStat] = field(default_factory=list)
    trend: List[TrendPoint] = field(default_factory=list)


def period_interval(period: str, anchor: date) -> Tuple[date, date]:
    if period == "day":
        return anchor, anchor
    if period == "week":
        return week_bounds(anchor)
    if period == "month":
        return month_bounds(anchor)
    if period == "year":
        return year_bounds(anchor)
    raise ValueError(f"Unknown period {period!r}; expected one of {', '.join(PERIODS)}")


def _percent(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    return int(part * 100 / whole + 0.5)


def compute_period_stats(
    catalog: Iterable[Activity],
    index: CompletionIndex,
    period: str,
    anchor: date,
    today: date,
    snapshots: Mapping[str, List[Activity]],
) -> PeriodStats:
    """Aggregate hours over the period containing ``anchor``.

    Past days use their frozen plan when one exists, so editing the catalog
    does not rewrite history.
    """
    start, end = period_interval(period, anchor)
    catalog = list(catalog)

    per_activity: Dict[str, ActivityPeriodStat] = {
        activity.id: ActivityPeriodStat(activity.id, activity.name, activity.color)
        for activity in catalog
        if not activity.is_archived
    }
    per_day: Dict[str, int] = {}

    for day in days_between(start, end):
        plan, _ = resolve_candidates(catalog, day, today, snapshots)
        done_today = 0
        for activity in plan:
            stat = per_activity.get(activity.id)
            if stat is None:
                stat = per_activity[activity.id] = ActivityPeriodStat(activity.id, activity.name, activity.color)
            done = len(index.completed_hours(activity, day))
            stat.planned += len(activity.slots)
            stat.completed += done
            done_today += done
        per_day[date_key(day)] = done_today

    activities = list(per_activity.values())
    total_planned = sum(stat.planned for stat in activities)
    total_completed = sum(stat.completed for stat in activities)

    most_frequent = None
    best = 0
    for stat in activities:
        if stat.completed > best:
            best = stat.completed
            most_frequent = stat.name

    if period == "day":
        trend = [TrendPoint(stat.name, stat.completed) for stat in activities if stat.completed > 0]
    elif period == "year":
        trend = [
            TrendPoint(month, sum(count for key, count in per_day.items() if key.startswith(month)))
            for month in month_keys(start, end)
        ]
    else:
        trend = [TrendPoint(key, count) for key, count in per_day.items()]

    return PeriodStats(
        period=period,
        start=start,
        end=end,
        total_planned=total_planned,
        total_completed=total_completed,
        overall_completion=_percent(total_completed, total_planned),
        most_frequent_activity=most_frequent,
        activities=activities,
        trend=trend,
    )
