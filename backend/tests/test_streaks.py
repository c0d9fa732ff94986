from __future__ import annotations

from datetime import date

import pytest

from chronoflow.models import Activity, CompletedSlot
from chronoflow.services.calendar import add_days, date_key, days_between
from chronoflow.services.completion_index import CompletionIndex
from chronoflow.services.streaks import compute_streaks, current_streak, longest_streak

WEEKDAY_MORNINGS = Activity(id="A", slots=[7, 8], days=[1, 2, 3, 4, 5])
DATE_NIGHT = Activity(id="B", slots=[20], is_recurring=False, specific_date="2024-03-15")


def _log(days, hours) -> list[CompletedSlot]:
    return [CompletedSlot(date=date_key(day), hour=hour) for day in days for hour in hours]


def _first_week() -> list[date]:
    return days_between(date(2024, 1, 1), date(2024, 1, 5))


def test_weekday_streak_skips_weekend_and_unfinished_today() -> None:
    records = compute_streaks([WEEKDAY_MORNINGS], _log(_first_week(), [7, 8]), date(2024, 1, 8))

    assert records["A"].current_streak == 5
    assert records["A"].longest_streak == 5


def test_single_date_activity_streak() -> None:
    log = _log([date(2024, 3, 15)], [20])

    after = compute_streaks([DATE_NIGHT], log, date(2024, 3, 16))["B"]
    before = compute_streaks([DATE_NIGHT], log, date(2024, 3, 10))["B"]

    assert (after.current_streak, after.longest_streak) == (1, 1)
    assert (before.current_streak, before.longest_streak) == (0, 0)


def test_single_date_activity_not_completed() -> None:
    record = compute_streaks([DATE_NIGHT], [], date(2024, 3, 20))["B"]
    assert (record.current_streak, record.longest_streak) == (0, 0)


def test_missed_scheduled_day_breaks_current_but_not_longest() -> None:
    days = [day for day in _first_week() if day != date(2024, 1, 4)]

    record = compute_streaks([WEEKDAY_MORNINGS], _log(days, [7, 8]), date(2024, 1, 8))["A"]

    assert record.current_streak == 1
    assert record.longest_streak == 3


def test_completed_reference_day_counts() -> None:
    days = _first_week() + [date(2024, 1, 8)]

    record = compute_streaks([WEEKDAY_MORNINGS], _log(days, [7, 8]), date(2024, 1, 8))["A"]

    assert record.current_streak == 6
    assert record.longest_streak == 6


def test_partially_completed_day_breaks_streak() -> None:
    log = _log(_first_week(), [7]) + _log([date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 4), date(2024, 1, 5)], [8])

    record = compute_streaks([WEEKDAY_MORNINGS], log, date(2024, 1, 8))["A"]

    assert record.current_streak == 2
    assert record.longest_streak == 2


@pytest.mark.parametrize(
    "activity",
    [
        Activity(id="archived", slots=[7], is_archived=True),
        Activity(id="empty", slots=[]),
        Activity(id="undated", slots=[7], is_recurring=False),
    ],
)
def test_activities_that_can_never_complete_have_no_streak(activity) -> None:
    log = _log(days_between(date(2024, 1, 1), date(2024, 1, 10)), range(24))

    record = compute_streaks([activity], log, date(2024, 1, 10))[activity.id]

    assert (record.current_streak, record.longest_streak) == (0, 0)


def test_lookback_caps_current_streak_only() -> None:
    daily = Activity(id="daily", slots=[7])
    reference = date(2024, 6, 30)
    log = _log(days_between(add_days(reference, -399), reference), [7])

    record = compute_streaks([daily], log, reference, lookback_days=30)["daily"]

    assert record.current_streak == 30
    assert record.longest_streak == 400


def test_longest_is_never_below_current() -> None:
    daily = Activity(id="daily", slots=[7])
    reference = date(2024, 2, 10)
    completed = [day for day in days_between(date(2024, 1, 1), reference) if day.day % 9 != 0]
    index = CompletionIndex.from_log(_log(completed, [7]))

    for offset in range(40):
        day = add_days(reference, -offset)
        assert longest_streak(daily, index, day) >= current_streak(daily, index, day)


def test_compute_streaks_accepts_prebuilt_index_and_covers_whole_catalog() -> None:
    index = CompletionIndex.from_log(_log(_first_week(), [7, 8]))

    records = compute_streaks([WEEKDAY_MORNINGS, DATE_NIGHT], index, date(2024, 1, 8))

    assert set(records) == {"A", "B"}
    assert records["B"].current_streak == 0


def test_longest_streak_only_scans_history_window() -> None:
    daily = Activity(id="daily", slots=[7])
    reference = date(2024, 1, 10)
    log = _log(days_between(date(2024, 1, 1), reference), [7])

    record = compute_streaks([daily], log, reference, lookback_days=3, history_days=5)["daily"]

    assert record.current_streak == 3
    assert record.longest_streak == 5


def test_ancient_completion_does_not_stretch_the_scan() -> None:
    daily = Activity(id="daily", slots=[7])
    reference = date(2024, 1, 10)
    index = CompletionIndex.from_log(_log([date(1, 1, 1)], [7]) + _log(days_between(date(2024, 1, 8), reference), [7]))

    assert longest_streak(daily, index, reference) == 3
    assert current_streak(daily, index, date(1, 1, 1)) == 1
