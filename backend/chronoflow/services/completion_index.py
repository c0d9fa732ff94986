"""Read-side index over the completed-slot log."""
from __future__ import annotations

from datetime import date
from typing import FrozenSet, Iterable, List, Mapping, Optional, Set

from chronoflow.models.activity import Activity, CompletedSlot
from chronoflow.services.calendar import date_key, parse_date_key


def slot_key(day_key: str, hour: int) -> str:
    return f"{day_key}-{hour}"


class CompletionIndex:
    """Set of ``"{date_key}-{hour}"`` keys built once from the slot log.

    The index is a snapshot of the log at build time; build a new one after
    every toggle.
    """

    def __init__(self, keys: Set[str], day_keys: Set[str]):
        self._keys: FrozenSet[str] = frozenset(keys)
        self._day_keys: FrozenSet[str] = frozenset(day_keys)

    @classmethod
    def from_log(cls, log: Iterable[CompletedSlot | Mapping]) -> "CompletionIndex":
        keys: Set[str] = set()
        day_keys: Set[str] = set()
        for entry in log:
            slot = entry if isinstance(entry, CompletedSlot) else CompletedSlot.model_validate(entry)
            keys.add(slot_key(slot.date, slot.hour))
            day_keys.add(slot.date)
        return cls(keys, day_keys)

    def is_slot_completed(self, day_key: str, hour: int) -> bool:
        return slot_key(day_key, hour) in self._keys

    def completed_hours(self, activity: Activity, day: date) -> List[int]:
        key = date_key(day)
        return [hour for hour in activity.slots if self.is_slot_completed(key, hour)]

    def is_activity_completed_on(self, activity: Activity, day: date) -> bool:
        """All of the activity's hours are done that day. Empty activities never are."""
        if not activity.slots:
            return False
        key = date_key(day)
        return all(self.is_slot_completed(key, hour) for hour in activity.slots)

    def completed_dates(self) -> List[date]:
        """Distinct dates with at least one completed hour, ascending; bad keys are ignored."""
        parsed = (parse_date_key(key) for key in self._day_keys)
        return sorted(day for day in parsed if day is not None)

    def earliest_completed_date(self) -> Optional[date]:
        dates = self.completed_dates()
        return dates[0] if dates else None
