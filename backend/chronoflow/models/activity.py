"""Activity catalog and completed-slot log models."""
from __future__ import annotations

from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

ALL_DAYS: tuple[int, ...] = (0, 1, 2, 3, 4, 5, 6)
HOURS_PER_DAY = 24

# Fields whose absence (or explicit null) in stored records means "use the default".
_LEGACY_DEFAULTED = ("isRecurring", "is_recurring", "days", "slots", "isArchived", "is_archived")


def _unique_sorted(values: List[int], upper: int, label: str) -> List[int]:
    for value in values:
        if not 0 <= value <= upper:
            raise ValueError(f"{label} {value} is outside 0..{upper}")
    return sorted(set(values))


class Activity(BaseModel):
    """A planned activity occupying hour slots on the 24-hour dial.

    Recurring activities apply on the weekdays in ``days`` (0 = Sunday);
    single-date activities apply only on ``specific_date``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str = ""
    icon: str = ""
    color: str = ""
    slots: List[int] = Field(default_factory=list)
    is_recurring: bool = True
    days: List[int] = Field(default_factory=lambda: list(ALL_DAYS))
    specific_date: Optional[str] = None
    is_archived: bool = False
    reminder_minutes: Optional[int] = Field(default=None, gt=0)

    @model_validator(mode="before")
    @classmethod
    def _fill_legacy_defaults(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        cleaned = {key: value for key, value in data.items() if not (key in _LEGACY_DEFAULTED and value is None)}
        if cleaned.get("id") is not None and not isinstance(cleaned["id"], str):
            cleaned["id"] = str(cleaned["id"])
        for key in ("reminderMinutes", "reminder_minutes"):
            reminder = cleaned.get(key)
            if reminder is not None and (not isinstance(reminder, int) or reminder <= 0):
                cleaned[key] = None
        return cleaned

    @field_validator("slots")
    @classmethod
    def _check_slots(cls, value: List[int]) -> List[int]:
        return _unique_sorted(value, HOURS_PER_DAY - 1, "hour")

    @field_validator("days")
    @classmethod
    def _check_days(cls, value: List[int]) -> List[int]:
        return _unique_sorted(value, 6, "weekday")

    def to_record(self) -> dict:
        """Plain JSON-compatible form, in the stored camelCase shape."""
        return self.model_dump(mode="json", by_alias=True)


class CompletedSlot(BaseModel):
    """One hour marked complete on one date."""

    date: str
    hour: int = Field(ge=0, le=HOURS_PER_DAY - 1)


def migrate_activity(raw: Activity | Mapping[str, Any]) -> Activity:
    """Normalize an activity entering the system.

    Stored records from older clients may lack ``isRecurring`` or ``days``;
    they become weekly activities on every day.
    """
    if isinstance(raw, Activity):
        return raw
    return Activity.model_validate(raw)
