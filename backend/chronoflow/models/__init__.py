"""Domain models shared by the planning services and the API."""
from chronoflow.models.activity import ALL_DAYS, Activity, CompletedSlot, migrate_activity
from chronoflow.models.streak import StreakRecord

__all__ = [
    "ALL_DAYS",
    "Activity",
    "CompletedSlot",
    "StreakRecord",
    "migrate_activity",
]
