"""Per-user catalog, slot log and snapshots on top of the key-value store."""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Tuple
from uuid import UUID

from pydantic import ValidationError

from chronoflow.models.activity import Activity, CompletedSlot, migrate_activity
from chronoflow.services.catalog import default_activities
from chronoflow.store.base import KeyValueStore

logger = logging.getLogger(__name__)

ACTIVITIES_KEY = "activities"
COMPLETED_SLOTS_KEY = "completedSlots"
SNAPSHOTS_KEY = "dailySnapshots"


def _split_records(records: Any, parse: Callable[[Any], Any], source: str) -> Tuple[List[Any], List[Any]]:
    """Parsed records plus the raw ones that failed validation, in stored order."""
    parsed: List[Any] = []
    unreadable: List[Any] = []
    for record in records or []:
        try:
            parsed.append(parse(record))
        except ValidationError as exc:
            logger.warning("Ignoring malformed record in %s: %s", source, exc.errors()[:1])
            unreadable.append(record)
    return parsed, unreadable


class PlannerState:
    """Reads always hit the store, so each computation sees the latest writes.

    Stored records that fail validation are skipped on read but written back
    untouched on save; a frozen day is only ever written once.
    """

    def __init__(self, store: KeyValueStore, user_id: UUID, *, seed_defaults: bool = True):
        self.store = store
        self.user_id = user_id
        self.seed_defaults = seed_defaults

    def _key(self, name: str) -> str:
        return f"{self.user_id}:{name}"

    def _unreadable(self, name: str, parse: Callable[[Any], Any]) -> List[Any]:
        _, unreadable = _split_records(self.store.get(self._key(name)), parse, name)
        return unreadable

    def load_activities(self) -> List[Activity]:
        records = self.store.get(self._key(ACTIVITIES_KEY))
        if records is None:
            if not self.seed_defaults:
                return []
            seeded = default_activities()
            self.save_activities(seeded)
            logger.info("Seeded default catalog with %d activities", len(seeded))
            return seeded
        activities, _ = _split_records(records, migrate_activity, ACTIVITIES_KEY)
        return activities

    def save_activities(self, activities: List[Activity]) -> None:
        kept = self._unreadable(ACTIVITIES_KEY, migrate_activity)
        self.store.set(self._key(ACTIVITIES_KEY), [activity.to_record() for activity in activities] + kept)

    def load_completed_slots(self) -> List[CompletedSlot]:
        slots, _ = _split_records(
            self.store.get(self._key(COMPLETED_SLOTS_KEY)),
            CompletedSlot.model_validate,
            COMPLETED_SLOTS_KEY,
        )
        return slots

    def save_completed_slots(self, slots: List[CompletedSlot]) -> None:
        kept = self._unreadable(COMPLETED_SLOTS_KEY, CompletedSlot.model_validate)
        self.store.set(self._key(COMPLETED_SLOTS_KEY), [slot.model_dump(mode="json") for slot in slots] + kept)

    def load_snapshots(self) -> Dict[str, List[Activity]]:
        raw = self.store.get(self._key(SNAPSHOTS_KEY)) or {}
        snapshots: Dict[str, List[Activity]] = {}
        for day_key, records in raw.items():
            snapshots[day_key], _ = _split_records(records, migrate_activity, f"{SNAPSHOTS_KEY}[{day_key}]")
        return snapshots

    def save_snapshot(self, day_key: str, plan: List[Activity]) -> None:
        """Store one newly frozen day; existing days are left byte-for-byte as stored."""
        raw = self.store.get(self._key(SNAPSHOTS_KEY)) or {}
        if day_key in raw:
            logger.warning("Snapshot for %s already stored; keeping the existing one", day_key)
            return
        raw[day_key] = [activity.to_record() for activity in plan]
        self.store.set(self._key(SNAPSHOTS_KEY), raw)
