"""FastAPI dependencies shared by the planning routes."""
from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import Depends, Query

from chronoflow.core.config import settings
from chronoflow.services.calendar import local_today
from chronoflow.services.planner_state import PlannerState
from chronoflow.store.base import KeyValueStore
from chronoflow.store.factory import get_store


def get_today() -> date:
    """Today's date in the configured timezone; override in tests to pin the clock."""
    return local_today(settings.timezone)


def planner_state_for(store: KeyValueStore, user_id: UUID) -> PlannerState:
    return PlannerState(store, user_id, seed_defaults=settings.seed_default_activities)


def get_planner_state(
    user_id: UUID = Query(..., description="User ID owning the planner"),
    store: KeyValueStore = Depends(get_store),
) -> PlannerState:
    return planner_state_for(store, user_id)
