"""Schemas for the daily plan endpoint."""
from __future__ import annotations

import datetime as dt
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from chronoflow.api.schemas.activity import ActivityPayload


class PlannedActivity(BaseModel):
    activity: ActivityPayload
    completed: bool
    completed_hours: List[int]
    current_streak: int


class DialSlotPayload(BaseModel):
    hour: int
    activity_id: Optional[str]
    completed: bool


class DailyPlanResponse(BaseModel):
    user_id: UUID
    date: dt.date
    is_past: bool
    from_snapshot: bool
    activities: List[PlannedActivity]
    dial: List[DialSlotPayload]
    planned_hours: int
    completed_hours: int
    total_activities: int
    request_id: str
