"""Schemas for the statistics endpoint."""
from __future__ import annotations

from datetime import date
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel


class ActivityStatPayload(BaseModel):
    activity_id: str
    name: str
    color: str
    planned: int
    completed: int


class TrendPointPayload(BaseModel):
    label: str
    completed: int


class StatsResponse(BaseModel):
    user_id: UUID
    period: Literal["day", "week", "month", "year"]
    start: date
    end: date
    total_planned: int
    total_completed: int
    overall_completion: int
    most_frequent_activity: Optional[str]
    activities: List[ActivityStatPayload]
    trend: List[TrendPointPayload]
    request_id: str
