"""Schemas for streak endpoints."""
from __future__ import annotations

from datetime import date
from typing import List
from uuid import UUID

from pydantic import BaseModel


class StreakPayload(BaseModel):
    activity_id: str
    name: str
    current_streak: int
    longest_streak: int


class StreaksResponse(BaseModel):
    user_id: UUID
    reference_date: date
    lookback_days: int
    streaks: List[StreakPayload]
    request_id: str
