"""Derived streak record."""
from __future__ import annotations

from pydantic import BaseModel, Field


class StreakRecord(BaseModel):
    activity_id: str
    current_streak: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)
