"""Schemas for completed-slot endpoints."""
from __future__ import annotations

import datetime as dt
from typing import List
from uuid import UUID

from pydantic import BaseModel, Field


class SlotToggleRequest(BaseModel):
    user_id: UUID
    date: dt.date
    hour: int = Field(..., ge=0, le=23)


class SlotToggleResponse(BaseModel):
    date: dt.date
    hour: int
    completed: bool
    request_id: str


class CompletedSlotsResponse(BaseModel):
    user_id: UUID
    date: dt.date
    hours: List[int]
    request_id: str
