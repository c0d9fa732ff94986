"""Schemas for activity catalog endpoints."""
from __future__ import annotations

from typing import Annotated, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from chronoflow.models.activity import Activity

Hour = Annotated[int, Field(ge=0, le=23)]
Weekday = Annotated[int, Field(ge=0, le=6)]


class ActivityPayload(BaseModel):
    id: str
    name: str
    icon: str
    color: str
    slots: List[int]
    is_recurring: bool
    days: List[int]
    specific_date: Optional[str]
    is_archived: bool
    reminder_minutes: Optional[int]

    @classmethod
    def from_activity(cls, activity: Activity) -> "ActivityPayload":
        return cls.model_validate(activity.model_dump())


class ActivityFields(BaseModel):
    name: str = Field(..., min_length=1, max_length=80)
    icon: str = ""
    color: str = ""
    slots: List[Hour] = Field(default_factory=list)
    is_recurring: Optional[bool] = None
    days: Optional[List[Weekday]] = None
    specific_date: Optional[str] = Field(default=None, pattern=r"^\d{4}-\d{2}-\d{2}$")
    reminder_minutes: Optional[int] = Field(default=None, gt=0)

    def to_activity(self, activity_id: str, *, is_archived: bool = False) -> Activity:
        return Activity.model_validate({**self.model_dump(), "id": activity_id, "is_archived": is_archived})


class ActivityCreateRequest(ActivityFields):
    user_id: UUID
    id: Optional[str] = Field(default=None, min_length=1, max_length=64)


class ActivityUpdateRequest(ActivityFields):
    user_id: UUID


class ActivityActionRequest(BaseModel):
    user_id: UUID


class ActivityResponse(BaseModel):
    activity: ActivityPayload
    request_id: str


class ActivityListResponse(BaseModel):
    user_id: UUID
    activities: List[ActivityPayload]
    request_id: str
