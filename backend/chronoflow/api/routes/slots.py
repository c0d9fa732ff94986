"""Completed-slot API routes."""
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from chronoflow.api.deps import get_planner_state, get_today, planner_state_for
from chronoflow.api.schemas.slots import CompletedSlotsResponse, SlotToggleRequest, SlotToggleResponse
from chronoflow.core.config import settings
from chronoflow.observability.metrics import log_metric, timed
from chronoflow.observability.tracing import trace
from chronoflow.services.calendar import date_key
from chronoflow.services.catalog import InvalidSlotError, PastDateLockedError, toggle_slot
from chronoflow.services.planner_state import PlannerState
from chronoflow.store.base import KeyValueStore
from chronoflow.store.factory import get_store

router = APIRouter()


@router.get("/slots", response_model=CompletedSlotsResponse, tags=["slots"])
def list_completed_slots(
    http_request: Request,
    day: Optional[date] = Query(default=None, alias="date"),
    state: PlannerState = Depends(get_planner_state),
    today: date = Depends(get_today),
) -> CompletedSlotsResponse:
    """Hours marked complete on a day (today by default)."""
    request_id = getattr(http_request.state, "request_id", None)
    target = day or today
    key = date_key(target)
    with trace("slots.list", metadata={"date": key}, user_id=str(state.user_id), request_id=request_id):
        hours = sorted({slot.hour for slot in state.load_completed_slots() if slot.date == key})

    return CompletedSlotsResponse(user_id=state.user_id, date=target, hours=hours, request_id=request_id or "")


@router.post("/slots/toggle", response_model=SlotToggleResponse, tags=["slots"])
def toggle_completed_slot(
    payload: SlotToggleRequest,
    http_request: Request,
    store: KeyValueStore = Depends(get_store),
    today: date = Depends(get_today),
) -> SlotToggleResponse:
    """Mark an hour complete, or clear it if it already was."""
    request_id = getattr(http_request.state, "request_id", None)
    state = planner_state_for(store, payload.user_id)
    key = date_key(payload.date)
    metadata = {"date": key, "hour": payload.hour}

    with timed("slots.toggle", metadata=metadata), trace(
        "slots.toggle",
        metadata=metadata,
        user_id=str(payload.user_id),
        request_id=request_id,
    ):
        try:
            log, completed = toggle_slot(
                state.load_completed_slots(),
                key,
                payload.hour,
                today=today,
                allow_past=settings.allow_past_slot_edits,
            )
        except PastDateLockedError as exc:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
        except InvalidSlotError as exc:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
        state.save_completed_slots(log)

    log_metric("slots.toggle.completed", 1 if completed else 0, metadata=metadata)
    return SlotToggleResponse(date=payload.date, hour=payload.hour, completed=completed, request_id=request_id or "")
