"""Activity catalog API routes."""
from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from chronoflow.api.deps import get_planner_state, planner_state_for
from chronoflow.api.schemas.activity import (
    ActivityActionRequest,
    ActivityCreateRequest,
    ActivityListResponse,
    ActivityPayload,
    ActivityResponse,
    ActivityUpdateRequest,
)
from chronoflow.observability.metrics import log_metric
from chronoflow.observability.tracing import trace
from chronoflow.services.catalog import (
    ActivityNotFoundError,
    archive_activity,
    delete_activity,
    find_activity,
    new_activity_id,
    save_activity,
    unarchive_activity,
)
from chronoflow.services.planner_state import PlannerState
from chronoflow.store.base import KeyValueStore
from chronoflow.store.factory import get_store

router = APIRouter()


@router.get("/activities", response_model=ActivityListResponse, tags=["activities"])
def list_activities(
    http_request: Request,
    include_archived: bool = Query(False, description="Include archived activities"),
    state: PlannerState = Depends(get_planner_state),
) -> ActivityListResponse:
    """List the user's activity catalog in catalog order."""
    request_id = getattr(http_request.state, "request_id", None)
    with trace(
        "activities.list",
        metadata={"route": "/activities", "include_archived": include_archived},
        user_id=str(state.user_id),
        request_id=request_id,
    ):
        catalog = state.load_activities()
        if not include_archived:
            catalog = [activity for activity in catalog if not activity.is_archived]

    log_metric("activities.list.count", len(catalog), metadata={"user_id": str(state.user_id)})
    return ActivityListResponse(
        user_id=state.user_id,
        activities=[ActivityPayload.from_activity(activity) for activity in catalog],
        request_id=request_id or "",
    )


@router.post(
    "/activities",
    response_model=ActivityResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["activities"],
)
def create_activity(
    payload: ActivityCreateRequest,
    http_request: Request,
    store: KeyValueStore = Depends(get_store),
) -> ActivityResponse:
    """Add an activity to the catalog."""
    request_id = getattr(http_request.state, "request_id", None)
    state = planner_state_for(store, payload.user_id)
    activity_id = payload.id or new_activity_id()

    with trace(
        "activities.create",
        metadata={"activity_id": activity_id, "slots": len(payload.slots)},
        user_id=str(payload.user_id),
        request_id=request_id,
    ):
        catalog = state.load_activities()
        if any(existing.id == activity_id for existing in catalog):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Activity id already exists")
        activity = payload.to_activity(activity_id)
        state.save_activities(save_activity(catalog, activity))

    log_metric("activities.create.success", 1, metadata={"user_id": str(payload.user_id)})
    return ActivityResponse(activity=ActivityPayload.from_activity(activity), request_id=request_id or "")


@router.put("/activities/{activity_id}", response_model=ActivityResponse, tags=["activities"])
def update_activity(
    activity_id: str,
    payload: ActivityUpdateRequest,
    http_request: Request,
    store: KeyValueStore = Depends(get_store),
) -> ActivityResponse:
    """Replace an activity's definition, keeping its archive state."""
    request_id = getattr(http_request.state, "request_id", None)
    state = planner_state_for(store, payload.user_id)

    with trace(
        "activities.update",
        metadata={"activity_id": activity_id},
        user_id=str(payload.user_id),
        request_id=request_id,
    ):
        catalog = state.load_activities()
        try:
            existing = find_activity(catalog, activity_id)
        except ActivityNotFoundError:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Activity not found")
        activity = payload.to_activity(activity_id, is_archived=existing.is_archived)
        state.save_activities(save_activity(catalog, activity))

    log_metric("activities.update.success", 1, metadata={"user_id": str(payload.user_id)})
    return ActivityResponse(activity=ActivityPayload.from_activity(activity), request_id=request_id or "")


@router.post("/activities/{activity_id}/archive", response_model=ActivityResponse, tags=["activities"])
def archive(
    activity_id: str,
    payload: ActivityActionRequest,
    http_request: Request,
    store: KeyValueStore = Depends(get_store),
) -> ActivityResponse:
    """Hide an activity from plans and streaks without deleting it."""
    return _apply_archive_state(activity_id, payload, http_request, store, archived=True)


@router.post("/activities/{activity_id}/unarchive", response_model=ActivityResponse, tags=["activities"])
def unarchive(
    activity_id: str,
    payload: ActivityActionRequest,
    http_request: Request,
    store: KeyValueStore = Depends(get_store),
) -> ActivityResponse:
    return _apply_archive_state(activity_id, payload, http_request, store, archived=False)


@router.delete("/activities/{activity_id}", tags=["activities"])
def remove_activity(
    activity_id: str,
    http_request: Request,
    state: PlannerState = Depends(get_planner_state),
) -> Dict[str, Any]:
    """Delete an activity. Frozen snapshots of past days keep their copy."""
    request_id = getattr(http_request.state, "request_id", None)
    with trace(
        "activities.delete",
        metadata={"activity_id": activity_id},
        user_id=str(state.user_id),
        request_id=request_id,
    ):
        try:
            catalog = delete_activity(state.load_activities(), activity_id)
        except ActivityNotFoundError:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Activity not found")
        state.save_activities(catalog)

    log_metric("activities.delete.success", 1, metadata={"user_id": str(state.user_id)})
    return {"deleted": activity_id, "request_id": request_id or ""}


def _apply_archive_state(
    activity_id: str,
    payload: ActivityActionRequest,
    http_request: Request,
    store: KeyValueStore,
    *,
    archived: bool,
) -> ActivityResponse:
    request_id = getattr(http_request.state, "request_id", None)
    state = planner_state_for(store, payload.user_id)
    action = "archive" if archived else "unarchive"

    with trace(
        f"activities.{action}",
        metadata={"activity_id": activity_id},
        user_id=str(payload.user_id),
        request_id=request_id,
    ):
        change = archive_activity if archived else unarchive_activity
        try:
            catalog = change(state.load_activities(), activity_id)
        except ActivityNotFoundError:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Activity not found")
        state.save_activities(catalog)
        activity = find_activity(catalog, activity_id)

    log_metric(f"activities.{action}.success", 1, metadata={"user_id": str(payload.user_id)})
    return ActivityResponse(activity=ActivityPayload.from_activity(activity), request_id=request_id or "")
