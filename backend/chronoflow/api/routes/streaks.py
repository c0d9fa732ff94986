"""Streak API route."""
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from chronoflow.api.deps import get_planner_state, get_today
from chronoflow.api.schemas.streaks import StreakPayload, StreaksResponse
from chronoflow.core.config import settings
from chronoflow.observability.metrics import log_metric, timed
from chronoflow.observability.tracing import trace
from chronoflow.services.calendar import date_key
from chronoflow.services.completion_index import CompletionIndex
from chronoflow.services.planner_state import PlannerState
from chronoflow.services.streaks import compute_streaks

router = APIRouter()


@router.get("/streaks", response_model=StreaksResponse, tags=["streaks"])
def get_streaks(
    http_request: Request,
    day: Optional[date] = Query(default=None, alias="date"),
    state: PlannerState = Depends(get_planner_state),
    today: date = Depends(get_today),
) -> StreaksResponse:
    """Current and longest streak for every activity as of a day."""
    request_id = getattr(http_request.state, "request_id", None)
    reference = day or today
    lookback = settings.streak_lookback_days
    metadata = {"date": date_key(reference), "lookback_days": lookback}

    with timed("streaks.get", metadata=metadata), trace(
        "streaks.get",
        metadata=metadata,
        user_id=str(state.user_id),
        request_id=request_id,
    ):
        catalog = state.load_activities()
        index = CompletionIndex.from_log(state.load_completed_slots())
        records = compute_streaks(
            catalog,
            index,
            reference,
            lookback,
            history_days=settings.streak_history_days,
        )

    best = max((record.current_streak for record in records.values()), default=0)
    log_metric("streaks.get.best_current", best, metadata={"user_id": str(state.user_id)})

    return StreaksResponse(
        user_id=state.user_id,
        reference_date=reference,
        lookback_days=lookback,
        streaks=[
            StreakPayload(
                activity_id=activity.id,
                name=activity.name,
                current_streak=records[activity.id].current_streak,
                longest_streak=records[activity.id].longest_streak,
            )
            for activity in catalog
        ],
        request_id=request_id or "",
    )
