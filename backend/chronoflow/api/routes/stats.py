"""Statistics API route."""
from __future__ import annotations

from datetime import date
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, Request

from chronoflow.api.deps import get_planner_state, get_today
from chronoflow.api.schemas.stats import ActivityStatPayload, StatsResponse, TrendPointPayload
from chronoflow.observability.metrics import timed
from chronoflow.observability.tracing import trace
from chronoflow.services.calendar import date_key
from chronoflow.services.completion_index import CompletionIndex
from chronoflow.services.planner_state import PlannerState
from chronoflow.services.stats import compute_period_stats

router = APIRouter()


@router.get("/stats", response_model=StatsResponse, tags=["stats"])
def get_stats(
    http_request: Request,
    period: Literal["day", "week", "month", "year"] = Query("day"),
    day: Optional[date] = Query(default=None, alias="date"),
    state: PlannerState = Depends(get_planner_state),
    today: date = Depends(get_today),
) -> StatsResponse:
    """Planned versus completed hours over the period containing a day."""
    request_id = getattr(http_request.state, "request_id", None)
    anchor = day or today
    metadata = {"period": period, "date": date_key(anchor)}

    with timed("stats.get", metadata=metadata), trace(
        "stats.get",
        metadata=metadata,
        user_id=str(state.user_id),
        request_id=request_id,
    ):
        stats = compute_period_stats(
            state.load_activities(),
            CompletionIndex.from_log(state.load_completed_slots()),
            period,
            anchor,
            today,
            state.load_snapshots(),
        )

    return StatsResponse(
        user_id=state.user_id,
        period=period,
        start=stats.start,
        end=stats.end,
        total_planned=stats.total_planned,
        total_completed=stats.total_completed,
        overall_completion=stats.overall_completion,
        most_frequent_activity=stats.most_frequent_activity,
        activities=[
            ActivityStatPayload(
                activity_id=stat.activity_id,
                name=stat.name,
                color=stat.color,
                planned=stat.planned,
                completed=stat.completed,
            )
            for stat in stats.activities
        ],
        trend=[TrendPointPayload(label=point.label, completed=point.completed) for point in stats.trend],
        request_id=request_id or "",
    )
