"""Daily plan API route."""
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from chronoflow.api.deps import get_planner_state, get_today
from chronoflow.api.schemas.activity import ActivityPayload
from chronoflow.api.schemas.daily_plan import DailyPlanResponse, DialSlotPayload, PlannedActivity
from chronoflow.core.config import settings
from chronoflow.observability.metrics import log_metric, timed
from chronoflow.observability.tracing import trace
from chronoflow.services.calendar import date_key
from chronoflow.services.completion_index import CompletionIndex
from chronoflow.services.daily_plan import (
    build_daily_plan,
    build_dial,
    is_past,
    materialize_snapshot,
    plan_totals,
    resolve_candidates,
)
from chronoflow.services.planner_state import PlannerState
from chronoflow.services.streaks import compute_streaks

router = APIRouter()


@router.get("/daily-plan", response_model=DailyPlanResponse, tags=["daily-plan"])
def get_daily_plan(
    http_request: Request,
    day: Optional[date] = Query(default=None, alias="date"),
    state: PlannerState = Depends(get_planner_state),
    today: date = Depends(get_today),
) -> DailyPlanResponse:
    """Activities scheduled on a day, unfinished first, with the 24-hour dial.

    Viewing a past day for the first time freezes its plan.
    """
    request_id = getattr(http_request.state, "request_id", None)
    target = day or today
    key = date_key(target)
    metadata = {"date": key, "user_id": str(state.user_id)}

    with timed("daily_plan.get", metadata=metadata), trace(
        "daily_plan.get",
        metadata=metadata,
        user_id=str(state.user_id),
        request_id=request_id,
    ):
        catalog = state.load_activities()
        snapshots = state.load_snapshots()
        if materialize_snapshot(catalog, target, today, snapshots):
            state.save_snapshot(key, snapshots[key])
            log_metric("daily_plan.snapshot_created", 1, metadata=metadata)

        index = CompletionIndex.from_log(state.load_completed_slots())
        _, from_snapshot = resolve_candidates(catalog, target, today, snapshots)
        plan = build_daily_plan(catalog, target, today, snapshots, index)
        streaks = compute_streaks(
            plan,
            index,
            target,
            settings.streak_lookback_days,
            history_days=settings.streak_history_days,
        )
        planned_hours, completed_hours = plan_totals(plan, target, index)
        dial = build_dial(plan, target, index)

    return DailyPlanResponse(
        user_id=state.user_id,
        date=target,
        is_past=is_past(target, today),
        from_snapshot=from_snapshot,
        activities=[
            PlannedActivity(
                activity=ActivityPayload.from_activity(activity),
                completed=index.is_activity_completed_on(activity, target),
                completed_hours=index.completed_hours(activity, target),
                current_streak=streaks[activity.id].current_streak,
            )
            for activity in plan
        ],
        dial=[DialSlotPayload(hour=slot.hour, activity_id=slot.activity_id, completed=slot.completed) for slot in dial],
        planned_hours=planned_hours,
        completed_hours=completed_hours,
        total_activities=sum(1 for activity in catalog if not activity.is_archived),
        request_id=request_id or "",
    )
