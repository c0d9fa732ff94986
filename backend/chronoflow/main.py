"""Main FastAPI application for the ChronoFlow backend."""
from fastapi import FastAPI, Request

from chronoflow.api.routes.activities import router as activities_router
from chronoflow.api.routes.daily_plan import router as daily_plan_router
from chronoflow.api.routes.slots import router as slots_router
from chronoflow.api.routes.stats import router as stats_router
from chronoflow.api.routes.streaks import router as streaks_router
from chronoflow.core.config import settings
from chronoflow.core.logging import configure_logging
from chronoflow.core.middleware import RequestContextMiddleware
from chronoflow.observability.client import init_opik
from chronoflow.observability.tracing import trace

configure_logging(log_level=settings.log_level)

app = FastAPI(title=settings.app_name, version="0.1.0")
app.add_middleware(RequestContextMiddleware)
app.include_router(activities_router)
app.include_router(slots_router)
app.include_router(daily_plan_router)
app.include_router(streaks_router)
app.include_router(stats_router)


@app.on_event("startup")
async def startup_observability() -> None:
    """Initialize observability backends after the event loop starts."""
    init_opik()


@app.get("/health", tags=["health"], summary="Readiness probe")
async def health_check(request: Request) -> dict[str, str]:
    """Return a simple status payload so automation can probe the API."""
    with trace("http.health_check", metadata={"route": "/health"}, request_id=request.state.request_id):
        return {"status": "ok"}
