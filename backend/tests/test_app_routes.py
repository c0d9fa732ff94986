"""Regression tests for application route registration."""
import pytest

from chronoflow.main import app


@pytest.mark.parametrize(
    "path,method",
    [
        ("/activities", "get"),
        ("/activities", "post"),
        ("/activities/{activity_id}", "put"),
        ("/activities/{activity_id}", "delete"),
        ("/activities/{activity_id}/archive", "post"),
        ("/activities/{activity_id}/unarchive", "post"),
        ("/slots", "get"),
        ("/slots/toggle", "post"),
        ("/daily-plan", "get"),
        ("/streaks", "get"),
        ("/stats", "get"),
        ("/health", "get"),
    ],
)
def test_route_is_published(path: str, method: str) -> None:
    assert method in app.openapi()["paths"].get(path, {})


def test_operation_ids_are_unique() -> None:
    """A router mounted twice would publish the same operation twice."""
    operation_ids = [
        operation["operationId"]
        for methods in app.openapi()["paths"].values()
        for operation in methods.values()
    ]
    assert len(operation_ids) == len(set(operation_ids))
