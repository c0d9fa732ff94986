from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from chronoflow.main import app


@pytest.fixture()
def client() -> TestClient:
    return TestClient(app)


def test_health_reports_ok_with_fresh_request_id(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers.get("X-Request-Id")


def test_each_request_gets_its_own_id(client) -> None:
    first = client.get("/health").headers["X-Request-Id"]
    second = client.get("/health").headers["X-Request-Id"]

    assert first != second


def test_caller_request_id_is_echoed_on_planner_routes(client) -> None:
    response = client.get(
        "/activities",
        params={"user_id": str(uuid4())},
        headers={"X-Request-Id": "planner-req-7"},
    )

    assert response.headers.get("X-Request-Id") == "planner-req-7"
    assert response.json()["request_id"] == "planner-req-7"
