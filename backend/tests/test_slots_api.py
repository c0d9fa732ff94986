from __future__ import annotations

from datetime import date
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from chronoflow.api.deps import get_today
from chronoflow.core.config import settings
from chronoflow.main import app
from chronoflow.store.factory import get_store
from chronoflow.store.memory import InMemoryKeyValueStore

TODAY = date(2024, 1, 10)


@pytest.fixture()
def client(monkeypatch):
    store = InMemoryKeyValueStore()
    monkeypatch.setattr(settings, "seed_default_activities", False)
    monkeypatch.setattr(settings, "allow_past_slot_edits", False)

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_today] = lambda: TODAY
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _toggle(client: TestClient, user_id, day: str, hour: int):
    return client.post("/slots/toggle", json={"user_id": str(user_id), "date": day, "hour": hour})


def test_toggle_marks_and_clears_hour(client) -> None:
    user_id = uuid4()

    first = _toggle(client, user_id, "2024-01-10", 7)
    assert first.status_code == 200
    assert first.json()["completed"] is True
    assert first.json()["request_id"] == first.headers["X-Request-Id"]

    listed = client.get("/slots", params={"user_id": str(user_id), "date": "2024-01-10"}).json()
    assert listed["hours"] == [7]

    second = _toggle(client, user_id, "2024-01-10", 7)
    assert second.json()["completed"] is False
    assert client.get("/slots", params={"user_id": str(user_id), "date": "2024-01-10"}).json()["hours"] == []


def test_listing_defaults_to_today(client) -> None:
    user_id = uuid4()
    _toggle(client, user_id, "2024-01-10", 9)
    _toggle(client, user_id, "2024-01-10", 3)
    _toggle(client, user_id, "2024-01-11", 4)

    data = client.get("/slots", params={"user_id": str(user_id)}).json()

    assert data["date"] == "2024-01-10"
    assert data["hours"] == [3, 9]


def test_past_day_is_locked(client) -> None:
    response = _toggle(client, uuid4(), "2024-01-09", 7)
    assert response.status_code == 409


def test_past_day_editable_when_allowed(client, monkeypatch) -> None:
    monkeypatch.setattr(settings, "allow_past_slot_edits", True)

    response = _toggle(client, uuid4(), "2024-01-09", 7)

    assert response.status_code == 200
    assert response.json()["completed"] is True


@pytest.mark.parametrize("day,hour", [("2024-01-10", 24), ("2024-01-10", -1), ("2024-02-30", 7), ("soon", 7)])
def test_invalid_slot_is_rejected(client, day, hour) -> None:
    assert _toggle(client, uuid4(), day, hour).status_code == 422
