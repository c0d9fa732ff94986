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

TODAY = date(2024, 6, 1)


@pytest.fixture()
def client(monkeypatch):
    store = InMemoryKeyValueStore()
    monkeypatch.setattr(settings, "seed_default_activities", False)
    monkeypatch.setattr(settings, "allow_past_slot_edits", True)

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_today] = lambda: TODAY
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def user_id(client) -> str:
    user = str(uuid4())
    client.post("/activities", json={"user_id": user, "id": "A", "name": "Alpha", "slots": [7, 8], "days": [1, 2, 3, 4, 5]})
    client.post("/activities", json={"user_id": user, "id": "B", "name": "Beta", "slots": [20]})
    for day, hour in (("2024-01-01", 7), ("2024-01-01", 8), ("2024-01-01", 20), ("2024-01-02", 7)):
        client.post("/slots/toggle", json={"user_id": user, "date": day, "hour": hour})
    return user


def test_week_stats(client, user_id) -> None:
    response = client.get("/stats", params={"user_id": user_id, "period": "week", "date": "2024-01-03"})

    assert response.status_code == 200
    data = response.json()
    assert (data["start"], data["end"]) == ("2024-01-01", "2024-01-07")
    assert (data["total_planned"], data["total_completed"], data["overall_completion"]) == (17, 4, 24)
    assert data["most_frequent_activity"] == "Alpha"
    assert len(data["trend"]) == 7
    assert data["trend"][0] == {"label": "2024-01-01", "completed": 3}


def test_day_stats_are_the_default(client, user_id) -> None:
    data = client.get("/stats", params={"user_id": user_id, "date": "2024-01-01"}).json()

    assert data["period"] == "day"
    assert data["overall_completion"] == 100
    assert data["trend"] == [{"label": "Alpha", "completed": 2}, {"label": "Beta", "completed": 1}]


def test_year_stats(client, user_id) -> None:
    data = client.get("/stats", params={"user_id": user_id, "period": "year", "date": "2024-03-01"}).json()

    assert len(data["trend"]) == 12
    assert data["trend"][0] == {"label": "2024-01", "completed": 4}


def test_frozen_day_is_used_after_catalog_edit(client, user_id) -> None:
    client.get("/daily-plan", params={"user_id": user_id, "date": "2024-01-01"})
    client.delete("/activities/B", params={"user_id": user_id})

    data = client.get("/stats", params={"user_id": user_id, "date": "2024-01-01"}).json()

    assert (data["total_planned"], data["total_completed"]) == (3, 3)
    assert [stat["activity_id"] for stat in data["activities"]] == ["A", "B"]


def test_unknown_period_is_rejected(client, user_id) -> None:
    response = client.get("/stats", params={"user_id": user_id, "period": "decade"})
    assert response.status_code == 422
