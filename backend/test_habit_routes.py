from datetime import date

import pytest
from fastapi.testclient import TestClient

from conftest import HABITS_APP, LOGS_APP
from living_apps_rest import create_record_url
from main import app
from routes.habit_routes import get_service, get_state
from services.habit_service import DashboardState, HabitService

DAY = "2026-10-19"


@pytest.fixture
def api(service, store):
    state = DashboardState(selected_date=date(2026, 10, 19))

    async def _state():
        if state.loading:
            await HabitService.load(state, service)
        return state

    app.dependency_overrides[get_service] = lambda: service
    app.dependency_overrides[get_state] = _state
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health_check(api):
    resp = api.get("/api/v1/health-check")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_dashboard_summary(api, store):
    habit_id = store.add(HABITS_APP, {"name": "Meditate", "frequency": "daily"})
    store.add(LOGS_APP, {"habit_id": create_record_url(HABITS_APP, habit_id), "date": DAY, "completed": True})

    resp = api.get("/api/v1/dashboard", params={"day": DAY})

    assert resp.status_code == 200
    body = resp.json()
    assert body["completion_rate"] == 100
    assert body["completed"] == 1 and body["total"] == 1
    assert body["habits"][0]["habit"]["name"] == "Meditate"
    assert [d["date"] for d in body["week"]][0] == DAY


def test_create_habit_requires_name(api):
    resp = api.post("/api/v1/habits", json={"name": "  "})
    assert resp.status_code == 400


def test_create_and_toggle_habit(api, store):
    resp = api.post("/api/v1/habits", json={"name": "Read", "icon": "📚"})
    assert resp.status_code == 200
    habit_id = resp.json()["habits"][0]["id"]

    resp = api.post(f"/api/v1/habits/{habit_id}/toggle", params={"day": DAY})
    assert resp.status_code == 200
    assert resp.json()["completed"] is True

    resp = api.post(f"/api/v1/habits/{habit_id}/toggle", params={"day": DAY})
    assert resp.json()["completed"] is False
    assert len(store.apps[LOGS_APP]) == 1


def test_toggle_unknown_habit(api):
    resp = api.post("/api/v1/habits/nope/toggle")
    assert resp.status_code == 404


def test_week(api):
    resp = api.get("/api/v1/week", params={"anchor": "2026-10-22"})
    assert resp.status_code == 200
    days = resp.json()
    assert len(days) == 7
    assert days[0]["date"] == DAY
    assert days[-1]["date"] == "2026-10-25"


def test_reload_failure(api, store):
    api.get("/api/v1/habits")
    store.fail_with = 500

    resp = api.post("/api/v1/reload")
    assert resp.status_code == 502


def test_habit_options(api):
    body = api.get("/api/v1/habits/options").json()
    assert len(body["colors"]) == 7
    assert "🎯" in body["icons"]


def test_dashboard_day_does_not_change_selection(api, store):
    api.get("/api/v1/dashboard", params={"day": "2026-10-30"})

    body = api.get("/api/v1/dashboard").json()
    assert body["date"] == DAY


def test_select_date(api):
    resp = api.post("/api/v1/selected-date", params={"day": "2026-10-30"})
    assert resp.status_code == 200

    assert api.get("/api/v1/dashboard").json()["date"] == "2026-10-30"
    assert api.get("/api/v1/week").json()[0]["date"] == "2026-10-26"
