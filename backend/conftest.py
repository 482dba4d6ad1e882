import json

import httpx
import pytest

from living_apps_rest import LivingAppsClient
from services.living_apps_service import LivingAppsService

BASE_URL = "https://records.test/rest"
HABITS_APP = "a" * 24
LOGS_APP = "b" * 24


class FakeLivingApps:
    """In-memory stand-in for the record store, served through httpx.MockTransport."""

    def __init__(self):
        self.apps: dict[str, dict[str, dict]] = {HABITS_APP: {}, LOGS_APP: {}}
        self.requests: list[httpx.Request] = []
        self.fail_with: int | None = None
        self.fail_methods: set[str] = set()  # fail only these verbs
        self._next_id = 1

    def add(self, app_id: str, fields: dict, record_id: str | None = None) -> str:
        record_id = record_id or self._new_id()
        self.apps[app_id][record_id] = {"createdat": "2026-01-01T00:00:00", "updatedat": None, "fields": dict(fields)}
        return record_id

    def _new_id(self) -> str:
        record_id = f"{self._next_id:024x}"
        self._next_id += 1
        return record_id

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with or request.method in self.fail_methods:
            return httpx.Response(self.fail_with or 500, text="store unavailable")

        # /rest/apps/{app_id}/records[/{record_id}]
        parts = request.url.path.strip("/").split("/")
        app_id = parts[2]
        record_id = parts[4] if len(parts) > 4 else None
        records = self.apps.setdefault(app_id, {})
        body = json.loads(request.content) if request.content else {}

        if request.method == "GET" and record_id is None:
            return httpx.Response(200, json=records)
        if request.method == "POST":
            new_id = self.add(app_id, body["fields"])
            return httpx.Response(200, json={"id": new_id})
        if record_id not in records:
            return httpx.Response(404, text="record not found")
        if request.method == "GET":
            return httpx.Response(200, json={"id": record_id, **records[record_id]})
        if request.method == "PATCH":
            records[record_id]["fields"].update(body["fields"])
            return httpx.Response(200, json={"id": record_id, **records[record_id]})
        if request.method == "DELETE":
            del records[record_id]
            return httpx.Response(204)
        return httpx.Response(405)


@pytest.fixture
def store():
    return FakeLivingApps()


@pytest.fixture
def client(store):
    return LivingAppsClient(base_url=BASE_URL, cookie="sid=abc", transport=httpx.MockTransport(store.handler))


@pytest.fixture
def service(client):
    return LivingAppsService(client, habits_app_id=HABITS_APP, habit_logs_app_id=LOGS_APP)
