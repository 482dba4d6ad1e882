"""
living_apps_rest.py — HTTP client for the Living Apps record store REST API.
Each app (collection) exposes GET/POST /apps/{app_id}/records and
GET/PATCH/DELETE /apps/{app_id}/records/{record_id}. List responses are a JSON
object mapping record id -> record, not an array.
Uses only httpx.
"""
import logging
import re

import httpx

from config import LIVING_APPS_BASE_URL, LIVING_APPS_COOKIE, LIVING_APPS_TIMEOUT

logger = logging.getLogger(__name__)

# Record ids are 24 hex characters; a reference is any string ending in one.
_RECORD_ID_SUFFIX = re.compile(r"([a-f0-9]{24})$", re.IGNORECASE)


class LivingAppsError(Exception):
    """Raised for transport failures and non-success responses."""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def extract_record_id(reference: str | None) -> str | None:
    """Return the trailing 24-hex record id of a reference URL, or None."""
    if not reference:
        return None
    match = _RECORD_ID_SUFFIX.search(reference)
    return match.group(1) if match else None


def create_record_url(app_id: str, record_id: str, base_url: str = LIVING_APPS_BASE_URL) -> str:
    """Build the reference URL pointing at record_id inside app_id."""
    return f"{base_url}/apps/{app_id}/records/{record_id}"


class LivingAppsClient:
    """Async CRUD calls against one Living Apps host. No retries, no backoff."""

    def __init__(
        self,
        base_url: str = LIVING_APPS_BASE_URL,
        cookie: str = LIVING_APPS_COOKIE,
        timeout: float = LIVING_APPS_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.cookie = cookie
        self.timeout = timeout
        self.transport = transport

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.cookie:
            headers["Cookie"] = self.cookie
        return headers

    async def _call(self, method: str, endpoint: str, data: dict | None = None):
        url = f"{self.base_url}{endpoint}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.request(method, url, json=data, headers=self._headers())
        except httpx.HTTPError as e:
            logger.error(f"{method} {endpoint} failed: {e}")
            raise LivingAppsError(str(e)) from e

        if resp.is_error:
            logger.error(f"{method} {endpoint} returned {resp.status_code}")
            raise LivingAppsError(resp.text, status_code=resp.status_code, body=resp.text)

        # DELETE usually answers with an empty body
        if method == "DELETE":
            return True
        return resp.json()

    async def list_records(self, app_id: str) -> list[dict]:
        """All records of an app, flattened to [{"id": ..., **record}]."""
        data = await self._call("GET", f"/apps/{app_id}/records")
        return [{"id": record_id, **record} for record_id, record in (data or {}).items()]

    async def get_record(self, app_id: str, record_id: str) -> dict:
        data = await self._call("GET", f"/apps/{app_id}/records/{record_id}")
        return {**data, "id": data.get("id", record_id)}

    async def create_record(self, app_id: str, fields: dict):
        """Create a record. The result is opaque; re-list to learn the new id."""
        return await self._call("POST", f"/apps/{app_id}/records", {"fields": fields})

    async def update_record(self, app_id: str, record_id: str, fields: dict):
        """Partial update of the given fields."""
        return await self._call("PATCH", f"/apps/{app_id}/records/{record_id}", {"fields": fields})

    async def delete_record(self, app_id: str, record_id: str) -> bool:
        return await self._call("DELETE", f"/apps/{app_id}/records/{record_id}")
