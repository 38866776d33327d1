"""HTTP client for the dashboard REST API.

Every call unwraps the ``{"data": ..., "success": true}`` envelope and
turns failures into the shared error taxonomy:

* 400 → :class:`ValidationError`
* 404 → :class:`NotFoundError`
* anything else (no connection, timeout, other status, bad JSON)
  → :class:`PersistenceError`

The HTTP session is injectable.  Anything with ``requests``-style
``get/post/put/patch/delete`` methods works, which is how the tests talk
to the app through FastAPI's ``TestClient``.
"""

from __future__ import annotations

import logging

import requests

from ..errors import NotFoundError, PersistenceError, ValidationError
from .records import RecordId

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0


class ApiClient:
    """Thin wrapper around one HTTP session and the API base URL."""

    def __init__(
        self,
        base_url: str,
        *,
        session=None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    def request(self, method: str, path: str, *, json=None, resource: str = "Resource"):
        """Send a request and return the unwrapped ``data`` payload."""
        url = f"{self._base_url}{path}"
        send = getattr(self._session, method.lower())
        kwargs = {"timeout": self._timeout}
        if json is not None:
            kwargs["json"] = json

        try:
            response = send(url, **kwargs)
        except requests.RequestException as exc:
            raise PersistenceError(f"{method} {path} failed: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            body = None

        status = response.status_code
        if status == 404:
            raise NotFoundError(resource)
        if status == 400:
            message = body.get("error") if isinstance(body, dict) else None
            raise ValidationError(message or "Invalid request")
        if not 200 <= status < 300:
            message = body.get("error") if isinstance(body, dict) else None
            raise PersistenceError(f"{method} {path} returned {status}: {message or 'no details'}")
        if not isinstance(body, dict) or "data" not in body:
            raise PersistenceError(f"{method} {path} returned a malformed payload")
        return body["data"]


class ResourceApi:
    """CRUD endpoints for one resource kind (``/notes``, ``/tasks``, ``/links``)."""

    def __init__(self, client: ApiClient, path: str, resource: str) -> None:
        self._client = client
        self._path = path
        self._resource = resource

    @property
    def resource(self) -> str:
        return self._resource

    def _call(self, method: str, path: str = "", json=None):
        return self._client.request(
            method, f"{self._path}{path}", json=json, resource=self._resource,
        )

    def list_all(self) -> list[dict]:
        data = self._call("GET")
        if not isinstance(data, list):
            raise PersistenceError(f"GET {self._path} did not return a list")
        return data

    def create(self, payload: dict) -> dict:
        return self._call("POST", json=payload)

    def update(self, record_id: RecordId, changes: dict) -> dict:
        return self._call("PUT", f"/{record_id}", json=changes)

    def delete(self, record_id: RecordId) -> None:
        self._call("DELETE", f"/{record_id}")


class TaskApi(ResourceApi):

    def __init__(self, client: ApiClient) -> None:
        super().__init__(client, "/tasks", "Task")

    def toggle(self, record_id: RecordId) -> dict:
        return self._call("PATCH", f"/{record_id}/toggle")


class LinkApi(ResourceApi):

    def __init__(self, client: ApiClient) -> None:
        super().__init__(client, "/links", "Link")

    def reorder(self, positions: list[dict]) -> list[dict]:
        """Send ``[{"id": ..., "position": ...}]``; returns every link in order."""
        data = self._call("PUT", "/reorder", json={"links": positions})
        if not isinstance(data, list):
            raise PersistenceError("PUT /links/reorder did not return a list")
        return data


class NoteApi(ResourceApi):

    def __init__(self, client: ApiClient) -> None:
        super().__init__(client, "/notes", "Note")


class PomodoroApi:

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def log_session(self, duration_minutes: int) -> dict:
        return self._client.request(
            "POST", "/pomodoro/session",
            json={"duration": duration_minutes}, resource="Session",
        )

    def stats(self) -> dict:
        return self._client.request("GET", "/pomodoro/stats", resource="Stats")
