"""Tests for the REST API: envelopes, status codes, CRUD, ordering,
toggle, reorder and pomodoro statistics."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from deskboard.database.db import get_session
from deskboard.database.models import PomodoroSession


def _data(response):
    body = response.json()
    assert body["success"] is True
    return body["data"]


def _error(response, status):
    assert response.status_code == status
    body = response.json()
    assert body["success"] is False
    return body["error"]


# ═══════════════════════════════════════════════════════════════════════
#  GENERAL
# ═══════════════════════════════════════════════════════════════════════


class TestGeneral:

    def test_health(self, api):
        body = api.get("/api/health").json()
        assert body["status"] == "ok"
        assert "timestamp" in body

    def test_unknown_route_is_enveloped_404(self, api):
        message = _error(api.get("/api/nothing-here"), 404)
        assert message == "Route GET /api/nothing-here not found"

    def test_malformed_body_is_400(self, api):
        _error(api.post("/api/tasks", json={"title": 42}), 400)

    def test_non_numeric_id_is_400(self, api):
        _error(api.get("/api/notes/abc"), 400)


# ═══════════════════════════════════════════════════════════════════════
#  NOTES
# ═══════════════════════════════════════════════════════════════════════


class TestNotes:

    def test_create_returns_201(self, api):
        response = api.post("/api/notes", json={"title": "Ideas", "content": "ship it"})
        assert response.status_code == 201
        note = _data(response)
        assert note["id"] > 0
        assert note["title"] == "Ideas"
        assert note["content"] == "ship it"
        assert note["created_at"] and note["updated_at"]

    def test_title_required(self, api):
        assert _error(api.post("/api/notes", json={"content": "x"}), 400) == "title is required"

    def test_get_missing_is_404(self, api):
        assert _error(api.get("/api/notes/999"), 404) == "Note not found"

    def test_update_refreshes_updated_at(self, api):
        note = _data(api.post("/api/notes", json={"title": "a", "content": "b"}))
        updated = _data(api.put(f"/api/notes/{note['id']}", json={"content": "c"}))
        assert updated["title"] == "a"
        assert updated["content"] == "c"
        assert updated["updated_at"] >= note["updated_at"]
        assert updated["created_at"] == note["created_at"]

    def test_update_missing_is_404(self, api):
        _error(api.put("/api/notes/999", json={"title": "x"}), 404)

    def test_empty_update_is_400(self, api):
        note = _data(api.post("/api/notes", json={"title": "a"}))
        assert _error(api.put(f"/api/notes/{note['id']}", json={}), 400) == "No fields to update"

    def test_list_most_recently_updated_first(self, api):
        first = _data(api.post("/api/notes", json={"title": "first"}))
        _data(api.post("/api/notes", json={"title": "second"}))
        assert [n["title"] for n in _data(api.get("/api/notes"))] == ["second", "first"]
        api.put(f"/api/notes/{first['id']}", json={"title": "first, edited"})
        assert _data(api.get("/api/notes"))[0]["title"] == "first, edited"

    def test_delete(self, api):
        note = _data(api.post("/api/notes", json={"title": "bye"}))
        assert _data(api.delete(f"/api/notes/{note['id']}")) == {"id": note["id"]}
        _error(api.delete(f"/api/notes/{note['id']}"), 404)
        assert _data(api.get("/api/notes")) == []


# ═══════════════════════════════════════════════════════════════════════
#  TASKS
# ═══════════════════════════════════════════════════════════════════════


class TestTasks:

    def test_defaults(self, api):
        task = _data(api.post("/api/tasks", json={"title": "Buy milk"}))
        assert task["priority"] == "medium"
        assert task["completed"] is False
        assert task["due_date"] is None

    def test_invalid_priority(self, api):
        message = _error(api.post("/api/tasks", json={"title": "x", "priority": "urgent"}), 400)
        assert message == "Priority must be one of: low, medium, high"

    def test_invalid_due_date(self, api):
        message = _error(api.post("/api/tasks", json={"title": "x", "due_date": "someday"}), 400)
        assert message == "Invalid date format"

    def test_completed_must_be_boolean(self, api):
        task = _data(api.post("/api/tasks", json={"title": "x"}))
        _error(api.put(f"/api/tasks/{task['id']}", json={"completed": "yes"}), 400)

    def test_update_fields(self, api):
        task = _data(api.post("/api/tasks", json={"title": "x", "due_date": "2026-11-01"}))
        updated = _data(api.put(
            f"/api/tasks/{task['id']}",
            json={"completed": True, "priority": "high", "due_date": None},
        ))
        assert updated["completed"] is True
        assert updated["priority"] == "high"
        assert updated["due_date"] is None

    def test_update_missing_is_404(self, api):
        assert _error(api.put("/api/tasks/4242", json={"completed": True}), 404) == "Task not found"

    def test_toggle(self, api):
        task = _data(api.post("/api/tasks", json={"title": "x"}))
        assert _data(api.patch(f"/api/tasks/{task['id']}/toggle"))["completed"] is True
        assert _data(api.patch(f"/api/tasks/{task['id']}/toggle"))["completed"] is False

    def test_toggle_missing_is_404(self, api):
        _error(api.patch("/api/tasks/77/toggle"), 404)

    def test_status_filter(self, api):
        done = _data(api.post("/api/tasks", json={"title": "done"}))
        _data(api.post("/api/tasks", json={"title": "open"}))
        api.patch(f"/api/tasks/{done['id']}/toggle")
        assert [t["title"] for t in _data(api.get("/api/tasks?status=completed"))] == ["done"]
        assert [t["title"] for t in _data(api.get("/api/tasks?status=active"))] == ["open"]
        assert len(_data(api.get("/api/tasks"))) == 2


# ═══════════════════════════════════════════════════════════════════════
#  LINKS
# ═══════════════════════════════════════════════════════════════════════


class TestLinks:

    def _create(self, api, title, url="https://example.com", **extra):
        return _data(api.post("/api/links", json={"title": title, "url": url, **extra}))

    def test_positions_increment(self, api):
        assert [self._create(api, t)["position"] for t in "abc"] == [0, 1, 2]

    def test_position_follows_max_after_delete(self, api):
        self._create(api, "a")
        b = self._create(api, "b")
        api.delete(f"/api/links/{b['id']}")
        assert self._create(api, "c")["position"] == 1

    def test_invalid_url(self, api):
        assert _error(api.post("/api/links", json={"title": "x", "url": "not a url"}), 400) == "Invalid URL format"

    def test_url_required(self, api):
        assert _error(api.post("/api/links", json={"title": "x"}), 400) == "url is required"

    def test_reorder(self, api):
        a, b, c = (self._create(api, t) for t in "abc")
        response = api.put("/api/links/reorder", json={"links": [
            {"id": c["id"], "position": 0},
            {"id": a["id"], "position": 1},
            {"id": b["id"], "position": 2},
        ]})
        assert [link["title"] for link in _data(response)] == ["c", "a", "b"]

    def test_reorder_unknown_id_changes_nothing(self, api):
        a, b = (self._create(api, t) for t in "ab")
        response = api.put("/api/links/reorder", json={"links": [
            {"id": b["id"], "position": 0},
            {"id": 999, "position": 1},
        ]})
        _error(response, 404)
        assert [link["title"] for link in _data(api.get("/api/links"))] == ["a", "b"]

    def test_update(self, api):
        link = self._create(api, "a", icon="🐙")
        updated = _data(api.put(f"/api/links/{link['id']}", json={"url": "https://b.example"}))
        assert updated["url"] == "https://b.example"
        assert updated["icon"] == "🐙"

    def test_update_missing_is_404(self, api):
        assert _error(api.put("/api/links/5", json={"title": "x"}), 404) == "Link not found"


# ═══════════════════════════════════════════════════════════════════════
#  POMODORO
# ═══════════════════════════════════════════════════════════════════════


class TestPomodoro:

    def test_log_session(self, api):
        response = api.post("/api/pomodoro/session", json={"duration": 25})
        assert response.status_code == 201
        assert _data(response)["duration"] == 25

    @pytest.mark.parametrize("body,message", [
        ({}, "duration is required"),
        ({"duration": 0}, "duration must be a positive number"),
        ({"duration": -3}, "duration must be a positive number"),
    ])
    def test_invalid_session(self, api, body, message):
        assert _error(api.post("/api/pomodoro/session", json=body), 400) == message

    def test_stats_empty(self, api):
        assert _data(api.get("/api/pomodoro/stats")) == {
            "total_sessions": 0,
            "total_minutes": 0,
            "sessions_today": 0,
            "sessions_this_week": 0,
        }

    def test_stats_windows(self, api):
        now = datetime.now()
        with get_session() as db:
            db.add(PomodoroSession(duration=25, completed_at=now))
            db.add(PomodoroSession(duration=25, completed_at=now - timedelta(days=3)))
            db.add(PomodoroSession(duration=50, completed_at=now - timedelta(days=30)))
        stats = _data(api.get("/api/pomodoro/stats"))
        assert stats["total_sessions"] == 3
        assert stats["total_minutes"] == 100
        assert stats["sessions_today"] == 1
        assert stats["sessions_this_week"] == 2
