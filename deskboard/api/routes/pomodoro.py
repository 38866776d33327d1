"""``/pomodoro``: completed-session log and aggregate statistics."""

from __future__ import annotations

from datetime import datetime, time, timedelta

from fastapi import APIRouter
from sqlalchemy import func

from ...database.db import get_session
from ...database.models import PomodoroSession
from ...validation import validate_positive_number, validate_required
from ..schemas import SessionCreate, envelope

router = APIRouter(prefix="/pomodoro", tags=["pomodoro"])


@router.post("/session", status_code=201)
def log_session(body: SessionCreate) -> dict:
    validate_required(body.duration, "duration")
    validate_positive_number(body.duration, "duration")
    with get_session() as db:
        record = PomodoroSession(duration=round(body.duration))
        db.add(record)
        db.flush()
        return envelope(record.to_dict())


@router.get("/stats")
def session_stats() -> dict:
    today_start = datetime.combine(datetime.now().date(), time.min)
    week_start = today_start - timedelta(days=7)

    with get_session() as db:
        total_sessions, total_minutes = db.query(
            func.count(PomodoroSession.id),
            func.coalesce(func.sum(PomodoroSession.duration), 0),
        ).one()
        sessions_today = (
            db.query(func.count(PomodoroSession.id))
            .filter(PomodoroSession.completed_at >= today_start)
            .scalar()
        )
        sessions_this_week = (
            db.query(func.count(PomodoroSession.id))
            .filter(PomodoroSession.completed_at >= week_start)
            .scalar()
        )

    return envelope({
        "total_sessions": total_sessions,
        "total_minutes": total_minutes,
        "sessions_today": sessions_today,
        "sessions_this_week": sessions_this_week,
    })
