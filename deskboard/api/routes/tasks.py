"""``/tasks``: CRUD plus a completion toggle."""

from __future__ import annotations

from fastapi import APIRouter

from ...database.db import get_session
from ...database.models import Task
from ...errors import NotFoundError, ValidationError
from ...validation import validate_date, validate_priority, validate_required
from ..schemas import TaskCreate, TaskUpdate, envelope

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("")
def list_tasks(status: str | None = None) -> dict:
    """All tasks, newest first.  ``status`` filters on active/completed."""
    with get_session() as db:
        query = db.query(Task)
        if status == "completed":
            query = query.filter(Task.completed.is_(True))
        elif status == "active":
            query = query.filter(Task.completed.is_(False))
        tasks = query.order_by(Task.created_at.desc(), Task.id.desc()).all()
        return envelope([t.to_dict() for t in tasks])


@router.get("/{task_id}")
def get_task(task_id: int) -> dict:
    with get_session() as db:
        task = db.get(Task, task_id)
        if task is None:
            raise NotFoundError("Task")
        return envelope(task.to_dict())


@router.post("", status_code=201)
def create_task(body: TaskCreate) -> dict:
    validate_required(body.title, "title")
    priority = body.priority or "medium"
    validate_priority(priority)
    if body.due_date:
        validate_date(body.due_date)

    with get_session() as db:
        task = Task(title=body.title, priority=priority, due_date=body.due_date or None)
        db.add(task)
        db.flush()
        return envelope(task.to_dict())


@router.put("/{task_id}")
def update_task(task_id: int, body: TaskUpdate) -> dict:
    changes = body.model_dump(exclude_unset=True)
    with get_session() as db:
        task = db.get(Task, task_id)
        if task is None:
            raise NotFoundError("Task")

        if "title" in changes:
            validate_required(changes["title"], "title")
        if "priority" in changes:
            validate_priority(changes["priority"])
        if changes.get("due_date") is not None:
            validate_date(changes["due_date"])
        if "completed" in changes and changes["completed"] is None:
            raise ValidationError("completed must be a boolean")
        if not changes:
            raise ValidationError("No fields to update")

        for field, value in changes.items():
            setattr(task, field, value)
        db.flush()
        return envelope(task.to_dict())


@router.patch("/{task_id}/toggle")
def toggle_task(task_id: int) -> dict:
    with get_session() as db:
        task = db.get(Task, task_id)
        if task is None:
            raise NotFoundError("Task")
        task.completed = not task.completed
        db.flush()
        return envelope(task.to_dict())


@router.delete("/{task_id}")
def delete_task(task_id: int) -> dict:
    with get_session() as db:
        task = db.get(Task, task_id)
        if task is None:
            raise NotFoundError("Task")
        db.delete(task)
        return envelope({"id": task_id})
