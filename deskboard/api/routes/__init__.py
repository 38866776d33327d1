"""API routers, one per resource kind."""

from .links import router as links_router
from .notes import router as notes_router
from .pomodoro import router as pomodoro_router
from .tasks import router as tasks_router

__all__ = ["links_router", "notes_router", "pomodoro_router", "tasks_router"]
