"""UI package."""

from .pomodoro_widget import PomodoroWidget
from .resource_widgets import NotesWidget, QuickLinksWidget, ResourceListWidget, TasksWidget
from .settings_dialog import TimerSettingsDialog
from .weather_widget import WeatherWidget

__all__ = [
    "PomodoroWidget",
    "NotesWidget",
    "QuickLinksWidget",
    "ResourceListWidget",
    "TasksWidget",
    "TimerSettingsDialog",
    "WeatherWidget",
]
