"""UI package."""

from .timer_widget import TimerWidget
from .settings_dialog import SettingsDialog
from .styles import build_stylesheet, get_palette

__all__ = [
    "TimerWidget",
    "SettingsDialog",
    "build_stylesheet",
    "get_palette",
]
