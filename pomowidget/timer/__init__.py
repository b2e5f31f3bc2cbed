"""Timer package."""

from .engine import TimerEngine, TICK_INTERVAL_MS
from .presets import PRESETS, DEFAULT_PRESET, preset_name_for
from .state import (
    SessionType,
    PomodoroSettings,
    PomodoroState,
    InvalidSettingsError,
    NEXT_SESSION,
    merge_settings,
    next_session,
)

__all__ = [
    "TimerEngine",
    "TICK_INTERVAL_MS",
    "PRESETS",
    "DEFAULT_PRESET",
    "preset_name_for",
    "SessionType",
    "PomodoroSettings",
    "PomodoroState",
    "InvalidSettingsError",
    "NEXT_SESSION",
    "merge_settings",
    "next_session",
]
