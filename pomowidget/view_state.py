"""Shell-local view state and the pure helpers the widgets render from."""

from __future__ import annotations

from dataclasses import dataclass

from .timer.state import PomodoroSettings, PomodoroState, SessionType


SESSION_LABELS: dict[SessionType, str] = {
    SessionType.WORK:        "Work",
    SessionType.SHORT_BREAK: "Short break",
    SessionType.LONG_BREAK:  "Long break",
}


@dataclass(frozen=True)
class ViewState:
    """Presentation flags owned by the shell, not the engine."""

    is_dark_mode: bool = False
    is_transparent: bool = False

    @property
    def is_draggable(self) -> bool:
        return not self.is_transparent


def format_time(seconds: int) -> str:
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


def status_text(state: PomodoroState) -> str:
    if state.is_running:
        return f"{SESSION_LABELS[state.current_session]} in progress"
    return "Ready"


def mode_switch_target(state: PomodoroState) -> SessionType:
    """Where the break/work button jumps to from the current session."""
    if state.current_session == SessionType.WORK:
        return SessionType.SHORT_BREAK
    return SessionType.WORK


def preset_tooltip(settings: PomodoroSettings) -> str:
    return "\n".join([
        f"Work: {format_time(settings.work)}",
        f"Short Break: {format_time(settings.short_break)}",
        f"Long Break: {format_time(settings.long_break)}",
    ])
