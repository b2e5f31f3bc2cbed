"""Session types, settings, and the immutable state snapshot.

Everything here is a plain value: the engine replaces its state with a
new ``PomodoroState`` on every mutation and broadcasts that same object.

Wire format
-----------
Session types and settings keys use the camelCase names the shell sends
(``work``, ``shortBreak``, ``longBreak``).  ``as_dict()`` produces the
snapshot mapping the shell renders from.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import Enum


# ── enums ─────────────────────────────────────────────────────────────────


class SessionType(Enum):
    WORK = "work"
    SHORT_BREAK = "shortBreak"
    LONG_BREAK = "longBreak"


class InvalidSettingsError(ValueError):
    """A settings update was refused.  Prior settings stay in force."""


# ── hub rule ──────────────────────────────────────────────────────────────

# Every break returns to work; work always goes to a short break.
NEXT_SESSION: dict[SessionType, SessionType] = {
    SessionType.WORK: SessionType.SHORT_BREAK,
    SessionType.SHORT_BREAK: SessionType.WORK,
    SessionType.LONG_BREAK: SessionType.WORK,
}


def next_session(completed: SessionType) -> SessionType:
    """Session that follows the natural completion of *completed*."""
    return NEXT_SESSION[completed]


# ── settings ──────────────────────────────────────────────────────────────

_FIELD_FOR_SESSION: dict[SessionType, str] = {
    SessionType.WORK: "work",
    SessionType.SHORT_BREAK: "short_break",
    SessionType.LONG_BREAK: "long_break",
}

# snake_case aliases accepted alongside the wire names
_KEY_ALIASES: dict[str, SessionType] = {
    "short_break": SessionType.SHORT_BREAK,
    "long_break": SessionType.LONG_BREAK,
}


@dataclass(frozen=True)
class PomodoroSettings:
    """Duration in whole seconds for each session type."""

    work: int = 25 * 60
    short_break: int = 5 * 60
    long_break: int = 15 * 60

    def __post_init__(self) -> None:
        for session, name in _FIELD_FOR_SESSION.items():
            _check_duration(session, getattr(self, name))

    def duration_for(self, session: SessionType) -> int:
        return getattr(self, _FIELD_FOR_SESSION[session])

    def as_dict(self) -> dict[str, int]:
        return {
            session.value: self.duration_for(session)
            for session in SessionType
        }

    @classmethod
    def from_mapping(cls, data: Mapping) -> PomodoroSettings:
        """Build a complete settings value; all three fields required."""
        patch = normalize_patch(data)
        missing = [s.value for s in SessionType if s not in patch]
        if missing:
            raise InvalidSettingsError(
                f"missing duration(s): {', '.join(missing)}"
            )
        return cls(**{_FIELD_FOR_SESSION[s]: v for s, v in patch.items()})


def _check_duration(session: SessionType, value: object) -> None:
    # bool is an int subclass but never a duration
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidSettingsError(
            f"{session.value} must be a whole number of seconds, "
            f"got {value!r}"
        )
    if value <= 0:
        raise InvalidSettingsError(
            f"{session.value} must be positive, got {value}"
        )


def _session_for_key(key: object) -> SessionType:
    if isinstance(key, SessionType):
        return key
    if isinstance(key, str):
        if key in _KEY_ALIASES:
            return _KEY_ALIASES[key]
        try:
            return SessionType(key)
        except ValueError:
            pass
    raise InvalidSettingsError(f"unknown settings field {key!r}")


def normalize_patch(patch: Mapping) -> dict[SessionType, int]:
    """Validate a (possibly partial) settings mapping.

    Keys may be ``SessionType`` members, wire names or snake_case names.
    Raises ``InvalidSettingsError`` on unknown keys or bad durations.
    """
    if not isinstance(patch, Mapping):
        raise InvalidSettingsError(
            f"settings update must be a mapping, got {type(patch).__name__}"
        )
    result: dict[SessionType, int] = {}
    for key, value in patch.items():
        session = _session_for_key(key)
        _check_duration(session, value)
        result[session] = value
    return result


def merge_settings(
    current: PomodoroSettings, patch: Mapping,
) -> PomodoroSettings:
    """Return *current* with the fields in *patch* replaced.

    Fields absent from *patch* keep their previous value.  The whole
    merge is refused if any provided field is invalid.
    """
    changes = normalize_patch(patch)
    if not changes:
        return current
    return replace(
        current,
        **{_FIELD_FOR_SESSION[s]: v for s, v in changes.items()},
    )


# ── snapshot ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class PomodoroState:
    """The snapshot broadcast after every mutation."""

    current_session: SessionType
    time_left: int
    is_running: bool
    settings: PomodoroSettings

    @classmethod
    def initial(cls, settings: PomodoroSettings) -> PomodoroState:
        return cls(
            current_session=SessionType.WORK,
            time_left=settings.work,
            is_running=False,
            settings=settings,
        )

    @property
    def session_duration(self) -> int:
        """Configured length of the active session."""
        return self.settings.duration_for(self.current_session)

    def as_dict(self) -> dict:
        return {
            "currentSession": self.current_session.value,
            "timeLeft": self.time_left,
            "isRunning": self.is_running,
            "settings": self.settings.as_dict(),
        }
