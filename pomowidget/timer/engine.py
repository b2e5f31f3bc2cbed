"""Timer state machine for PomoWidget.

Sessions
--------
WORK          Focus countdown.
SHORT_BREAK   Short rest.
LONG_BREAK    Long rest.

Transitions
-----------
WORK → SHORT_BREAK                 (timer reaches 0)
SHORT_BREAK | LONG_BREAK → WORK    (timer reaches 0)
Any → Any                          (change_session)

The clock always stops at a session boundary; the next countdown
begins only on an explicit ``start()``.

Mutation model
--------------
The engine is the only writer of ``PomodoroState``.  Ticks and actions
both arrive on the Qt event loop, so they never interleave.  A mutation
requested *while* a snapshot is being broadcast (a subscriber reacting
to an update) is queued and applied once the broadcast has finished, so
every subscriber sees snapshots in mutation order.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Mapping
from dataclasses import replace

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .presets import DEFAULT_PRESET, PRESETS
from .state import (
    PomodoroSettings,
    PomodoroState,
    SessionType,
    merge_settings,
    next_session,
    normalize_patch,
)

logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000


class TimerEngine(QObject):
    """Qt-based Pomodoro countdown that owns the one ``PomodoroState``.

    Signals
    -------
    state_updated(state: PomodoroState)
        Emitted after every mutation that changed the state.
    session_completed(session_type: SessionType)
        Emitted when a countdown reaches 0, after the transition to the
        next session has been applied.
    """

    state_updated = pyqtSignal(object)
    session_completed = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        settings: PomodoroSettings | None = None,
    ) -> None:
        super().__init__(parent)

        if settings is None:
            settings = PRESETS[DEFAULT_PRESET]
        self._state: PomodoroState = PomodoroState.initial(settings)

        # ── mutation queue ────────────────────────────────────────────
        self._pending: deque[Callable[[PomodoroState], PomodoroState]] = deque()
        self._draining: bool = False

        # ── Qt timer ──────────────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self._on_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    def snapshot(self) -> PomodoroState:
        """The current state.  Immutable, safe to hand to the shell."""
        return self._state

    @property
    def session_type(self) -> SessionType:
        return self._state.current_session

    @property
    def remaining(self) -> int:
        """Seconds left on the clock."""
        return self._state.time_left

    @property
    def is_running(self) -> bool:
        return self._state.is_running

    @property
    def settings(self) -> PomodoroSettings:
        return self._state.settings

    # ══════════════════════════════════════════════════════════════════
    #  SUBSCRIPTION
    # ══════════════════════════════════════════════════════════════════

    def subscribe(self, callback: Callable[[PomodoroState], object]) -> None:
        """Deliver the current snapshot now, then every later update."""
        callback(self._state)
        self.state_updated.connect(callback)

    def unsubscribe(self, callback: Callable[[PomodoroState], object]) -> None:
        self.state_updated.disconnect(callback)

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Run the clock.  First decrement comes one interval later."""
        self._mutate(self._apply_start)

    def stop(self) -> None:
        """Freeze the clock, keeping the remaining time."""
        self._mutate(self._apply_stop)

    def toggle(self) -> None:
        """Start when stopped, stop when running."""
        self._mutate(
            lambda s: self._apply_stop(s) if s.is_running else self._apply_start(s)
        )

    def reset(self) -> None:
        """Rewind the active session to its full duration and stop."""
        self._mutate(
            lambda s: self._stopped(replace(s, time_left=s.session_duration))
        )

    def change_session(self, session_type: SessionType) -> None:
        """Jump to *session_type*, full duration, clock stopped.

        Any target is accepted.  Asking for the session that is already
        active still rewinds and stops it.
        """
        session_type = SessionType(session_type)
        self._mutate(lambda s: self._enter_session(s, session_type))

    def update_settings(self, patch: Mapping) -> None:
        """Merge a partial settings mapping into the current settings.

        Raises ``InvalidSettingsError`` (and changes nothing) when any
        provided duration is not a positive whole number of seconds.
        """
        # Validated up front so the caller gets the error synchronously,
        # even if the merge itself ends up queued.
        changes = normalize_patch(patch)
        self._mutate(lambda s: self._apply_settings(s, changes))

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: transitions
    # ══════════════════════════════════════════════════════════════════

    def _apply_start(self, state: PomodoroState) -> PomodoroState:
        if state.is_running:
            return state
        self._qt_timer.start()
        return replace(state, is_running=True)

    def _apply_stop(self, state: PomodoroState) -> PomodoroState:
        return self._stopped(state)

    def _stopped(self, state: PomodoroState) -> PomodoroState:
        self._qt_timer.stop()
        if not state.is_running:
            return state
        return replace(state, is_running=False)

    def _enter_session(
        self, state: PomodoroState, session_type: SessionType,
    ) -> PomodoroState:
        return self._stopped(replace(
            state,
            current_session=session_type,
            time_left=state.settings.duration_for(session_type),
        ))

    def _apply_settings(
        self, state: PomodoroState, changes: dict[SessionType, int],
    ) -> PomodoroState:
        merged = merge_settings(state.settings, changes)
        if merged == state.settings:
            return state
        logger.info("Settings updated: %s", merged.as_dict())

        active = state.current_session
        if merged.duration_for(active) != state.settings.duration_for(active):
            return self._stopped(replace(
                state,
                settings=merged,
                time_left=merged.duration_for(active),
            ))
        return replace(state, settings=merged)

    def _apply_tick(self, state: PomodoroState) -> PomodoroState:
        if not state.is_running:
            # stale timeout delivered after a stop
            self._qt_timer.stop()
            return state

        time_left = max(0, state.time_left - 1)
        if time_left > 0:
            return replace(state, time_left=time_left)

        completed = state.current_session
        following = next_session(completed)
        logger.info(
            "Session %s completed, next: %s", completed.value, following.value,
        )
        self._pending.append(self._completion_notice(completed))
        return self._enter_session(state, following)

    def _completion_notice(
        self, completed: SessionType,
    ) -> Callable[[PomodoroState], PomodoroState]:
        def notify(state: PomodoroState) -> PomodoroState:
            self.session_completed.emit(completed)
            return state
        return notify

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        self._mutate(self._apply_tick)

    def _mutate(
        self, transition: Callable[[PomodoroState], PomodoroState],
    ) -> None:
        self._pending.append(transition)
        if self._draining:
            return

        self._draining = True
        try:
            while self._pending:
                step = self._pending.popleft()
                previous = self._state
                self._state = step(previous)
                if self._state != previous:
                    self.state_updated.emit(self._state)
        finally:
            self._draining = False
