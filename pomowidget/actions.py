"""Inbound action messages and the single path that routes them.

Buttons, keyboard shortcuts and the settings form all build an
``Action`` (or a raw ``{"type": ..., "payload": ...}`` message) and hand
it to ``ActionDispatcher.dispatch``.  Timer actions go to the engine;
view and window actions update the shell's ``ViewState`` and the host
window.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Protocol

from PyQt6.QtCore import QObject, pyqtSignal

from .timer.engine import TimerEngine
from .timer.state import InvalidSettingsError, SessionType
from .view_state import ViewState

logger = logging.getLogger(__name__)


class ActionKind(Enum):
    START_STOP = "START_STOP"
    RESET = "RESET"
    CHANGE_SESSION = "CHANGE_SESSION"
    UPDATE_SETTING = "UPDATE_SETTING"
    TOGGLE_TRANSPARENCY = "TOGGLE_TRANSPARENCY"
    TOGGLE_DARK_MODE = "TOGGLE_DARK_MODE"
    MINIMIZE = "MINIMIZE"
    CLOSE = "CLOSE"


_NO_PAYLOAD = frozenset({
    ActionKind.START_STOP,
    ActionKind.RESET,
    ActionKind.MINIMIZE,
    ActionKind.CLOSE,
})

_OPTIONAL_BOOL_PAYLOAD = frozenset({
    ActionKind.TOGGLE_TRANSPARENCY,
    ActionKind.TOGGLE_DARK_MODE,
})


class UnknownActionError(ValueError):
    """An inbound message had an unknown kind or a malformed payload."""


@dataclass(frozen=True)
class Action:
    kind: ActionKind
    payload: Any = None


def parse_action(message: Action | Mapping) -> Action:
    """Validate *message* and return it as an ``Action``.

    Accepts an ``Action`` or a mapping with ``type`` and optional
    ``payload`` keys.  ``CHANGE_SESSION`` payloads are normalised to
    ``SessionType``.
    """
    if isinstance(message, Action):
        kind, payload = message.kind, message.payload
    elif isinstance(message, Mapping):
        raw = message.get("type")
        try:
            kind = ActionKind(raw)
        except ValueError:
            raise UnknownActionError(f"unknown action type {raw!r}") from None
        payload = message.get("payload")
    else:
        raise UnknownActionError(
            f"action must be an Action or a mapping, got {type(message).__name__}"
        )

    if kind in _NO_PAYLOAD:
        if payload is not None:
            raise UnknownActionError(f"{kind.value} takes no payload")
    elif kind in _OPTIONAL_BOOL_PAYLOAD:
        if payload is not None and not isinstance(payload, bool):
            raise UnknownActionError(
                f"{kind.value} payload must be a bool, got {payload!r}"
            )
    elif kind == ActionKind.CHANGE_SESSION:
        try:
            payload = SessionType(payload)
        except ValueError:
            raise UnknownActionError(
                f"unknown session type {payload!r}"
            ) from None
    elif kind == ActionKind.UPDATE_SETTING:
        if not isinstance(payload, Mapping):
            raise UnknownActionError(
                "UPDATE_SETTING payload must be a mapping of durations"
            )
    return Action(kind, payload)


class WindowHost(Protocol):
    """Window-level side effects the dispatcher triggers."""

    def minimize(self) -> None: ...

    def close_app(self) -> None: ...

    def set_draggable(self, draggable: bool) -> None: ...

    def set_transparent(self, transparent: bool) -> None: ...


class ActionDispatcher(QObject):
    """Routes every inbound action to the engine, the view or the host.

    Signals
    -------
    view_changed(view: ViewState)
        Emitted when dark mode or transparency flips.
    settings_rejected(message: str)
        Emitted when an ``UPDATE_SETTING`` payload is refused.
    """

    view_changed = pyqtSignal(object)
    settings_rejected = pyqtSignal(str)

    def __init__(
        self,
        engine: TimerEngine,
        host: WindowHost | None = None,
        parent: QObject | None = None,
        *,
        view: ViewState | None = None,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._host = host
        self._view = view if view is not None else ViewState()

    @property
    def view(self) -> ViewState:
        return self._view

    def attach_host(self, host: WindowHost) -> None:
        """Bind the window and push the current drag/transparency flags."""
        self._host = host
        host.set_transparent(self._view.is_transparent)
        host.set_draggable(self._view.is_draggable)

    def dispatch(self, message: Action | Mapping) -> bool:
        """Apply one action.  Returns False if it was ignored or refused."""
        try:
            action = parse_action(message)
        except UnknownActionError as error:
            logger.warning("Ignoring action %r: %s", message, error)
            return False

        kind = action.kind
        if kind == ActionKind.START_STOP:
            self._engine.toggle()
        elif kind == ActionKind.RESET:
            self._engine.reset()
        elif kind == ActionKind.CHANGE_SESSION:
            self._engine.change_session(action.payload)
        elif kind == ActionKind.UPDATE_SETTING:
            try:
                self._engine.update_settings(action.payload)
            except InvalidSettingsError as error:
                logger.info("Settings update refused: %s", error)
                self.settings_rejected.emit(str(error))
                return False
        elif kind == ActionKind.TOGGLE_TRANSPARENCY:
            self._set_transparent(
                not self._view.is_transparent
                if action.payload is None else action.payload
            )
        elif kind == ActionKind.TOGGLE_DARK_MODE:
            dark = (
                not self._view.is_dark_mode
                if action.payload is None else action.payload
            )
            self._set_view(replace(self._view, is_dark_mode=dark))
        elif kind == ActionKind.MINIMIZE:
            if self._host is not None:
                self._host.minimize()
        elif kind == ActionKind.CLOSE:
            if self._host is not None:
                self._host.close_app()
        return True

    # ── internal ──────────────────────────────────────────────────────

    def _set_transparent(self, transparent: bool) -> None:
        if not self._set_view(replace(self._view, is_transparent=transparent)):
            return
        if self._host is not None:
            self._host.set_transparent(self._view.is_transparent)
            self._host.set_draggable(self._view.is_draggable)

    def _set_view(self, view: ViewState) -> bool:
        if view == self._view:
            return False
        self._view = view
        self.view_changed.emit(view)
        return True
