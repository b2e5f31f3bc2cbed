"""Tests for action parsing and the dispatcher.

Covers: message parsing and rejection, routing of timer actions to the
engine, settings refusals surfacing as a signal, and the view/host
actions (transparency, dark mode, minimize, close).
"""

import logging

import pytest

from pomowidget.actions import (
    Action, ActionDispatcher, ActionKind, UnknownActionError, parse_action,
)
from pomowidget.timer.presets import PRESETS
from pomowidget.timer.state import SessionType
from pomowidget.view_state import ViewState

from helpers import FakeHost, SignalCollector, run_ticks


# ═══════════════════════════════════════════════════════════════════════════
#  PARSING
# ═══════════════════════════════════════════════════════════════════════════


class TestParseAction:

    def test_mapping_without_payload(self):
        assert parse_action({"type": "START_STOP"}) == Action(ActionKind.START_STOP)

    def test_change_session_payload_normalised(self):
        action = parse_action({"type": "CHANGE_SESSION", "payload": "shortBreak"})
        assert action.payload is SessionType.SHORT_BREAK

    def test_action_passthrough(self):
        action = Action(ActionKind.UPDATE_SETTING, {"work": 60})
        assert parse_action(action) == action

    @pytest.mark.parametrize("message", [
        {"type": "SELF_DESTRUCT"},
        {"payload": 1},
        {"type": "RESET", "payload": "now"},
        {"type": "CHANGE_SESSION", "payload": "nap"},
        {"type": "CHANGE_SESSION"},
        {"type": "UPDATE_SETTING", "payload": 1500},
        {"type": "TOGGLE_TRANSPARENCY", "payload": "yes"},
        "START_STOP",
        None,
    ])
    def test_malformed_messages_raise(self, message):
        with pytest.raises(UnknownActionError):
            parse_action(message)


# ═══════════════════════════════════════════════════════════════════════════
#  TIMER ROUTING
# ═══════════════════════════════════════════════════════════════════════════


class TestTimerActions:

    def test_start_stop_toggles(self, dispatcher, engine):
        assert dispatcher.dispatch({"type": "START_STOP"})
        assert engine.is_running
        assert dispatcher.dispatch(Action(ActionKind.START_STOP))
        assert not engine.is_running

    def test_reset(self, dispatcher, engine):
        dispatcher.dispatch({"type": "START_STOP"})
        run_ticks(engine, 9)
        dispatcher.dispatch({"type": "RESET"})
        assert engine.remaining == PRESETS["CLASSIC"].work
        assert not engine.is_running

    def test_change_session(self, dispatcher, engine):
        dispatcher.dispatch({"type": "CHANGE_SESSION", "payload": "longBreak"})
        assert engine.session_type == SessionType.LONG_BREAK
        assert engine.remaining == PRESETS["CLASSIC"].long_break

    def test_update_setting_preset(self, dispatcher, engine):
        dispatcher.dispatch({
            "type": "UPDATE_SETTING", "payload": PRESETS["SHORT"].as_dict(),
        })
        assert engine.settings == PRESETS["SHORT"]

    def test_update_setting_partial(self, dispatcher, engine):
        dispatcher.dispatch({"type": "UPDATE_SETTING", "payload": {"shortBreak": 600}})
        assert engine.settings.short_break == 600
        assert engine.settings.work == 1500

    def test_scenario_classic_work_session(self, dispatcher, engine):
        dispatcher.dispatch({
            "type": "UPDATE_SETTING", "payload": PRESETS["CLASSIC"].as_dict(),
        })
        dispatcher.dispatch({"type": "START_STOP"})
        run_ticks(engine, 1500)
        state = engine.snapshot()
        assert state.current_session == SessionType.SHORT_BREAK
        assert state.time_left == 300
        assert state.is_running is False


# ═══════════════════════════════════════════════════════════════════════════
#  ERRORS
# ═══════════════════════════════════════════════════════════════════════════


class TestErrors:

    def test_invalid_settings_surface_as_signal(self, dispatcher, engine):
        c = SignalCollector()
        dispatcher.settings_rejected.connect(c)
        before = engine.snapshot()

        ok = dispatcher.dispatch({"type": "UPDATE_SETTING", "payload": {"work": 0}})

        assert ok is False
        assert len(c) == 1
        assert "work" in c.last
        assert engine.snapshot() == before

    def test_unknown_action_ignored_and_logged(self, dispatcher, engine, caplog):
        before = engine.snapshot()
        with caplog.at_level(logging.WARNING, logger="pomowidget.actions"):
            ok = dispatcher.dispatch({"type": "TELEPORT"})
        assert ok is False
        assert engine.snapshot() == before
        assert "TELEPORT" in caplog.text

    def test_malformed_payload_ignored(self, dispatcher, engine):
        before = engine.snapshot()
        assert dispatcher.dispatch({"type": "CHANGE_SESSION", "payload": 3}) is False
        assert engine.snapshot() == before


# ═══════════════════════════════════════════════════════════════════════════
#  VIEW / HOST ACTIONS
# ═══════════════════════════════════════════════════════════════════════════


class TestViewActions:

    def test_attach_host_pushes_current_flags(self, engine):
        host = FakeHost()
        d = ActionDispatcher(engine)
        d.attach_host(host)
        assert host.calls == [("set_transparent", False), ("set_draggable", True)]

    def test_transparency_toggle_updates_host(self, dispatcher, host):
        c = SignalCollector()
        dispatcher.view_changed.connect(c)

        dispatcher.dispatch({"type": "TOGGLE_TRANSPARENCY"})

        assert dispatcher.view.is_transparent is True
        assert c.last == ViewState(is_transparent=True)
        assert host.calls == [("set_transparent", True), ("set_draggable", False)]

    def test_transparency_toggle_twice_restores_drag(self, dispatcher, host):
        dispatcher.dispatch({"type": "TOGGLE_TRANSPARENCY"})
        dispatcher.dispatch({"type": "TOGGLE_TRANSPARENCY"})
        assert host.calls[-1] == ("set_draggable", True)
        assert dispatcher.view.is_draggable

    def test_explicit_transparency_value_is_idempotent(self, dispatcher, host):
        dispatcher.dispatch({"type": "TOGGLE_TRANSPARENCY", "payload": False})
        assert host.calls == []

    def test_dark_mode_toggle(self, dispatcher, host):
        c = SignalCollector()
        dispatcher.view_changed.connect(c)
        dispatcher.dispatch({"type": "TOGGLE_DARK_MODE"})
        assert dispatcher.view.is_dark_mode is True
        assert c.last.is_dark_mode is True
        assert host.calls == []

    def test_view_actions_leave_engine_alone(self, dispatcher, engine):
        before = engine.snapshot()
        dispatcher.dispatch({"type": "TOGGLE_DARK_MODE"})
        dispatcher.dispatch({"type": "TOGGLE_TRANSPARENCY"})
        assert engine.snapshot() is before

    def test_minimize_and_close(self, dispatcher, host):
        dispatcher.dispatch({"type": "MINIMIZE"})
        dispatcher.dispatch({"type": "CLOSE"})
        assert host.calls == [("minimize",), ("close_app",)]

    def test_host_actions_without_host(self, engine):
        d = ActionDispatcher(engine)
        assert d.dispatch({"type": "MINIMIZE"}) is True
