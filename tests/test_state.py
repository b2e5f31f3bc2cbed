"""Tests for the settings value, the merge, presets, and snapshots."""

import pytest

from pomowidget.timer.presets import PRESETS, DEFAULT_PRESET, preset_name_for
from pomowidget.timer.state import (
    InvalidSettingsError,
    NEXT_SESSION,
    PomodoroSettings,
    PomodoroState,
    SessionType,
    merge_settings,
    next_session,
)


BASE = PomodoroSettings(work=1500, short_break=300, long_break=900)


class TestHubRule:

    def test_work_goes_to_short_break(self):
        assert next_session(SessionType.WORK) == SessionType.SHORT_BREAK

    @pytest.mark.parametrize("brk", [SessionType.SHORT_BREAK, SessionType.LONG_BREAK])
    def test_every_break_returns_to_work(self, brk):
        assert next_session(brk) == SessionType.WORK

    def test_table_covers_every_session(self):
        assert set(NEXT_SESSION) == set(SessionType)


class TestSettings:

    def test_wire_values(self):
        assert [s.value for s in SessionType] == ["work", "shortBreak", "longBreak"]

    def test_duration_for(self):
        assert BASE.duration_for(SessionType.WORK) == 1500
        assert BASE.duration_for(SessionType.SHORT_BREAK) == 300
        assert BASE.duration_for(SessionType.LONG_BREAK) == 900

    def test_as_dict_uses_wire_keys(self):
        assert BASE.as_dict() == {"work": 1500, "shortBreak": 300, "longBreak": 900}

    def test_constructor_rejects_non_positive(self):
        with pytest.raises(InvalidSettingsError):
            PomodoroSettings(work=0)

    def test_from_mapping_requires_all_fields(self):
        with pytest.raises(InvalidSettingsError, match="longBreak"):
            PomodoroSettings.from_mapping({"work": 60, "shortBreak": 60})

    def test_from_mapping_accepts_snake_case(self):
        s = PomodoroSettings.from_mapping(
            {"work": 60, "short_break": 30, "long_break": 90}
        )
        assert s == PomodoroSettings(work=60, short_break=30, long_break=90)


class TestMerge:

    def test_partial_merge_preserves_untouched(self):
        merged = merge_settings(BASE, {"shortBreak": 600})
        assert merged == PomodoroSettings(work=1500, short_break=600, long_break=900)

    def test_enum_keys(self):
        merged = merge_settings(BASE, {SessionType.LONG_BREAK: 1200})
        assert merged.long_break == 1200

    def test_full_replacement(self):
        assert merge_settings(BASE, PRESETS["SHORT"].as_dict()) == PRESETS["SHORT"]

    def test_empty_patch_returns_same_value(self):
        assert merge_settings(BASE, {}) is BASE

    @pytest.mark.parametrize("patch", [
        {"work": 0},
        {"shortBreak": -1},
        {"longBreak": 90.0},
        {"work": None},
        {"work": False},
        {"lunch": 3600},
        {1: 60},
    ])
    def test_invalid_patch_raises(self, patch):
        with pytest.raises(InvalidSettingsError):
            merge_settings(BASE, patch)

    def test_non_mapping_raises(self):
        with pytest.raises(InvalidSettingsError):
            merge_settings(BASE, [("work", 60)])

    def test_one_bad_field_refuses_whole_merge(self):
        with pytest.raises(InvalidSettingsError):
            merge_settings(BASE, {"work": 1200, "longBreak": 0})
        assert BASE.work == 1500


class TestPresets:

    def test_preset_table(self):
        assert PRESETS["SHORT"].as_dict() == {"work": 900, "shortBreak": 300, "longBreak": 900}
        assert PRESETS["CLASSIC"].as_dict() == {"work": 1500, "shortBreak": 300, "longBreak": 900}
        assert PRESETS["LONG"].as_dict() == {"work": 3000, "shortBreak": 900, "longBreak": 1800}

    def test_preset_order(self):
        assert list(PRESETS) == ["SHORT", "CLASSIC", "LONG"]

    def test_default_preset(self):
        assert DEFAULT_PRESET == "CLASSIC"

    def test_preset_name_for_match(self):
        assert preset_name_for(BASE) == "CLASSIC"

    def test_preset_name_for_custom(self):
        assert preset_name_for(PomodoroSettings(work=1200)) is None


class TestSnapshot:

    def test_initial(self):
        state = PomodoroState.initial(BASE)
        assert state.current_session == SessionType.WORK
        assert state.time_left == 1500
        assert state.is_running is False
        assert state.session_duration == 1500

    def test_as_dict(self):
        state = PomodoroState(
            current_session=SessionType.SHORT_BREAK,
            time_left=120,
            is_running=True,
            settings=BASE,
        )
        assert state.as_dict() == {
            "currentSession": "shortBreak",
            "timeLeft": 120,
            "isRunning": True,
            "settings": {"work": 1500, "shortBreak": 300, "longBreak": 900},
        }
