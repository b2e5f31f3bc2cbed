"""Named settings bundles offered as one-click shortcuts.

A preset is just a complete ``PomodoroSettings`` value; selecting one
sends it through the same ``UPDATE_SETTING`` path as the settings form.
"""

from __future__ import annotations

from .state import PomodoroSettings


PRESETS: dict[str, PomodoroSettings] = {
    "SHORT": PomodoroSettings(work=15 * 60, short_break=5 * 60, long_break=15 * 60),
    "CLASSIC": PomodoroSettings(work=25 * 60, short_break=5 * 60, long_break=15 * 60),
    "LONG": PomodoroSettings(work=50 * 60, short_break=15 * 60, long_break=30 * 60),
}

DEFAULT_PRESET = "CLASSIC"


def preset_name_for(settings: PomodoroSettings) -> str | None:
    """Name of the preset whose durations all match *settings*, if any."""
    for name, preset in PRESETS.items():
        if preset == settings:
            return name
    return None
