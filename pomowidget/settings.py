"""Startup configuration read from a JSON file.

The file is read once at launch and never written back; durations
chosen at runtime live only in the engine.

Config is read from:
    ~/.config/PomoWidget/config.json

or from the path in ``$POMOWIDGET_CONFIG``.

Usage::

    config = load_config()
    engine = TimerEngine(settings=config.initial_settings())
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path

from .timer.presets import DEFAULT_PRESET, PRESETS
from .timer.state import PomodoroSettings

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "PomoWidget"
CONFIG_PATH = CONFIG_DIR / "config.json"
CONFIG_ENV_VAR = "POMOWIDGET_CONFIG"


@dataclass
class AppConfig:
    """Launch-time preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    preset: str = DEFAULT_PRESET

    # ── window ────────────────────────────────────────────────────────
    dark_mode: bool = False
    always_on_top: bool = True
    transparent_opacity: float = 0.35     # 0.0-1.0 while see-through

    # ── diagnostics ───────────────────────────────────────────────────
    log_level: str = "INFO"

    def initial_settings(self) -> PomodoroSettings:
        return PRESETS.get(self.preset, PRESETS[DEFAULT_PRESET])


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override) if override else CONFIG_PATH


def load_config(path: Path | None = None) -> AppConfig:
    """Load config from disk, falling back to defaults."""
    path = path or config_path()
    if not path.exists():
        return AppConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as error:
        logger.warning("Could not read config %s: %s", path, error)
        return AppConfig()
    if not isinstance(data, dict):
        logger.warning("Config %s is not a JSON object; using defaults", path)
        return AppConfig()

    # Only use keys that exist in the dataclass
    valid_keys = {f.name for f in fields(AppConfig)}
    config = AppConfig(**{k: v for k, v in data.items() if k in valid_keys})

    if config.preset not in PRESETS:
        logger.warning(
            "Unknown preset %r in %s; using %s",
            config.preset, path, DEFAULT_PRESET,
        )
        config.preset = DEFAULT_PRESET
    try:
        opacity = float(config.transparent_opacity)
    except (TypeError, ValueError):
        opacity = AppConfig.transparent_opacity
    config.transparent_opacity = min(1.0, max(0.05, opacity))
    return config
