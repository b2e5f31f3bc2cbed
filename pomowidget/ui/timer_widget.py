"""The widget card: presets, countdown, and controls.

Layout (top → bottom):
    - Status label (top-left) and window chrome (top-right)
    - Preset row (hidden while transparent)
    - Large MM:SS countdown
    - Start/stop, reset, and break/work buttons (hidden while transparent)
    - Dark-mode (bottom-left) and settings (bottom-right) buttons

The widget never touches the engine's state directly: it renders the
snapshots the engine broadcasts and turns every click into an
``Action`` for the dispatcher.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QFrame,
)

from ..actions import Action, ActionDispatcher, ActionKind
from ..timer.presets import PRESETS, preset_name_for
from ..timer.state import PomodoroState
from ..view_state import (
    ViewState, format_time, mode_switch_target, preset_tooltip, status_text,
)

PLAY_GLYPH = "▶"
PAUSE_GLYPH = "❚❚"
RESET_GLYPH = "↻"
BREAK_GLYPH = "☕"
SETTINGS_GLYPH = "⚙"
SUN_GLYPH = "☀"
MOON_GLYPH = "☾"


class TimerWidget(QWidget):
    """Renders ``PomodoroState`` snapshots and sends user actions."""

    settings_requested = pyqtSignal()

    def __init__(
        self,
        dispatcher: ActionDispatcher,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._dispatcher = dispatcher
        self._state: PomodoroState | None = None
        self._view: ViewState = dispatcher.view
        self._build_ui()
        self._connect_signals()
        self.apply_view(self._view)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 16, 24, 16)
        layout.setSpacing(8)

        # ── top row: status + chrome ─────────────────────────────────
        top_row = QHBoxLayout()
        self._status_label = QLabel("Ready", card)
        self._status_label.setObjectName("statusLabel")
        top_row.addWidget(self._status_label)
        top_row.addStretch()

        self._minimize_btn = QPushButton("–", card)
        self._minimize_btn.setObjectName("minimizeButton")
        self._minimize_btn.setToolTip("Minimize")
        self._close_btn = QPushButton("✕", card)
        self._close_btn.setObjectName("closeButton")
        self._close_btn.setToolTip("Close")
        top_row.addWidget(self._minimize_btn)
        top_row.addWidget(self._close_btn)
        layout.addLayout(top_row)

        # ── presets ──────────────────────────────────────────────────
        self._preset_row = QWidget(card)
        preset_layout = QHBoxLayout(self._preset_row)
        preset_layout.setContentsMargins(0, 0, 0, 0)
        preset_layout.setSpacing(16)
        preset_layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._preset_buttons: dict[str, QPushButton] = {}
        for name, settings in PRESETS.items():
            btn = QPushButton(name, self._preset_row)
            btn.setObjectName("presetButton")
            btn.setCheckable(True)
            btn.setToolTip(preset_tooltip(settings))
            self._preset_buttons[name] = btn
            preset_layout.addWidget(btn)
        layout.addWidget(self._preset_row)

        # ── countdown ────────────────────────────────────────────────
        self._time_label = QLabel("00:00", card)
        self._time_label.setObjectName("timeLabel")
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._time_label)

        # ── main controls ────────────────────────────────────────────
        self._controls_row = QWidget(card)
        btn_row = QHBoxLayout(self._controls_row)
        btn_row.setContentsMargins(0, 0, 0, 0)
        btn_row.setSpacing(16)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._start_stop_btn = QPushButton(PLAY_GLYPH, self._controls_row)
        self._start_stop_btn.setObjectName("primaryButton")
        self._reset_btn = QPushButton(RESET_GLYPH, self._controls_row)
        self._reset_btn.setToolTip("Reset")
        self._mode_btn = QPushButton(BREAK_GLYPH, self._controls_row)
        self._mode_btn.setToolTip("Switch between work and break")

        btn_row.addWidget(self._start_stop_btn)
        btn_row.addWidget(self._reset_btn)
        btn_row.addWidget(self._mode_btn)
        layout.addWidget(self._controls_row)

        # ── bottom corners ───────────────────────────────────────────
        self._corner_row = QWidget(card)
        corner_layout = QHBoxLayout(self._corner_row)
        corner_layout.setContentsMargins(0, 0, 0, 0)
        self._theme_btn = QPushButton(MOON_GLYPH, self._corner_row)
        self._theme_btn.setObjectName("cornerButton")
        self._theme_btn.setToolTip("Toggle dark mode")
        self._settings_btn = QPushButton(SETTINGS_GLYPH, self._corner_row)
        self._settings_btn.setObjectName("cornerButton")
        self._settings_btn.setToolTip("Settings")
        corner_layout.addWidget(self._theme_btn)
        corner_layout.addStretch()
        corner_layout.addWidget(self._settings_btn)
        layout.addWidget(self._corner_row)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_stop_btn.clicked.connect(
            lambda: self._send(ActionKind.START_STOP)
        )
        self._reset_btn.clicked.connect(lambda: self._send(ActionKind.RESET))
        self._mode_btn.clicked.connect(self._on_mode_clicked)
        self._minimize_btn.clicked.connect(lambda: self._send(ActionKind.MINIMIZE))
        self._close_btn.clicked.connect(lambda: self._send(ActionKind.CLOSE))
        self._theme_btn.clicked.connect(
            lambda: self._send(ActionKind.TOGGLE_DARK_MODE)
        )
        self._settings_btn.clicked.connect(lambda: self.settings_requested.emit())
        for name, btn in self._preset_buttons.items():
            btn.clicked.connect(
                lambda _checked=False, n=name: self._on_preset_clicked(n)
            )

        self._dispatcher.view_changed.connect(self.apply_view)

    def _send(self, kind: ActionKind, payload: object = None) -> None:
        self._dispatcher.dispatch(Action(kind, payload))

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_preset_clicked(self, name: str) -> None:
        self._send(ActionKind.UPDATE_SETTING, PRESETS[name].as_dict())
        # checked state follows the engine, not the click
        if self._state is not None:
            self._sync_presets(self._state)

    def _on_mode_clicked(self) -> None:
        if self._state is None:
            return
        self._send(ActionKind.CHANGE_SESSION, mode_switch_target(self._state))

    # ── rendering ─────────────────────────────────────────────────────────

    def show_state(self, state: PomodoroState) -> None:
        """Slot for ``TimerEngine.state_updated``."""
        self._state = state
        self._time_label.setText(format_time(state.time_left))
        self._status_label.setText(status_text(state))
        self._start_stop_btn.setText(PAUSE_GLYPH if state.is_running else PLAY_GLYPH)
        self._start_stop_btn.setToolTip("Stop" if state.is_running else "Start")
        self._sync_presets(state)

    def _sync_presets(self, state: PomodoroState) -> None:
        active = preset_name_for(state.settings)
        for name, btn in self._preset_buttons.items():
            btn.setChecked(name == active)

    def apply_view(self, view: ViewState) -> None:
        """Show or hide controls for the transparent overlay mode."""
        self._view = view
        visible = not view.is_transparent
        self._preset_row.setVisible(visible)
        self._controls_row.setVisible(visible)
        self._corner_row.setVisible(visible)
        self._theme_btn.setText(SUN_GLYPH if view.is_dark_mode else MOON_GLYPH)

    # ── accessors used by tests and the window ───────────────────────────

    @property
    def time_text(self) -> str:
        return self._time_label.text()

    @property
    def status(self) -> str:
        return self._status_label.text()

    def active_preset(self) -> str | None:
        for name, btn in self._preset_buttons.items():
            if btn.isChecked():
                return name
        return None
