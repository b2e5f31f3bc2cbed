"""Main window for PomoWidget.

A small frameless, always-on-top window.  It owns the engine and the
dispatcher, hosts the ``TimerWidget`` card, and implements the
window-level side effects (minimize, close, drag, transparency) the
dispatcher asks for.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, QPoint
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import QApplication, QVBoxLayout, QWidget

from .actions import Action, ActionDispatcher, ActionKind
from .settings import AppConfig
from .timer.engine import TimerEngine
from .timer.state import PomodoroState, SessionType
from .ui.settings_dialog import SettingsDialog
from .ui.styles import build_stylesheet, get_palette
from .ui.timer_widget import TimerWidget
from .view_state import SESSION_LABELS, ViewState

logger = logging.getLogger(__name__)

WINDOW_WIDTH = 540
WINDOW_HEIGHT = 310
WINDOW_TITLE = "PomoWidget"


class PomoWidgetApp(QWidget):
    """Frameless widget window; the dispatcher's ``WindowHost``."""

    def __init__(self, config: AppConfig | None = None) -> None:
        super().__init__()
        self._config = config or AppConfig()
        self.setWindowTitle(WINDOW_TITLE)
        self.setFixedSize(WINDOW_WIDTH, WINDOW_HEIGHT)

        flags = Qt.WindowType.FramelessWindowHint
        if self._config.always_on_top:
            flags |= Qt.WindowType.WindowStaysOnTopHint
        self.setWindowFlags(flags)
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)

        # ── drag state ────────────────────────────────────────────────
        self._draggable: bool = True
        self._transparent: bool = False
        self._drag_offset: QPoint | None = None

        # ── engine + dispatcher ───────────────────────────────────────
        self._timer_engine = TimerEngine(
            self, settings=self._config.initial_settings(),
        )
        self._dispatcher = ActionDispatcher(
            self._timer_engine,
            parent=self,
            view=ViewState(is_dark_mode=self._config.dark_mode),
        )

        # ── layout ────────────────────────────────────────────────────
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        self._timer_widget = TimerWidget(self._dispatcher, self)
        root.addWidget(self._timer_widget)

        # ── wire signals ──────────────────────────────────────────────
        self._timer_widget.settings_requested.connect(self._open_settings)
        self._dispatcher.view_changed.connect(self._apply_view)
        self._timer_engine.state_updated.connect(self._sync_title)
        self._timer_engine.session_completed.connect(self._on_session_completed)

        # initial snapshot first, then the push stream
        self._timer_engine.subscribe(self._timer_widget.show_state)
        self._dispatcher.attach_host(self)
        self._apply_view(self._dispatcher.view)

        # ── keyboard shortcuts ────────────────────────────────────────
        self._setup_shortcuts()

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def engine(self) -> TimerEngine:
        return self._timer_engine

    @property
    def dispatcher(self) -> ActionDispatcher:
        return self._dispatcher

    @property
    def timer_widget(self) -> TimerWidget:
        return self._timer_widget

    @property
    def is_draggable(self) -> bool:
        return self._draggable

    @property
    def is_transparent(self) -> bool:
        return self._transparent

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW HOST
    # ══════════════════════════════════════════════════════════════════

    def minimize(self) -> None:
        self.showMinimized()

    def close_app(self) -> None:
        self.close()
        app = QApplication.instance()
        if app is not None:
            app.quit()

    def set_draggable(self, draggable: bool) -> None:
        self._draggable = draggable
        if not draggable:
            self._drag_offset = None

    def set_transparent(self, transparent: bool) -> None:
        self._transparent = transparent
        self.setWindowOpacity(
            self._config.transparent_opacity if transparent else 1.0
        )

    # ══════════════════════════════════════════════════════════════════
    #  SLOTS
    # ══════════════════════════════════════════════════════════════════

    def _apply_view(self, view: ViewState) -> None:
        self.setStyleSheet(
            build_stylesheet(
                get_palette(view.is_dark_mode),
                transparent=view.is_transparent,
            )
        )

    def _open_settings(self) -> None:
        dialog = SettingsDialog(self._timer_engine.settings, self._dispatcher, self)
        dialog.exec()

    def _sync_title(self, state: PomodoroState) -> None:
        # completion notices land after their snapshot, so this clears
        # the "ready" title only on the next change
        self.setWindowTitle(WINDOW_TITLE)

    def _on_session_completed(self, session_type: SessionType) -> None:
        state: PomodoroState = self._timer_engine.snapshot()
        label = SESSION_LABELS[state.current_session]
        self.setWindowTitle(f"{WINDOW_TITLE}: {label} ready")
        logger.debug("Completed %s; %s ready", session_type.value, label)

    # ══════════════════════════════════════════════════════════════════
    #  KEYBOARD SHORTCUTS
    # ══════════════════════════════════════════════════════════════════

    def _setup_shortcuts(self) -> None:
        """Ctrl+P toggles transparency, Space starts/stops, Esc resets."""
        bindings = (
            ("Toggle Transparency", "Ctrl+P", ActionKind.TOGGLE_TRANSPARENCY),
            ("Start/Stop", "Space", ActionKind.START_STOP),
            ("Reset", "Esc", ActionKind.RESET),
        )
        for title, keys, kind in bindings:
            action = QAction(title, self)
            action.setShortcut(QKeySequence(keys))
            action.setShortcutContext(Qt.ShortcutContext.WindowShortcut)
            action.triggered.connect(
                lambda _checked=False, k=kind: self._dispatcher.dispatch(Action(k))
            )
            self.addAction(action)

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        if self._draggable and event.button() == Qt.MouseButton.LeftButton:
            self._drag_offset = (
                event.globalPosition().toPoint() - self.frameGeometry().topLeft()
            )
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event) -> None:  # type: ignore[override]
        if self._drag_offset is not None and self._draggable:
            self.move(event.globalPosition().toPoint() - self._drag_offset)
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event) -> None:  # type: ignore[override]
        self._drag_offset = None
        super().mouseReleaseEvent(event)
