"""Custom-duration dialog for PomoWidget.

A modal dialog with one minutes field per session type.  Save sends a
single ``UPDATE_SETTING`` action carrying only the fields the user
edited, so durations the form cannot show (odd seconds, over three
hours) survive an untouched Save.  If the dispatcher refuses the
patch, the dialog stays open and shows why.
"""

from __future__ import annotations

from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QSpinBox, QPushButton, QWidget,
)

from ..actions import Action, ActionDispatcher, ActionKind
from ..timer.state import PomodoroSettings, SessionType


class SettingsDialog(QDialog):
    """Modal dialog for the three session durations."""

    def __init__(
        self,
        settings: PomodoroSettings,
        dispatcher: ActionDispatcher,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setMinimumWidth(320)
        self.setModal(True)

        self._settings = settings
        self._dispatcher = dispatcher
        self._rejection: str | None = None
        self._shown_minutes: dict[SessionType, int] = {}

        self._build_ui()
        self._populate()
        self._dispatcher.settings_rejected.connect(self._on_rejected)
        self._listening = True

    # ══════════════════════════════════════════════════════════════════
    #  BUILD UI
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 20, 24, 20)
        root.setSpacing(16)

        form = QFormLayout()
        form.setHorizontalSpacing(20)
        form.setVerticalSpacing(10)

        self._spins: dict[SessionType, QSpinBox] = {}
        for session, label in (
            (SessionType.WORK, "Work:"),
            (SessionType.SHORT_BREAK, "Short break:"),
            (SessionType.LONG_BREAK, "Long break:"),
        ):
            spin = QSpinBox()
            spin.setRange(0, 180)
            spin.setSuffix(" min")
            self._spins[session] = spin
            form.addRow(label, spin)
        root.addLayout(form)

        self._error_label = QLabel("", self)
        self._error_label.setObjectName("errorLabel")
        self._error_label.setWordWrap(True)
        self._error_label.setVisible(False)
        root.addWidget(self._error_label)

        btn_row = QHBoxLayout()
        btn_row.addStretch()
        cancel_btn = QPushButton("Cancel")
        cancel_btn.clicked.connect(self.reject)
        save_btn = QPushButton("Save")
        save_btn.setObjectName("primaryButton")
        save_btn.setDefault(True)
        save_btn.clicked.connect(self._on_save)
        btn_row.addWidget(cancel_btn)
        btn_row.addWidget(save_btn)
        root.addLayout(btn_row)

    def _populate(self) -> None:
        for session, spin in self._spins.items():
            spin.setValue(self._settings.duration_for(session) // 60)
            self._shown_minutes[session] = spin.value()

    # ══════════════════════════════════════════════════════════════════
    #  HANDLERS
    # ══════════════════════════════════════════════════════════════════

    def form_values(self) -> dict[str, int]:
        """Current form contents as a wire-format settings patch."""
        return {
            session.value: spin.value() * 60
            for session, spin in self._spins.items()
        }

    def changed_values(self) -> dict[str, int]:
        """Only the fields edited since the dialog opened, in seconds."""
        return {
            session.value: spin.value() * 60
            for session, spin in self._spins.items()
            if spin.value() != self._shown_minutes[session]
        }

    def _on_save(self) -> None:
        self._rejection = None
        accepted = self._dispatcher.dispatch(
            Action(ActionKind.UPDATE_SETTING, self.changed_values())
        )
        if accepted:
            self.accept()

    def _on_rejected(self, message: str) -> None:
        self._rejection = message
        self._error_label.setText(message)
        self._error_label.setVisible(True)

    def done(self, result: int) -> None:  # type: ignore[override]
        if self._listening:
            self._dispatcher.settings_rejected.disconnect(self._on_rejected)
            self._listening = False
        super().done(result)

    @property
    def error_text(self) -> str | None:
        return self._rejection
