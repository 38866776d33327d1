"""Timer settings dialog.

The spin boxes are where duration limits live (work 1-60 min, break
1-30 min); the timer itself accepts any positive value.
"""

from __future__ import annotations

from PyQt6.QtWidgets import (
    QDialog, QDialogButtonBox, QFormLayout, QVBoxLayout,
    QSpinBox, QWidget,
)

WORK_RANGE = (1, 60)
BREAK_RANGE = (1, 30)


class TimerSettingsDialog(QDialog):
    """Modal dialog asking for work and break minutes."""

    def __init__(
        self,
        work_minutes: int,
        break_minutes: int,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Timer Settings")
        self.setMinimumWidth(320)
        self.setModal(True)

        root = QVBoxLayout(self)
        root.setContentsMargins(24, 20, 24, 20)
        form = QFormLayout()
        form.setHorizontalSpacing(20)
        form.setVerticalSpacing(10)

        self._work_spin = QSpinBox()
        self._work_spin.setRange(*WORK_RANGE)
        self._work_spin.setSuffix(" min")
        self._work_spin.setValue(work_minutes)
        form.addRow("Work duration:", self._work_spin)

        self._break_spin = QSpinBox()
        self._break_spin.setRange(*BREAK_RANGE)
        self._break_spin.setSuffix(" min")
        self._break_spin.setValue(break_minutes)
        form.addRow("Break duration:", self._break_spin)

        root.addLayout(form)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Save
            | QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        root.addWidget(buttons)

    @property
    def work_minutes(self) -> int:
        return self._work_spin.value()

    @property
    def break_minutes(self) -> int:
        return self._break_spin.value()
