# -*- coding: utf-8 -*-
"""
Wizard Footer Component - cancel, previous and primary action of a wizard.

The primary button follows the submit gate: disabled while the gate is
closed and showing a busy label while a request is in flight.
"""

from PyQt5.QtWidgets import QWidget, QHBoxLayout, QLabel
from PyQt5.QtCore import pyqtSignal

from services.translation_manager import tr
from ui.components.action_button import ActionButton
from ui.design_system import Colors, Spacing


class WizardFooter(QWidget):
    """
    Signals:
        previous_clicked: Previous button clicked
        primary_clicked: Next/Submit button clicked
        cancel_clicked: Cancel button clicked
    """

    previous_clicked = pyqtSignal()
    primary_clicked = pyqtSignal()
    cancel_clicked = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._primary_text = tr("wizard.next")
        self._busy = False
        self._setup_ui()

    def _setup_ui(self):
        self.setStyleSheet(f"""
            QWidget {{
                background-color: {Colors.BACKGROUND};
                border-top: 1px solid {Colors.BORDER_DEFAULT};
            }}
        """)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(Spacing.XL, Spacing.LG, Spacing.XL, Spacing.LG)
        layout.setSpacing(Spacing.MD)

        self.btn_cancel = ActionButton(tr("wizard.cancel"), variant="secondary")
        self.btn_cancel.clicked.connect(self.cancel_clicked.emit)
        layout.addWidget(self.btn_cancel)

        self.info_label = QLabel("")
        self.info_label.setStyleSheet(f"background: transparent; border: none; color: {Colors.TEXT_SECONDARY};")
        layout.addWidget(self.info_label)

        layout.addStretch()

        self.btn_previous = ActionButton(tr("wizard.previous"), variant="secondary")
        self.btn_previous.clicked.connect(self.previous_clicked.emit)
        layout.addWidget(self.btn_previous)

        self.btn_primary = ActionButton(self._primary_text, variant="primary", width=140)
        self.btn_primary.clicked.connect(self.primary_clicked.emit)
        layout.addWidget(self.btn_primary)

    def set_primary(self, text: str, enabled: bool):
        self._primary_text = text
        self.btn_primary.setText(tr("wizard.submitting") if self._busy else text)
        self.btn_primary.setEnabled(enabled and not self._busy)

    def set_busy(self, busy: bool):
        """Lock the footer while a submission is in flight."""
        self._busy = busy
        self.btn_primary.setText(tr("wizard.submitting") if busy else self._primary_text)
        self.btn_primary.setEnabled(not busy and self.btn_primary.isEnabled())
        self.btn_previous.setEnabled(not busy)

    def set_previous_enabled(self, enabled: bool):
        self.btn_previous.setEnabled(enabled and not self._busy)

    def set_previous_visible(self, visible: bool):
        self.btn_previous.setVisible(visible)

    def set_info_text(self, text: str):
        self.info_label.setText(text)
