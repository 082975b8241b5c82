# -*- coding: utf-8 -*-
"""
Empty State Component - placeholder shown instead of a list.

Renders the loading, error and empty states of a list-backed step; the
error state offers a retry button.
"""

from PyQt5.QtWidgets import QWidget, QVBoxLayout, QLabel
from PyQt5.QtCore import Qt, pyqtSignal

from services.translation_manager import tr
from ui.components.action_button import ActionButton
from ui.design_system import Colors


class EmptyState(QWidget):
    """Icon, title and description, with an optional retry action."""

    retry_clicked = pyqtSignal()

    def __init__(self, title: str = "", description: str = "", icon_text: str = "i", parent=None):
        super().__init__(parent)
        self._setup_ui()
        self.set_content(title, description, icon_text)

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignCenter)
        layout.setContentsMargins(40, 40, 40, 40)
        layout.setSpacing(8)

        self.icon_label = QLabel()
        self.icon_label.setAlignment(Qt.AlignCenter)
        self.icon_label.setFixedSize(64, 64)
        self.icon_label.setStyleSheet(f"""
            QLabel {{
                background-color: {Colors.PRIMARY_BLUE};
                color: {Colors.PRIMARY_WHITE};
                border-radius: 32px;
                font-size: 24px;
                font-weight: bold;
            }}
        """)
        layout.addWidget(self.icon_label, 0, Qt.AlignCenter)
        layout.addSpacing(16)

        self.title_label = QLabel()
        self.title_label.setAlignment(Qt.AlignCenter)
        self.title_label.setStyleSheet(f"font-size: 16px; font-weight: 600; color: {Colors.TEXT_PRIMARY};")
        layout.addWidget(self.title_label)

        self.description_label = QLabel()
        self.description_label.setAlignment(Qt.AlignCenter)
        self.description_label.setWordWrap(True)
        self.description_label.setMaximumWidth(400)
        self.description_label.setStyleSheet(f"color: {Colors.TEXT_SECONDARY};")
        layout.addWidget(self.description_label, 0, Qt.AlignCenter)

        self.btn_retry = ActionButton(tr("wizard.retry"), variant="outline")
        self.btn_retry.clicked.connect(self.retry_clicked.emit)
        self.btn_retry.hide()
        layout.addWidget(self.btn_retry, 0, Qt.AlignCenter)

    def set_content(self, title: str, description: str = "", icon_text: str = "i",
                    retry: bool = False):
        self.icon_label.setText(icon_text)
        self.title_label.setText(title)
        self.description_label.setText(description)
        self.description_label.setVisible(bool(description))
        self.btn_retry.setVisible(retry)

    def show_loading(self, title: str = ""):
        self.set_content(title or tr("state.loading"), icon_text="…")

    def show_error(self, description: str = ""):
        self.set_content(tr("state.error"), description, icon_text="!", retry=True)

    def show_empty(self, title: str, description: str = ""):
        self.set_content(title, description, icon_text="∅")
