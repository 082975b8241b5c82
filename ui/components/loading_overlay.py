# -*- coding: utf-8 -*-
"""
Loading overlay component.

Dims its parent while a blocking request (roster upload, import execution)
is in flight, and keeps covering the parent when it is resized.
"""

from PyQt5.QtWidgets import QFrame, QLabel, QProgressBar, QVBoxLayout, QWidget
from PyQt5.QtCore import QEvent, Qt
from PyQt5.QtGui import QColor, QPainter

from services.translation_manager import tr
from ui.design_system import Colors, Spacing

DIM = QColor(0, 0, 0, 100)


class LoadingOverlay(QWidget):
    """Dimmed cover with a message and an indeterminate progress bar."""

    def __init__(self, parent: QWidget):
        super().__init__(parent)

        card = QFrame(self)
        card.setFixedWidth(300)
        card.setStyleSheet(
            f"QFrame {{ background-color: {Colors.SURFACE}; border: 1px solid {Colors.BORDER_DEFAULT};"
            f" border-radius: 8px; }}"
        )
        card_layout = QVBoxLayout(card)
        card_layout.setContentsMargins(Spacing.XL, Spacing.XL, Spacing.XL, Spacing.XL)
        card_layout.setSpacing(Spacing.LG)

        self.message_label = QLabel(tr("state.loading"))
        self.message_label.setAlignment(Qt.AlignCenter)
        self.message_label.setWordWrap(True)
        self.message_label.setStyleSheet(f"color: {Colors.TEXT_PRIMARY}; border: none;")
        card_layout.addWidget(self.message_label)

        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, 0)
        self.progress_bar.setTextVisible(False)
        self.progress_bar.setFixedHeight(8)
        card_layout.addWidget(self.progress_bar)

        layout = QVBoxLayout(self)
        layout.addWidget(card, 0, Qt.AlignCenter)

        parent.installEventFilter(self)
        self.hide()

    def eventFilter(self, watched, event):
        if watched is self.parentWidget() and event.type() == QEvent.Resize:
            self.setGeometry(watched.rect())
        return super().eventFilter(watched, event)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), DIM)

    def set_loading(self, loading: bool, message: str = ""):
        if not loading:
            self.hide()
            return
        self.message_label.setText(message or tr("state.loading"))
        self.setGeometry(self.parentWidget().rect())
        self.show()
        self.raise_()
