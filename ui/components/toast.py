# -*- coding: utf-8 -*-
"""
Toast notification shown on the window that opened a wizard.
"""

from PyQt5.QtWidgets import QLabel, QWidget, QGraphicsOpacityEffect
from PyQt5.QtCore import Qt, QTimer, QPropertyAnimation

from ui.design_system import Spacing, tone_colors

OBJECT_NAME = "wizard-toast"


class Toast(QLabel):
    """Fading message anchored to the bottom of its parent."""

    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    FADE_MS = 250

    def __init__(self, parent: QWidget):
        super().__init__(parent)
        self.setObjectName(OBJECT_NAME)
        self.setAlignment(Qt.AlignCenter)
        self.setWordWrap(True)
        self.setMinimumWidth(280)
        self.setMaximumWidth(520)

        self._effect = QGraphicsOpacityEffect(self)
        self._effect.setOpacity(0)
        self.setGraphicsEffect(self._effect)
        self._animation = QPropertyAnimation(self._effect, b"opacity", self)
        self._animation.setDuration(self.FADE_MS)
        self._animation.finished.connect(self._on_animation_finished)

        self._hide_timer = QTimer(self)
        self._hide_timer.setSingleShot(True)
        self._hide_timer.timeout.connect(lambda: self._fade(1.0, 0.0))
        self.hide()

    def show_message(self, message: str, tone: str = INFO, duration: int = 3000):
        background, color = tone_colors(tone)
        self.setText(message)
        self.setStyleSheet(
            f"QLabel#{OBJECT_NAME} {{ background-color: {background}; color: {color};"
            f" padding: {Spacing.MD}px {Spacing.XL}px; border-radius: 6px; }}"
        )
        self._place()
        self.show()
        self.raise_()
        self._fade(self._effect.opacity(), 1.0)
        # A new message restarts the countdown of the previous one
        self._hide_timer.start(duration)

    def _place(self):
        self.adjustSize()
        area = self.parentWidget().rect()
        self.move((area.width() - self.width()) // 2, area.height() - self.height() - 48)

    def _fade(self, start: float, end: float):
        self._animation.stop()
        self._animation.setStartValue(start)
        self._animation.setEndValue(end)
        self._animation.start()

    def _on_animation_finished(self):
        if self._animation.endValue() == 0.0:
            self.hide()

    @classmethod
    def notify(cls, parent: QWidget, message: str, tone: str = INFO, duration: int = 3000) -> "Toast":
        """Show a toast on ``parent``, reusing its existing one."""
        toast = parent.findChild(Toast, OBJECT_NAME)
        if toast is None:
            toast = Toast(parent)
        toast.show_message(message, tone, duration)
        return toast
