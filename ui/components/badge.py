# -*- coding: utf-8 -*-
"""
Badge Component - small rounded label coloured by tone.

Used for content-gap severity, import row status and capacity.
"""

from PyQt5.QtWidgets import QLabel
from PyQt5.QtCore import Qt

from ui.design_system import tone_colors


class Badge(QLabel):

    def __init__(self, text: str = "", tone: str = "neutral", parent=None):
        super().__init__(parent)
        self.setAlignment(Qt.AlignCenter)
        self.set_badge(text, tone)

    def set_badge(self, text: str, tone: str):
        background, color = tone_colors(tone)
        self.tone = tone
        self.setText(text)
        self.setStyleSheet(f"""
            QLabel {{
                background-color: {background};
                color: {color};
                border-radius: 10px;
                padding: 2px 10px;
                font-size: 11px;
                font-weight: 600;
            }}
        """)
