# -*- coding: utf-8 -*-
"""
Action Button Component - footer and dialog button with consistent styling.

Variants:
- primary: main action (Next, Submit)
- secondary: Cancel, Previous
- outline: inline actions (Retry, Contact support)
"""

from PyQt5.QtWidgets import QPushButton

from ui.design_system import Colors

_STYLES = {
    "primary": (Colors.PRIMARY_BLUE, Colors.PRIMARY_WHITE, "none", Colors.PRIMARY_BLUE_HOVER),
    "secondary": (Colors.NEUTRAL, Colors.PRIMARY_WHITE, "none", "#5c636a"),
    "outline": ("#F0F7FF", Colors.PRIMARY_BLUE, f"1px solid {Colors.PRIMARY_BLUE}", "#E0EAFF"),
}


class ActionButton(QPushButton):
    """
    Button with one of the design-system variants.

    Usage:
        btn = ActionButton(tr("wizard.next"), variant="primary")
    """

    def __init__(self, text: str, variant: str = "primary", width: int = 114,
                 height: int = 44, parent=None):
        super().__init__(text, parent)
        if variant not in _STYLES:
            raise ValueError(f"Invalid variant: {variant}. Must be one of {sorted(_STYLES)}")
        self.variant = variant
        self.setMinimumSize(width, height)
        self._apply_style(variant)

    def _apply_style(self, variant: str):
        background, color, border, hover = _STYLES[variant]
        self.setStyleSheet(f"""
            QPushButton {{
                background-color: {background};
                color: {color};
                border: {border};
                padding: 8px 12px;
                border-radius: 4px;
                font-size: 13px;
            }}
            QPushButton:hover {{
                background-color: {hover};
            }}
            QPushButton:disabled {{
                background-color: {Colors.TEXT_DISABLED};
                color: {Colors.PRIMARY_WHITE};
                border: none;
            }}
        """)
