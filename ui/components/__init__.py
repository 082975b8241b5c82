# -*- coding: utf-8 -*-
"""
EduCenter UI Components
"""

from .toast import Toast
from .action_button import ActionButton
from .empty_state import EmptyState
from .wizard_footer import WizardFooter
from .loading_overlay import LoadingOverlay
from .badge import Badge

__all__ = [
    "Toast",
    "ActionButton",
    "EmptyState",
    "WizardFooter",
    "LoadingOverlay",
    "Badge",
]
