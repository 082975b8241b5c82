"""
EduCenter Design System

Colour tokens and spacing shared by the wizard dialogs and components.
"""


class Colors:
    """Colour palette of the desktop client."""
    PRIMARY_BLUE = "#0d6efd"
    PRIMARY_BLUE_HOVER = "#0b5ed7"
    PRIMARY_WHITE = "#FFFFFF"

    BACKGROUND = "#f8f9fa"
    SURFACE = "#FFFFFF"
    BORDER_DEFAULT = "#dee2e6"

    # Text Colors
    TEXT_PRIMARY = "#212529"
    TEXT_SECONDARY = "#6c757d"
    TEXT_DISABLED = "#adb5bd"

    # Status Colors
    SUCCESS = "#198754"
    WARNING = "#ffc107"
    CAUTION = "#fd7e14"
    ERROR = "#dc3545"
    INFO = "#0dcaf0"
    NEUTRAL = "#6c757d"


# Badge tone -> (background, text)
TONES = {
    "success": (Colors.SUCCESS, Colors.PRIMARY_WHITE),
    "warning": (Colors.WARNING, Colors.TEXT_PRIMARY),
    "caution": (Colors.CAUTION, Colors.PRIMARY_WHITE),
    "danger": (Colors.ERROR, Colors.PRIMARY_WHITE),
    "error": (Colors.ERROR, Colors.PRIMARY_WHITE),
    "info": (Colors.INFO, Colors.TEXT_PRIMARY),
    "neutral": (Colors.NEUTRAL, Colors.PRIMARY_WHITE),
}


def tone_colors(tone: str):
    """Background and text colour of a badge tone (neutral when unknown)."""
    return TONES.get(tone, TONES["neutral"])


class Spacing:
    XS = 4
    SM = 8
    MD = 12
    LG = 16
    XL = 20
