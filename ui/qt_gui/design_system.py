"""
Design System

Centralized design tokens for the desk UI.
Colors, spacing, and the value-derived badge palette used by select fields.
"""
from typing import Dict, Optional, Tuple

from PyQt6.QtGui import QColor


# =============================================================================
# Colors
# =============================================================================

class Colors:
    """Base color palette"""
    BG_DARK = QColor(28, 28, 32)
    BG_MEDIUM = QColor(42, 42, 47)
    BG_LIGHT = QColor(56, 56, 62)

    BORDER = QColor(75, 75, 80)

    TEXT_PRIMARY = QColor(240, 240, 245)
    TEXT_SECONDARY = QColor(180, 180, 185)
    TEXT_DISABLED = QColor(120, 120, 125)

    STATUS_SUCCESS = QColor(80, 180, 120)
    STATUS_WARNING = QColor(220, 180, 60)
    STATUS_ERROR = QColor(220, 80, 80)
    STATUS_INFO = QColor(70, 130, 220)


class Spacing:
    """Spacing scale (pixels)"""
    XS = 4
    SM = 8
    MD = 16
    LG = 24
    XL = 32


# =============================================================================
# Badge palette
# =============================================================================

# name -> (background, border, text)
BADGE_COLORS: Dict[str, Tuple[str, str, str]] = {
    "blue": ("#d0ebff", "#74c0fc", "#1864ab"),
    "cyan": ("#c5f6fa", "#66d9e8", "#0b7285"),
    "teal": ("#c3fae8", "#63e6be", "#087f5b"),
    "green": ("#d3f9d8", "#8ce99a", "#2b8a3e"),
    "lime": ("#e9fac8", "#c0eb75", "#5c940d"),
    "yellow": ("#fff3bf", "#ffd43b", "#e67700"),
    "orange": ("#ffe8cc", "#ffc078", "#d9480f"),
    "red": ("#ffe3e3", "#ffa8a8", "#c92a2a"),
    "pink": ("#ffdeeb", "#faa2c1", "#a61e4d"),
    "grape": ("#f3d9fa", "#e599f7", "#862e9c"),
    "violet": ("#e5dbff", "#b197fc", "#5f3dc4"),
    "indigo": ("#dbe4ff", "#91a7ff", "#364fc7"),
    "gray": ("#f1f3f5", "#dee2e6", "#212529"),
}

HASH_COLORS = (
    "blue", "cyan", "teal", "green", "lime", "yellow",
    "orange", "red", "pink", "grape", "violet", "indigo",
)


def _string_hash(value: str) -> int:
    """31-multiplier string hash wrapped to signed 32 bits."""
    h = 0
    for ch in value:
        h = ((h << 5) - h + ord(ch)) & 0xFFFFFFFF
    return h - 0x100000000 if h & 0x80000000 else h


def hash_color(value: Optional[str], fallback: str = "gray") -> str:
    """
    Stable badge color name for a value.

    The same value always maps to the same color; empty values use fallback.
    """
    if not value:
        return fallback
    return HASH_COLORS[abs(_string_hash(value)) % len(HASH_COLORS)]


def badge_style(color_name: str) -> str:
    """Stylesheet for a value badge (select field) in the given palette color."""
    background, border, text = BADGE_COLORS.get(color_name, BADGE_COLORS["gray"])
    return (
        f"background-color: {background}; color: {text}; "
        f"border: 1px solid {border}; font-weight: 500; padding: 1px {Spacing.XS}px;"
    )
