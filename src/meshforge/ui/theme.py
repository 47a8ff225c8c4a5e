"""Dark theme configuration for the web dashboard."""

from __future__ import annotations

from dataclasses import dataclass

from meshforge.models.machine import OperationalCategory


@dataclass(frozen=True)
class Palette:
    bg: str = "#1a1b26"
    surface: str = "#24283b"
    muted: str = "#565f89"
    text: str = "#c0caf5"
    accent: str = "#7aa2f7"
    green: str = "#9ece6a"
    yellow: str = "#e0af68"
    red: str = "#f7768e"


COLORS = Palette()

CATEGORY_COLORS: dict[OperationalCategory, str] = {
    OperationalCategory.IDLE: COLORS.green,
    OperationalCategory.RUN: COLORS.accent,
    OperationalCategory.HOLD: COLORS.yellow,
    OperationalCategory.ALARM: COLORS.red,
    OperationalCategory.DISCONNECTED: COLORS.muted,
}

GLOBAL_CSS = f"""
body {{
    background-color: {COLORS.bg} !important;
    color: {COLORS.text} !important;
}}
.q-card {{
    background-color: {COLORS.surface} !important;
    border: 1px solid {COLORS.muted} !important;
}}
.q-header {{
    background-color: {COLORS.surface} !important;
    border-bottom: 1px solid {COLORS.muted} !important;
}}
.q-btn {{
    text-transform: none !important;
}}
.mono {{
    font-family: ui-monospace, 'SF Mono', monospace;
}}
"""


def badge_style(color: str) -> str:
    """Inline style for a tinted status badge."""
    return f"background: {color}40; color: {color}; border: 1px solid {color}66"
