"""
Subject color themes for the Weekly Planner exporters.

Maps a free-text subject name to a fixed color family. Matching is a
case-insensitive substring test in both directions, first match wins,
and anything unmatched (including a blank subject) falls back to blue.
"""

import functools
from dataclasses import dataclass

DEFAULT_PRIMARY = "#3b82f6"
DEFAULT_BACKGROUND = "#eff6ff"

SECONDARY_COLOR = "#10b981"
ACCENT_COLOR = "#8b5cf6"
NEUTRAL_GRAY = "#6b7280"

# Ordered: "earth science" must hit science before art.
SUBJECT_COLORS = [
    ("mathematics", "#3b82f6", "#eff6ff"),
    ("science", "#10b981", "#ecfdf5"),
    ("english", "#8b5cf6", "#f5f3ff"),
    ("history", "#f97316", "#fff7ed"),
    ("geography", "#0ea5e9", "#f0f9ff"),
    ("art", "#ec4899", "#fdf2f8"),
    ("music", "#f43f5e", "#fff1f2"),
    ("physical education", "#84cc16", "#f7fee7"),
]


@dataclass(frozen=True)
class RenderTheme:
    primary_color: str
    secondary_color: str
    accent_color: str
    neutral_gray: str
    light_background: str

    @staticmethod
    def argb(color: str) -> str:
        """Convert ``#rrggbb`` to the ``FFRRGGBB`` form openpyxl styles use."""
        return "FF" + color.lstrip("#").upper()


def _family(primary: str, background: str) -> RenderTheme:
    return RenderTheme(
        primary_color=primary,
        secondary_color=SECONDARY_COLOR,
        accent_color=ACCENT_COLOR,
        neutral_gray=NEUTRAL_GRAY,
        light_background=background,
    )


@functools.lru_cache(maxsize=128)
def resolve_theme(subject_name: str) -> RenderTheme:
    """Resolve the color theme for a subject name. Never raises.

    Args:
        subject_name: Free-text subject, e.g. "Mathematics" or "Art & Design".

    Returns:
        The RenderTheme for the first matching subject keyword, or the
        default blue theme.
    """
    needle = (subject_name or "").strip().lower()
    if needle:
        for key, primary, background in SUBJECT_COLORS:
            if key in needle or needle in key:
                return _family(primary, background)
    return _family(DEFAULT_PRIMARY, DEFAULT_BACKGROUND)
