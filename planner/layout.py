"""
Content-height estimation for the Weekly Planner exporters.

The PDF renderer asks how much vertical space a daily block will need
before drawing it, so that a block is only started when it is expected to
fit on the current page. The numbers here are approximations, not text
shaping: they count characters rather than measuring glyphs, and they are
tuned to overestimate. The defaults are tuning values, not font metrics;
override them from the ``layout:`` section of config.yaml.
"""

import math
from dataclasses import dataclass, fields
from typing import Optional

from planner.plan_model import DailyEntry

MIN_NOTE_ROWS = 4
MAX_NOTE_ROWS = 30


@dataclass(frozen=True)
class LayoutConstants:
    """Vertical spacing used by estimator and renderer, in points."""

    topic_height: float = 30
    field_height: float = 30
    notes_base_height: float = 25
    line_height: float = 12
    chars_per_line: int = 50
    field_chars_per_line: int = 28
    topic_chars_per_line: int = 60
    padding: float = 30
    day_header_height: float = 30
    empty_state_height: float = 50
    block_gap: float = 14
    top_margin: float = 80
    bottom_margin: float = 70
    side_margin: float = 40

    @classmethod
    def from_config(cls, config: Optional[dict]) -> "LayoutConstants":
        """Build constants from a config dict, ignoring unknown keys."""
        section = (config or {}).get("layout") or {}
        known = {f.name for f in fields(cls)}
        overrides = {k: v for k, v in section.items() if k in known}
        return cls(**overrides)

    def page_bottom(self, page_height: float) -> float:
        """Lowest cursor position content may reach on a page."""
        return page_height - self.bottom_margin


def wrapped_line_count(text: Optional[str], chars_per_line: int) -> int:
    """Estimated number of lines ``text`` wraps to. Zero for empty text."""
    if not text:
        return 0
    return max(1, math.ceil(len(text) / chars_per_line))


def _overflow(text: Optional[str], chars_per_line: int, layout: LayoutConstants) -> float:
    """Height of the lines beyond the first that a short field wraps to."""
    extra = wrapped_line_count(text, chars_per_line) - 1
    return max(0, extra) * layout.line_height


def estimate_height(entry: Optional[DailyEntry], layout: LayoutConstants) -> float:
    """Estimate the height of a daily entry's content area.

    Starts from the topic line, adds a fixed increment per populated
    optional field, then a base height plus wrapped lines for notes, then
    padding. An absent entry (or one without a topic) renders as the
    fixed-height empty state.

    Args:
        entry: The DailyEntry, or None for an unplanned day.
        layout: Spacing constants.

    Returns:
        Estimated height in points. May overestimate, never meant to
        underestimate.
    """
    if entry is None or not entry.has_content:
        return layout.empty_state_height

    height = layout.topic_height
    height += _overflow(entry.topic, layout.topic_chars_per_line, layout)

    for value in (entry.books_and_pages, entry.homework, entry.assignments):
        if value:
            height += layout.field_height
            height += _overflow(value, layout.field_chars_per_line, layout)

    if entry.homework_due_date:
        height += layout.field_height

    if entry.notes:
        lines = wrapped_line_count(entry.notes, layout.chars_per_line)
        height += layout.notes_base_height + lines * layout.line_height

    return height + layout.padding


def block_height(entry: Optional[DailyEntry], layout: LayoutConstants) -> float:
    """Full height of a daily block: header bar plus content estimate."""
    return layout.day_header_height + estimate_height(entry, layout)


def estimate_note_rows(text: Optional[str], layout: LayoutConstants) -> int:
    """Number of spreadsheet rows a merged notes region should span."""
    lines = wrapped_line_count(text, layout.chars_per_line * 2)
    return min(MAX_NOTE_ROWS, max(MIN_NOTE_ROWS, lines))
