"""
Shared utility functions for the Weekly Planner export modules.

Provides date formatting, filename sanitizing and text wrapping used by
both pdf_export.py and excel_export.py, so that the two formats print the
same dates and the same text.
"""

import re
from datetime import date, datetime
from typing import Callable, List, Optional

from reportlab.pdfbase.pdfmetrics import stringWidth

DEFAULT_SYSTEM_NAME = "Weekly Planner System for Schools"


def format_date(value: Optional[date]) -> str:
    """Format a date as ``Sep 2, 2024``. Missing dates read ``N/A``."""
    if value is None:
        return "N/A"
    if isinstance(value, datetime):
        value = value.date()
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def format_date_range(start: date, end: date) -> str:
    return f"{format_date(start)} - {format_date(end)}"


def format_timestamp(value: datetime) -> str:
    """Format a generation timestamp as ``Sep 2, 2024 08:30``."""
    return f"{format_date(value)} {value.strftime('%H:%M')}"


def truncate(text: str, limit: int) -> str:
    """Shorten ``text`` to ``limit`` characters, ending with '...' if cut."""
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def sanitize_filename(title: str, default: str = "export") -> str:
    """Sanitize a title for use as a filename.

    Args:
        title: The raw title string.
        default: Fallback name if the sanitized result is empty.

    Returns:
        A safe filename string (max 80 characters).
    """
    clean = re.sub(r"[^\w\s\-]", "", title)
    clean = re.sub(r"\s+", "_", clean.strip())
    return clean[:80] or default


def _split_word(word: str, font_name: str, font_size: float, max_width: float) -> List[str]:
    """Break a single word wider than ``max_width`` into pieces that fit."""
    pieces = []
    current = ""
    for ch in word:
        if current and stringWidth(current + ch, font_name, font_size) > max_width:
            pieces.append(current)
            current = ch
        else:
            current += ch
    if current:
        pieces.append(current)
    return pieces


def wrap_text_lines(text: str, font_name: str, font_size: float, max_width: float) -> List[str]:
    """Word-wrap text to lines no wider than ``max_width`` points.

    Explicit newlines start new lines. Words wider than a whole line are
    split.
    """
    if not text:
        return []
    lines = []
    for paragraph in text.splitlines():
        line = ""
        for word in paragraph.split():
            test_line = f"{line} {word}".strip()
            if stringWidth(test_line, font_name, font_size) <= max_width:
                line = test_line
                continue
            if line:
                lines.append(line)
            if stringWidth(word, font_name, font_size) <= max_width:
                line = word
            else:
                *head, line = _split_word(word, font_name, font_size, max_width)
                lines.extend(head)
        lines.append(line)
    return lines


def pdf_wrap_text(
    c,
    text: str,
    x: float,
    cursor: float,
    max_width: float,
    page_height: float,
    leading: float,
    page_bottom: float,
    new_page: Callable[[], float],
) -> float:
    """Draw word-wrapped text on a ReportLab canvas, top-down.

    Uses the canvas's current font. When the next line would fall below
    ``page_bottom``, ``new_page`` is called and drawing continues from the
    cursor it returns.

    Args:
        c: ReportLab canvas object.
        text: The text to draw.
        x: Left x coordinate.
        cursor: Distance from the top of the page to the first line's top.
        max_width: Maximum line width in points.
        page_height: Page height, to convert the cursor to canvas y.
        leading: Line spacing in points.
        page_bottom: Lowest cursor position a line may reach.
        new_page: Callback that starts a new page and returns its cursor.

    Returns:
        Cursor position below the last drawn line.
    """
    font_name, font_size = c._fontname, c._fontsize
    fill = c._fillColorObj
    for line in wrap_text_lines(text, font_name, font_size, max_width):
        if cursor + leading > page_bottom:
            cursor = new_page()
            c.setFont(font_name, font_size)
            c.setFillColor(fill)
        c.drawString(x, page_height - cursor - font_size, line)
        cursor += leading
    return cursor
