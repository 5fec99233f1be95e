"""
Weekly plan PDF export for the Weekly Planner.

Draws a cover page, an overview page and one block per weekday on a
ReportLab canvas. Pages are buffered until the whole document is drawn,
then a second pass stamps every page except the cover with a
"Page N of TOTAL" footer; the total is only known at that point.

Layout uses a top-down cursor (points from the top edge of the page).
Every ``_draw_*`` step takes the cursor and returns the cursor below what
it drew.
"""

import io
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from planner.completion import compute_completion, summarize_fields
from planner.export_utils import (
    DEFAULT_SYSTEM_NAME,
    format_date,
    format_date_range,
    format_timestamp,
    pdf_wrap_text,
    truncate,
    wrap_text_lines,
)
from planner.layout import LayoutConstants, block_height, estimate_height, wrapped_line_count
from planner.plan_model import DAY_NAMES, WEEKDAYS, DailyEntry, PlanModel
from planner.theme import RenderTheme, resolve_theme

logger = logging.getLogger(__name__)

DARK_GRAY = colors.HexColor("#374151")
TEXT_COLOR = colors.HexColor("#111827")
BORDER_COLOR = colors.HexColor("#e5e7eb")
MUTED_COLOR = colors.HexColor("#9ca3af")
PAGE_TINT = colors.HexColor("#f3f4f6")
EMPTY_FILL = colors.HexColor("#fafafa")
ASSIGNMENT_COLOR = colors.HexColor("#f97316")
DUE_DATE_COLOR = colors.HexColor("#ef4444")
NOTES_COLOR = colors.HexColor("#8b5cf6")

HEADER_BAND = 60
TOPIC_PREVIEW_CHARS = 40

# ZapfDingbats glyphs
CHECK_MARK = "4"
CROSS_MARK = "8"


@dataclass(frozen=True)
class BlockPlacement:
    """Where a daily block started: page number, top cursor, estimated height."""

    day: int
    page: int
    top: float
    height: float


class _BufferedCanvas(canvas.Canvas):
    """Canvas that holds every page until save().

    showPage() only records the finished page. save() replays the pages,
    calling ``footer(canvas, page_number, total_pages)`` on each one before
    it is written out.
    """

    def __init__(self, *args, footer=None, **kwargs):
        canvas.Canvas.__init__(self, *args, **kwargs)
        self._page_states = []
        self._footer = footer

    def showPage(self):
        self._page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        total = len(self._page_states)
        for number, state in enumerate(self._page_states, start=1):
            self.__dict__.update(state)
            if self._footer is not None:
                self._footer(self, number, total)
            canvas.Canvas.showPage(self)
        canvas.Canvas.save(self)


def _fit_font(c, text: str, font_name: str, base_size: float, max_width: float) -> float:
    """Shrink the font size until ``text`` fits ``max_width`` (min 8pt)."""
    size = float(base_size)
    while size > 8.0:
        if c.stringWidth(text, font_name, size) <= max_width:
            return size
        size -= 0.5
    return 8.0


class WeeklyPlanPdfRenderer:
    """Renders one PlanModel to a paginated PDF.

    A renderer instance is single-use per render() call; ``placements``,
    ``footers`` and ``page_count`` describe the most recent render.
    """

    def __init__(
        self,
        plan: PlanModel,
        theme: Optional[RenderTheme] = None,
        layout: Optional[LayoutConstants] = None,
        generated_at: Optional[datetime] = None,
        system_name: str = DEFAULT_SYSTEM_NAME,
        pagesize=A4,
    ):
        self.plan = plan
        self.meta = plan.week_meta
        self.theme = theme or resolve_theme(self.meta.subject_name)
        self.layout = layout or LayoutConstants()
        self.invariant = generated_at is not None
        self.generated_at = generated_at or datetime.now()
        self.system_name = system_name
        self.width, self.height = pagesize
        self.pagesize = pagesize

        self.primary = colors.HexColor(self.theme.primary_color)
        self.secondary = colors.HexColor(self.theme.secondary_color)
        self.accent = colors.HexColor(self.theme.accent_color)
        self.gray = colors.HexColor(self.theme.neutral_gray)
        self.background = colors.HexColor(self.theme.light_background)

        self.placements: List[BlockPlacement] = []
        self.footers: List[str] = []
        self.page_count = 0
        self._page = 0
        self._page_title = ""

    # -- geometry -----------------------------------------------------------

    @property
    def content_top(self) -> float:
        return self.layout.top_margin

    @property
    def page_bottom(self) -> float:
        return self.layout.page_bottom(self.height)

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.layout.side_margin

    def _y(self, cursor: float) -> float:
        """Convert a top-down cursor to a canvas y coordinate."""
        return self.height - cursor

    def _rect(self, c, x, top, w, h, fill, stroke=None, radius=0):
        c.setFillColor(fill)
        if stroke is not None:
            c.setStrokeColor(stroke)
            c.setLineWidth(0.5)
        if radius:
            c.roundRect(x, self._y(top + h), w, h, radius, fill=1, stroke=1 if stroke else 0)
        else:
            c.rect(x, self._y(top + h), w, h, fill=1, stroke=1 if stroke else 0)

    def _text(self, c, x, baseline, text, font="Helvetica", size=10, color=DARK_GRAY):
        c.setFont(font, size)
        c.setFillColor(color)
        c.drawString(x, self._y(baseline), text)

    def _label_value(self, c, x, baseline, label, value, size=10):
        """Draw ``Label: value`` with a bold label."""
        self._text(c, x, baseline, label, "Helvetica-Bold", size, DARK_GRAY)
        offset = c.stringWidth(label + " ", "Helvetica-Bold", size)
        self._text(c, x + offset, baseline, value, "Helvetica", size, self.gray)

    # -- document -----------------------------------------------------------

    def render(self) -> io.BytesIO:
        """Draw the whole document and return it as a BytesIO buffer."""
        self.placements = []
        self.footers = []
        self._page = 1

        buf = io.BytesIO()
        c = _BufferedCanvas(
            buf,
            pagesize=self.pagesize,
            footer=self._stamp_footer,
            invariant=1 if self.invariant else 0,
        )
        self._set_metadata(c)

        self._draw_cover(c)
        cursor = self._new_page(c, "WEEKLY OVERVIEW")
        cursor = self._draw_overview(c, cursor)

        cursor = self._new_page(c, "WEEKLY LESSON PLAN")
        for day in WEEKDAYS:
            cursor = self._draw_daily_block(c, cursor, day)

        if self.plan.weekly_notes:
            cursor = self._draw_weekly_notes(c, cursor)

        c.showPage()
        self.page_count = self._page
        # Footer pass: _BufferedCanvas.save() stamps every buffered page.
        c.save()

        logger.debug(
            "WeeklyPlanPdfRenderer.render: %s pages for %s",
            self.page_count, self.meta.document_id,
        )
        buf.seek(0)
        return buf

    def _set_metadata(self, c):
        m = self.meta
        c.setTitle(f"Weekly Plan - {m.subject_name} - {m.grade_name} - Week {m.week_number}")
        c.setAuthor(m.teacher_name)
        c.setSubject(f"Weekly Lesson Plan for {m.subject_name}")
        c.setKeywords("weekly plan, lesson plan, school, education, curriculum")
        c.setCreator(self.system_name)

    def _new_page(self, c, title: Optional[str] = None) -> float:
        """Finish the current page, start a new one with its running header."""
        c.showPage()
        self._page += 1
        if title is not None:
            self._page_title = title
        self._draw_page_header(c, self._page_title)
        return self.content_top

    def _continue_page(self, c) -> float:
        m = self.meta
        return self._new_page(
            c, f"Weekly Plan - {m.grade_name} - {m.subject_name} - Week {m.week_number}"
        )

    def _draw_page_header(self, c, title: str):
        m = self.meta
        self._rect(c, 0, 0, self.width, HEADER_BAND, PAGE_TINT)
        self._rect(c, 0, 0, self.width, 8, self.primary)

        size = _fit_font(c, title, "Helvetica-Bold", 16, self.content_width * 0.6)
        self._text(c, self.layout.side_margin, 40, title, "Helvetica-Bold", size, self.primary)

        c.setFont("Helvetica", 9)
        c.setFillColor(self.gray)
        c.drawRightString(
            self.width - self.layout.side_margin,
            self._y(40),
            f"{m.grade_name} - {m.subject_name} - Week {m.week_number} ({m.week_year})",
        )

    def _stamp_footer(self, c, page_number: int, total: int):
        if page_number == 1:
            return
        m = self.meta
        left = f"{m.grade_name} - {m.subject_name} - Week {m.week_number}"
        right = f"Page {page_number} of {total}"
        margin = self.layout.side_margin

        c.setStrokeColor(BORDER_COLOR)
        c.setLineWidth(0.5)
        c.line(margin, 50, self.width - margin, 50)

        c.setFont("Helvetica", 8)
        c.setFillColor(MUTED_COLOR)
        c.drawString(margin, 40, left)
        c.drawCentredString(self.width / 2, 40, self.system_name)
        c.drawRightString(self.width - margin, 40, right)
        self.footers.append(f"{left} | {self.system_name} | {right}")

    # -- cover --------------------------------------------------------------

    def _draw_cover(self, c):
        m = self.meta
        center = self.width / 2
        max_width = self.width - 2 * self.layout.side_margin

        self._rect(c, 0, 0, self.width, self.height, self.background)
        self._rect(c, 0, 0, self.width, 200, self.primary)

        c.setFillColor(colors.white)
        c.setStrokeColor(self.primary)
        c.setLineWidth(2)
        c.circle(center, self._y(140), 40, fill=1, stroke=1)

        c.setFont("Helvetica-Bold", 16)
        c.setFillColor(colors.white)
        c.drawCentredString(center, self._y(80), self.system_name.upper())

        c.setFont("Helvetica-Bold", 34)
        c.setFillColor(self.primary)
        c.drawCentredString(center, self._y(265), "WEEKLY LESSON PLAN")

        size = _fit_font(c, m.subject_name, "Helvetica", 24, max_width)
        c.setFont("Helvetica", size)
        c.setFillColor(DARK_GRAY)
        c.drawCentredString(center, self._y(315), m.subject_name)

        size = _fit_font(c, m.grade_name, "Helvetica", 20, max_width)
        c.setFont("Helvetica", size)
        c.drawCentredString(center, self._y(345), m.grade_name)

        c.setFont("Helvetica-Bold", 18)
        c.setFillColor(self.primary)
        c.drawCentredString(center, self._y(380), f"Week {m.week_number} - {m.week_year}")

        c.setFont("Helvetica", 14)
        c.setFillColor(DARK_GRAY)
        c.drawCentredString(
            center, self._y(405), format_date_range(m.start_date, self.plan.end_date)
        )

        box_w = 300
        box_x = (self.width - box_w) / 2
        self._rect(c, box_x, 480, box_w, 60, colors.HexColor("#f9fafb"), BORDER_COLOR, radius=5)
        self._label_value(c, box_x + 20, 503, "Teacher:", m.teacher_name, size=12)
        self._label_value(c, box_x + 20, 523, "Document ID:", m.document_id, size=12)

        c.setFont("Helvetica", 8)
        c.setFillColor(self.gray)
        c.drawCentredString(
            center,
            self._y(self.height - 90),
            "This document contains confidential information and is intended "
            "for educational purposes only.",
        )
        c.drawCentredString(center, self._y(self.height - 78), f"© {self.system_name}")

    # -- overview -----------------------------------------------------------

    def _draw_overview(self, c, cursor: float) -> float:
        cursor = self._draw_meta_box(c, cursor)
        cursor = self._draw_progress(c, cursor)
        cursor = self._draw_day_list(c, cursor)
        cursor = self._draw_checklist(c, cursor)
        if self.plan.weekly_notes:
            cursor = self._draw_special_instructions(c, cursor)
        return cursor

    def _draw_meta_box(self, c, cursor: float) -> float:
        m = self.meta
        margin = self.layout.side_margin
        self._rect(c, margin, cursor, self.content_width, 80, EMPTY_FILL, BORDER_COLOR, radius=5)

        left = margin + 20
        right = self.width / 2 + 20
        self._label_value(c, left, cursor + 20, "Teacher:", m.teacher_name)
        self._label_value(c, left, cursor + 40, "Subject:", m.subject_name)
        self._label_value(
            c, left, cursor + 60, "Document Generated:", format_timestamp(self.generated_at)
        )
        self._label_value(c, right, cursor + 20, "Grade:", m.grade_name)
        self._label_value(c, right, cursor + 40, "Week:", f"{m.week_number} ({m.week_year})")
        self._label_value(
            c, right, cursor + 60, "Date Range:",
            format_date_range(m.start_date, self.plan.end_date),
        )
        return cursor + 100

    def _draw_progress(self, c, cursor: float) -> float:
        summary = compute_completion(self.plan)
        margin = self.layout.side_margin
        bar_w = self.content_width

        self._text(c, margin, cursor + 14, "Weekly Overview", "Helvetica-Bold", 14, DARK_GRAY)
        cursor += 24

        self._rect(c, margin, cursor, bar_w, 25, PAGE_TINT, radius=3)
        if summary.completed_count:
            self._rect(c, margin, cursor, bar_w * summary.ratio, 25, self.secondary, radius=3)
        c.setFont("Helvetica-Bold", 11)
        c.setFillColor(TEXT_COLOR)
        c.drawCentredString(margin + bar_w / 2, self._y(cursor + 17), summary.label)
        cursor += 40

        day_w = bar_w / len(WEEKDAYS)
        for index, day in enumerate(WEEKDAYS):
            done = summary.per_day[day]
            mid = margin + index * day_w + day_w / 2
            c.setFont("Helvetica", 9)
            c.setFillColor(DARK_GRAY)
            c.drawCentredString(mid, self._y(cursor + 9), DAY_NAMES[day][:3])

            c.setFillColor(self.secondary if done else BORDER_COLOR)
            c.setStrokeColor(self.secondary if done else colors.HexColor("#d1d5db"))
            c.setLineWidth(0.5)
            c.circle(mid, self._y(cursor + 24), 8, fill=1, stroke=1)
            if done:
                c.setFont("ZapfDingbats", 8)
                c.setFillColor(colors.white)
                c.drawCentredString(mid, self._y(cursor + 27), CHECK_MARK)
        cursor += 42

        c.setStrokeColor(BORDER_COLOR)
        c.line(margin, self._y(cursor), self.width - margin, self._y(cursor))
        return cursor + 15

    def _draw_day_list(self, c, cursor: float) -> float:
        margin = self.layout.side_margin
        self._text(c, margin, cursor + 14, "Daily Topics", "Helvetica-Bold", 14, DARK_GRAY)
        cursor += 26
        for day in WEEKDAYS:
            entry = self.plan.planned_entry(day)
            self._text(c, margin, cursor + 12, DAY_NAMES[day], "Helvetica-Bold", 12, DARK_GRAY)

            c.setFillColor(self.secondary if entry else BORDER_COLOR)
            c.circle(margin + 90, self._y(cursor + 8), 4, fill=1, stroke=0)

            if entry:
                preview = truncate(entry.topic, TOPIC_PREVIEW_CHARS)
                self._text(c, margin + 110, cursor + 12, preview, "Helvetica", 10, self.gray)
            else:
                self._text(
                    c, margin + 110, cursor + 12, "No plan for this day",
                    "Helvetica-Oblique", 10, MUTED_COLOR,
                )
            cursor += 20
        return cursor + 10

    def _draw_checklist(self, c, cursor: float) -> float:
        margin = self.layout.side_margin
        self._text(
            c, margin, cursor + 14, "Plan Elements Included", "Helvetica-Bold", 14, DARK_GRAY
        )
        cursor += 24
        for label, included in summarize_fields(self.plan).items():
            self._text(
                c, margin + 10, cursor + 10, CHECK_MARK if included else CROSS_MARK,
                "ZapfDingbats", 9, self.secondary if included else colors.HexColor("#d1d5db"),
            )
            self._text(c, margin + 28, cursor + 10, label, "Helvetica", 10, DARK_GRAY)
            cursor += 16
        return cursor + 10

    def _draw_special_instructions(self, c, cursor: float) -> float:
        margin = self.layout.side_margin
        if cursor + 40 > self.page_bottom:
            cursor = self._new_page(c, "WEEKLY OVERVIEW (CONTINUED)")
        self._text(c, margin, cursor + 14, "Special Instructions", "Helvetica-Bold", 14, DARK_GRAY)
        cursor += 24
        c.setFont("Helvetica-Oblique", 10)
        c.setFillColor(self.gray)
        return pdf_wrap_text(
            c, self.plan.weekly_notes, margin + 10, cursor,
            self.content_width - 20, self.height, self.layout.line_height,
            self.page_bottom, lambda: self._new_page(c, "WEEKLY OVERVIEW (CONTINUED)"),
        )

    # -- daily blocks -------------------------------------------------------

    def _draw_daily_block(self, c, cursor: float, day: int) -> float:
        """Draw one weekday block, breaking the page first if it won't fit."""
        entry = self.plan.planned_entry(day)
        height = block_height(entry, self.layout)

        if cursor + height > self.page_bottom and cursor > self.content_top:
            cursor = self._continue_page(c)

        self.placements.append(BlockPlacement(day=day, page=self._page, top=cursor, height=height))

        cursor = self._draw_day_header(c, cursor, day, entry is not None)
        if entry is None:
            cursor = self._draw_empty_day(c, cursor)
        else:
            cursor = self._draw_entry(c, cursor, entry)
        return cursor + self.layout.block_gap

    def _draw_day_header(self, c, cursor: float, day: int, has_content: bool) -> float:
        margin = self.layout.side_margin
        bar_h = self.layout.day_header_height
        if has_content:
            self._rect(c, margin, cursor, self.content_width, bar_h, self.primary)
            self._rect(c, margin, cursor, 8, bar_h, self.accent)
        else:
            self._rect(c, margin, cursor, self.content_width, bar_h, self.gray)

        self._text(c, margin + 15, cursor + 20, DAY_NAMES[day], "Helvetica-Bold", 14, colors.white)
        c.setFont("Helvetica", 10)
        c.drawRightString(
            self.width - margin - 12, self._y(cursor + 19), format_date(self.plan.day_date(day))
        )
        return cursor + bar_h

    def _draw_empty_day(self, c, cursor: float) -> float:
        margin = self.layout.side_margin
        box_h = self.layout.empty_state_height
        self._rect(c, margin, cursor, self.content_width, box_h, EMPTY_FILL, BORDER_COLOR)
        self._text(
            c, margin + 20, cursor + 20, "No plan created for this day.",
            "Helvetica-Oblique", 11, self.gray,
        )
        self._text(
            c, margin + 20, cursor + 36,
            "Add a plan for this day to complete your weekly planning.",
            "Helvetica", 9, MUTED_COLOR,
        )
        return cursor + box_h

    def _draw_entry(self, c, cursor: float, entry: DailyEntry) -> float:
        layout = self.layout
        margin = layout.side_margin
        start_page = self._page
        box_top = cursor
        box_h = min(estimate_height(entry, layout), self.page_bottom - box_top)
        self._rect(c, margin, box_top, self.content_width, box_h, colors.white, BORDER_COLOR)

        cursor += 10
        cursor = self._draw_topic(c, cursor, entry.topic)

        col_w = (self.content_width - 30) / 2
        left_x = margin + 20
        right_x = left_x + col_w + 10
        due = format_date(entry.homework_due_date) if entry.homework_due_date else None
        rows = [
            (("Books & Pages:", entry.books_and_pages, self.secondary),
             ("Homework:", entry.homework, self.accent)),
            (("Assignments:", entry.assignments, ASSIGNMENT_COLOR),
             ("Due Date:", due, DUE_DATE_COLOR)),
        ]
        for left, right in rows:
            cursor = self._draw_field_row(c, cursor, left_x, right_x, col_w, left, right)

        if entry.notes:
            cursor = self._draw_notes(c, cursor, entry.notes)

        end = cursor + layout.padding - 10
        if self._page == start_page:
            end = max(end, box_top + estimate_height(entry, layout))
        return end

    def _draw_topic(self, c, cursor: float, topic: str) -> float:
        layout = self.layout
        margin = layout.side_margin
        label_w = c.stringWidth("Topic: ", "Helvetica-Bold", 12)
        text_x = margin + 20 + label_w
        lines = wrap_text_lines(topic, "Helvetica", 11, self.width - margin - 20 - text_x)

        if cursor + layout.topic_height > self.page_bottom:
            cursor = self._continue_page(c)

        self._rect(c, margin, cursor - 2, 8, 18, self.primary)
        self._text(c, margin + 20, cursor + 12, "Topic:", "Helvetica-Bold", 12, TEXT_COLOR)
        baseline = cursor + 12
        for i, line in enumerate(lines):
            if i:
                baseline += layout.line_height
                if baseline > self.page_bottom:
                    baseline = self._continue_page(c) + 12
            self._text(c, text_x, baseline, line, "Helvetica", 11, DARK_GRAY)
        return baseline - 12 + layout.topic_height

    def _draw_field_row(self, c, cursor, left_x, right_x, col_w, left, right) -> float:
        """Draw two labelled fields side by side; skip the row if both are empty.

        Both columns advance one line at a time, so a page break mid-row
        carries the remaining lines of each column onto the next page.
        """
        layout = self.layout
        columns = []
        for x, (label, value, stripe) in ((left_x, left), (right_x, right)):
            if value:
                columns.append((x, label, wrap_text_lines(value, "Helvetica", 10, col_w - 10), stripe))
        if not columns:
            return cursor

        if cursor + layout.field_height > self.page_bottom:
            cursor = self._continue_page(c)

        for x, label, _, stripe in columns:
            self._rect(c, x - 20, cursor - 2, 8, 18, stripe)
            self._text(c, x, cursor + 10, label, "Helvetica-Bold", 10, TEXT_COLOR)

        depth = max(len(lines) for _, _, lines, _ in columns)
        baseline = cursor + 22
        for i in range(depth):
            if i:
                baseline += layout.line_height
                if baseline > self.page_bottom:
                    baseline = self._continue_page(c) + 10
            for x, _, lines, _ in columns:
                if i < len(lines):
                    self._text(c, x, baseline, lines[i], "Helvetica", 10, DARK_GRAY)
        return baseline - 22 + layout.field_height

    def _draw_notes(self, c, cursor: float, notes: str) -> float:
        layout = self.layout
        margin = layout.side_margin
        if cursor + layout.notes_base_height + layout.line_height > self.page_bottom:
            cursor = self._continue_page(c)

        self._rect(c, margin, cursor - 2, 8, 18, NOTES_COLOR)
        self._text(c, margin + 20, cursor + 10, "Notes:", "Helvetica-Bold", 10, TEXT_COLOR)
        c.setFont("Helvetica", 10)
        c.setFillColor(DARK_GRAY)
        cursor = pdf_wrap_text(
            c, notes, margin + 20, cursor + 15, self.content_width - 40, self.height,
            layout.line_height, self.page_bottom, lambda: self._continue_page(c),
        )
        return cursor + layout.notes_base_height - 15

    # -- weekly notes -------------------------------------------------------

    def _draw_weekly_notes(self, c, cursor: float) -> float:
        layout = self.layout
        margin = layout.side_margin
        notes = self.plan.weekly_notes
        height = 40 + wrapped_line_count(notes, layout.chars_per_line) * layout.line_height
        if cursor + height > self.page_bottom and cursor > self.content_top:
            cursor = self._continue_page(c)

        self._text(
            c, margin, cursor + 18, "Additional Planning Notes", "Helvetica-Bold", 16, DARK_GRAY
        )
        self._rect(c, margin, cursor + 26, self.content_width, 4, self.primary)
        c.setFont("Helvetica", 10)
        c.setFillColor(DARK_GRAY)
        return pdf_wrap_text(
            c, notes, margin, cursor + 40, self.content_width, self.height,
            layout.line_height, self.page_bottom, lambda: self._continue_page(c),
        )


def export_weekly_plan_pdf(
    plan: PlanModel,
    theme: Optional[RenderTheme] = None,
    layout: Optional[LayoutConstants] = None,
    generated_at: Optional[datetime] = None,
    system_name: str = DEFAULT_SYSTEM_NAME,
) -> io.BytesIO:
    """Export a weekly plan to PDF.

    Args:
        plan: The PlanModel to render.
        theme: Color theme; resolved from the subject name when omitted.
        layout: Spacing constants; defaults when omitted.
        generated_at: Timestamp printed on the overview page. When given,
            the PDF is written in invariant mode so identical input gives
            identical bytes.
        system_name: Product name printed on the cover and footers.

    Returns:
        BytesIO buffer containing the PDF file.
    """
    renderer = WeeklyPlanPdfRenderer(
        plan, theme=theme, layout=layout, generated_at=generated_at, system_name=system_name
    )
    return renderer.render()
