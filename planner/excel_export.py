"""
Weekly plan Excel export for the Weekly Planner.

Writes two sheets with openpyxl: an "Overview" sheet of label/value
metadata rows and a "Daily Plans" sheet that lays the week out as a fixed
grid, one row per plan field and one column per weekday. Styling is
decided by a cell's row and column role only, never by how much text it
holds.
"""

import io
import logging
import zipfile
from datetime import datetime
from typing import Optional

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.xml.constants import ARC_CORE
from openpyxl.xml.functions import tostring

from planner.completion import compute_completion
from planner.export_utils import (
    DEFAULT_SYSTEM_NAME,
    format_date,
    format_date_range,
    format_timestamp,
)
from planner.layout import LayoutConstants, estimate_note_rows
from planner.plan_model import DAY_NAMES, WEEKDAYS, PlanModel
from planner.theme import RenderTheme, resolve_theme

logger = logging.getLogger(__name__)

OVERVIEW_SHEET = "Overview"
GRID_SHEET = "Daily Plans"
NO_PLAN_MARKER = "No plan"

# (DailyEntry attribute, row label, row height)
GRID_FIELDS = [
    ("topic", "Topic", 36),
    ("books_and_pages", "Books & Pages", 30),
    ("homework", "Homework", 30),
    ("homework_due_date", "Due Date", 22),
    ("assignments", "Assignments", 30),
    ("notes", "Notes", 60),
]

GRID_TITLE_ROW = 1
GRID_META_ROW = 2
GRID_HEADER_ROW = 3
GRID_FIRST_FIELD_ROW = 4
GRID_LAST_COLUMN = get_column_letter(1 + len(WEEKDAYS))

DAY_TINTS = {
    1: "FFD1D4FE",
    2: "FFD1FADF",
    3: "FFFEF3C7",
    4: "FFFCE7F3",
    5: "FFDDD6FE",
}

WHITE = "FFFFFFFF"
DARK_GRAY = "FF374151"
GRAY = "FF6B7280"
LIGHT_GRAY = "FFF3F4F6"
MEDIUM_GRAY = "FFE5E7EB"
NOTES_FILL = "FFF5F3FF"

THIN = Side(style="thin", color="FFD1D5DB")
MEDIUM = Side(style="medium", color="FF9CA3AF")
THIN_BORDER = Border(left=THIN, right=THIN, top=THIN, bottom=THIN)
HEADER_BORDER = Border(left=THIN, right=THIN, top=MEDIUM, bottom=MEDIUM)


def _fill(argb: str) -> PatternFill:
    return PatternFill(start_color=argb, end_color=argb, fill_type="solid")


def _write(cell, value):
    """Set a cell value; text starting with '=' stays text, not a formula.

    Control characters a worksheet cannot store are dropped.
    """
    if isinstance(value, str):
        value = ILLEGAL_CHARACTERS_RE.sub("", value)
    cell.value = value
    if isinstance(value, str) and value.startswith("="):
        cell.data_type = "s"
    return cell


def _banner(ws, cell_range: str, value, font: Font, fill: Optional[PatternFill] = None,
            horizontal: str = "center"):
    """Merge a range and style its top-left cell as a heading."""
    ws.merge_cells(cell_range)
    cell = _write(ws[cell_range.split(":")[0]], value)
    cell.font = font
    if fill is not None:
        cell.fill = fill
    cell.alignment = Alignment(horizontal=horizontal, vertical="center", wrap_text=True)
    return cell


# ---------------------------------------------------------------------------
# Overview sheet
# ---------------------------------------------------------------------------


def _build_overview_sheet(ws, plan: PlanModel, theme: RenderTheme, generated_at: datetime,
                          layout: LayoutConstants):
    m = plan.week_meta
    primary = theme.argb(theme.primary_color)
    date_range = format_date_range(m.start_date, plan.end_date)

    ws.sheet_properties.tabColor = primary
    ws.column_dimensions["A"].width = 22
    ws.column_dimensions["B"].width = 45

    _banner(ws, "A1:B2", "Weekly Lesson Plan",
            Font(name="Arial", size=24, bold=True, color=WHITE), _fill(primary))
    _banner(ws, "A3:B3", f"{m.grade_name} - {m.subject_name}",
            Font(name="Arial", size=16, bold=True, color=primary))
    _banner(ws, "A4:B4", f"Week {m.week_number} ({m.week_year}) - {date_range}",
            Font(name="Arial", size=14, color=DARK_GRAY))

    _banner(ws, "A6:B6", "Plan Information",
            Font(name="Arial", size=12, bold=True, color=WHITE),
            _fill(theme.argb(theme.secondary_color)))

    for col, label in ((1, "Field"), (2, "Value")):
        cell = _write(ws.cell(row=7, column=col), label)
        cell.font = Font(bold=True, size=12, color=DARK_GRAY)
        cell.fill = _fill(MEDIUM_GRAY)
        cell.alignment = Alignment(horizontal="center")
        cell.border = THIN_BORDER

    info = [
        ("Teacher", m.teacher_name),
        ("Grade Level", m.grade_name),
        ("Subject", m.subject_name),
        ("Week Number", f"Week {m.week_number}"),
        ("Academic Year", str(m.week_year)),
        ("Date Range", date_range),
        ("Days Planned", compute_completion(plan).label),
        ("Document ID", m.document_id),
        ("Generated On", format_timestamp(generated_at)),
    ]
    row = 8
    for i, (field, value) in enumerate(info):
        stripe = _fill(LIGHT_GRAY if i % 2 == 0 else MEDIUM_GRAY)
        label_cell = _write(ws.cell(row=row, column=1), field)
        label_cell.font = Font(name="Arial", size=11, bold=True)
        value_cell = _write(ws.cell(row=row, column=2), value)
        value_cell.font = Font(name="Arial", size=11)
        for cell in (label_cell, value_cell):
            cell.fill = stripe
            cell.border = THIN_BORDER
        row += 1

    if plan.weekly_notes:
        row += 1
        _banner(ws, f"A{row}:B{row}", "Weekly Notes",
                Font(name="Arial", size=12, bold=True, color=WHITE),
                _fill(theme.argb(theme.accent_color)))
        _write_notes_region(ws, row + 1, "B", plan.weekly_notes, layout)


def _write_notes_region(ws, first_row: int, last_column: str, notes: str,
                        layout: LayoutConstants) -> int:
    """Write notes into a merged block starting at ``first_row``.

    Returns the first row below the block.
    """
    rows = estimate_note_rows(notes, layout)
    last_row = first_row + rows - 1
    ws.merge_cells(f"A{first_row}:{last_column}{last_row}")
    cell = _write(ws.cell(row=first_row, column=1), notes)
    cell.font = Font(name="Arial", size=11)
    cell.alignment = Alignment(wrap_text=True, vertical="top", horizontal="left")
    cell.border = THIN_BORDER
    cell.fill = _fill(NOTES_FILL)
    return last_row + 1


# ---------------------------------------------------------------------------
# Daily Plans grid
# ---------------------------------------------------------------------------


def _build_grid_sheet(ws, plan: PlanModel, theme: RenderTheme, generated_at: datetime,
                      system_name: str, layout: LayoutConstants):
    m = plan.week_meta
    primary = theme.argb(theme.primary_color)

    ws.sheet_properties.tabColor = primary
    ws.column_dimensions["A"].width = 18
    for col in range(2, 2 + len(WEEKDAYS)):
        ws.column_dimensions[get_column_letter(col)].width = 28

    _banner(ws, f"A{GRID_TITLE_ROW}:{GRID_LAST_COLUMN}{GRID_TITLE_ROW}",
            f"{m.grade_name} - {m.subject_name} - Week {m.week_number} - Daily Plans",
            Font(name="Arial", size=16, bold=True, color=WHITE), _fill(primary))
    ws.row_dimensions[GRID_TITLE_ROW].height = 30

    _banner(ws, f"A{GRID_META_ROW}:{GRID_LAST_COLUMN}{GRID_META_ROW}",
            f"Teacher: {m.teacher_name}  |  Week {m.week_number} ({m.week_year})  |  "
            f"{format_date_range(m.start_date, plan.end_date)}",
            Font(name="Arial", size=11, italic=True, color=DARK_GRAY))
    ws.row_dimensions[GRID_META_ROW].height = 20

    corner = _write(ws.cell(row=GRID_HEADER_ROW, column=1), "Plan")
    corner.font = Font(name="Arial", size=12, bold=True, color=WHITE)
    corner.fill = _fill(primary)
    corner.alignment = Alignment(horizontal="center", vertical="center")
    corner.border = HEADER_BORDER
    for day in WEEKDAYS:
        cell = _write(
            ws.cell(row=GRID_HEADER_ROW, column=1 + day),
            f"{DAY_NAMES[day]}\n{format_date(plan.day_date(day))}",
        )
        cell.font = Font(name="Arial", size=12, bold=True, color=WHITE)
        cell.fill = _fill(primary)
        cell.alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)
        cell.border = HEADER_BORDER
    ws.row_dimensions[GRID_HEADER_ROW].height = 36

    for offset, (attr, label, height) in enumerate(GRID_FIELDS):
        row = GRID_FIRST_FIELD_ROW + offset
        ws.row_dimensions[row].height = height

        label_cell = _write(ws.cell(row=row, column=1), label)
        label_cell.font = Font(name="Arial", size=11, bold=True, color=DARK_GRAY)
        label_cell.fill = _fill(LIGHT_GRAY)
        label_cell.alignment = Alignment(horizontal="left", vertical="center")
        label_cell.border = THIN_BORDER

        for day in WEEKDAYS:
            _write_grid_cell(ws.cell(row=row, column=1 + day), plan, day, attr)

    ws.freeze_panes = ws.cell(row=GRID_FIRST_FIELD_ROW, column=2)

    row = GRID_FIRST_FIELD_ROW + len(GRID_FIELDS) + 1
    if plan.weekly_notes:
        _banner(ws, f"A{row}:{GRID_LAST_COLUMN}{row}", "Weekly Notes",
                Font(name="Arial", size=12, bold=True, color=WHITE),
                _fill(theme.argb(theme.accent_color)))
        row = _write_notes_region(ws, row + 1, GRID_LAST_COLUMN, plan.weekly_notes, layout) + 1

    _banner(ws, f"A{row}:{GRID_LAST_COLUMN}{row}",
            f"Generated by {system_name} on {format_date(generated_at)}",
            Font(name="Arial", size=10, italic=True, color=GRAY))


def _write_grid_cell(cell, plan: PlanModel, day: int, attr: str):
    """Fill one weekday cell. Styling depends on row and planned/unplanned only."""
    entry = plan.planned_entry(day)
    cell.border = THIN_BORDER
    cell.alignment = Alignment(wrap_text=True, vertical="top")

    if entry is None:
        cell.fill = _fill(LIGHT_GRAY)
        if attr == "topic":
            _write(cell, NO_PLAN_MARKER)
            cell.font = Font(name="Arial", size=11, italic=True, color=GRAY)
        return

    cell.fill = _fill(DAY_TINTS[day])
    value = getattr(entry, attr)
    if attr == "homework_due_date":
        _write(cell, value)
        cell.number_format = "mmm d, yyyy"
        cell.alignment = Alignment(horizontal="left", vertical="top")
    else:
        _write(cell, value)
    bold = attr == "topic"
    cell.font = Font(name="Arial", size=11, bold=bold, color=DARK_GRAY)


# ---------------------------------------------------------------------------
# Workbook
# ---------------------------------------------------------------------------


def build_workbook(
    plan: PlanModel,
    theme: Optional[RenderTheme] = None,
    generated_at: Optional[datetime] = None,
    system_name: str = DEFAULT_SYSTEM_NAME,
    layout: Optional[LayoutConstants] = None,
) -> Workbook:
    """Build the two-sheet workbook for a weekly plan."""
    m = plan.week_meta
    theme = theme or resolve_theme(m.subject_name)
    generated_at = generated_at or datetime.now()
    layout = layout or LayoutConstants()

    wb = Workbook()
    props = wb.properties
    props.creator = system_name
    props.lastModifiedBy = m.teacher_name
    props.title = f"Weekly Lesson Plan - {m.grade_name} - {m.subject_name}"
    props.subject = "Weekly Lesson Plan"
    props.keywords = "education, planning, school, lessons"
    props.category = "Education"
    props.identifier = m.document_id
    props.created = generated_at
    props.modified = generated_at

    overview = wb.active
    overview.title = OVERVIEW_SHEET
    _build_overview_sheet(overview, plan, theme, generated_at, layout)

    grid = wb.create_sheet(title=GRID_SHEET)
    _build_grid_sheet(grid, plan, theme, generated_at, system_name, layout)
    return wb


def _stable_archive(raw: io.BytesIO, wb: Workbook, generated_at: datetime) -> io.BytesIO:
    """Rewrite the xlsx archive with fixed entry timestamps and core properties."""
    wb.properties.modified = generated_at
    stamp = generated_at.timetuple()[:6]
    out = io.BytesIO()
    with zipfile.ZipFile(raw) as src, zipfile.ZipFile(out, "w", zipfile.ZIP_DEFLATED) as dst:
        for item in src.infolist():
            data = src.read(item.filename)
            if item.filename == ARC_CORE:
                data = tostring(wb.properties.to_tree())
            info = zipfile.ZipInfo(item.filename, date_time=stamp)
            info.compress_type = zipfile.ZIP_DEFLATED
            dst.writestr(info, data)
    return out


def export_weekly_plan_excel(
    plan: PlanModel,
    theme: Optional[RenderTheme] = None,
    layout: Optional[LayoutConstants] = None,
    generated_at: Optional[datetime] = None,
    system_name: str = DEFAULT_SYSTEM_NAME,
) -> io.BytesIO:
    """Export a weekly plan to an Excel workbook.

    Args:
        plan: The PlanModel to render.
        theme: Color theme; resolved from the subject name when omitted.
        layout: Spacing constants (used for the notes regions).
        generated_at: Generation timestamp. When given, the archive is
            normalized so identical input gives identical bytes.
        system_name: Product name printed in the footer line.

    Returns:
        BytesIO buffer containing the .xlsx file.
    """
    wb = build_workbook(plan, theme, generated_at, system_name, layout)
    buf = io.BytesIO()
    wb.save(buf)
    buf.seek(0)
    if generated_at is not None:
        stable = _stable_archive(buf, wb, generated_at)
        buf.close()
        buf = stable
    buf.seek(0)
    logger.debug("export_weekly_plan_excel: wrote %s", plan.week_meta.document_id)
    return buf
