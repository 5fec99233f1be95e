"""
Tests for the weekly plan Excel export (planner/excel_export.py).

Workbooks are reloaded with openpyxl and checked cell by cell.
"""

import dataclasses
import io
from datetime import datetime
from types import MappingProxyType

import pytest
from openpyxl import load_workbook

from planner.excel_export import (
    GRID_FIELDS,
    GRID_FIRST_FIELD_ROW,
    GRID_HEADER_ROW,
    GRID_SHEET,
    NO_PLAN_MARKER,
    OVERVIEW_SHEET,
    build_workbook,
    export_weekly_plan_excel,
)
from planner.plan_model import WEEKDAYS, DailyEntry

TOPIC_ROW = GRID_FIRST_FIELD_ROW
BOOKS_ROW = GRID_FIRST_FIELD_ROW + 1
DUE_ROW = GRID_FIRST_FIELD_ROW + 3
NOTES_ROW = GRID_FIRST_FIELD_ROW + 5


def _reload(plan, fixed_time, **kwargs):
    buf = export_weekly_plan_excel(plan, generated_at=fixed_time, **kwargs)
    return load_workbook(io.BytesIO(buf.getvalue()))


def _column_values(ws, row):
    return [ws.cell(row=row, column=1 + day).value for day in WEEKDAYS]


class TestWorkbookShape:
    def test_returns_xlsx(self, scenario_plan, fixed_time):
        buf = export_weekly_plan_excel(scenario_plan, generated_at=fixed_time)
        assert isinstance(buf, io.BytesIO)
        # xlsx is a zip archive
        assert buf.getvalue()[:2] == b"PK"

    def test_two_sheets(self, scenario_plan, fixed_time):
        wb = _reload(scenario_plan, fixed_time)
        assert wb.sheetnames == [OVERVIEW_SHEET, GRID_SHEET]

    def test_grid_headers(self, scenario_plan, fixed_time):
        ws = _reload(scenario_plan, fixed_time)[GRID_SHEET]
        assert ws.cell(row=GRID_HEADER_ROW, column=1).value == "Plan"
        assert _column_values(ws, GRID_HEADER_ROW) == [
            "Monday\nSep 2, 2024",
            "Tuesday\nSep 3, 2024",
            "Wednesday\nSep 4, 2024",
            "Thursday\nSep 5, 2024",
            "Friday\nSep 6, 2024",
        ]

    def test_field_labels(self, empty_plan, fixed_time):
        ws = _reload(empty_plan, fixed_time)[GRID_SHEET]
        labels = [
            ws.cell(row=GRID_FIRST_FIELD_ROW + i, column=1).value for i in range(len(GRID_FIELDS))
        ]
        assert labels == ["Topic", "Books & Pages", "Homework", "Due Date", "Assignments", "Notes"]

    def test_freeze_panes(self, scenario_plan, fixed_time):
        ws = _reload(scenario_plan, fixed_time)[GRID_SHEET]
        assert ws.freeze_panes == "B4"


class TestGridContent:
    def test_scenario_grid(self, scenario_plan, fixed_time):
        ws = _reload(scenario_plan, fixed_time)[GRID_SHEET]
        assert _column_values(ws, TOPIC_ROW) == ["Fractions"] + [NO_PLAN_MARKER] * 4
        assert _column_values(ws, BOOKS_ROW) == ["pp.10-12", None, None, None, None]

    def test_empty_plan_all_no_plan(self, empty_plan, fixed_time):
        ws = _reload(empty_plan, fixed_time)[GRID_SHEET]
        assert _column_values(ws, TOPIC_ROW) == [NO_PLAN_MARKER] * 5
        for offset in range(1, len(GRID_FIELDS)):
            assert _column_values(ws, GRID_FIRST_FIELD_ROW + offset) == [None] * 5

    def test_due_date_is_real_date(self, full_plan, fixed_time):
        ws = _reload(full_plan, fixed_time)[GRID_SHEET]
        cell = ws.cell(row=DUE_ROW, column=2)
        assert cell.value == datetime(2024, 9, 3)
        assert cell.number_format == "mmm d, yyyy"

    def test_full_plan_notes_row(self, full_plan, fixed_time):
        ws = _reload(full_plan, fixed_time)[GRID_SHEET]
        assert _column_values(ws, NOTES_ROW) == [f"Notes for day {i}." for i in range(1, 6)]

    def test_styling_ignores_content_length(self, make_plan, fixed_time):
        plan = make_plan({
            "monday": {"topic": "A"},
            "tuesday": {"topic": "A much longer topic " * 10},
        })
        ws = _reload(plan, fixed_time)[GRID_SHEET]
        short, long = ws.cell(row=TOPIC_ROW, column=2), ws.cell(row=TOPIC_ROW, column=3)
        assert short.font.b == long.font.b is True
        assert short.font.sz == long.font.sz
        assert short.alignment.wrap_text == long.alignment.wrap_text

    def test_formula_text_kept_as_text(self, make_plan, fixed_time):
        plan = make_plan({"monday": {"topic": "=SUM(A1:A3)"}})
        ws = _reload(plan, fixed_time)[GRID_SHEET]
        cell = ws.cell(row=TOPIC_ROW, column=2)
        assert cell.value == "=SUM(A1:A3)"
        assert cell.data_type == "s"

    def test_pasted_control_characters(self, make_plan, fixed_time):
        plan = make_plan({"monday": {"topic": "Maps", "notes": "Pasted\x0btext"}}, notes="Week\x0cnotes")
        wb = _reload(plan, fixed_time)
        ws = wb[GRID_SHEET]
        assert ws.cell(row=NOTES_ROW, column=2).value == "Pasted\ntext"
        overview_values = [c.value for row in wb[OVERVIEW_SHEET].iter_rows() for c in row]
        assert "Week\nnotes" in overview_values

    def test_control_characters_in_direct_entries(self, scenario_plan, fixed_time):
        entries = dict(scenario_plan.daily_entries)
        entries[2] = DailyEntry(topic="Bell\x07 work", homework="Read\x1b p.4")
        plan = dataclasses.replace(scenario_plan, daily_entries=MappingProxyType(entries))
        ws = _reload(plan, fixed_time)[GRID_SHEET]
        assert ws.cell(row=TOPIC_ROW, column=3).value == "Bell work"
        assert ws.cell(row=TOPIC_ROW + 2, column=3).value == "Read p.4"

    def test_footer_line(self, scenario_plan, fixed_time):
        ws = _reload(scenario_plan, fixed_time)[GRID_SHEET]
        footer_row = GRID_FIRST_FIELD_ROW + len(GRID_FIELDS) + 1
        assert ws.cell(row=footer_row, column=1).value == (
            "Generated by Weekly Planner System for Schools on Sep 1, 2024"
        )


class TestWeeklyNotes:
    def test_grid_notes_region(self, full_plan, fixed_time):
        ws = _reload(full_plan, fixed_time)[GRID_SHEET]
        banner_row = GRID_FIRST_FIELD_ROW + len(GRID_FIELDS) + 1
        assert ws.cell(row=banner_row, column=1).value == "Weekly Notes"
        assert ws.cell(row=banner_row + 1, column=1).value == "Quiz on Friday."
        merged = [str(r) for r in ws.merged_cells.ranges]
        assert f"A{banner_row + 1}:F{banner_row + 4}" in merged

    def test_no_notes_region_without_notes(self, scenario_plan, fixed_time):
        ws = _reload(scenario_plan, fixed_time)[GRID_SHEET]
        values = [c.value for row in ws.iter_rows() for c in row]
        assert "Weekly Notes" not in values

    def test_overview_notes(self, full_plan, fixed_time):
        ws = _reload(full_plan, fixed_time)[OVERVIEW_SHEET]
        values = [c.value for row in ws.iter_rows() for c in row]
        assert "Weekly Notes" in values
        assert "Quiz on Friday." in values


class TestOverviewSheet:
    def test_title_rows(self, scenario_plan, fixed_time):
        ws = _reload(scenario_plan, fixed_time)[OVERVIEW_SHEET]
        assert ws["A1"].value == "Weekly Lesson Plan"
        assert ws["A3"].value == "Grade 4 - Mathematics"
        assert ws["A4"].value == "Week 36 (2024) - Sep 2, 2024 - Sep 6, 2024"

    def test_info_rows(self, scenario_plan, fixed_time):
        ws = _reload(scenario_plan, fixed_time)[OVERVIEW_SHEET]
        info = {ws.cell(row=r, column=1).value: ws.cell(row=r, column=2).value for r in range(8, 17)}
        assert info == {
            "Teacher": "J. Smith",
            "Grade Level": "Grade 4",
            "Subject": "Mathematics",
            "Week Number": "Week 36",
            "Academic Year": "2024",
            "Date Range": "Sep 2, 2024 - Sep 6, 2024",
            "Days Planned": "1 of 5 days planned (20%)",
            "Document ID": "WP-7-36-2024",
            "Generated On": "Sep 1, 2024 08:30",
        }


class TestWorkbookProperties:
    def test_document_properties(self, scenario_plan, fixed_time):
        wb = build_workbook(scenario_plan, generated_at=fixed_time, system_name="Test System")
        assert wb.properties.creator == "Test System"
        assert wb.properties.identifier == "WP-7-36-2024"
        assert wb.properties.created == fixed_time

    def test_tab_color_follows_subject(self, make_plan, fixed_time):
        wb = build_workbook(make_plan({}, subject_name="Science"), generated_at=fixed_time)
        assert wb[GRID_SHEET].sheet_properties.tabColor.rgb == "FF10B981"


class TestDeterminism:
    def test_identical_bytes(self, full_plan, fixed_time):
        first = export_weekly_plan_excel(full_plan, generated_at=fixed_time).getvalue()
        second = export_weekly_plan_excel(full_plan, generated_at=fixed_time).getvalue()
        assert first == second

    @pytest.mark.parametrize("plan_name", ["empty_plan", "scenario_plan", "full_plan"])
    def test_all_shapes_reload(self, request, plan_name, fixed_time):
        wb = _reload(request.getfixturevalue(plan_name), fixed_time)
        assert wb[GRID_SHEET].max_column == 6
