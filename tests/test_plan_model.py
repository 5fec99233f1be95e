"""
Tests for the weekly plan model (planner/plan_model.py).

Covers record normalization: weekday slots, field cleanup, date parsing
and the generated document id.
"""

from datetime import date, datetime

import pytest

from planner.plan_model import (
    WEEKDAYS,
    DailyEntry,
    PlanModel,
    build_plan_model,
    parse_date,
)


class TestParseDate:
    def test_none_and_blank(self):
        assert parse_date(None) is None
        assert parse_date("   ") is None

    def test_date_passthrough(self):
        assert parse_date(date(2024, 9, 2)) == date(2024, 9, 2)

    def test_datetime_truncated(self):
        assert parse_date(datetime(2024, 9, 2, 13, 45)) == date(2024, 9, 2)

    def test_iso_timestamp(self):
        assert parse_date("2024-09-02T00:00:00.000Z") == date(2024, 9, 2)

    def test_invalid_text_raises(self):
        with pytest.raises(ValueError):
            parse_date("next tuesday")


class TestBuildPlanModel:
    def test_always_five_slots(self, empty_plan):
        assert sorted(empty_plan.daily_entries.keys()) == list(WEEKDAYS)
        assert all(entry is None for entry in empty_plan.daily_entries.values())

    def test_camel_case_fields(self, full_plan):
        entry = full_plan.entry(1)
        assert entry.topic == "Topic 1"
        assert entry.books_and_pages == "pp.10-12"
        assert entry.homework == "Worksheet 1"
        assert entry.homework_due_date == date(2024, 9, 3)
        assert entry.assignments == "Assignment 1"
        assert entry.notes == "Notes for day 1."

    def test_snake_case_record(self):
        record = {
            "weekly_plan": {"id": 3, "notes": "  Bring rulers  "},
            "daily_plans": {"tuesday": {"topic": "Angles", "books_and_pages": "p.4"}},
        }
        plan = build_plan_model(record, "A. Lee", "Grade 5", "Maths", 10, 2025, "2025-03-03")
        assert plan.entry(2).topic == "Angles"
        assert plan.entry(2).books_and_pages == "p.4"
        assert plan.weekly_notes == "Bring rulers"

    def test_list_of_rows_with_day_of_week(self):
        record = {
            "weeklyPlan": {"id": 1},
            "dailyPlans": [
                {"dayOfWeek": 3, "topic": "Volcanoes"},
                {"dayOfWeek": 5, "topic": "Review"},
            ],
        }
        plan = build_plan_model(record, "T", "G", "Science", 2, 2024, "2024-01-08")
        assert plan.entry(3).topic == "Volcanoes"
        assert plan.entry(5).topic == "Review"
        assert plan.entry(1) is None

    def test_numeric_string_keys(self):
        record = {"dailyPlans": {"4": {"topic": "Poetry"}}}
        plan = build_plan_model(record, "T", "G", "English", 2, 2024, "2024-01-08")
        assert plan.entry(4).topic == "Poetry"

    def test_weekend_day_ignored(self, caplog):
        record = {"dailyPlans": [{"dayOfWeek": 6, "topic": "Saturday club"}]}
        plan = build_plan_model(record, "T", "G", "Art", 2, 2024, "2024-01-08")
        assert sorted(plan.daily_entries.keys()) == list(WEEKDAYS)
        assert "ignoring daily plan" in caplog.text

    def test_blank_fields_become_none(self):
        record = {"dailyPlans": {"monday": {"topic": "Maps", "homework": "   ", "notes": ""}}}
        plan = build_plan_model(record, "T", "G", "Geography", 2, 2024, "2024-01-08")
        entry = plan.entry(1)
        assert entry.homework is None
        assert entry.notes is None

    def test_pasted_breaks_become_newlines(self):
        record = {"dailyPlans": {"monday": {"topic": "Maps", "notes": "Pasted\x0btext\x0cmore"}}}
        plan = build_plan_model(record, "T", "G", "Geography", 2, 2024, "2024-01-08")
        assert plan.entry(1).notes == "Pasted\ntext\nmore"

    def test_other_control_characters_dropped(self):
        record = {
            "weeklyPlan": {"notes": "Bell\x07 schedule"},
            "dailyPlans": {"monday": {"topic": "Ma\x00ps\x1f", "homework": "\x01\x02"}},
        }
        plan = build_plan_model(record, "T\x08", "G", "Geography", 2, 2024, "2024-01-08")
        assert plan.entry(1).topic == "Maps"
        assert plan.entry(1).homework is None
        assert plan.weekly_notes == "Bell schedule"
        assert plan.week_meta.teacher_name == "T"

    def test_tabs_and_newlines_kept(self):
        record = {"dailyPlans": {"monday": {"topic": "Maps", "notes": "one\ttwo\nthree"}}}
        plan = build_plan_model(record, "T", "G", "Geography", 2, 2024, "2024-01-08")
        assert plan.entry(1).notes == "one\ttwo\nthree"

    def test_blank_topic_is_not_planned(self):
        record = {"dailyPlans": {"monday": {"topic": "  ", "homework": "Read ch. 2"}}}
        plan = build_plan_model(record, "T", "G", "History", 2, 2024, "2024-01-08")
        assert plan.entry(1) is not None
        assert plan.entry(1).has_content is False
        assert plan.planned_entry(1) is None

    def test_document_id_from_plan_id(self, scenario_plan):
        assert scenario_plan.week_meta.document_id == "WP-7-36-2024"

    def test_document_id_without_plan_id(self):
        plan = build_plan_model({}, "T", "G", "Music", 12, 2024, "2024-03-18")
        assert plan.week_meta.document_id == "WP-12-2024"

    def test_explicit_document_id_wins(self):
        plan = build_plan_model(
            {"weeklyPlan": {"id": 5}}, "T", "G", "Music", 12, 2024, "2024-03-18",
            document_id="DOC-1",
        )
        assert plan.week_meta.document_id == "DOC-1"

    def test_non_monday_start_warns(self, caplog):
        build_plan_model({}, "T", "G", "Music", 12, 2024, "2024-03-20")
        assert "is not a Monday" in caplog.text

    def test_meta_strings_stripped(self):
        plan = build_plan_model({}, "  J. Smith ", " Grade 4", "Mathematics ", 36, 2024, "2024-09-02")
        assert plan.week_meta.teacher_name == "J. Smith"
        assert plan.week_meta.grade_name == "Grade 4"
        assert plan.week_meta.subject_name == "Mathematics"


class TestPlanModel:
    def test_dates(self, scenario_plan):
        assert scenario_plan.end_date == date(2024, 9, 6)
        assert scenario_plan.day_date(1) == date(2024, 9, 2)
        assert scenario_plan.day_date(5) == date(2024, 9, 6)

    def test_read_only(self, scenario_plan):
        with pytest.raises(TypeError):
            scenario_plan.daily_entries[2] = DailyEntry(topic="Sneaky")
        with pytest.raises(AttributeError):
            scenario_plan.weekly_notes = "changed"

    def test_planned_entry(self, scenario_plan):
        assert scenario_plan.planned_entry(1).topic == "Fractions"
        assert scenario_plan.planned_entry(2) is None

    def test_default_slots(self, scenario_plan):
        plan = PlanModel(week_meta=scenario_plan.week_meta)
        assert sorted(plan.daily_entries.keys()) == list(WEEKDAYS)
