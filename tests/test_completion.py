"""Tests for completion tracking (planner/completion.py)."""

import pytest

from planner.completion import compute_completion, summarize_fields
from planner.plan_model import WEEKDAYS

DAY_ORDER = ["monday", "tuesday", "wednesday", "thursday", "friday"]


class TestComputeCompletion:
    @pytest.mark.parametrize("planned", [0, 1, 2, 3, 4, 5])
    def test_counts_planned_days(self, make_plan, planned):
        days = {name: {"topic": f"Lesson {i}"} for i, name in enumerate(DAY_ORDER[:planned])}
        summary = compute_completion(make_plan(days))
        assert summary.completed_count == planned
        assert summary.ratio == pytest.approx(planned / 5)
        assert summary.percent == round(planned / 5 * 100)
        assert sum(summary.per_day.values()) == planned

    def test_scenario_label(self, scenario_plan):
        summary = compute_completion(scenario_plan)
        assert summary.per_day == {1: True, 2: False, 3: False, 4: False, 5: False}
        assert summary.label == "1 of 5 days planned (20%)"

    def test_full_week(self, full_plan):
        summary = compute_completion(full_plan)
        assert summary.ratio == 1.0
        assert summary.label == "5 of 5 days planned (100%)"

    def test_blank_topic_not_counted(self, make_plan):
        plan = make_plan({"monday": {"topic": "   ", "notes": "Fire drill"}})
        assert compute_completion(plan).per_day[1] is False

    def test_idempotent(self, full_plan):
        assert compute_completion(full_plan) == compute_completion(full_plan)

    def test_per_day_keys(self, empty_plan):
        assert sorted(compute_completion(empty_plan).per_day.keys()) == list(WEEKDAYS)


class TestSummarizeFields:
    def test_empty_plan(self, empty_plan):
        items = dict(summarize_fields(empty_plan).items())
        assert items["Daily Topics"] is True
        assert not any(v for k, v in items.items() if k != "Daily Topics")

    def test_scenario(self, scenario_plan):
        checklist = summarize_fields(scenario_plan)
        assert checklist.books_and_pages is True
        assert checklist.homework is False
        assert checklist.due_dates is False

    def test_full_plan(self, full_plan):
        assert all(included for _, included in summarize_fields(full_plan).items())

    def test_unplanned_day_fields_ignored(self, make_plan):
        plan = make_plan({"monday": {"topic": "", "homework": "Worksheet"}})
        assert summarize_fields(plan).homework is False

    def test_item_order(self, full_plan):
        labels = [label for label, _ in summarize_fields(full_plan).items()]
        assert labels == [
            "Daily Topics",
            "Books & Pages References",
            "Homework Assignments",
            "Class Assignments",
            "Due Dates",
            "Teaching Notes",
        ]
