"""
Shared pytest fixtures for the Weekly Planner tests.

Fixture summary
---------------
Time:
    fixed_time           -- generation timestamp injected for reproducible output

Data builders:
    make_plan            -- factory: make_plan(daily_plans, notes=None, **meta)
    scenario_plan        -- Grade 4 Mathematics, week 36/2024, Monday only
    empty_plan           -- all five days unplanned, no weekly notes
    full_plan            -- every day planned with every field, plus weekly notes
"""

from datetime import date, datetime

import pytest

from planner.plan_model import build_plan_model

DEFAULT_META = {
    "teacher_name": "J. Smith",
    "grade_name": "Grade 4",
    "subject_name": "Mathematics",
    "week_number": 36,
    "week_year": 2024,
    "start_date": date(2024, 9, 2),
}


@pytest.fixture
def fixed_time():
    return datetime(2024, 9, 1, 8, 30, 0)


@pytest.fixture
def make_plan():
    """Factory building a PlanModel from daily plan dicts keyed by weekday name."""

    def _make(daily_plans=None, notes=None, plan_id=7, **meta):
        values = dict(DEFAULT_META)
        values.update(meta)
        record = {
            "weeklyPlan": {"id": plan_id, "notes": notes},
            "dailyPlans": daily_plans or {},
        }
        return build_plan_model(record, **values)

    return _make


@pytest.fixture
def scenario_plan(make_plan):
    return make_plan({"monday": {"topic": "Fractions", "booksAndPages": "pp.10-12"}})


@pytest.fixture
def empty_plan(make_plan):
    return make_plan({})


@pytest.fixture
def full_plan(make_plan):
    days = {}
    for i, name in enumerate(["monday", "tuesday", "wednesday", "thursday", "friday"]):
        days[name] = {
            "topic": f"Topic {i + 1}",
            "booksAndPages": f"pp.{10 + i}-{12 + i}",
            "homework": f"Worksheet {i + 1}",
            "homeworkDueDate": f"2024-09-0{3 + i}",
            "assignments": f"Assignment {i + 1}",
            "notes": f"Notes for day {i + 1}.",
        }
    return make_plan(days, notes="Quiz on Friday.")
