"""
Completion tracking for weekly plans.

Reports which weekdays have planned content and which optional plan
elements appear anywhere in the week. Both functions are pure: they read
a PlanModel and build fresh results on every call.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from planner.plan_model import WEEKDAYS, PlanModel


@dataclass(frozen=True)
class CompletionSummary:
    per_day: Mapping[int, bool]
    completed_count: int
    ratio: float

    @property
    def percent(self) -> int:
        return round(self.ratio * 100)

    @property
    def label(self) -> str:
        return f"{self.completed_count} of {len(WEEKDAYS)} days planned ({self.percent}%)"


@dataclass(frozen=True)
class FieldChecklist:
    """Which optional elements appear in at least one planned day."""

    books_and_pages: bool
    homework: bool
    assignments: bool
    due_dates: bool
    notes: bool

    def items(self):
        """Checklist rows as (label, included) pairs, in display order."""
        return [
            ("Daily Topics", True),
            ("Books & Pages References", self.books_and_pages),
            ("Homework Assignments", self.homework),
            ("Class Assignments", self.assignments),
            ("Due Dates", self.due_dates),
            ("Teaching Notes", self.notes),
        ]


def compute_completion(plan: PlanModel) -> CompletionSummary:
    """Compute per-day completion and the aggregate ratio for a plan.

    A weekday counts as complete when its entry exists and its topic is
    non-empty after trimming.
    """
    per_day = {}
    for day in WEEKDAYS:
        entry = plan.daily_entries.get(day)
        per_day[day] = entry is not None and entry.has_content
    completed = sum(1 for done in per_day.values() if done)
    return CompletionSummary(
        per_day=MappingProxyType(per_day),
        completed_count=completed,
        ratio=completed / len(WEEKDAYS),
    )


def summarize_fields(plan: PlanModel) -> FieldChecklist:
    entries = [plan.planned_entry(day) for day in WEEKDAYS]
    entries = [e for e in entries if e is not None]
    return FieldChecklist(
        books_and_pages=any(e.books_and_pages for e in entries),
        homework=any(e.homework for e in entries),
        assignments=any(e.assignments for e in entries),
        due_dates=any(e.homework_due_date for e in entries),
        notes=any(e.notes for e in entries),
    )
