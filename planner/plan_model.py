"""
Weekly plan model for the Weekly Planner exporters.

Normalizes the upstream weekly-plan record (a plan header, up to five
daily plans and display metadata) into one immutable PlanModel that both
the PDF and the Excel renderers read from.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

logger = logging.getLogger(__name__)

WEEKDAYS = (1, 2, 3, 4, 5)

DAY_NAMES = {
    1: "Monday",
    2: "Tuesday",
    3: "Wednesday",
    4: "Thursday",
    5: "Friday",
}

DAY_KEYS = {name.lower(): number for number, name in DAY_NAMES.items()}

BREAK_CHARACTERS = str.maketrans({"\x0b": "\n", "\x0c": "\n"})

# camelCase upstream name -> DailyEntry attribute
ENTRY_FIELDS = {
    "topic": "topic",
    "booksAndPages": "books_and_pages",
    "homework": "homework",
    "homeworkDueDate": "homework_due_date",
    "assignments": "assignments",
    "notes": "notes",
}


@dataclass(frozen=True)
class DailyEntry:
    """Content planned for a single weekday."""

    topic: str
    books_and_pages: Optional[str] = None
    homework: Optional[str] = None
    homework_due_date: Optional[date] = None
    assignments: Optional[str] = None
    notes: Optional[str] = None

    @property
    def has_content(self) -> bool:
        return bool(self.topic and self.topic.strip())


@dataclass(frozen=True)
class WeekMeta:
    week_number: int
    week_year: int
    start_date: date
    teacher_name: str
    grade_name: str
    subject_name: str
    document_id: str


@dataclass(frozen=True)
class PlanModel:
    """Canonical, read-only view of one weekly lesson plan.

    Attributes:
        week_meta: Display metadata for the week.
        daily_entries: Mapping of weekday (1=Monday..5=Friday) to a
            DailyEntry, or None when no plan exists for that day.
        weekly_notes: Optional notes attached to the whole week.
    """

    week_meta: WeekMeta
    daily_entries: Mapping[int, Optional[DailyEntry]] = field(
        default_factory=lambda: MappingProxyType({day: None for day in WEEKDAYS})
    )
    weekly_notes: Optional[str] = None

    @property
    def end_date(self) -> date:
        return self.week_meta.start_date + timedelta(days=4)

    def day_date(self, day: int) -> date:
        return self.week_meta.start_date + timedelta(days=day - 1)

    def entry(self, day: int) -> Optional[DailyEntry]:
        return self.daily_entries.get(day)

    def planned_entry(self, day: int) -> Optional[DailyEntry]:
        """Return the entry for ``day`` only if it carries a topic."""
        entry = self.daily_entries.get(day)
        if entry is not None and entry.has_content:
            return entry
        return None


# ---------------------------------------------------------------------------
# Normalization helpers
# ---------------------------------------------------------------------------


def _clean_text(value) -> Optional[str]:
    """Strip a text value; blank or missing values become None.

    Vertical tab and form feed (manual line and page breaks pasted from
    word processors) become newlines; other control characters that a
    spreadsheet cannot store are dropped.
    """
    if value is None:
        return None
    text = str(value).translate(BREAK_CHARACTERS)
    text = ILLEGAL_CHARACTERS_RE.sub("", text).strip()
    return text or None


def parse_date(value) -> Optional[date]:
    """Parse a date from a date, datetime or ISO-8601 string.

    Returns None for blank values. Raises ValueError for unparseable text.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    # Accept full timestamps ("2024-09-02T00:00:00.000Z") by keeping the date part
    return date.fromisoformat(text[:10])


def _get(data: Dict[str, Any], camel: str, snake: str):
    if camel in data:
        return data[camel]
    return data.get(snake)


def _day_number(key) -> Optional[int]:
    if isinstance(key, int):
        return key
    text = str(key).strip().lower()
    if text.isdigit():
        return int(text)
    return DAY_KEYS.get(text)


def _build_entry(data) -> Optional[DailyEntry]:
    if data is None:
        return None
    if isinstance(data, DailyEntry):
        return data
    values = {}
    for camel, attr in ENTRY_FIELDS.items():
        raw = _get(data, camel, attr)
        if attr == "homework_due_date":
            values[attr] = parse_date(raw)
        else:
            values[attr] = _clean_text(raw)
    values["topic"] = values["topic"] or ""
    return DailyEntry(**values)


def _collect_daily_plans(daily_plans) -> Dict[int, Optional[DailyEntry]]:
    """Map any supported daily-plan container onto the five weekday slots."""
    slots: Dict[int, Optional[DailyEntry]] = {day: None for day in WEEKDAYS}
    if not daily_plans:
        return slots

    if isinstance(daily_plans, dict):
        items = list(daily_plans.items())
    else:
        items = []
        for row in daily_plans:
            if isinstance(row, DailyEntry):
                raise ValueError("DailyEntry rows need a weekday; pass a mapping instead.")
            items.append((_get(row, "dayOfWeek", "day_of_week"), row))

    for key, row in items:
        day = _day_number(key)
        if day not in slots:
            logger.warning("build_plan_model: ignoring daily plan for day=%r", key)
            continue
        slots[day] = _build_entry(row)
    return slots


def build_plan_model(
    record: Dict[str, Any],
    teacher_name: str,
    grade_name: str,
    subject_name: str,
    week_number: int,
    week_year: int,
    start_date,
    plan_id=None,
    document_id: Optional[str] = None,
) -> PlanModel:
    """Build a PlanModel from an upstream weekly-plan record.

    Args:
        record: Dict shaped like ``{"weeklyPlan": {...}, "dailyPlans": ...}``.
            ``dailyPlans`` may be keyed by weekday name or number, or be a
            list of rows carrying ``dayOfWeek``.
        teacher_name: Display name of the teacher.
        grade_name: Display name of the grade.
        subject_name: Display name of the subject.
        week_number: Planning week number.
        week_year: Planning week year.
        start_date: Monday of the planning week (date or ISO string).
        plan_id: Optional weekly plan id, used for the document id.
        document_id: Explicit document id (overrides the generated one).

    Returns:
        A fully-populated PlanModel with exactly five weekday slots.
    """
    weekly_plan = record.get("weeklyPlan") or record.get("weekly_plan") or {}
    if plan_id is None:
        plan_id = weekly_plan.get("id")

    start = parse_date(start_date)
    if start is not None and start.weekday() != 0:
        logger.warning(
            "build_plan_model: start_date %s is not a Monday", start.isoformat()
        )

    if not document_id:
        if plan_id is not None:
            document_id = f"WP-{plan_id}-{week_number}-{week_year}"
        else:
            document_id = f"WP-{week_number}-{week_year}"

    meta = WeekMeta(
        week_number=week_number,
        week_year=week_year,
        start_date=start,
        teacher_name=_clean_text(teacher_name) or "",
        grade_name=_clean_text(grade_name) or "",
        subject_name=_clean_text(subject_name) or "",
        document_id=document_id,
    )

    daily_plans = record.get("dailyPlans")
    if daily_plans is None:
        daily_plans = record.get("daily_plans")

    return PlanModel(
        week_meta=meta,
        daily_entries=MappingProxyType(_collect_daily_plans(daily_plans)),
        weekly_notes=_clean_text(weekly_plan.get("notes")),
    )
