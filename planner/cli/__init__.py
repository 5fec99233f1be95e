"""
CLI command modules for the Weekly Planner.

Provides shared helpers for all CLI command modules.
"""

import json
import os

import yaml

from planner.plan_model import build_plan_model

REQUIRED_META = (
    "teacher_name",
    "grade_name",
    "subject_name",
    "week_number",
    "week_year",
    "start_date",
)


def load_plan_file(path):
    """Load a PlanModel from a YAML or JSON plan file.

    The file holds the upstream record (``weeklyPlan`` and ``dailyPlans``)
    plus a ``meta`` block with the display metadata.
    """
    with open(path, "r") as f:
        if os.path.splitext(path)[1].lower() == ".json":
            record = json.load(f)
        else:
            record = yaml.safe_load(f)
    if not isinstance(record, dict):
        raise ValueError(f"{path}: expected a mapping at the top level.")

    meta = record.get("meta") or {}
    missing = [key for key in REQUIRED_META if meta.get(key) in (None, "")]
    if missing:
        raise ValueError(f"{path}: meta is missing {', '.join(missing)}.")

    return build_plan_model(
        record,
        teacher_name=meta["teacher_name"],
        grade_name=meta["grade_name"],
        subject_name=meta["subject_name"],
        week_number=int(meta["week_number"]),
        week_year=int(meta["week_year"]),
        start_date=meta["start_date"],
        document_id=meta.get("document_id"),
    )
