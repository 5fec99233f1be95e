"""
Export facade for the Weekly Planner.

The one entry point callers use: validate the plan's shape, pick the
renderer for the requested format, and hand back the finished file. All
or nothing: a render failure raises RenderFailed and no bytes escape.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from planner.errors import InvalidPlanShape, RenderFailed
from planner.excel_export import export_weekly_plan_excel
from planner.export_utils import DEFAULT_SYSTEM_NAME, sanitize_filename
from planner.layout import LayoutConstants
from planner.pdf_export import export_weekly_plan_pdf
from planner.plan_model import WEEKDAYS, PlanModel
from planner.theme import resolve_theme

logger = logging.getLogger(__name__)


class ExportFormat(str, Enum):
    PDF = "pdf"
    EXCEL = "xlsx"

    @classmethod
    def coerce(cls, value) -> "ExportFormat":
        """Accept an ExportFormat or one of "pdf", "xlsx", "excel"."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key == "excel":
            return cls.EXCEL
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unsupported export format: {value!r}") from None


MIMETYPES = {
    ExportFormat.PDF: "application/pdf",
    ExportFormat.EXCEL: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}

RENDERERS = {
    ExportFormat.PDF: export_weekly_plan_pdf,
    ExportFormat.EXCEL: export_weekly_plan_excel,
}


@dataclass(frozen=True)
class ExportedFile:
    fmt: ExportFormat
    data: bytes
    filename: str
    mimetype: str


def validate_plan(plan) -> None:
    """Check the plan has five weekday slots and complete week metadata.

    Raises:
        InvalidPlanShape: listing every problem found.
    """
    if not isinstance(plan, PlanModel):
        raise InvalidPlanShape([f"expected a PlanModel, got {type(plan).__name__}"])

    problems: List[str] = []
    slots = plan.daily_entries
    if slots is None or sorted(slots.keys()) != list(WEEKDAYS):
        keys = sorted(slots.keys()) if slots is not None else []
        problems.append(f"daily entries must have slots 1-5, got {keys}")

    meta = plan.week_meta
    if meta is None:
        problems.append("week metadata is missing")
        raise InvalidPlanShape(problems)

    for name in ("teacher_name", "grade_name", "subject_name", "document_id"):
        value = getattr(meta, name, None)
        if not isinstance(value, str) or not value.strip():
            problems.append(f"{name} is required")
    if not isinstance(meta.week_number, int) or not 1 <= meta.week_number <= 53:
        problems.append(f"week_number must be 1-53, got {meta.week_number!r}")
    if not isinstance(meta.week_year, int) or meta.week_year < 1:
        problems.append(f"week_year must be a positive year, got {meta.week_year!r}")
    if not isinstance(meta.start_date, date):
        problems.append("start_date is required")

    if problems:
        raise InvalidPlanShape(problems)


def export_filename(plan: PlanModel, fmt: ExportFormat) -> str:
    """Download name, e.g. ``weekly-plan-Grade_4-Mathematics-week-36.pdf``."""
    m = plan.week_meta
    base = sanitize_filename(
        f"weekly-plan-{m.grade_name}-{m.subject_name}-week-{m.week_number}",
        default="weekly-plan",
    )
    return f"{base}.{fmt.value}"


def export_plan(
    plan: PlanModel,
    fmt,
    generated_at: Optional[datetime] = None,
    config: Optional[dict] = None,
) -> ExportedFile:
    """Render a weekly plan in the requested format.

    Args:
        plan: The PlanModel to export.
        fmt: ExportFormat, or "pdf" / "xlsx" / "excel".
        generated_at: Fixed generation timestamp; pass one for
            reproducible output.
        config: Optional app config; ``export.system_name`` and the
            ``layout`` section are honored.

    Returns:
        ExportedFile with the rendered bytes, filename and mimetype.

    Raises:
        InvalidPlanShape: the plan failed validation; nothing was rendered.
        RenderFailed: rendering aborted.
    """
    fmt = ExportFormat.coerce(fmt)
    validate_plan(plan)

    config = config or {}
    system_name = (config.get("export") or {}).get("system_name") or DEFAULT_SYSTEM_NAME
    layout = LayoutConstants.from_config(config)
    theme = resolve_theme(plan.week_meta.subject_name)

    buf = None
    try:
        buf = RENDERERS[fmt](
            plan,
            theme=theme,
            layout=layout,
            generated_at=generated_at,
            system_name=system_name,
        )
        data = buf.getvalue()
    except Exception as e:
        logger.exception(
            "export_plan: %s render failed for %s", fmt.value, plan.week_meta.document_id
        )
        raise RenderFailed(fmt.value, str(e) or type(e).__name__) from e
    finally:
        if buf is not None:
            buf.close()

    logger.info(
        "export_plan: rendered %s (%d bytes) for %s",
        fmt.value, len(data), plan.week_meta.document_id,
    )
    return ExportedFile(
        fmt=fmt,
        data=data,
        filename=export_filename(plan, fmt),
        mimetype=MIMETYPES[fmt],
    )
