"""
Weekly plan export CLI commands.
"""

import os

import yaml

from planner.cli import load_plan_file
from planner.completion import compute_completion
from planner.errors import InvalidPlanShape, RenderFailed
from planner.export import ExportFormat, export_plan
from planner.plan_model import DAY_NAMES, WEEKDAYS


def register_export_commands(subparsers):
    """Register weekly plan subcommands."""

    # export-plan
    p = subparsers.add_parser("export-plan", help="Export a weekly plan to file.")
    p.add_argument("plan_file", type=str, help="Weekly plan YAML or JSON file.")
    p.add_argument(
        "--format", dest="fmt", required=True,
        choices=["pdf", "xlsx", "excel"],
        help="Export format.",
    )
    p.add_argument("--output", type=str, help="Output file path.")

    # show-plan
    p = subparsers.add_parser("show-plan", help="Print a weekly plan's completion summary.")
    p.add_argument("plan_file", type=str, help="Weekly plan YAML or JSON file.")


def handle_export_plan(config, args):
    """Export a weekly plan to file. Returns a process exit code."""
    try:
        plan = load_plan_file(args.plan_file)
        exported = export_plan(plan, ExportFormat.coerce(args.fmt), config=config)
    except (InvalidPlanShape, ValueError, OSError, yaml.YAMLError) as e:
        print(f"Error: {e}")
        return 2
    except RenderFailed as e:
        print(f"Error: {e}")
        return 1

    out_dir = config.get("export", {}).get("output_dir") or "."
    out_path = args.output or os.path.join(out_dir, exported.filename)
    with open(out_path, "wb") as f:
        f.write(exported.data)

    print(f"[OK] Exported weekly plan to: {out_path}")
    return 0


def handle_show_plan(config, args):
    """Print which weekdays are planned."""
    try:
        plan = load_plan_file(args.plan_file)
    except (ValueError, OSError, yaml.YAMLError) as e:
        print(f"Error: {e}")
        return 2

    m = plan.week_meta
    summary = compute_completion(plan)
    print(f"{m.grade_name} - {m.subject_name} - Week {m.week_number} ({m.week_year})")
    for day in WEEKDAYS:
        entry = plan.planned_entry(day)
        print(f"   {DAY_NAMES[day]:<10} {entry.topic if entry else '(no plan)'}")
    print(f"   {summary.label}")
    return 0
