"""
Demo export script for the Weekly Planner.

Renders the sample weekly plan in both formats so the output can be
opened and checked by eye.

Usage:
    python demo_data/setup_demo.py [output_dir]

The script will:
- Load demo_data/sample_plan.yaml
- Write the PDF and the Excel workbook to output_dir (default: demo_data/out)
- Print the completion summary and the written paths
"""

import os
import sys

# Add project root to sys.path so imports work from any directory
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from planner.cli import load_plan_file
from planner.completion import compute_completion
from planner.export import ExportFormat, export_plan


def setup_demo_exports(output_dir=None):
    """Render the sample plan to PDF and XLSX in ``output_dir``."""
    here = os.path.dirname(os.path.abspath(__file__))
    output_dir = output_dir or os.path.join(here, "out")
    os.makedirs(output_dir, exist_ok=True)

    print("\n=== Weekly Planner Demo Export ===\n")
    plan = load_plan_file(os.path.join(here, "sample_plan.yaml"))
    print(f"Plan: {plan.week_meta.document_id} - {compute_completion(plan).label}")

    for fmt in (ExportFormat.PDF, ExportFormat.EXCEL):
        exported = export_plan(plan, fmt)
        path = os.path.join(output_dir, exported.filename)
        with open(path, "wb") as f:
            f.write(exported.data)
        print(f"   [OK] {fmt.value}: {path} ({len(exported.data)} bytes)")


if __name__ == "__main__":
    setup_demo_exports(sys.argv[1] if len(sys.argv) > 1 else None)
