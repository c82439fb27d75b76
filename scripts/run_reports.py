"""
Generate the project reports from a CSV dataset.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from app.config import get_report_settings
from app.logging_utils import configure_logging
from app.services.project_ingestion_service import CSVHeaderValidationError
from app.services.report_pipeline_service import ReportPipelineService

DEFAULT_INPUT = "dpwh_flood_control_projects.csv"


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate infrastructure project reports.")
    parser.add_argument(
        "--input",
        dest="input",
        default=DEFAULT_INPUT,
        help=f"Project dataset CSV (default: {DEFAULT_INPUT}).",
    )
    parser.add_argument(
        "--output-dir",
        dest="output_dir",
        default=None,
        help="Directory for report files (default: REPORT_OUTPUT_DIR or the current directory).",
    )
    args = parser.parse_args(argv)

    configure_logging()
    settings = get_report_settings()
    pipeline = ReportPipelineService(settings)
    output_dir = Path(args.output_dir) if args.output_dir else settings.output_dir

    print("Processing dataset...", end="", flush=True)
    try:
        ingestion = pipeline.load(Path(args.input))
    except (CSVHeaderValidationError, FileNotFoundError) as exc:
        print()
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    summary = ingestion.summary
    print(
        f"  ({summary.rows_loaded:,} rows loaded, {summary.rows_in_window:,} "
        f"filtered for {settings.year_start}-{settings.year_end})"
    )

    if pipeline.skip_empty(ingestion):
        return 0

    print()
    print("Generating reports...")
    bundle = pipeline.generate(ingestion)
    for index, report in enumerate(pipeline.export(bundle, output_dir), start=1):
        print(f"{index}. {report.title} (exported to {report.path.name})")

    print()
    print("Generating summary...", end="", flush=True)
    summary_path = pipeline.export_summary(bundle, output_dir)
    print(f"  (exported to {summary_path.name})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
