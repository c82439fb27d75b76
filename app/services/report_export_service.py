"""
app/services/report_export_service.py

CSV / JSON export of generated reports.

Tabular reports
---------------
Every numeric cell is rendered as an en-US decimal string with thousands
separators and at most two fraction digits, rounded half away from zero:

    1234.5     -> "1,234.5"
    23.3333    -> "23.33"
    12.0       -> "12"
    NaN        -> "NaN"
    +/-inf     -> "∞" / "-∞"

``FundingYear`` is an identifier and is written without separators.

Summary
-------
Written as pretty-printed JSON (2-space indent) with raw numbers;
non-finite values become ``null``.

No report logic lives here; rows arrive fully computed and sorted.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Context, Decimal
from pathlib import Path
from typing import Any

import pandas as pd
from pydantic import BaseModel

from app.logging_utils import log_event
from app.schemas.reports import (
    AnnualTrendRow,
    ContractorPerformanceRow,
    ProjectSummary,
    RegionEfficiencyRow,
)
from reports.orchestrator import ReportBundle

logger = logging.getLogger(__name__)

REGIONAL_REPORT_FILE = "report1_regional_summary.csv"
CONTRACTOR_REPORT_FILE = "report2_contractor_ranking.csv"
TREND_REPORT_FILE = "report3_annual_trends.csv"
SUMMARY_FILE = "summary.json"

_UNFORMATTED_COLUMNS: frozenset[str] = frozenset({"FundingYear"})
_CENT = Decimal("0.01")
_WIDE_CONTEXT = Context(prec=400)


# ---------------------------------------------------------------------------
# Export containers
# ---------------------------------------------------------------------------


@dataclass
class ExportResult:
    """
    Flat tabular data ready for CSV serialisation.

    Attributes
    ----------
    rows:   One dict per row; every value is already a display string.
    fields: Ordered column names, fixed per report.
    """

    rows: list[dict[str, str]] = field(default_factory=list)
    fields: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ExportedReport:
    """One written report file."""

    title: str
    path: Path
    rows: int


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_number(value: float | int) -> str:
    """
    Render *value* as an en-US string with at most two fraction digits.
    """
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "∞" if value > 0 else "-∞"

    quantized = Decimal(repr(value)).quantize(_CENT, rounding=ROUND_HALF_UP, context=_WIDE_CONTEXT)
    text = format(quantized, ",f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _format_cell(column: str, value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return str(value)
    if column in _UNFORMATTED_COLUMNS:
        return str(value)
    return format_number(value)


def _json_safe(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class ReportExportService:
    """
    Formats report rows and writes them to disk.

    The caller owns the output directory; it is created when missing.
    """

    def to_table(
        self,
        rows: Sequence[BaseModel],
        columns: Sequence[str],
    ) -> ExportResult:
        """
        Flatten report rows into display strings keyed by column name.
        """
        table_rows = []
        for row in rows:
            dumped = row.model_dump(by_alias=True)
            table_rows.append({column: _format_cell(column, dumped[column]) for column in columns})
        return ExportResult(rows=table_rows, fields=list(columns))

    def write_csv(
        self,
        rows: Sequence[BaseModel],
        columns: Sequence[str],
        path: Path,
    ) -> Path:
        """
        Write *rows* as a CSV file with a header line.
        """
        result = self.to_table(rows, columns)
        path.parent.mkdir(parents=True, exist_ok=True)
        pd.DataFrame(result.rows, columns=result.fields).to_csv(path, index=False)
        return path

    def summary_payload(self, summary: ProjectSummary) -> dict[str, Any]:
        """Summary as a JSON-safe dict in column order."""
        return {key: _json_safe(value) for key, value in summary.model_dump(by_alias=True).items()}

    def write_summary(self, summary: ProjectSummary, path: Path) -> Path:
        """
        Write the summary object as pretty-printed JSON.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.summary_payload(summary), indent=2), encoding="utf-8")
        log_event(logger, logging.INFO, "summary_exported", path=str(path))
        return path

    def write_reports(self, bundle: ReportBundle, output_dir: Path) -> list[ExportedReport]:
        """
        Write the three tabular reports in their fixed order.
        """
        targets: list[tuple[str, Sequence[BaseModel], list[str], str]] = [
            (
                "Flood Mitigation Efficiency Summary",
                bundle.regional,
                RegionEfficiencyRow.columns(),
                REGIONAL_REPORT_FILE,
            ),
            (
                "Top Contractors Performance Ranking",
                bundle.contractors,
                ContractorPerformanceRow.columns(),
                CONTRACTOR_REPORT_FILE,
            ),
            (
                "Annual Project Type Cost Overrun Trends",
                bundle.trends,
                AnnualTrendRow.columns(),
                TREND_REPORT_FILE,
            ),
        ]

        exported: list[ExportedReport] = []
        for title, rows, columns, filename in targets:
            path = self.write_csv(rows, columns, output_dir / filename)
            exported.append(ExportedReport(title=title, path=path, rows=len(rows)))
            log_event(
                logger,
                logging.INFO,
                "report_exported",
                title=title,
                path=str(path),
                rows=len(rows),
            )
        return exported
