"""
app/services/report_pipeline_service.py

End-to-end report run: ingest -> normalize + filter -> build -> export.

An empty working set is not an error: the run stops after ingestion,
writes nothing and reports ``skipped=True``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from app.config import ReportSettings, get_report_settings
from app.domain.project import NormalizationSummary
from app.failure_codes import EMPTY_WORKING_SET
from app.logging_utils import log_event
from app.services.project_ingestion_service import IngestionResult, ProjectIngestionService
from app.services.report_export_service import SUMMARY_FILE, ExportedReport, ReportExportService
from reports.orchestrator import ReportBundle, ReportOrchestrator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportRunResult:
    """
    Outcome of one pipeline run.
    """

    normalization: NormalizationSummary
    skipped: bool
    bundle: ReportBundle | None = None
    exported: list[ExportedReport] = field(default_factory=list)
    summary_path: Path | None = None


class ReportPipelineService:
    """
    Wires ingestion, the report orchestrator and the exporter together.

    Each stage is also exposed on its own so a caller (the CLI) can
    report progress between stages.
    """

    def __init__(
        self,
        settings: ReportSettings | None = None,
        *,
        ingestion: ProjectIngestionService | None = None,
        orchestrator: ReportOrchestrator | None = None,
        exporter: ReportExportService | None = None,
    ) -> None:
        self._settings = settings or ReportSettings()
        self._ingestion = ingestion or ProjectIngestionService(
            year_start=self._settings.year_start,
            year_end=self._settings.year_end,
            max_validation_errors=self._settings.max_logged_errors,
            log_validation_errors=self._settings.log_validation_errors,
        )
        self._orchestrator = orchestrator or ReportOrchestrator(self._settings)
        self._exporter = exporter or ReportExportService()

    @property
    def settings(self) -> ReportSettings:
        return self._settings

    def load(self, csv_path: Path) -> IngestionResult:
        """Read and normalize the dataset at *csv_path*."""
        result = self._ingestion.load_csv(csv_path)
        log_event(
            logger,
            logging.INFO,
            "dataset_loaded",
            path=str(csv_path),
            rows_loaded=result.summary.rows_loaded,
            rows_failed=result.summary.rows_failed,
            rows_in_window=result.summary.rows_in_window,
        )
        return result

    def skip_empty(self, ingestion: IngestionResult) -> bool:
        """Log ``empty_working_set`` and return True when nothing is in the window."""
        if not ingestion.is_empty:
            return False
        log_event(
            logger,
            logging.INFO,
            EMPTY_WORKING_SET,
            year_start=self._settings.year_start,
            year_end=self._settings.year_end,
        )
        return True

    def generate(self, ingestion: IngestionResult) -> ReportBundle:
        """Build every report from a non-empty working set."""
        return self._orchestrator.run(ingestion.projects)

    def export(self, bundle: ReportBundle, output_dir: Path) -> list[ExportedReport]:
        """Write the three tabular reports."""
        return self._exporter.write_reports(bundle, output_dir)

    def export_summary(self, bundle: ReportBundle, output_dir: Path) -> Path:
        """Write ``summary.json``."""
        return self._exporter.write_summary(bundle.summary, output_dir / SUMMARY_FILE)

    def run(self, csv_path: Path, output_dir: Path | None = None) -> ReportRunResult:
        """
        Run every stage; skip generation when no project is in the window.
        """
        output_dir = output_dir if output_dir is not None else self._settings.output_dir
        ingestion = self.load(csv_path)

        if self.skip_empty(ingestion):
            return ReportRunResult(normalization=ingestion.summary, skipped=True)

        bundle = self.generate(ingestion)
        exported = self.export(bundle, output_dir)
        summary_path = self.export_summary(bundle, output_dir)
        return ReportRunResult(
            normalization=ingestion.summary,
            skipped=False,
            bundle=bundle,
            exported=exported,
            summary_path=summary_path,
        )


@lru_cache(maxsize=1)
def get_report_pipeline_service() -> ReportPipelineService:
    """
    Build and cache the pipeline with env-driven settings.
    """
    return ReportPipelineService(get_report_settings())
