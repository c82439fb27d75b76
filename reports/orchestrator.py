"""
reports/orchestrator.py

Fans the working set out to every report builder. Contains no
statistics and performs no I/O.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from app.config import ReportSettings
from app.domain.project import Project
from app.schemas.reports import (
    AnnualTrendRow,
    ContractorPerformanceRow,
    ProjectSummary,
    RegionEfficiencyRow,
)
from reports.contractor import ContractorRankingBuilder
from reports.regional import RegionalEfficiencyBuilder
from reports.summary import SummaryBuilder
from reports.trend import AnnualTrendBuilder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportBundle:
    """
    Outputs of one report generation, independent of each other.
    """

    regional: list[RegionEfficiencyRow]
    contractors: list[ContractorPerformanceRow]
    trends: list[AnnualTrendRow]
    summary: ProjectSummary


class ReportOrchestrator:
    """Coordinates the four builders over one read-only working set.

    Builders are configured from :class:`~app.config.ReportSettings` at
    construction time. Each builder sees the same immutable tuple of
    projects, so no builder can affect another's output.
    """

    def __init__(self, settings: ReportSettings | None = None) -> None:
        """
        Args:
            settings: Report settings; defaults to ``ReportSettings()``.
        """
        settings = settings or ReportSettings()
        self._regional = RegionalEfficiencyBuilder(high_delay_days=settings.high_delay_days)
        self._contractors = ContractorRankingBuilder(
            min_projects=settings.min_contractor_projects,
            limit=settings.contractor_limit,
            risk_threshold=settings.risk_threshold,
            delay_baseline_days=settings.delay_baseline_days,
        )
        self._trends = AnnualTrendBuilder(
            first_year=settings.year_start,
            yoy_lookup=settings.yoy_lookup,
        )
        self._summary = SummaryBuilder()

    def run(self, projects: Sequence[Project]) -> ReportBundle:
        """Build every report from *projects*.

        Args:
            projects: Normalized, year-filtered working set. Must not be empty.

        Returns:
            A :class:`ReportBundle` with the rows of each report.

        Raises:
            ValueError: If *projects* is empty; the caller skips generation
                        for an empty working set instead.
        """
        if not projects:
            raise ValueError("Cannot build reports from an empty working set.")

        working_set = tuple(projects)
        bundle = ReportBundle(
            regional=self._regional.build(working_set),
            contractors=self._contractors.build(working_set),
            trends=self._trends.build(working_set),
            summary=self._summary.build(working_set),
        )
        logger.info(
            "Reports built regions=%d contractors=%d trend_rows=%d projects=%d",
            len(bundle.regional),
            len(bundle.contractors),
            len(bundle.trends),
            bundle.summary.total_projects,
        )
        return bundle
