"""
reports/regional.py

Regional efficiency report: one row per region, ranked by efficiency score.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from app.domain.project import Project
from app.schemas.reports import RegionEfficiencyRow
from metrics.grouping import group_by
from metrics.reducers import (
    DEFAULT_HIGH_DELAY_DAYS,
    average,
    efficiency_score,
    high_delay_pct,
    median,
    total,
)
from reports.base import BaseReportBuilder

logger = logging.getLogger(__name__)


class RegionalEfficiencyBuilder(BaseReportBuilder[RegionEfficiencyRow]):
    """
    Groups projects by region and scores each region's cost efficiency.

    ``MainIsland`` is taken from the first project of each region; it is
    not checked for consistency across the group.
    """

    def __init__(self, *, high_delay_days: float = DEFAULT_HIGH_DELAY_DAYS) -> None:
        self._high_delay_days = high_delay_days

    def build(self, projects: Sequence[Project]) -> list[RegionEfficiencyRow]:
        rows: list[RegionEfficiencyRow] = []

        for region, members in group_by(projects, lambda p: p.region).items():
            delays = [p.completion_day_delays for p in members]
            median_savings = median(p.cost_savings for p in members)
            avg_delay = average(delays)

            rows.append(
                RegionEfficiencyRow(
                    region=region,
                    main_island=members[0].main_island,
                    total_budget=total(p.approved_budget_for_contract for p in members),
                    median_savings=median_savings,
                    avg_delay=avg_delay,
                    high_delay_pct=high_delay_pct(delays, self._high_delay_days),
                    efficiency_score=efficiency_score(median_savings, avg_delay),
                )
            )

        rows.sort(key=_descending_score)
        logger.debug("Regional efficiency built for %d regions", len(rows))
        return rows


def _descending_score(row: RegionEfficiencyRow) -> tuple[bool, float]:
    # NaN scores sort after every real score.
    score = row.efficiency_score
    if math.isnan(score):
        return True, 0.0
    return False, -score
