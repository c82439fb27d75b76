"""
reports/contractor.py

Contractor performance ranking.

Contractors with fewer than ``min_projects`` projects are excluded
entirely. The remaining contractors are sorted by total contract cost in
ascending order, the first ``limit`` are kept, and that selection is
reversed for presentation. The report therefore holds the ``limit``
lowest-cost qualifying contractors, listed from the most to the least
expensive.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from app.domain.project import Project
from app.schemas.reports import ContractorPerformanceRow
from metrics.grouping import group_by
from metrics.reducers import DEFAULT_DELAY_BASELINE_DAYS, average, reliability_index, total
from reports.base import BaseReportBuilder

logger = logging.getLogger(__name__)

HIGH_RISK = "High Risk"
LOW_RISK = "Low Risk"


@dataclass(frozen=True)
class _ContractorStats:
    contractor: str
    total_cost: float
    num_projects: int
    avg_delay: float
    total_savings: float
    reliability_index: float


class ContractorRankingBuilder(BaseReportBuilder[ContractorPerformanceRow]):
    """
    Ranks the lowest-cost qualifying contractors, most expensive first.

    Parameters
    ----------
    min_projects:
        Minimum group size; smaller contractors are dropped.
    limit:
        Maximum number of ranked rows.
    risk_threshold:
        Reliability index below which a contractor is flagged ``"High Risk"``.
    delay_baseline_days:
        Delay baseline used by the reliability index.
    """

    def __init__(
        self,
        *,
        min_projects: int = 5,
        limit: int = 15,
        risk_threshold: float = 50.0,
        delay_baseline_days: float = DEFAULT_DELAY_BASELINE_DAYS,
    ) -> None:
        self._min_projects = min_projects
        self._limit = limit
        self._risk_threshold = risk_threshold
        self._delay_baseline_days = delay_baseline_days

    def build(self, projects: Sequence[Project]) -> list[ContractorPerformanceRow]:
        qualifying: list[_ContractorStats] = []

        for contractor, members in group_by(projects, lambda p: p.contractor).items():
            if len(members) < self._min_projects:
                continue

            total_cost = total(p.contract_cost for p in members)
            avg_delay = average(p.completion_day_delays for p in members)
            total_savings = total(p.cost_savings for p in members)

            qualifying.append(
                _ContractorStats(
                    contractor=contractor,
                    total_cost=total_cost,
                    num_projects=len(members),
                    avg_delay=avg_delay,
                    total_savings=total_savings,
                    reliability_index=reliability_index(
                        avg_delay,
                        total_savings,
                        total_cost,
                        self._delay_baseline_days,
                    ),
                )
            )

        # Equal totals come out in reverse first-seen order.
        cheapest = sorted(qualifying, key=lambda s: s.total_cost)[: self._limit]
        ranked = list(reversed(cheapest))

        rows = [
            ContractorPerformanceRow(
                rank=rank,
                contractor=stats.contractor,
                total_cost=stats.total_cost,
                num_projects=stats.num_projects,
                avg_delay=stats.avg_delay,
                total_savings=stats.total_savings,
                reliability_index=stats.reliability_index,
                risk_flag=self._risk_flag(stats.reliability_index),
            )
            for rank, stats in enumerate(ranked, start=1)
        ]
        logger.debug(
            "Contractor ranking built: %d qualifying, %d ranked",
            len(qualifying),
            len(rows),
        )
        return rows

    def _risk_flag(self, reliability: float) -> str:
        # NaN compares False, so an undefined index is not flagged High Risk.
        return HIGH_RISK if reliability < self._risk_threshold else LOW_RISK
