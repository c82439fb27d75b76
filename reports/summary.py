"""
reports/summary.py

Single aggregate over the whole working set.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from app.domain.project import Project
from app.schemas.reports import ProjectSummary
from metrics.reducers import average, total

logger = logging.getLogger(__name__)


class SummaryBuilder:
    """
    Computes the global project summary.

    ``TotalContractors`` counts distinct non-empty contract ids, not
    contractor names.
    """

    def build(self, projects: Sequence[Project]) -> ProjectSummary:
        contract_ids = {p.contract_id for p in projects if p.contract_id}
        summary = ProjectSummary(
            total_projects=len(projects),
            total_contractors=len(contract_ids),
            global_avg_delay=average(p.completion_day_delays for p in projects),
            total_savings=total(p.cost_savings for p in projects),
        )
        logger.debug("Summary built over %d projects", summary.total_projects)
        return summary
