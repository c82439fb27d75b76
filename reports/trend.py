"""
reports/trend.py

Annual project type cost overrun trends.

Rows are (funding year, type of work) cells sorted by year ascending and
average savings descending. Year-over-year change compares a cell's
average savings with a baseline from the preceding year.

Baseline lookup
---------------
``year`` (default)
    The baseline is indexed by year only. Later cells of a year overwrite
    earlier ones, so the baseline is the last cell of the preceding year
    in sorted order (its lowest average savings), whatever its type of
    work. Every cell of a year is compared against that one value.
``year_type``
    The baseline is the preceding year's cell with the same type of work.

Cells without a baseline, and cells of the first reporting year, keep a
YoY change of 0.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Sequence
from dataclasses import dataclass

from app.config import YOY_LOOKUP_YEAR, YOY_LOOKUP_YEAR_TYPE
from app.domain.project import Project
from app.schemas.reports import AnnualTrendRow
from metrics.grouping import group_by_nested
from metrics.reducers import average, overrun_rate, percent_change
from reports.base import BaseReportBuilder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _TrendCell:
    funding_year: int | float
    type_of_work: str
    total_projects: int
    avg_savings: float
    overrun_rate: float


class AnnualTrendBuilder(BaseReportBuilder[AnnualTrendRow]):
    """
    Builds the per-year, per-type trend table with YoY linking.

    Parameters
    ----------
    first_year:
        Cells of this year or earlier never get a YoY change.
    yoy_lookup:
        ``"year"`` or ``"year_type"``; see the module docstring.
    """

    def __init__(self, *, first_year: int = 2021, yoy_lookup: str = YOY_LOOKUP_YEAR) -> None:
        if yoy_lookup not in (YOY_LOOKUP_YEAR, YOY_LOOKUP_YEAR_TYPE):
            raise ValueError(f"Unsupported yoy_lookup: {yoy_lookup!r}")
        self._first_year = first_year
        self._yoy_lookup = yoy_lookup

    def build(self, projects: Sequence[Project]) -> list[AnnualTrendRow]:
        cells: list[_TrendCell] = []

        by_year = group_by_nested(projects, lambda p: p.funding_year, lambda p: p.type_of_work)
        for year, by_type in by_year.items():
            for type_of_work, members in by_type.items():
                savings = [p.cost_savings for p in members]
                cells.append(
                    _TrendCell(
                        funding_year=year,
                        type_of_work=type_of_work,
                        total_projects=len(members),
                        avg_savings=average(savings),
                        overrun_rate=overrun_rate(savings),
                    )
                )

        cells.sort(key=lambda c: (c.funding_year, -c.avg_savings))

        baselines: dict[Hashable, float] = {}
        for cell in cells:
            key = self._baseline_key(cell.funding_year, cell.type_of_work)
            baselines[key] = cell.avg_savings

        rows = [
            AnnualTrendRow(
                funding_year=cell.funding_year,
                type_of_work=cell.type_of_work,
                total_projects=cell.total_projects,
                avg_savings=cell.avg_savings,
                overrun_rate=cell.overrun_rate,
                yoy_change=self._yoy_change(cell, baselines),
            )
            for cell in cells
        ]
        logger.debug("Annual trends built: %d cells over %d years", len(rows), len(by_year))
        return rows

    def _baseline_key(self, year: int | float, type_of_work: str) -> Hashable:
        if self._yoy_lookup == YOY_LOOKUP_YEAR_TYPE:
            return year, type_of_work
        return year

    def _yoy_change(self, cell: _TrendCell, baselines: dict[Hashable, float]) -> float:
        if cell.funding_year <= self._first_year:
            return 0.0
        previous = baselines.get(self._baseline_key(cell.funding_year - 1, cell.type_of_work))
        if previous is None:
            return 0.0
        return percent_change(cell.avg_savings, previous)
