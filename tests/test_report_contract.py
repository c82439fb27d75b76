"""
tests/test_report_contract.py

Contract tests for the report row models.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from app.schemas.reports import AnnualTrendRow, ContractorPerformanceRow, ProjectSummary, RegionEfficiencyRow


def _contractor_row(**overrides) -> ContractorPerformanceRow:
    values = {
        "rank": 1,
        "contractor": "Acme Builders",
        "total_cost": 5000.0,
        "num_projects": 5,
        "avg_delay": 12.0,
        "total_savings": 250.0,
        "reliability_index": 4.33,
        "risk_flag": "High Risk",
    }
    values.update(overrides)
    return ContractorPerformanceRow(**values)


class TestColumns:
    @pytest.mark.parametrize(
        "model, expected",
        [
            (
                RegionEfficiencyRow,
                ["Region", "MainIsland", "TotalBudget", "MedianSavings", "AvgDelay", "HighDelayPct", "EfficiencyScore"],
            ),
            (
                ContractorPerformanceRow,
                [
                    "Rank",
                    "Contractor",
                    "TotalCost",
                    "NumProjects",
                    "AvgDelay",
                    "TotalSavings",
                    "ReliabilityIndex",
                    "RiskFlag",
                ],
            ),
            (
                AnnualTrendRow,
                ["FundingYear", "TypeOfWork", "TotalProjects", "AvgSavings", "OverrunRate", "YoYChange"],
            ),
            (ProjectSummary, ["TotalProjects", "TotalContractors", "GlobalAvgDelay", "TotalSavings"]),
        ],
    )
    def test_column_order(self, model, expected) -> None:
        assert model.columns() == expected

    def test_dump_by_alias_matches_columns(self) -> None:
        row = _contractor_row()
        assert list(row.model_dump(by_alias=True)) == ContractorPerformanceRow.columns()


class TestValidation:
    def test_rows_are_frozen(self) -> None:
        row = _contractor_row()
        with pytest.raises(ValidationError):
            row.rank = 2  # type: ignore[misc]

    def test_unknown_fields_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _contractor_row(grade="A")

    def test_rank_starts_at_one(self) -> None:
        with pytest.raises(ValidationError):
            _contractor_row(rank=0)

    def test_risk_flag_is_closed_set(self) -> None:
        with pytest.raises(ValidationError):
            _contractor_row(risk_flag="Medium Risk")

    def test_aliases_accepted_on_input(self) -> None:
        row = ProjectSummary(TotalProjects=1, TotalContractors=1, GlobalAvgDelay=2.0, TotalSavings=3.0)
        assert row.total_projects == 1

    def test_yoy_change_defaults_to_zero(self) -> None:
        row = AnnualTrendRow(
            funding_year=2021,
            type_of_work="Dike",
            total_projects=1,
            avg_savings=1.0,
            overrun_rate=0.0,
        )
        assert row.yoy_change == 0.0

    def test_non_finite_values_allowed(self) -> None:
        row = _contractor_row(avg_delay=float("nan"), reliability_index=float("nan"), risk_flag="Low Risk")
        assert row.avg_delay != row.avg_delay
