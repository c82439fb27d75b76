"""
app/schemas/reports.py

Output contracts for the generated reports.

Each model serializes (``model_dump(by_alias=True)``) to the exact column
names of its report, in column order. Numeric fields hold exact values;
NaN and infinities are allowed because degenerate groups propagate them.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

RiskFlag = Literal["High Risk", "Low Risk"]


class _ReportRow(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
    )

    @classmethod
    def columns(cls) -> list[str]:
        """Report column names in output order."""
        return [info.alias or name for name, info in cls.model_fields.items()]


class RegionEfficiencyRow(_ReportRow):
    """One region of the flood mitigation efficiency summary."""

    region: str = Field(alias="Region")
    main_island: str = Field(alias="MainIsland")
    total_budget: float = Field(alias="TotalBudget")
    median_savings: float = Field(alias="MedianSavings")
    avg_delay: float = Field(alias="AvgDelay")
    high_delay_pct: float = Field(alias="HighDelayPct")
    efficiency_score: float = Field(alias="EfficiencyScore")


class ContractorPerformanceRow(_ReportRow):
    """One ranked contractor of the performance ranking."""

    rank: int = Field(alias="Rank", ge=1)
    contractor: str = Field(alias="Contractor")
    total_cost: float = Field(alias="TotalCost")
    num_projects: int = Field(alias="NumProjects", ge=1)
    avg_delay: float = Field(alias="AvgDelay")
    total_savings: float = Field(alias="TotalSavings")
    reliability_index: float = Field(alias="ReliabilityIndex")
    risk_flag: RiskFlag = Field(alias="RiskFlag")


class AnnualTrendRow(_ReportRow):
    """One (funding year, type of work) cell of the annual trend report."""

    funding_year: int | float = Field(alias="FundingYear")
    type_of_work: str = Field(alias="TypeOfWork")
    total_projects: int = Field(alias="TotalProjects", ge=1)
    avg_savings: float = Field(alias="AvgSavings")
    overrun_rate: float = Field(alias="OverrunRate")
    yoy_change: float = Field(alias="YoYChange", default=0.0)


class ProjectSummary(_ReportRow):
    """Global aggregate over the working set."""

    total_projects: int = Field(alias="TotalProjects", ge=0)
    total_contractors: int = Field(alias="TotalContractors", ge=0)
    global_avg_delay: float = Field(alias="GlobalAvgDelay")
    total_savings: float = Field(alias="TotalSavings")
