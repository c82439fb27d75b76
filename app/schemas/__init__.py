"""
app/schemas package marker.
"""

from app.schemas.reports import (
    AnnualTrendRow,
    ContractorPerformanceRow,
    ProjectSummary,
    RegionEfficiencyRow,
)

__all__ = [
    "AnnualTrendRow",
    "ContractorPerformanceRow",
    "ProjectSummary",
    "RegionEfficiencyRow",
]
