"""
app/domain/project.py

Domain models used by the project normalization flow.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime

_SECONDS_PER_DAY = 86_400


@dataclass(frozen=True)
class Project:
    """
    One normalized infrastructure project.

    ``cost_savings`` and ``completion_day_delays`` are derived from the
    other attributes when the record is built and cannot be passed in.
    """

    main_island: str
    region: str
    province: str
    legislative_district: str
    municipality: str
    district_engineering_office: str
    project_id: str
    project_name: str
    type_of_work: str
    funding_year: int | float
    contract_id: str
    approved_budget_for_contract: float
    contract_cost: float
    actual_completion_date: datetime
    contractor: str
    start_date: datetime
    project_latitude: float
    project_longitude: float
    provincial_capital: str
    provincial_capital_latitude: float
    provincial_capital_longitude: float

    cost_savings: float = field(init=False)
    completion_day_delays: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "cost_savings",
            self.approved_budget_for_contract - self.contract_cost,
        )
        object.__setattr__(
            self,
            "completion_day_delays",
            _whole_days_between(self.start_date, self.actual_completion_date),
        )


def _whole_days_between(start: datetime, end: datetime) -> int:
    """Day difference rounded half up, negative when *end* precedes *start*."""
    days = (end - start).total_seconds() / _SECONDS_PER_DAY
    return math.floor(days + 0.5)


@dataclass(frozen=True)
class RecordValidationError:
    """
    One row normalization error detail.
    """

    row_number: int
    code: str
    message: str
    column: str | None = None
    value: str | None = None


@dataclass(frozen=True)
class NormalizationSummary:
    """
    End-of-normalization summary.

    ``rows_loaded`` counts rows that became a Project; ``rows_in_window``
    counts those that survived the funding-year filter.
    """

    rows_read: int
    rows_loaded: int
    rows_failed: int
    rows_in_window: int
    validation_errors: list[RecordValidationError] = field(default_factory=list)
