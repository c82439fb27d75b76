"""
Shared factories for report pipeline tests.
"""

from __future__ import annotations

import csv
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest

from app.domain.project import Project

_START = datetime(2022, 1, 1, tzinfo=timezone.utc)


def build_project(
    *,
    region: str = "Region I",
    main_island: str = "Luzon",
    contractor: str = "Acme Builders",
    contract_id: str = "C-001",
    type_of_work: str = "Construction of Flood Mitigation Structure",
    funding_year: int | float = 2022,
    budget: float = 1_000.0,
    cost: float = 900.0,
    delay_days: int = 10,
    project_id: str = "P-001",
) -> Project:
    return Project(
        main_island=main_island,
        region=region,
        province="Ilocos Norte",
        legislative_district="1st District",
        municipality="Laoag City",
        district_engineering_office="Ilocos Norte 1st DEO",
        project_id=project_id,
        project_name=f"Project {project_id}",
        type_of_work=type_of_work,
        funding_year=funding_year,
        contract_id=contract_id,
        approved_budget_for_contract=budget,
        contract_cost=cost,
        actual_completion_date=_START + timedelta(days=delay_days),
        contractor=contractor,
        start_date=_START,
        project_latitude=18.19,
        project_longitude=120.59,
        provincial_capital="Laoag City",
        provincial_capital_latitude=18.2,
        provincial_capital_longitude=120.6,
    )


def build_raw_row(**overrides: Any) -> dict[str, str]:
    row = {
        "MainIsland": "Luzon",
        "Region": "Region I",
        "Province": "Ilocos Norte",
        "LegislativeDistrict": "1st District",
        "Municipality": "Laoag City",
        "DistrictEngineeringOffice": "Ilocos Norte 1st DEO",
        "ProjectId": "P-001",
        "ProjectName": "Flood wall",
        "TypeOfWork": "Construction of Flood Mitigation Structure",
        "FundingYear": "2022",
        "ContractId": "C-001",
        "ApprovedBudgetForContract": "1000000.50",
        "ContractCost": "950000.25",
        "ActualCompletionDate": "2022-03-15",
        "Contractor": "Acme Builders",
        "StartDate": "2022-01-10",
        "ProjectLatitude": "18.1978",
        "ProjectLongitude": "120.5957",
        "ProvincialCapital": "Laoag City",
        "ProvincialCapitalLatitude": "18.1978",
        "ProvincialCapitalLongitude": "120.5936",
    }
    row.update(overrides)
    return row


@pytest.fixture()
def make_project() -> Callable[..., Project]:
    """Factory for valid Project records with overridable fields."""
    return build_project


@pytest.fixture()
def make_raw_row() -> Callable[..., dict[str, str]]:
    """Factory for raw CSV-shaped rows with overridable columns."""
    return build_raw_row


def write_dataset(path: Path, rows: list[dict[str, Any]], fieldnames: list[str] | None = None) -> Path:
    """Write *rows* as a header-driven CSV dataset."""
    columns = fieldnames or list(build_raw_row().keys())
    with path.open("w", encoding="utf-8", newline="") as fh:
        writer = csv.DictWriter(fh, fieldnames=columns, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(rows)
    return path


@pytest.fixture()
def make_dataset(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing CSV datasets under the test's tmp_path."""

    def _make(rows: list[dict[str, Any]], *, name: str = "projects.csv", fieldnames: list[str] | None = None) -> Path:
        return write_dataset(tmp_path / name, rows, fieldnames)

    return _make
