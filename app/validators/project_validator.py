"""
app/validators/project_validator.py

Row-level validation and type parsing for project records.
"""

from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from typing import Any, Mapping

from app.domain.project import Project, RecordValidationError
from app.failure_codes import INVALID_DATE, INVALID_NUMBER, MISSING_COLUMN

TIMESTAMP_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y %H:%M:%S",
)

# Plain decimal or exponent notation; no digit-group separators.
_NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

TEXT_COLUMNS: dict[str, str] = {
    "main_island": "MainIsland",
    "region": "Region",
    "province": "Province",
    "legislative_district": "LegislativeDistrict",
    "municipality": "Municipality",
    "district_engineering_office": "DistrictEngineeringOffice",
    "project_id": "ProjectId",
    "project_name": "ProjectName",
    "type_of_work": "TypeOfWork",
    "contract_id": "ContractId",
    "contractor": "Contractor",
    "provincial_capital": "ProvincialCapital",
}

NUMERIC_COLUMNS: dict[str, str] = {
    "funding_year": "FundingYear",
    "approved_budget_for_contract": "ApprovedBudgetForContract",
    "contract_cost": "ContractCost",
    "project_latitude": "ProjectLatitude",
    "project_longitude": "ProjectLongitude",
    "provincial_capital_latitude": "ProvincialCapitalLatitude",
    "provincial_capital_longitude": "ProvincialCapitalLongitude",
}

DATE_COLUMNS: dict[str, str] = {
    "actual_completion_date": "ActualCompletionDate",
    "start_date": "StartDate",
}

REQUIRED_COLUMNS: tuple[str, ...] = (
    *TEXT_COLUMNS.values(),
    *NUMERIC_COLUMNS.values(),
    *DATE_COLUMNS.values(),
)


class ProjectRowValidator:
    """
    Validates and parses one raw project row into a :class:`Project`.
    """

    def validate_row(
        self,
        *,
        raw_row: Mapping[str, str | None],
        row_number: int,
    ) -> tuple[Project | None, list[RecordValidationError]]:
        """
        Validate and parse one raw row.

        Every column is checked so a rejected row reports all of its
        problems at once.
        """

        errors: list[RecordValidationError] = []
        values: dict[str, Any] = {}

        for attribute, column in TEXT_COLUMNS.items():
            values[attribute] = self._parse_text(
                raw_row=raw_row,
                row_number=row_number,
                column=column,
                errors=errors,
            )

        for attribute, column in NUMERIC_COLUMNS.items():
            values[attribute] = self._parse_number(
                raw_row=raw_row,
                row_number=row_number,
                column=column,
                errors=errors,
            )

        for attribute, column in DATE_COLUMNS.items():
            values[attribute] = self._parse_date(
                raw_row=raw_row,
                row_number=row_number,
                column=column,
                errors=errors,
            )

        if errors:
            return None, errors

        values["funding_year"] = _as_year(values["funding_year"])
        return Project(**values), []

    def _parse_text(
        self,
        *,
        raw_row: Mapping[str, str | None],
        row_number: int,
        column: str,
        errors: list[RecordValidationError],
    ) -> str:
        if column not in raw_row:
            errors.append(self._missing(row_number, column))
            return ""
        value = raw_row[column]
        return "" if value is None else str(value)

    def _parse_number(
        self,
        *,
        raw_row: Mapping[str, str | None],
        row_number: int,
        column: str,
        errors: list[RecordValidationError],
    ) -> float:
        if column not in raw_row:
            errors.append(self._missing(row_number, column))
            return math.nan

        value = raw_row[column]
        parsed = parse_finite_number(value)
        if parsed is None:
            errors.append(
                RecordValidationError(
                    row_number=row_number,
                    code=INVALID_NUMBER,
                    column=column,
                    message=f"'{value}' is not a finite number.",
                    value=self._stringify_value(value),
                )
            )
            return math.nan
        return parsed

    def _parse_date(
        self,
        *,
        raw_row: Mapping[str, str | None],
        row_number: int,
        column: str,
        errors: list[RecordValidationError],
    ) -> datetime:
        if column not in raw_row:
            errors.append(self._missing(row_number, column))
            return datetime.min

        value = raw_row[column]
        parsed = parse_date(value)
        if parsed is None:
            errors.append(
                RecordValidationError(
                    row_number=row_number,
                    code=INVALID_DATE,
                    column=column,
                    message="Invalid date/time format.",
                    value=self._stringify_value(value),
                )
            )
            return datetime.min
        return parsed

    @staticmethod
    def _missing(row_number: int, column: str) -> RecordValidationError:
        return RecordValidationError(
            row_number=row_number,
            code=MISSING_COLUMN,
            column=column,
            message="Required column is missing.",
            value=None,
        )

    @staticmethod
    def _stringify_value(value: Any) -> str | None:
        if value is None:
            return None
        return str(value)


def parse_finite_number(value: str | None) -> float | None:
    """
    Parse *value* as a finite real number.

    Returns None for blanks, non-numeric text, ``NaN``/``Infinity`` tokens
    and literals that overflow to infinity.
    """
    if value is None:
        return None
    raw = str(value).strip()
    if not _NUMBER_PATTERN.fullmatch(raw):
        return None
    number = float(raw)
    if not math.isfinite(number):
        return None
    return number


def parse_date(value: str | None) -> datetime | None:
    """
    Parse an ISO-8601 or slash-separated date into an aware UTC datetime.
    """
    if value is None:
        return None
    raw = str(value).strip()
    if not raw:
        return None

    normalized = raw[:-1] + "+00:00" if raw.endswith("Z") else raw
    try:
        parsed = datetime.fromisoformat(normalized)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    except ValueError:
        pass

    for fmt in TIMESTAMP_FORMATS:
        try:
            parsed = datetime.strptime(raw, fmt)
            return parsed.replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    return None


def _as_year(value: float) -> int | float:
    return int(value) if value.is_integer() else value
