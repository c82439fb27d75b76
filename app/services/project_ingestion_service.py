"""
app/services/project_ingestion_service.py

Service layer for project dataset ingestion.

Turns raw rows (``column -> string``) into the working set every report is
derived from:

    1. Each row is normalized by ProjectRowValidator; invalid rows are
       skipped, counted and logged, never fatal.
    2. Surviving projects are restricted to the configured funding-year
       window (inclusive on both ends).

CSV parsing lives only in :meth:`ProjectIngestionService.load_csv`; the
row-level path (:meth:`normalize_rows`) accepts any iterable of mappings.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from app.config import get_report_settings
from app.domain.project import NormalizationSummary, Project, RecordValidationError
from app.validators.project_validator import REQUIRED_COLUMNS, ProjectRowValidator

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class CSVHeaderValidationError(ValueError):
    """
    Raised when CSV shape/header validation fails.
    """

    def __init__(self, message: str, *, missing_columns: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.missing_columns = tuple(missing_columns)


# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class IngestionResult:
    """
    Working set plus the normalization summary that produced it.
    """

    projects: tuple[Project, ...]
    summary: NormalizationSummary

    @property
    def is_empty(self) -> bool:
        return not self.projects


def filter_funding_years(
    projects: Iterable[Project],
    year_start: int,
    year_end: int,
) -> tuple[Project, ...]:
    """Keep projects whose funding year lies in ``[year_start, year_end]``."""
    return tuple(p for p in projects if year_start <= p.funding_year <= year_end)


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class ProjectIngestionService:
    """
    Coordinates row normalization, error capture and year filtering.
    """

    def __init__(
        self,
        *,
        year_start: int = 2021,
        year_end: int = 2023,
        max_validation_errors: int = 500,
        log_validation_errors: bool = True,
        validator: ProjectRowValidator | None = None,
    ) -> None:
        self._year_start = year_start
        self._year_end = year_end
        self._max_validation_errors = max(1, max_validation_errors)
        self._log_validation_errors = log_validation_errors
        self._validator = validator or ProjectRowValidator()

    def normalize_rows(
        self,
        rows: Iterable[Mapping[str, str | None]],
        *,
        first_row_number: int = 1,
    ) -> IngestionResult:
        """
        Normalize *rows*, skip invalid ones and apply the year window.

        Args:
            rows:             Raw rows keyed by column name.
            first_row_number: Number reported for the first row in errors
                              (2 for a CSV body under a header line).
        """
        rows_read = 0
        rows_failed = 0
        captured_errors: list[RecordValidationError] = []
        loaded: list[Project] = []

        for row_number, raw_row in enumerate(rows, start=first_row_number):
            rows_read += 1
            project, row_errors = self._validator.validate_row(
                raw_row=raw_row,
                row_number=row_number,
            )
            if row_errors or project is None:
                rows_failed += 1
                for error in row_errors:
                    self._record_error(captured_errors, error)
                continue
            loaded.append(project)

        working_set = filter_funding_years(loaded, self._year_start, self._year_end)
        summary = NormalizationSummary(
            rows_read=rows_read,
            rows_loaded=len(loaded),
            rows_failed=rows_failed,
            rows_in_window=len(working_set),
            validation_errors=captured_errors,
        )
        logger.info(
            "Normalized rows read=%d loaded=%d failed=%d in_window=%d window=[%d, %d]",
            summary.rows_read,
            summary.rows_loaded,
            summary.rows_failed,
            summary.rows_in_window,
            self._year_start,
            self._year_end,
        )
        return IngestionResult(projects=working_set, summary=summary)

    def load_csv(self, csv_path: Path) -> IngestionResult:
        """
        Read a header-driven CSV file and normalize its rows.

        Raises:
            CSVHeaderValidationError: header missing, required columns
                                      absent, bad encoding or malformed CSV.
        """
        try:
            with Path(csv_path).open("r", encoding="utf-8-sig", newline="") as fh:
                reader = csv.DictReader(fh)
                headers = reader.fieldnames or []
                if not headers:
                    raise CSVHeaderValidationError("CSV header row is missing.")

                missing = [column for column in REQUIRED_COLUMNS if column not in headers]
                if missing:
                    raise CSVHeaderValidationError(
                        f"CSV is missing required columns: {', '.join(missing)}.",
                        missing_columns=missing,
                    )

                return self.normalize_rows(reader, first_row_number=2)
        except UnicodeDecodeError as exc:
            raise CSVHeaderValidationError("CSV must be UTF-8 encoded.") from exc
        except csv.Error as exc:
            raise CSVHeaderValidationError(f"Invalid CSV format: {exc}") from exc

    def _record_error(
        self,
        captured_errors: list[RecordValidationError],
        error: RecordValidationError,
    ) -> None:
        if len(captured_errors) >= self._max_validation_errors:
            return

        if self._log_validation_errors:
            logger.warning(
                "Project row rejected row=%s code=%s column=%s message=%s value=%r",
                error.row_number,
                error.code,
                error.column,
                error.message,
                error.value,
            )
        captured_errors.append(error)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_project_ingestion_service() -> ProjectIngestionService:
    """
    Build and cache the ingestion service with env-driven settings.
    """
    settings = get_report_settings()
    return ProjectIngestionService(
        year_start=settings.year_start,
        year_end=settings.year_end,
        max_validation_errors=settings.max_logged_errors,
        log_validation_errors=settings.log_validation_errors,
    )
