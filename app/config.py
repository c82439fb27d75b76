"""
app/config.py

Environment-driven settings for the report pipeline.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import TypeVar

PROJECT_ROOT = Path(__file__).resolve().parents[1]

YOY_LOOKUP_YEAR = "year"
YOY_LOOKUP_YEAR_TYPE = "year_type"
_ALLOWED_YOY_LOOKUPS = {YOY_LOOKUP_YEAR, YOY_LOOKUP_YEAR_TYPE}

_NumberT = TypeVar("_NumberT", int, float)


def load_env_files(project_root: Path = PROJECT_ROOT) -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading settings.
    """

    load_env_files()


def _env_value(name: str) -> str | None:
    """Stripped value of *name*, or None when unset or blank."""
    _load_env_once()
    value = (os.getenv(name) or "").strip()
    return value or None


def _env_flag(name: str, default: bool) -> bool:
    value = _env_value(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


def _env_number(name: str, default: _NumberT, parse: Callable[[str], _NumberT]) -> _NumberT:
    """
    Parse *name* with *parse*; unparsable values fall back to *default*.
    """
    value = _env_value(name)
    if value is None:
        return default
    try:
        return parse(value)
    except ValueError:
        return default


def _env_text(name: str, default: str) -> str:
    value = _env_value(name)
    return default if value is None else value


@dataclass(frozen=True)
class ReportSettings:
    """
    Runtime settings for normalization, report building and export.
    """

    year_start: int = 2021
    year_end: int = 2023
    high_delay_days: float = 30.0
    min_contractor_projects: int = 5
    contractor_limit: int = 15
    risk_threshold: float = 50.0
    delay_baseline_days: float = 90.0
    yoy_lookup: str = YOY_LOOKUP_YEAR
    output_dir: Path = Path(".")
    max_logged_errors: int = 500
    log_validation_errors: bool = True


@lru_cache(maxsize=1)
def get_report_settings() -> ReportSettings:
    """
    Return cached report settings from environment variables.

    Raises RuntimeError when the funding-year window is inverted or
    REPORT_YOY_LOOKUP names an unknown policy.
    """

    year_start = _env_number("REPORT_YEAR_START", 2021, int)
    year_end = _env_number("REPORT_YEAR_END", 2023, int)
    if year_start > year_end:
        raise RuntimeError(
            f"REPORT_YEAR_START ({year_start}) must not exceed REPORT_YEAR_END ({year_end})."
        )

    yoy_lookup = _env_text("REPORT_YOY_LOOKUP", YOY_LOOKUP_YEAR).lower()
    if yoy_lookup not in _ALLOWED_YOY_LOOKUPS:
        raise RuntimeError(
            f"REPORT_YOY_LOOKUP '{yoy_lookup}' is not valid. "
            f"Allowed values: {sorted(_ALLOWED_YOY_LOOKUPS)}."
        )

    return ReportSettings(
        year_start=year_start,
        year_end=year_end,
        high_delay_days=_env_number("REPORT_HIGH_DELAY_DAYS", 30.0, float),
        min_contractor_projects=max(1, _env_number("REPORT_MIN_CONTRACTOR_PROJECTS", 5, int)),
        contractor_limit=max(1, _env_number("REPORT_CONTRACTOR_LIMIT", 15, int)),
        risk_threshold=_env_number("REPORT_RISK_THRESHOLD", 50.0, float),
        delay_baseline_days=_env_number("REPORT_DELAY_BASELINE_DAYS", 90.0, float) or 90.0,
        yoy_lookup=yoy_lookup,
        output_dir=Path(_env_text("REPORT_OUTPUT_DIR", ".")),
        max_logged_errors=max(1, _env_number("REPORT_MAX_LOGGED_ERRORS", 500, int)),
        log_validation_errors=_env_flag("REPORT_LOG_VALIDATION_ERRORS", True),
    )
