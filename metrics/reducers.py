"""
metrics/reducers.py

Statistical reducers applied over numeric projections of a record group.

Formulas
--------
Total            = sum(values)                        (0.0 when empty)
Median           = sorted(values)[floor(n / 2)]       (upper median)
Average          = sum(values) / n
High Delay %     = count(delay > threshold) / n * 100
Overrun Rate     = count(savings < 0) / n * 100
Efficiency Score = (median_savings / avg_delay) * 100
Reliability      = clamp(|(1 - avg_delay / baseline)
                          * (total_savings / total_cost) * 100|, 0, 100)
Percent Change   = (current - previous) / previous * 100

Degenerate inputs never raise: an empty group or a zero denominator
yields NaN or +/-inf following IEEE-754 division.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable

import numpy as np

DEFAULT_HIGH_DELAY_DAYS = 30.0
DEFAULT_DELAY_BASELINE_DAYS = 90.0


def _as_array(values: Iterable[float]) -> np.ndarray:
    return np.fromiter(values, dtype=np.float64)


def divide(numerator: float, denominator: float) -> float:
    """IEEE-754 division: ``x / 0`` is +/-inf and ``0 / 0`` is NaN."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(numerator) / np.float64(denominator))


def total(values: Iterable[float]) -> float:
    """Arithmetic sum; 0.0 for an empty input."""
    return float(_as_array(values).sum())


def median(values: Iterable[float]) -> float:
    """
    Upper median: the element at index ``n // 2`` of the ascending sort.

    Even-length inputs are not averaged. NaN for an empty input.
    """
    ordered = np.sort(_as_array(values))
    if ordered.size == 0:
        return math.nan
    return float(ordered[ordered.size // 2])


def average(values: Iterable[float]) -> float:
    """Mean of *values*; NaN for an empty input."""
    arr = _as_array(values)
    return divide(float(arr.sum()), float(arr.size))


def percentage_where(values: Iterable[float], predicate: Callable[[float], bool]) -> float:
    """Share of *values* satisfying *predicate*, as a percentage."""
    arr = _as_array(values)
    hits = sum(1 for value in arr if predicate(float(value)))
    return divide(float(hits), float(arr.size)) * 100.0


def high_delay_pct(
    delays: Iterable[float],
    threshold: float = DEFAULT_HIGH_DELAY_DAYS,
) -> float:
    """Percentage of delays strictly greater than *threshold* days."""
    return percentage_where(delays, lambda delay: delay > threshold)


def overrun_rate(savings: Iterable[float]) -> float:
    """Percentage of projects whose cost savings are negative."""
    return percentage_where(savings, lambda saving: saving < 0)


def efficiency_score(median_savings: float, avg_delay: float) -> float:
    """
    (median_savings / avg_delay) * 100.

    Unbounded: a near-zero average delay pushes the score toward +/-inf.
    """
    return divide(median_savings, avg_delay) * 100.0


def reliability_index(
    avg_delay: float,
    total_savings: float,
    total_cost: float,
    baseline_days: float = DEFAULT_DELAY_BASELINE_DAYS,
) -> float:
    """
    Composite 0-100 contractor score.

    The absolute value is taken before clamping, so a negative raw score
    maps onto its magnitude. NaN inputs yield NaN.
    """
    raw = (1.0 - divide(avg_delay, baseline_days)) * divide(total_savings, total_cost) * 100.0
    if math.isnan(raw):
        return math.nan
    return clamp(abs(raw), 0.0, 100.0)


def percent_change(current: float, previous: float) -> float:
    """(current - previous) / previous * 100."""
    return divide(current - previous, previous) * 100.0


def clamp(value: float, min_value: float, max_value: float) -> float:
    """Clamp *value* to ``[min_value, max_value]``."""
    return max(min_value, min(value, max_value))
