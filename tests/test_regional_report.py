"""
tests/test_regional_report.py

Tests for the regional efficiency report builder.
"""

from __future__ import annotations

import math

import pytest

from reports.regional import RegionalEfficiencyBuilder


@pytest.fixture()
def builder() -> RegionalEfficiencyBuilder:
    return RegionalEfficiencyBuilder()


def _project(make_project, region, savings, delay, **kwargs):
    return make_project(region=region, budget=1_000.0 + savings, cost=1_000.0, delay_days=delay, **kwargs)


class TestRegionalMetrics:
    def test_three_project_region_scenario(self, builder, make_project) -> None:
        projects = [
            _project(make_project, "R1", 100.0, 10),
            _project(make_project, "R1", 200.0, 40),
            _project(make_project, "R1", -50.0, 20),
        ]

        [row] = builder.build(projects)

        assert row.region == "R1"
        assert row.median_savings == pytest.approx(100.0)
        assert row.avg_delay == pytest.approx(23.33, abs=0.01)
        assert row.high_delay_pct == pytest.approx(33.33, abs=0.01)
        assert row.efficiency_score == pytest.approx(100.0 / (70 / 3) * 100)
        assert row.total_budget == pytest.approx(1_100.0 + 1_200.0 + 950.0)

    def test_main_island_comes_from_first_member(self, builder, make_project) -> None:
        projects = [
            make_project(region="R2", main_island="Visayas"),
            make_project(region="R2", main_island="Mindanao"),
        ]
        [row] = builder.build(projects)
        assert row.main_island == "Visayas"

    def test_single_project_region_is_reported(self, builder, make_project) -> None:
        rows = builder.build([make_project(region="Solo")])
        assert [r.region for r in rows] == ["Solo"]

    def test_zero_average_delay_gives_infinite_score(self, builder, make_project) -> None:
        [row] = builder.build([_project(make_project, "R3", 10.0, 0)])
        assert row.efficiency_score == math.inf

    def test_input_is_not_mutated(self, builder, make_project) -> None:
        projects = [_project(make_project, "A", 5.0, 3), _project(make_project, "B", 1.0, 9)]
        snapshot = list(projects)
        builder.build(projects)
        assert projects == snapshot


class TestRegionalOrdering:
    def test_rows_sorted_by_descending_efficiency(self, builder, make_project) -> None:
        projects = [
            _project(make_project, "Low", 10.0, 10),
            _project(make_project, "High", 500.0, 10),
            _project(make_project, "Negative", -300.0, 10),
            _project(make_project, "Mid", 100.0, 10),
        ]

        rows = builder.build(projects)

        assert [r.region for r in rows] == ["High", "Mid", "Low", "Negative"]
        scores = [r.efficiency_score for r in rows]
        assert all(a >= b for a, b in zip(scores, scores[1:]))

    def test_ties_keep_first_seen_order(self, builder, make_project) -> None:
        projects = [_project(make_project, "First", 50.0, 5), _project(make_project, "Second", 50.0, 5)]
        assert [r.region for r in builder.build(projects)] == ["First", "Second"]

    def test_nan_scores_sort_last(self, builder, make_project) -> None:
        projects = [
            _project(make_project, "Undefined", 0.0, 0),
            _project(make_project, "Defined", -10.0, 5),
        ]
        rows = builder.build(projects)
        assert [r.region for r in rows] == ["Defined", "Undefined"]
        assert math.isnan(rows[-1].efficiency_score)
