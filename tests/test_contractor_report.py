"""
tests/test_contractor_report.py

Tests for the contractor performance ranking builder.
"""

from __future__ import annotations

import pytest

from reports.contractor import HIGH_RISK, LOW_RISK, ContractorRankingBuilder


@pytest.fixture()
def builder() -> ContractorRankingBuilder:
    return ContractorRankingBuilder()


def _contractor_projects(make_project, name, count, *, cost=100.0, budget=110.0, delay=10):
    return [
        make_project(contractor=name, cost=cost, budget=budget, delay_days=delay, project_id=f"{name}-{i}")
        for i in range(count)
    ]


class TestMinimumSampleSize:
    def test_contractor_with_four_projects_is_excluded(self, builder, make_project) -> None:
        projects = _contractor_projects(make_project, "Small", 4, cost=1_000_000.0)
        projects += _contractor_projects(make_project, "Qualified", 5)

        rows = builder.build(projects)

        assert [r.contractor for r in rows] == ["Qualified"]

    def test_no_qualifying_contractor_gives_empty_report(self, builder, make_project) -> None:
        assert builder.build(_contractor_projects(make_project, "Tiny", 2)) == []


class TestRanking:
    def test_rows_descend_by_total_cost_with_sequential_ranks(self, builder, make_project) -> None:
        projects = []
        projects += _contractor_projects(make_project, "Mid", 5, cost=200.0)
        projects += _contractor_projects(make_project, "Top", 5, cost=900.0)
        projects += _contractor_projects(make_project, "Low", 6, cost=50.0)

        rows = builder.build(projects)

        assert [r.contractor for r in rows] == ["Top", "Mid", "Low"]
        assert [r.rank for r in rows] == [1, 2, 3]
        assert rows[0].total_cost == pytest.approx(4_500.0)
        assert rows[2].num_projects == 6

    def test_keeps_fifteen_lowest_cost_contractors_most_expensive_first(self, builder, make_project) -> None:
        projects = []
        for index in range(20):
            projects += _contractor_projects(make_project, f"C{index:02d}", 5, cost=100.0 * (index + 1))

        rows = builder.build(projects)

        assert len(rows) == 15
        assert [r.rank for r in rows] == list(range(1, 16))
        assert [r.contractor for r in rows] == [f"C{index:02d}" for index in range(14, -1, -1)]
        costs = [r.total_cost for r in rows]
        assert costs == sorted(costs, reverse=True)

    def test_equal_totals_come_out_in_reverse_first_seen_order(self, builder, make_project) -> None:
        projects = _contractor_projects(make_project, "First", 5, cost=100.0)
        projects += _contractor_projects(make_project, "Second", 5, cost=100.0)

        rows = builder.build(projects)

        assert [r.contractor for r in rows] == ["Second", "First"]

    def test_custom_limit_and_minimum(self, make_project) -> None:
        builder = ContractorRankingBuilder(min_projects=2, limit=1)
        projects = _contractor_projects(make_project, "A", 2, cost=10.0)
        projects += _contractor_projects(make_project, "B", 2, cost=20.0)
        assert [r.contractor for r in builder.build(projects)] == ["A"]


class TestReliability:
    def test_metrics_and_low_risk_flag(self, builder, make_project) -> None:
        # avg delay 0, savings ratio 0.6 -> reliability 60
        projects = _contractor_projects(make_project, "Good", 5, cost=100.0, budget=160.0, delay=0)

        [row] = builder.build(projects)

        assert row.total_savings == pytest.approx(300.0)
        assert row.avg_delay == 0.0
        assert row.reliability_index == pytest.approx(60.0)
        assert row.risk_flag == LOW_RISK

    def test_high_risk_flag_below_fifty(self, builder, make_project) -> None:
        # (1 - 45/90) * 0.1 * 100 = 5
        projects = _contractor_projects(make_project, "Slow", 5, cost=100.0, budget=110.0, delay=45)

        [row] = builder.build(projects)

        assert row.reliability_index == pytest.approx(5.0)
        assert row.risk_flag == HIGH_RISK

    def test_reliability_never_exceeds_hundred(self, builder, make_project) -> None:
        projects = _contractor_projects(make_project, "Cheap", 5, cost=10.0, budget=1_000.0, delay=0)
        [row] = builder.build(projects)
        assert row.reliability_index == 100.0
