from __future__ import annotations

import pytest

from estimator_app.models.project import Member, ProjectConfig
from estimator_app.sample_data import build_sample_project
from estimator_app.services.calculator import (
    compute_project,
    estimate_project,
    generate_breakdown,
    resolve_monthly_revenue,
)


def hourly_config(**overrides) -> ProjectConfig:
    values = dict(pricing_model="hourly", hourly_rate=100, hours_per_day=8, days_per_month=20, duration_months=3)
    values.update(overrides)
    return ProjectConfig(**values)


def test_sample_project_generates_results():
    project = build_sample_project()
    estimate = estimate_project(project, project.members)
    aggregate = estimate.aggregate

    assert len(estimate.breakdown) == project.duration_months
    assert aggregate.monthly_revenue == 19200
    assert aggregate.total_revenue == 115200
    assert aggregate.total_cost == pytest.approx(34560 + 10000 + 5760)
    assert aggregate.net_value == pytest.approx(115200 - 50320)
    assert aggregate.total_allocated_percent == 35
    assert estimate.breakdown[-1].cumulative_net == pytest.approx(aggregate.net_value)


def test_pricing_models():
    assert resolve_monthly_revenue(hourly_config()) == 16000
    assert resolve_monthly_revenue(ProjectConfig(pricing_model="daily", daily_rate=800, days_per_month=20)) == 16000
    assert resolve_monthly_revenue(ProjectConfig(pricing_model="fixed", fixed_monthly=10000)) == 10000
    assert resolve_monthly_revenue(ProjectConfig(pricing_model="retainer", fixed_monthly=10000)) == 0


def test_pricing_factors_coerce_independently():
    config = ProjectConfig(pricing_model="daily", daily_rate="abc", days_per_month=20)
    assert resolve_monthly_revenue(config) == 0
    config = ProjectConfig(pricing_model="fixed", fixed_monthly="")
    assert resolve_monthly_revenue(config) == 0


def test_scenario_a_no_members():
    aggregate = compute_project(hourly_config(), [])

    assert aggregate.monthly_revenue == 16000
    assert aggregate.total_revenue == 48000
    assert aggregate.total_cost == 0
    assert aggregate.net_value == 48000
    assert aggregate.cost_percent_of_revenue == 0
    assert aggregate.member_stats == []


def test_scenario_b_percentage_member_clipped_to_own_duration():
    member = Member(name="Dev", share_type="percentage", share_value=50, duration_months=2)
    aggregate = compute_project(hourly_config(), [member])
    stats = aggregate.member_stats[0]

    assert stats.monthly_payout == 8000
    assert stats.effective_duration == 2
    assert stats.total_payout == 16000
    assert aggregate.cost_percent_of_revenue == 16000 / 48000 * 100

    breakdown = generate_breakdown(aggregate)
    assert [row.team_cost for row in breakdown] == [8000, 8000, 0]
    assert [row.net_income for row in breakdown] == [8000, 8000, 16000]
    assert [row.cumulative_net for row in breakdown] == [8000, 16000, 32000]
    assert breakdown[-1].cumulative_net == 48000 - 16000


def test_scenario_c_fixed_share_ignores_revenue():
    member = Member(share_type="fixed", share_value=500, duration_months=1)
    for fixed_monthly in (0, 16000, 1000000):
        config = ProjectConfig(pricing_model="fixed", fixed_monthly=fixed_monthly, duration_months=3)
        stats = compute_project(config, [member]).member_stats[0]
        assert stats.monthly_payout == 500
        assert stats.total_payout == 500


def test_scenario_d_zero_duration_coerces_to_one_month():
    config = hourly_config(duration_months=0)
    estimate = estimate_project(config, [])

    assert config.duration_months == 1
    assert estimate.aggregate.project_duration == 1
    assert [row.month for row in estimate.breakdown] == [1]
    assert estimate.aggregate.total_revenue == 16000


def test_member_duration_never_outlasts_project():
    member = Member(share_type="fixed", share_value=1000, duration_months=24)
    stats = compute_project(hourly_config(duration_months=6), [member]).member_stats[0]

    assert stats.effective_duration == 6
    assert stats.total_payout == 6000


def test_non_numeric_member_duration_pays_nothing():
    member = Member(share_type="fixed", share_value=1000, duration_months="soon")
    aggregate = compute_project(hourly_config(), [member])

    assert aggregate.member_stats[0].effective_duration == 0
    assert aggregate.total_cost == 0
    assert all(row.team_cost == 0 for row in generate_breakdown(aggregate))


def test_referral_costs_are_split_from_team_costs():
    members = [
        Member(employment_type="full-time", share_type="fixed", share_value=1000, duration_months=3),
        Member(employment_type="part-time", share_type="fixed", share_value=500, duration_months=1),
        Member(employment_type="referral", share_type="percentage", share_value=10, duration_months=2),
    ]
    breakdown = generate_breakdown(compute_project(hourly_config(), members))

    assert [row.team_cost for row in breakdown] == [1500, 1000, 1000]
    assert [row.referral_cost for row in breakdown] == pytest.approx([1600, 1600, 0])
    assert [row.total_cost for row in breakdown] == pytest.approx([3100, 2600, 1000])
    assert all(row.gross_revenue == 16000 for row in breakdown)


def test_allocated_percent_is_reported_but_not_capped():
    members = [
        Member(share_type="percentage", share_value=80, duration_months=3),
        Member(share_type="percentage", share_value=70, duration_months=3),
        Member(share_type="fixed", share_value=900, duration_months=3),
    ]
    aggregate = compute_project(hourly_config(), members)

    assert aggregate.total_allocated_percent == 150
    assert aggregate.net_value < 0
    assert aggregate.cost_percent_of_revenue > 100


def test_zero_revenue_reports_zero_cost_percent():
    member = Member(share_type="fixed", share_value=750, duration_months=3)
    aggregate = compute_project(ProjectConfig(pricing_model="fixed", fixed_monthly=0, duration_months=3), [member])

    assert aggregate.total_cost == 2250
    assert aggregate.cost_percent_of_revenue == 0
    assert aggregate.net_value == -2250


def test_breakdown_is_restartable():
    project = build_sample_project()
    aggregate = compute_project(project, project.members)

    assert generate_breakdown(aggregate) == generate_breakdown(aggregate)
