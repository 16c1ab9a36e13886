from __future__ import annotations

from estimator_app.models.project import Member, ProjectConfig
from estimator_app.services.calculator import compute_project, estimate_project
from estimator_app.services.dashboard import OVER_COST_WARNING, build_cost_meter, build_dashboard
from estimator_app.services.formatting import format_money, format_percent, round_money


CONFIG = ProjectConfig(pricing_model="fixed", fixed_monthly=10000, duration_months=2)


def test_format_money():
    assert format_money(16000) == "$16,000"
    assert format_money(1234567.49) == "$1,234,567"
    assert format_money(2.5) == "$3"
    assert format_money(-2.5) == "-$3"
    assert format_money(-1250) == "-$1,250"
    assert format_money(0) == "$0"
    assert format_money(-0.4) == "-$0"
    assert format_money(0.4) == "$0"
    assert format_money(900, symbol="€") == "€900"


def test_round_money_handles_non_finite():
    assert round_money(float("inf")) == 0


def test_format_percent():
    assert format_percent(37.456) == "37.5%"
    assert format_percent(0) == "0.0%"


def test_cost_meter_caps_bar_but_not_label():
    members = [Member(share_type="fixed", share_value=15000, duration_months=2)]
    meter = build_cost_meter(compute_project(CONFIG, members))

    assert meter.label == "150.0% of revenue"
    assert meter.bar_width == 100
    assert meter.warning == OVER_COST_WARNING


def test_cost_meter_without_revenue_has_no_warning():
    config = CONFIG.model_copy(update={"fixed_monthly": 0.0})
    meter = build_cost_meter(compute_project(config, [Member(share_type="fixed", share_value=500, duration_months=2)]))

    assert meter.label == "0.0% of revenue"
    assert meter.bar_width == 0
    assert meter.warning == ""


def test_dashboard_mirrors_estimate():
    members = [
        Member(name="Ana", share_type="percentage", share_value=25, duration_months=1),
        Member(name="Agency", employment_type="referral", share_type="fixed", share_value=12000, duration_months=2),
    ]
    dashboard = build_dashboard(estimate_project(CONFIG, members))
    stats = {card.key: card.value for card in dashboard.stats}

    assert stats == {
        "monthly_revenue": "$10,000",
        "total_revenue": "$20,000",
        "total_cost": "$26,500",
        "net_value": "-$6,500",
    }
    assert not dashboard.show_empty_state
    assert [row.total_payout for row in dashboard.team_rows] == ["$2,500", "$24,000"]
    assert dashboard.team_rows[1].index == 1
    assert [(row.label, row.net_income, row.net_tone, row.cumulative_net) for row in dashboard.breakdown_rows] == [
        ("Month 1", "-$4,500", "negative", "-$4,500"),
        ("Month 2", "-$2,000", "negative", "-$6,500"),
    ]


def test_dashboard_empty_roster():
    dashboard = build_dashboard(estimate_project(CONFIG, []))

    assert dashboard.show_empty_state
    assert dashboard.team_rows == []
    assert dashboard.cost_meter.warning == ""
    assert {row.net_tone for row in dashboard.breakdown_rows} == {"positive"}
