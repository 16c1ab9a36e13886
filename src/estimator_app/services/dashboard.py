from __future__ import annotations

from ..models.dashboard import BreakdownTableRow, CostMeter, Dashboard, StatCard, TeamTableRow
from ..models.results import AggregateResult, ProjectEstimate
from .formatting import format_money, format_percent


OVER_COST_WARNING = "Warning: Costs exceed revenue!"


def build_cost_meter(aggregate: AggregateResult) -> CostMeter:
    percent = aggregate.cost_percent_of_revenue
    return CostMeter(
        label=f"{format_percent(percent)} of revenue",
        bar_width=min(percent, 100.0),
        warning=OVER_COST_WARNING if percent > 100 else "",
    )


def build_dashboard(estimate: ProjectEstimate, currency_symbol: str = "$") -> Dashboard:
    aggregate = estimate.aggregate

    def money(amount: float) -> str:
        return format_money(amount, currency_symbol)

    stats = [
        StatCard(key="monthly_revenue", label="Monthly Revenue", value=money(aggregate.monthly_revenue)),
        StatCard(key="total_revenue", label="Total Revenue", value=money(aggregate.total_revenue)),
        StatCard(key="total_cost", label="Total Cost", value=money(aggregate.total_cost)),
        StatCard(key="net_value", label="Net Value", value=money(aggregate.net_value)),
    ]
    team_rows = [
        TeamTableRow(
            index=index,
            name=stats.name,
            role=stats.role,
            employment_type=stats.employment_type,
            share_type=stats.share_type,
            share_value=stats.share_value,
            duration_months=stats.duration_months,
            monthly_payout=money(stats.monthly_payout),
            total_payout=money(stats.total_payout),
        )
        for index, stats in enumerate(aggregate.member_stats)
    ]
    breakdown_rows = [
        BreakdownTableRow(
            label=f"Month {row.month}",
            gross_revenue=money(row.gross_revenue),
            team_cost=money(row.team_cost),
            referral_cost=money(row.referral_cost),
            net_income=money(row.net_income),
            net_tone="positive" if row.net_income >= 0 else "negative",
            cumulative_net=money(row.cumulative_net),
        )
        for row in estimate.breakdown
    ]
    return Dashboard(
        stats=stats,
        cost_meter=build_cost_meter(aggregate),
        team_rows=team_rows,
        show_empty_state=not team_rows,
        breakdown_rows=breakdown_rows,
    )
