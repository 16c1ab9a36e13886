from __future__ import annotations

from typing import List

from .common import ResultModel
from .project import Member


class MemberStats(Member):
    effective_duration: int
    monthly_payout: float
    total_payout: float


class AggregateResult(ResultModel):
    monthly_revenue: float
    total_revenue: float
    total_cost: float
    net_value: float
    cost_percent_of_revenue: float
    total_allocated_percent: float
    member_stats: List[MemberStats]
    project_duration: int


class BreakdownRow(ResultModel):
    month: int
    gross_revenue: float
    team_cost: float
    referral_cost: float
    total_cost: float
    net_income: float
    cumulative_net: float


class ProjectEstimate(ResultModel):
    aggregate: AggregateResult
    breakdown: List[BreakdownRow]
