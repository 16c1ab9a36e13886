from __future__ import annotations

from typing import List

from pydantic import Field

from .common import ResultModel


class StatCard(ResultModel):
    key: str
    label: str
    value: str


class CostMeter(ResultModel):
    label: str
    bar_width: float = Field(..., description="Progress bar fill, 0-100")
    warning: str = ""


class TeamTableRow(ResultModel):
    index: int
    name: str
    role: str
    employment_type: str
    share_type: str
    share_value: float
    duration_months: int
    monthly_payout: str
    total_payout: str


class BreakdownTableRow(ResultModel):
    label: str
    gross_revenue: str
    team_cost: str
    referral_cost: str
    net_income: str
    net_tone: str
    cumulative_net: str


class Dashboard(ResultModel):
    stats: List[StatCard]
    cost_meter: CostMeter
    team_rows: List[TeamTableRow]
    show_empty_state: bool
    breakdown_rows: List[BreakdownTableRow]
