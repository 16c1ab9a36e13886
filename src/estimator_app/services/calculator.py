from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

from ..models.common import PricingModel
from ..models.project import Member, ProjectConfig
from ..models.results import AggregateResult, BreakdownRow, MemberStats, ProjectEstimate


logger = logging.getLogger(__name__)


@dataclass
class AllocationState:
    total_cost: float = 0.0
    total_allocated_percent: float = 0.0


class ProjectCalculator:
    def resolve_monthly_revenue(self, config: ProjectConfig) -> float:
        model = config.pricing_model
        if model == PricingModel.FIXED:
            return config.fixed_monthly
        if model == PricingModel.DAILY:
            return config.daily_rate * config.days_per_month
        if model == PricingModel.HOURLY:
            return config.hourly_rate * config.hours_per_day * config.days_per_month
        return 0.0

    def compute_project(self, config: ProjectConfig, members: Sequence[Member]) -> AggregateResult:
        monthly_revenue = self.resolve_monthly_revenue(config)
        project_duration = config.duration_months
        total_revenue = monthly_revenue * project_duration

        allocation = AllocationState()
        member_stats = [
            self._allocate_member(member, monthly_revenue, project_duration, allocation)
            for member in members
        ]

        total_cost = allocation.total_cost
        net_value = total_revenue - total_cost
        cost_percent = (total_cost / total_revenue) * 100 if total_revenue > 0 else 0.0

        logger.debug(
            "Computed project: revenue=%.2f cost=%.2f members=%d months=%d",
            total_revenue,
            total_cost,
            len(member_stats),
            project_duration,
        )
        return AggregateResult(
            monthly_revenue=monthly_revenue,
            total_revenue=total_revenue,
            total_cost=total_cost,
            net_value=net_value,
            cost_percent_of_revenue=cost_percent,
            total_allocated_percent=allocation.total_allocated_percent,
            member_stats=member_stats,
            project_duration=project_duration,
        )

    def generate_breakdown(self, aggregate: AggregateResult) -> List[BreakdownRow]:
        rows: List[BreakdownRow] = []
        cumulative_net = 0.0
        for month in range(1, aggregate.project_duration + 1):
            team_cost = 0.0
            referral_cost = 0.0
            for stats in aggregate.member_stats:
                if month > stats.effective_duration:
                    continue
                if stats.is_referral:
                    referral_cost += stats.monthly_payout
                else:
                    team_cost += stats.monthly_payout
            total_cost = team_cost + referral_cost
            net_income = aggregate.monthly_revenue - total_cost
            cumulative_net += net_income
            rows.append(
                BreakdownRow(
                    month=month,
                    gross_revenue=aggregate.monthly_revenue,
                    team_cost=team_cost,
                    referral_cost=referral_cost,
                    total_cost=total_cost,
                    net_income=net_income,
                    cumulative_net=cumulative_net,
                )
            )
        return rows

    def estimate(self, config: ProjectConfig, members: Sequence[Member]) -> ProjectEstimate:
        aggregate = self.compute_project(config, members)
        return ProjectEstimate(aggregate=aggregate, breakdown=self.generate_breakdown(aggregate))

    def _allocate_member(
        self,
        member: Member,
        monthly_revenue: float,
        project_duration: int,
        allocation: AllocationState,
    ) -> MemberStats:
        # Compensation never outlasts the project.
        effective_duration = min(member.duration_months, project_duration)

        if member.is_percentage_share:
            allocation.total_allocated_percent += member.share_value
            monthly_payout = monthly_revenue * (member.share_value / 100)
        else:
            monthly_payout = member.share_value

        total_payout = monthly_payout * effective_duration
        allocation.total_cost += total_payout
        return MemberStats(
            **member.model_dump(),
            effective_duration=effective_duration,
            monthly_payout=monthly_payout,
            total_payout=total_payout,
        )


calculator = ProjectCalculator()


def resolve_monthly_revenue(config: ProjectConfig) -> float:
    return calculator.resolve_monthly_revenue(config)


def compute_project(config: ProjectConfig, members: Sequence[Member]) -> AggregateResult:
    return calculator.compute_project(config, members)


def generate_breakdown(aggregate: AggregateResult) -> List[BreakdownRow]:
    return calculator.generate_breakdown(aggregate)


def estimate_project(config: ProjectConfig, members: Sequence[Member]) -> ProjectEstimate:
    return calculator.estimate(config, members)
