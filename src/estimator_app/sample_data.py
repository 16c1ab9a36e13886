from __future__ import annotations

from .models.common import EmploymentType, PricingModel, ShareType
from .models.project import Member, ProjectState


def build_sample_project() -> ProjectState:
    members = [
        Member(
            name="Ana Costa",
            role="Tech Lead",
            employment_type=EmploymentType.FULL_TIME,
            share_type=ShareType.PERCENTAGE,
            share_value=30,
            duration_months=6,
        ),
        Member(
            name="Jon Reyes",
            role="Developer",
            employment_type=EmploymentType.PART_TIME,
            share_type=ShareType.FIXED,
            share_value=2500,
            duration_months=4,
        ),
        Member(
            name="Partner Agency",
            role="Sales",
            employment_type=EmploymentType.REFERRAL,
            share_type=ShareType.PERCENTAGE,
            share_value=5,
            duration_months=12,
        ),
    ]
    return ProjectState(
        project_name="Client Portal Rebuild",
        duration_months=6,
        pricing_model=PricingModel.HOURLY,
        hourly_rate=120,
        hours_per_day=8,
        days_per_month=20,
        members=members,
    )
