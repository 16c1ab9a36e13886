from __future__ import annotations

from enum import Enum
from typing import Any, List

from pydantic import Field, field_validator

from .common import (
    EmploymentType,
    EstimatorModel,
    PricingModel,
    ShareType,
    coerce_months,
    coerce_number,
)


STORAGE_KEY = "project_estimator_v1"


def _lenient_choice(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    return "" if value is None else str(value).strip().lower()


class ProjectConfig(EstimatorModel):
    project_name: str = ""
    duration_months: int = Field(12, alias="duration", description="Project length in months, at least 1")
    pricing_model: str = PricingModel.HOURLY.value
    hourly_rate: float = 100.0
    hours_per_day: float = 8.0
    daily_rate: float = 800.0
    days_per_month: float = 20.0
    fixed_monthly: float = 10000.0

    @field_validator("project_name", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("duration_months", mode="before")
    @classmethod
    def _duration(cls, value: Any) -> int:
        return max(1, coerce_months(value, default=1))

    @field_validator("pricing_model", mode="before")
    @classmethod
    def _pricing_model(cls, value: Any) -> str:
        return _lenient_choice(value)

    @field_validator("hourly_rate", "hours_per_day", "daily_rate", "days_per_month", "fixed_monthly", mode="before")
    @classmethod
    def _amount(cls, value: Any) -> float:
        return coerce_number(value)


class Member(EstimatorModel):
    name: str = "New Member"
    role: str = "Developer"
    employment_type: str = Field(EmploymentType.FULL_TIME.value, alias="type")
    share_type: str = ShareType.PERCENTAGE.value
    share_value: float = 10.0
    duration_months: int = Field(0, alias="duration", description="Planned months of compensation")

    @field_validator("name", "role", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("employment_type", "share_type", mode="before")
    @classmethod
    def _choice(cls, value: Any) -> str:
        return _lenient_choice(value)

    @field_validator("share_value", mode="before")
    @classmethod
    def _share_value(cls, value: Any) -> float:
        return coerce_number(value)

    @field_validator("duration_months", mode="before")
    @classmethod
    def _duration(cls, value: Any) -> int:
        return max(0, coerce_months(value, default=0))

    @property
    def is_referral(self) -> bool:
        return self.employment_type == EmploymentType.REFERRAL

    @property
    def is_percentage_share(self) -> bool:
        return self.share_type == ShareType.PERCENTAGE


class ProjectState(ProjectConfig):
    """Everything the user edits: the project configuration plus its roster."""

    members: List[Member] = Field(default_factory=list)

    @property
    def config(self) -> ProjectConfig:
        return ProjectConfig.model_validate(self.model_dump(exclude={"members"}))

    def new_member(self, **overrides: Any) -> Member:
        values: dict[str, Any] = {"duration_months": self.duration_months}
        values.update(overrides)
        return Member.model_validate(values)
