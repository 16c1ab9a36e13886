from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .models.dashboard import Dashboard
from .models.project import ProjectState
from .models.results import AggregateResult, BreakdownRow


Raw = Union[str, int, float, None]


class PatchModel(BaseModel):
    """Partial edit of form fields; values stay raw so the models can coerce them."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class ProjectConfigPatch(PatchModel):
    project_name: Optional[str] = None
    duration_months: Raw = None
    pricing_model: Optional[str] = None
    hourly_rate: Raw = None
    hours_per_day: Raw = None
    daily_rate: Raw = None
    days_per_month: Raw = None
    fixed_monthly: Raw = None

    model_config = ConfigDict(
        alias_generator=lambda name: "duration" if name == "duration_months" else to_camel(name),
        populate_by_name=True,
    )


class MemberPatch(PatchModel):
    name: Optional[str] = None
    role: Optional[str] = None
    employment_type: Optional[str] = None
    share_type: Optional[str] = None
    share_value: Raw = None
    duration_months: Raw = None

    model_config = ConfigDict(
        alias_generator=lambda name: {"duration_months": "duration", "employment_type": "type"}.get(name, to_camel(name)),
        populate_by_name=True,
    )


class EstimateResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    state: ProjectState
    aggregate: AggregateResult
    breakdown: List[BreakdownRow]
    dashboard: Dashboard


class ExportSavedResponse(BaseModel):
    filename: str
    path: str
