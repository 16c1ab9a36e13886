from __future__ import annotations

import math
import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


_NUMBER_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER_PREFIX = re.compile(r"^\s*[+-]?\d+")


class PricingModel(str, Enum):
    HOURLY = "hourly"
    DAILY = "daily"
    FIXED = "fixed"


class EmploymentType(str, Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    REFERRAL = "referral"


class ShareType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


def coerce_number(value: Any, default: float = 0.0) -> float:
    """Parse a form value the lenient way: leading numeric prefix or ``default``.

    Never raises. Booleans, ``None``, blanks, NaN and infinities all yield ``default``.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return default
    else:
        match = _NUMBER_PREFIX.match(str(value))
        if match is None:
            return default
        number = float(match.group(0))
    if not math.isfinite(number):
        return default
    return number


def coerce_months(value: Any, default: int) -> int:
    """Integer part of a month count, truncated toward zero, or ``default``."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return default
        return int(value)
    match = _INTEGER_PREFIX.match(str(value))
    if match is None:
        return default
    return int(match.group(0))


class EstimatorModel(BaseModel):
    """Immutable input value serialized with the camelCase keys of the stored record."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ResultModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
