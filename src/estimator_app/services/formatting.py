from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal


def round_money(amount: float) -> int:
    """Whole currency units, halves rounded away from zero."""
    if not math.isfinite(amount):
        return 0
    return int(Decimal(repr(float(amount))).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_money(amount: float, symbol: str = "$") -> str:
    value = round_money(amount)
    # Amounts that round to zero keep their sign: -0.4 renders as -$0.
    sign = "-" if value < 0 or (value == 0 and amount < 0) else ""
    return f"{sign}{symbol}{abs(value):,}"


def format_percent(value: float, decimals: int = 1) -> str:
    return f"{value:.{decimals}f}%"
