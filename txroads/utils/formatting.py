"""Display formatting for dollar amounts, counts, percentages and durations."""
from __future__ import annotations

import math


def _half_up(value: float, digits: int = 0) -> float:
    factor = 10**digits
    return math.floor(abs(value) * factor + 0.5) / factor * (1 if value >= 0 else -1)


def format_number(value: float) -> str:
    """Group thousands with commas, keeping at most three decimals."""
    rounded = _half_up(value, 3)
    if float(rounded).is_integer():
        return f"{int(rounded):,}"
    return f"{rounded:,.3f}".rstrip("0").rstrip(".")


def format_currency(value: float) -> str:
    amount = int(_half_up(value))
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,}"


def format_percent(value: float) -> str:
    """Format a 0-100 value with one optional decimal, e.g. ``12.5%``."""
    rounded = _half_up(value, 1)
    if float(rounded).is_integer():
        return f"{int(rounded)}%"
    return f"{rounded:.1f}%"


def format_time(minutes: float) -> str:
    hours = math.floor(minutes / 60)
    mins = int(_half_up(minutes % 60))
    if hours == 0:
        return f"{mins} min"
    if mins == 0:
        return f"{hours} hr"
    return f"{hours} hr {mins} min"


__all__ = ["format_currency", "format_number", "format_percent", "format_time"]
