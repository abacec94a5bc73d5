"""Tests for display formatting helpers."""
from __future__ import annotations

import pytest

from txroads.utils.formatting import format_currency, format_number, format_percent, format_time


@pytest.mark.parametrize(
    ("value", "expected"),
    [(1234.5, "$1,235"), (0, "$0"), (-5.4, "-$5"), (2_500_000_000, "$2,500,000,000")],
)
def test_format_currency(value, expected) -> None:
    assert format_currency(value) == expected


def test_format_number() -> None:
    assert format_number(1234567) == "1,234,567"
    assert format_number(1.23456) == "1.235"
    assert format_number(2.5) == "2.5"


def test_format_percent() -> None:
    assert format_percent(12.34) == "12.3%"
    assert format_percent(12.25) == "12.3%"
    assert format_percent(12.0) == "12%"


@pytest.mark.parametrize(
    ("minutes", "expected"),
    [(45, "45 min"), (120, "2 hr"), (135, "2 hr 15 min"), (0, "0 min")],
)
def test_format_time(minutes, expected) -> None:
    assert format_time(minutes) == expected
