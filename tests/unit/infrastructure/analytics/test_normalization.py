"""Tests for the 0-100 multi-metric district normalisation."""
from __future__ import annotations

from operator import attrgetter

from txroads.core.entities import DistrictSummary
from txroads.infrastructure.analytics.normalization import normalize_metrics


def _district(name: str, road_count: int, congestion: float, cost: float) -> DistrictSummary:
    return DistrictSummary(
        name=name,
        road_count=road_count,
        total_delay_per_mile=0.0,
        avg_delay_per_mile=0.0,
        total_cost_of_delay=cost,
        avg_congestion_index=congestion,
    )


def test_scores_are_relative_to_the_maximum() -> None:
    rows = normalize_metrics([_district("Houston", 10, 2.0, 100.0), _district("Austin", 5, 1.0, 25.0)])

    houston, austin = rows
    assert [value.score for value in houston.values] == [100.0, 100.0, 100.0]
    assert [value.score for value in austin.values] == [50.0, 50.0, 25.0]
    assert austin.score_for("Road Count") == 50.0
    assert austin.values[0].actual == 5


def test_zero_maximum_gives_zero_scores() -> None:
    rows = normalize_metrics([_district("Waco", 1, 0.0, 0.0), _district("Tyler", 2, 0.0, 0.0)])

    assert [row.score_for("Cost of Delay") for row in rows] == [0.0, 0.0]
    assert [row.score_for("Avg Congestion") for row in rows] == [0.0, 0.0]


def test_maximum_defaults_to_the_scored_items() -> None:
    districts = [_district("Houston", 30, 2.0, 100.0), _district("Austin", 10, 1.0, 50.0)]

    (austin,) = normalize_metrics(districts[1:])

    assert austin.score_for("Road Count") == 100.0


def test_reference_population_sets_the_maximum() -> None:
    districts = [_district(name, 3, 1.0, 10.0) for name in "ABCDEF"]
    districts.append(_district("G", 1, 4.0, 5.0))

    rows = normalize_metrics(districts[:6], reference=districts)

    assert [row.name for row in rows] == list("ABCDEF")
    assert [row.score_for("Avg Congestion") for row in rows] == [25.0] * 6
    assert [row.score_for("Road Count") for row in rows] == [100.0] * 6


def test_custom_metrics_and_empty_input() -> None:
    metrics = {"Roads": attrgetter("road_count")}

    assert normalize_metrics([], metrics) == []
    (row,) = normalize_metrics([_district("Bryan", 4, 1.0, 1.0)], metrics)
    assert row.score_for("Roads") == 100.0
    assert row.score_for("Avg Congestion") is None
