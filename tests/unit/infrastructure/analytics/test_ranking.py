"""Tests for top-N selection and display-name truncation."""
from __future__ import annotations

import pytest

from txroads.core.entities import DistrictSummary
from txroads.infrastructure.analytics.ranking import rank_by, top_n, truncate_name


def test_top_n_descending(make_record) -> None:
    records = [
        make_record(1, congestion_index=2.0),
        make_record(2, congestion_index=1.0),
        make_record(3, congestion_index=3.0),
    ]

    ranked = top_n(records, "congestion_index", 2, "desc")

    assert [item.value for item in ranked] == [3.0, 2.0]
    assert [item.position for item in ranked] == [1, 2]
    assert [record.id for record in records] == [1, 2, 3]


def test_top_n_ascending_by_rank(make_record) -> None:
    records = [make_record(1, rank=5), make_record(2, rank=1), make_record(3, rank=3)]

    ranked = top_n(records, "rank", 10, direction="asc")

    assert [item.record.id for item in ranked] == [2, 3, 1]


@pytest.mark.parametrize("direction", ["asc", "desc"])
def test_ties_keep_source_order(make_record, direction: str) -> None:
    records = [make_record(index, congestion_index=1.5) for index in (4, 2, 9)]

    ranked = top_n(records, "congestion_index", 3, direction=direction)

    assert [item.record.id for item in ranked] == [4, 2, 9]


def test_top_n_accepts_callable_key(make_record) -> None:
    records = [
        make_record(1, cost_of_delay=100.0, cost_of_truck_delay=90.0),
        make_record(2, cost_of_delay=500.0, cost_of_truck_delay=100.0),
    ]

    ranked = top_n(records, lambda record: record.cost_of_delay - record.cost_of_truck_delay, 1)

    assert ranked[0].record.id == 2
    assert ranked[0].value == 400.0


def test_top_n_truncates_display_names(make_record) -> None:
    long_name = "IH 610 West Loop from IH 10 to US 59"
    ranked = top_n([make_record(1, name=long_name)], "rank", 1, name_limit=25)

    assert ranked[0].display_name == long_name[:22] + "..."
    assert len(ranked[0].display_name) == 25
    assert ranked[0].full_name == long_name


def test_truncate_name_keeps_names_within_limit() -> None:
    assert truncate_name("x" * 20, 20) == "x" * 20
    assert truncate_name("x" * 21, 20) == "x" * 17 + "..."
    assert truncate_name("anything", None) == "anything"


def test_top_n_edge_sizes(make_record) -> None:
    records = [make_record(1), make_record(2)]

    assert top_n(records, "rank", 0) == []
    assert len(top_n(records, "rank", 10)) == 2
    assert top_n([], "rank", 5) == []


def test_top_n_rejects_invalid_arguments(make_record) -> None:
    with pytest.raises(ValueError):
        top_n([make_record(1)], "rank", 1, direction="up")
    with pytest.raises(ValueError):
        top_n([make_record(1)], "rank", -1)


def test_rank_by_orders_summaries_descending() -> None:
    summaries = [
        DistrictSummary("Austin", 3, 0.0, 0.0, 10.0, 1.0),
        DistrictSummary("Houston", 9, 0.0, 0.0, 5.0, 1.0),
        DistrictSummary("Dallas", 3, 0.0, 0.0, 7.0, 1.0),
    ]

    assert [item.name for item in rank_by(summaries, "road_count")] == ["Houston", "Austin", "Dallas"]
    assert [item.name for item in rank_by(summaries, "total_cost_of_delay", 1)] == ["Austin"]


def test_top_n_shows_a_separate_value(make_record) -> None:
    records = [
        make_record(1, rank=2, delay_per_mile=20.0),
        make_record(2, rank=1, delay_per_mile=10.0),
    ]

    ranked = top_n(records, "rank", 2, direction="asc", value="delay_per_mile")

    assert [item.record.id for item in ranked] == [2, 1]
    assert [item.value for item in ranked] == [10.0, 20.0]
