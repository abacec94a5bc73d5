"""Tests for the map filters and the selection toggle."""
from __future__ import annotations

from txroads.core.entities import DistrictSummary, RoadGeometry
from txroads.infrastructure.analytics.filters import (
    TEXAS_CENTER,
    compute_map_view,
    filter_roadways,
    find_district,
    list_districts,
    toggle_selection,
)


def test_filter_by_district_and_inclusive_range(make_record) -> None:
    records = [
        make_record(1, district="Austin", congestion_index=1.0),
        make_record(2, district="Austin", congestion_index=2.0),
        make_record(3, district="Austin", congestion_index=2.1),
        make_record(4, district="Dallas", congestion_index=1.5),
    ]

    filtered = filter_roadways(records, district="Austin", congestion_range=(1.0, 2.0))

    assert [record.id for record in filtered] == [1, 2]


def test_all_districts_keeps_every_district(make_record) -> None:
    records = [make_record(1, district="Austin"), make_record(2, district="Dallas")]

    assert filter_roadways(records, district="all") == records
    assert filter_roadways(records) == records


def test_list_districts_is_sorted_and_unique(make_record) -> None:
    records = [make_record(1, district="Waco"), make_record(2, district="Austin"), make_record(3, district="Waco")]

    assert list_districts(records) == ["Austin", "Waco"]


def test_map_view_centres_on_selected_district(make_record) -> None:
    records = [
        make_record(1, geometry=RoadGeometry("LineString", [[-97.0, 30.0], [-97.2, 30.2]])),
        make_record(2, geometry=RoadGeometry("LineString", [[-97.4, 30.4], [-97.6, 30.6]])),
    ]

    view = compute_map_view(records, district="Austin")

    assert round(view.center_lon, 6) == -97.3
    assert round(view.center_lat, 6) == 30.3
    assert view.zoom == 9


def test_map_view_defaults_to_texas(make_record) -> None:
    state = compute_map_view([make_record(1)], district="all")
    empty_district = compute_map_view([], district="Austin")

    for view in (state, empty_district):
        assert (view.center_lat, view.center_lon) == TEXAS_CENTER
        assert view.zoom == 6


def test_toggle_selection() -> None:
    assert toggle_selection(None, "Houston") == "Houston"
    assert toggle_selection("Houston", "Houston") is None
    assert toggle_selection("Houston", "Dallas") == "Dallas"


def test_find_district_tolerates_stale_selection() -> None:
    districts = [DistrictSummary("Austin", 2, 0.0, 0.0, 10.0, 1.5)]

    assert find_district(districts, "Austin") is districts[0]
    assert find_district(districts, "Waco") is None
    assert find_district(districts, None) is None
    assert find_district([], "Austin") is None
