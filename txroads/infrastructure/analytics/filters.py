"""Client-side filtering helpers for the roadway map."""
from __future__ import annotations

from typing import Iterable, Optional, Sequence, TypeVar

from txroads.core.entities import DistrictSummary, MapView, RoadwayRecord

T = TypeVar("T")

ALL_DISTRICTS = "all"
DEFAULT_CONGESTION_RANGE: tuple[float, float] = (0.0, 10.0)

TEXAS_CENTER: tuple[float, float] = (31.9686, -99.9018)
STATE_ZOOM = 6
DISTRICT_ZOOM = 9


def list_districts(records: Iterable[RoadwayRecord]) -> list[str]:
    return sorted({record.district for record in records})


def filter_roadways(
    records: Iterable[RoadwayRecord],
    district: Optional[str] = None,
    congestion_range: tuple[float, float] = DEFAULT_CONGESTION_RANGE,
) -> list[RoadwayRecord]:
    """Keep records of ``district`` whose index lies within the inclusive range."""
    low, high = congestion_range
    return [
        record
        for record in records
        if (district in (None, ALL_DISTRICTS) or record.district == district)
        and low <= record.congestion_index <= high
    ]


def compute_map_view(records: Sequence[RoadwayRecord], district: Optional[str] = None) -> MapView:
    """Centre on the filtered roads of a district, or on Texas otherwise."""
    if district not in (None, ALL_DISTRICTS):
        points = [point for record in records for point in record.geometry.points()]
        if points:
            lon = sum(point[0] for point in points) / len(points)
            lat = sum(point[1] for point in points) / len(points)
            return MapView(center_lat=lat, center_lon=lon, zoom=DISTRICT_ZOOM)
    return MapView(center_lat=TEXAS_CENTER[0], center_lon=TEXAS_CENTER[1], zoom=STATE_ZOOM)


def find_district(
    districts: Iterable[DistrictSummary], name: Optional[str]
) -> Optional[DistrictSummary]:
    """Return the summary named ``name``, or ``None`` when no district matches."""
    return next((district for district in districts if district.name == name), None)


def toggle_selection(current: Optional[T], clicked: T) -> Optional[T]:
    """Clicking the selected item clears the selection, anything else selects it."""
    return None if current == clicked else clicked


__all__ = [
    "ALL_DISTRICTS",
    "DEFAULT_CONGESTION_RANGE",
    "TEXAS_CENTER",
    "compute_map_view",
    "filter_roadways",
    "find_district",
    "list_districts",
    "toggle_selection",
]
