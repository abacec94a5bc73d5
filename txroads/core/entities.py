"""Core entities for the Texas congested roadways domain."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Optional


def _freeze(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


@dataclass(frozen=True)
class RoadGeometry:
    """GeoJSON geometry of a roadway segment, coordinates as nested tuples."""

    type: str
    coordinates: tuple

    def __post_init__(self) -> None:
        object.__setattr__(self, "coordinates", _freeze(self.coordinates))

    def points(self) -> Iterator[tuple[float, float]]:
        """Yield every ``(lon, lat)`` pair of the path."""
        if self.type == "MultiLineString":
            lines = self.coordinates
        else:
            lines = (self.coordinates,)
        for line in lines:
            for point in line:
                yield float(point[0]), float(point[1])


@dataclass(frozen=True)
class RoadwayRecord:
    """Domain entity representing one of the top congested roadway segments."""

    id: int
    name: str
    rank: int
    truck_rank: int
    district: str
    delay_per_mile: float
    congestion_index: float
    cost_of_delay: float
    truck_delay: float
    cost_of_truck_delay: float
    year: int
    geometry: RoadGeometry


@dataclass(frozen=True)
class DistrictSummary:
    name: str
    road_count: int
    total_delay_per_mile: float
    avg_delay_per_mile: float
    total_cost_of_delay: float
    avg_congestion_index: float


@dataclass(frozen=True)
class DistrictCostSummary:
    """Cost of delay for one district split into truck and commuter shares."""

    name: str
    road_count: int
    total_cost: float
    truck_cost: float
    commuter_cost: float


@dataclass(frozen=True)
class SeverityBucket:
    """Aggregated figures for the roads falling in one congestion tier."""

    label: str
    low: float
    high: float
    color: str
    road_count: int
    total_commuters: int
    total_cost: float
    avg_time_wasted: float
    roads: tuple[RoadwayRecord, ...] = ()


@dataclass(frozen=True)
class RoadTypeBucket:
    road_type: str
    count: int
    avg_congestion: float
    avg_delay: float
    total_cost: float
    cost_percentage: float
    roads: tuple[RoadwayRecord, ...] = ()


@dataclass(frozen=True)
class CostOverview:
    """Statewide cost totals and per-person estimates."""

    total_cost: float
    total_truck_cost: float
    total_commuter_cost: float
    truck_share: float
    cost_per_capita: float
    cost_per_commuter: float
    commuter_cost_per_commuter: float
    truck_cost_per_truck: float


@dataclass(frozen=True)
class RankedRoadway:
    """A record projected into a top-N view with a display-ready name."""

    position: int
    record: RoadwayRecord
    value: float
    display_name: str
    full_name: str


@dataclass(frozen=True)
class CommuterImpact:
    position: int
    record: RoadwayRecord
    display_name: str
    full_name: str
    estimated_commuters: int
    cost_per_commuter: float
    time_wasted: float


@dataclass(frozen=True)
class RoadImpactEstimate:
    """Illustrative per-road consequences derived from the feed metrics."""

    annual_commuter_hours: int
    truck_delay_days: int
    fuel_gallons: int
    jobs_equivalent: int


@dataclass(frozen=True)
class NormalizedValue:
    metric: str
    score: float
    actual: float


@dataclass(frozen=True)
class NormalizedRow:
    name: str
    values: tuple[NormalizedValue, ...]

    def score_for(self, metric: str) -> Optional[float]:
        for value in self.values:
            if value.metric == metric:
                return value.score
        return None


@dataclass(frozen=True)
class MapView:
    center_lat: float
    center_lon: float
    zoom: int


__all__ = [
    "CommuterImpact",
    "CostOverview",
    "DistrictCostSummary",
    "DistrictSummary",
    "MapView",
    "NormalizedRow",
    "NormalizedValue",
    "RankedRoadway",
    "RoadGeometry",
    "RoadImpactEstimate",
    "RoadTypeBucket",
    "RoadwayRecord",
    "SeverityBucket",
]
