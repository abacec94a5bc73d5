"""Group-by rollups of roadway records.

Every aggregator builds new containers and leaves its input untouched. Empty
groups and zero denominators produce zeros rather than NaN.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from txroads.core.entities import (
    CostOverview,
    DistrictCostSummary,
    DistrictSummary,
    RoadTypeBucket,
    RoadwayRecord,
    SeverityBucket,
)
from txroads.infrastructure.analytics.estimators import estimate_commuters, time_wasted
from txroads.infrastructure.rules.road_types import ROAD_TYPES, classify_road_type
from txroads.infrastructure.rules.severity import SEVERITY_TIERS
from txroads.utils.logger import logger

TEXAS_POPULATION = 29_000_000
COMMUTER_SHARE = 0.3
COMMERCIAL_TRUCKS = 100_000


def _mean(total: float, count: int) -> float:
    return total / count if count else 0.0


def _percentage(part: float, whole: float) -> float:
    return 100 * part / whole if whole else 0.0


@dataclass
class _Accumulator:
    roads: list[RoadwayRecord] = field(default_factory=list)
    delay: float = 0.0
    congestion: float = 0.0
    cost: float = 0.0
    truck_cost: float = 0.0

    def add(self, record: RoadwayRecord) -> None:
        self.roads.append(record)
        self.delay += record.delay_per_mile
        self.congestion += record.congestion_index
        self.cost += record.cost_of_delay
        self.truck_cost += record.cost_of_truck_delay

    @property
    def count(self) -> int:
        return len(self.roads)


def _group(records: Iterable[RoadwayRecord], key) -> dict[str, _Accumulator]:
    groups: dict[str, _Accumulator] = {}
    for record in records:
        groups.setdefault(key(record), _Accumulator()).add(record)
    return groups


def aggregate_by_district(records: Iterable[RoadwayRecord]) -> list[DistrictSummary]:
    """Summarise records per district in first-seen district order."""
    groups = _group(records, lambda record: record.district)
    logger.debug("Aggregated roadways into {} district(s)", len(groups))
    return [
        DistrictSummary(
            name=name,
            road_count=group.count,
            total_delay_per_mile=group.delay,
            avg_delay_per_mile=_mean(group.delay, group.count),
            total_cost_of_delay=group.cost,
            avg_congestion_index=_mean(group.congestion, group.count),
        )
        for name, group in groups.items()
    ]


def aggregate_district_costs(records: Iterable[RoadwayRecord]) -> list[DistrictCostSummary]:
    groups = _group(records, lambda record: record.district)
    return [
        DistrictCostSummary(
            name=name,
            road_count=group.count,
            total_cost=group.cost,
            truck_cost=group.truck_cost,
            commuter_cost=group.cost - group.truck_cost,
        )
        for name, group in groups.items()
    ]


def aggregate_by_severity(records: Iterable[RoadwayRecord]) -> list[SeverityBucket]:
    """Bucket records into the five severity tiers, in tier order.

    Buckets are always present; records whose congestion index matches no
    tier are left out of every bucket.
    """

    members: list[list[RoadwayRecord]] = [[] for _ in SEVERITY_TIERS]
    for record in records:
        for index, tier in enumerate(SEVERITY_TIERS):
            if tier.contains(record.congestion_index):
                members[index].append(record)
                break
        else:
            logger.debug("Roadway {} has no severity tier", record.id)

    buckets: list[SeverityBucket] = []
    for tier, roads in zip(SEVERITY_TIERS, members):
        total_delay = sum(road.delay_per_mile for road in roads)
        buckets.append(
            SeverityBucket(
                label=tier.label,
                low=tier.low,
                high=tier.high,
                color=tier.color,
                road_count=len(roads),
                total_commuters=sum(
                    estimate_commuters(road.congestion_index, road.id) for road in roads
                ),
                total_cost=sum(road.cost_of_delay for road in roads),
                avg_time_wasted=time_wasted(_mean(total_delay, len(roads))),
                roads=tuple(roads),
            )
        )
    return buckets


def aggregate_by_road_type(
    records: Sequence[RoadwayRecord], include_empty: bool = False
) -> list[RoadTypeBucket]:
    """Summarise records per road type.

    Types appear in first-seen order; with ``include_empty`` every known type is
    returned in rule order, zero-filled when it has no roads.
    """

    statewide_cost = sum(record.cost_of_delay for record in records)
    groups = _group(records, lambda record: classify_road_type(record.name))
    if include_empty:
        groups = {road_type: groups.get(road_type, _Accumulator()) for road_type in ROAD_TYPES}

    return [
        RoadTypeBucket(
            road_type=road_type,
            count=group.count,
            avg_congestion=_mean(group.congestion, group.count),
            avg_delay=_mean(group.delay, group.count),
            total_cost=group.cost,
            cost_percentage=_percentage(group.cost, statewide_cost),
            roads=tuple(group.roads),
        )
        for road_type, group in groups.items()
    ]


def summarize_costs(
    records: Iterable[RoadwayRecord],
    population: int = TEXAS_POPULATION,
    commuter_share: float = COMMUTER_SHARE,
    trucks: int = COMMERCIAL_TRUCKS,
) -> CostOverview:
    total = _Accumulator()
    for record in records:
        total.add(record)
    commuters = population * commuter_share
    return CostOverview(
        total_cost=total.cost,
        total_truck_cost=total.truck_cost,
        total_commuter_cost=total.cost - total.truck_cost,
        truck_share=_percentage(total.truck_cost, total.cost),
        cost_per_capita=total.cost / population if population else 0.0,
        cost_per_commuter=total.cost / commuters if commuters else 0.0,
        commuter_cost_per_commuter=(
            (total.cost - total.truck_cost) / commuters if commuters else 0.0
        ),
        truck_cost_per_truck=total.truck_cost / trucks if trucks else 0.0,
    )


def find_cost_violations(records: Iterable[RoadwayRecord]) -> list[RoadwayRecord]:
    """Return records whose truck cost exceeds their total cost of delay."""
    return [record for record in records if record.cost_of_truck_delay > record.cost_of_delay]


__all__ = [
    "COMMERCIAL_TRUCKS",
    "COMMUTER_SHARE",
    "TEXAS_POPULATION",
    "aggregate_by_district",
    "aggregate_by_road_type",
    "aggregate_by_severity",
    "aggregate_district_costs",
    "find_cost_violations",
    "summarize_costs",
]
