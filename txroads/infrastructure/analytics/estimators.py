"""Heuristic commuter and cost estimates derived from feed metrics.

None of these figures are measured; they come from fixed modeling formulas:

* commuters affected by a road: ``congestion_index * 10000`` scaled by a
  per-road factor in ``[0.8, 1.16]`` taken from the road id;
* time wasted: delay per mile over ``WORKING_DAYS_PER_YEAR`` working days;
* per-road consequences (hours, truck days, fuel, jobs) from fixed ratios.
"""
from __future__ import annotations

import math
from typing import Iterable, Optional

from txroads.core.entities import CommuterImpact, RoadImpactEstimate, RoadwayRecord
from txroads.infrastructure.analytics.ranking import top_n

WORKING_DAYS_PER_YEAR = 220
COMMUTERS_PER_INDEX_POINT = 10_000

COMMUTER_HOURS_PER_DELAY_HOUR = 5_000
HOURS_PER_DAY = 24
FUEL_COST_SHARE = 4
FUEL_PRICE_PER_GALLON = 3.5
COST_PER_JOB = 50_000


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up, not to even."""
    return int(math.floor(value + 0.5))


def estimate_commuters(congestion_index: float, record_id: Optional[int] = None) -> int:
    base = congestion_index * COMMUTERS_PER_INDEX_POINT
    if record_id is not None:
        multiplier = 0.8 + math.fmod(record_id, 10) / 25
    else:
        multiplier = 1.0
    return round_half_up(base * multiplier)


def time_wasted(delay_per_mile: float) -> float:
    return delay_per_mile * WORKING_DAYS_PER_YEAR


def build_commuter_impacts(
    records: Iterable[RoadwayRecord], limit: int = 15, name_limit: int = 20
) -> list[CommuterImpact]:
    """Estimate the commuter burden of the most congested roads."""
    impacts: list[CommuterImpact] = []
    for ranked in top_n(records, "congestion_index", limit, name_limit=name_limit):
        record = ranked.record
        commuters = estimate_commuters(record.congestion_index, record.id)
        impacts.append(
            CommuterImpact(
                position=ranked.position,
                record=record,
                display_name=ranked.display_name,
                full_name=ranked.full_name,
                estimated_commuters=commuters,
                cost_per_commuter=record.cost_of_delay / commuters if commuters else 0.0,
                time_wasted=time_wasted(record.delay_per_mile),
            )
        )
    return impacts


def estimate_road_impact(record: RoadwayRecord) -> RoadImpactEstimate:
    return RoadImpactEstimate(
        annual_commuter_hours=round_half_up(record.delay_per_mile * COMMUTER_HOURS_PER_DELAY_HOUR),
        truck_delay_days=round_half_up(record.truck_delay / HOURS_PER_DAY),
        fuel_gallons=round_half_up(record.cost_of_delay / FUEL_COST_SHARE / FUEL_PRICE_PER_GALLON),
        jobs_equivalent=round_half_up(record.cost_of_delay / COST_PER_JOB),
    )


__all__ = [
    "WORKING_DAYS_PER_YEAR",
    "build_commuter_impacts",
    "estimate_commuters",
    "estimate_road_impact",
    "round_half_up",
    "time_wasted",
]
