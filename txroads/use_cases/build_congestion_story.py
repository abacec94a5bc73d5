"""Use case assembling every roadway view from one feed snapshot."""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Mapping, Optional, Protocol, Sequence

from txroads.core.entities import (
    CommuterImpact,
    CostOverview,
    DistrictCostSummary,
    DistrictSummary,
    NormalizedRow,
    RankedRoadway,
    RoadTypeBucket,
    RoadwayRecord,
    SeverityBucket,
)
from txroads.infrastructure.analytics.aggregations import (
    aggregate_by_district,
    aggregate_by_road_type,
    aggregate_by_severity,
    aggregate_district_costs,
    find_cost_violations,
    summarize_costs,
)
from txroads.infrastructure.analytics.estimators import build_commuter_impacts
from txroads.infrastructure.analytics.normalization import normalize_metrics
from txroads.infrastructure.analytics.ranking import rank_by, top_n
from txroads.infrastructure.feed.client import FeedResult
from txroads.utils.logger import logger


class RoadwayFeed(Protocol):
    def fetch(self) -> FeedResult:
        ...


@dataclass(frozen=True)
class StoryLimits:
    """How many entries each view shows and how long display names may be."""

    top_congested: int = 10
    rankings: int = 10
    ranking_name_limit: int = 25
    commuter_impacts: int = 15
    commuter_name_limit: int = 20
    road_types: int = 8
    roads_per_type: int = 5
    district_comparison: int = 6
    district_metric: int = 8
    district_costs: int = 8

    @classmethod
    def from_config(cls, views: Mapping[str, int] | None) -> "StoryLimits":
        known = {item.name for item in fields(cls)}
        return cls(**{key: int(value) for key, value in (views or {}).items() if key in known})


@dataclass(frozen=True)
class CongestionStory:
    """All derived views over one immutable set of roadway records."""

    records: tuple[RoadwayRecord, ...]
    districts: tuple[DistrictSummary, ...]
    districts_by_road_count: tuple[DistrictSummary, ...]
    district_comparison: tuple[NormalizedRow, ...]
    district_costs: tuple[DistrictCostSummary, ...]
    severity: tuple[SeverityBucket, ...]
    road_types: tuple[RoadTypeBucket, ...]
    top_roads_by_type: Mapping[str, tuple[RankedRoadway, ...]]
    cost_overview: CostOverview
    top_congested: tuple[RankedRoadway, ...]
    overall_ranking: tuple[RankedRoadway, ...]
    truck_ranking: tuple[RankedRoadway, ...]
    cost_ranking: tuple[RankedRoadway, ...]
    commuter_impacts: tuple[CommuterImpact, ...]
    cost_violations: tuple[RoadwayRecord, ...] = ()
    rejected: int = 0
    feed_error: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.records


def build_story(
    records: Sequence[RoadwayRecord],
    limits: StoryLimits = StoryLimits(),
    rejected: int = 0,
    feed_error: Optional[str] = None,
) -> CongestionStory:
    """Derive every view from ``records``; the same input gives equal output."""

    snapshot = tuple(records)
    districts = aggregate_by_district(snapshot)
    by_road_count = rank_by(districts, "road_count")
    road_types = rank_by(aggregate_by_road_type(snapshot), "count", limits.road_types)
    name_limit = limits.ranking_name_limit

    return CongestionStory(
        records=snapshot,
        districts=tuple(districts),
        districts_by_road_count=tuple(by_road_count),
        district_comparison=tuple(
            normalize_metrics(by_road_count[: limits.district_comparison], reference=by_road_count)
        ),
        district_costs=tuple(
            rank_by(aggregate_district_costs(snapshot), "total_cost", limits.district_costs)
        ),
        severity=tuple(aggregate_by_severity(snapshot)),
        road_types=tuple(road_types),
        top_roads_by_type={
            bucket.road_type: tuple(
                top_n(bucket.roads, "congestion_index", limits.roads_per_type, name_limit=name_limit)
            )
            for bucket in road_types
        },
        cost_overview=summarize_costs(snapshot),
        top_congested=tuple(
            top_n(snapshot, "congestion_index", limits.top_congested, name_limit=name_limit)
        ),
        overall_ranking=tuple(
            top_n(
                snapshot,
                "rank",
                limits.rankings,
                direction="asc",
                name_limit=name_limit,
                value="delay_per_mile",
            )
        ),
        truck_ranking=tuple(
            top_n(
                snapshot,
                "truck_rank",
                limits.rankings,
                direction="asc",
                name_limit=name_limit,
                value="truck_delay",
            )
        ),
        cost_ranking=tuple(
            top_n(snapshot, "cost_of_delay", limits.rankings, name_limit=name_limit)
        ),
        commuter_impacts=tuple(
            build_commuter_impacts(
                snapshot, limit=limits.commuter_impacts, name_limit=limits.commuter_name_limit
            )
        ),
        cost_violations=tuple(find_cost_violations(snapshot)),
        rejected=rejected,
        feed_error=feed_error,
    )


class BuildCongestionStoryUseCase:
    """Fetch the roadway feed once and derive the congestion story from it."""

    def __init__(self, feed: RoadwayFeed, limits: StoryLimits | None = None) -> None:
        self._feed = feed
        self._limits = limits or StoryLimits()

    def execute(self) -> CongestionStory:
        result = self._feed.fetch()
        if not result.ok:
            logger.warning("Roadway feed unavailable, continuing with no data: {}", result.error)

        story = build_story(
            result.records,
            self._limits,
            rejected=result.rejected,
            feed_error=result.error,
        )
        for record in story.cost_violations:
            logger.warning(
                "Data quality: roadway {} ({}) has truck cost {} above total cost {}",
                record.id,
                record.name,
                record.cost_of_truck_delay,
                record.cost_of_delay,
            )
        logger.info(
            "Built congestion story for {} roadway(s) across {} district(s)",
            len(story.records),
            len(story.districts),
        )
        return story


__all__ = ["BuildCongestionStoryUseCase", "CongestionStory", "StoryLimits", "build_story"]
