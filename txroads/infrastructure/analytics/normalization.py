"""Normalise heterogeneous district metrics onto a shared 0-100 scale."""
from __future__ import annotations

from operator import attrgetter
from typing import Any, Callable, Mapping, Optional, Sequence

from txroads.core.entities import NormalizedRow, NormalizedValue

MetricAccessor = Callable[[Any], float]

DISTRICT_COMPARISON_METRICS: Mapping[str, MetricAccessor] = {
    "Road Count": attrgetter("road_count"),
    "Avg Congestion": attrgetter("avg_congestion_index"),
    "Cost of Delay": attrgetter("total_cost_of_delay"),
}


def normalize_metrics(
    items: Sequence[Any],
    metrics: Mapping[str, MetricAccessor] = DISTRICT_COMPARISON_METRICS,
    reference: Optional[Sequence[Any]] = None,
) -> list[NormalizedRow]:
    """Score each item as ``100 * value / max`` per metric.

    The maximum is taken over ``reference``, which defaults to ``items``; pass
    the full population to score a top-N slice against every district. When
    the maximum is zero every score for that metric is zero.
    """

    population = items if reference is None else reference
    maxima = {
        metric: max((accessor(item) for item in population), default=0.0)
        for metric, accessor in metrics.items()
    }

    rows: list[NormalizedRow] = []
    for item in items:
        values = []
        for metric, accessor in metrics.items():
            actual = accessor(item)
            peak = maxima[metric]
            values.append(
                NormalizedValue(
                    metric=metric,
                    score=100 * actual / peak if peak else 0.0,
                    actual=actual,
                )
            )
        rows.append(NormalizedRow(name=item.name, values=tuple(values)))
    return rows


__all__ = ["DISTRICT_COMPARISON_METRICS", "normalize_metrics"]
