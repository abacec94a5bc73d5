"""Sort-and-slice selectors producing top-N roadway views."""
from __future__ import annotations

from operator import attrgetter
from typing import Callable, Iterable, Optional, Sequence, TypeVar, Union

from txroads.core.entities import RankedRoadway, RoadwayRecord

KeyFunc = Callable[[RoadwayRecord], float]
T = TypeVar("T")

_DIRECTIONS = ("asc", "desc")


def truncate_name(name: str, limit: Optional[int]) -> str:
    """Shorten ``name`` to ``limit`` characters, ending with an ellipsis."""
    if limit is None or len(name) <= limit:
        return name
    return name[: max(limit - 3, 0)] + "..."


def _resolve_key(key: Union[str, KeyFunc]) -> KeyFunc:
    if isinstance(key, str):
        return attrgetter(key)
    return key


def top_n(
    records: Iterable[RoadwayRecord],
    key: Union[str, KeyFunc],
    n: int,
    direction: str = "desc",
    name_limit: Optional[int] = None,
    value: Union[str, KeyFunc, None] = None,
) -> list[RankedRoadway]:
    """Return the first ``n`` records ordered by ``key``.

    The sort is stable in both directions, so records with equal keys keep
    their source order. ``key`` is an attribute name or a callable, as is
    ``value``, the figure shown for each entry (defaults to ``key``).
    """

    if direction not in _DIRECTIONS:
        raise ValueError(f"direction must be one of {_DIRECTIONS}, got {direction!r}")
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")

    accessor = _resolve_key(key)
    shown = accessor if value is None else _resolve_key(value)
    ordered = sorted(records, key=accessor, reverse=direction == "desc")
    return [
        RankedRoadway(
            position=position,
            record=record,
            value=shown(record),
            display_name=truncate_name(record.name, name_limit),
            full_name=record.name,
        )
        for position, record in enumerate(ordered[:n], start=1)
    ]


def rank_by(items: Sequence[T], key: str, limit: Optional[int] = None) -> list[T]:
    """Order summaries by a numeric attribute, largest first."""
    ordered = sorted(items, key=attrgetter(key), reverse=True)
    return ordered if limit is None else ordered[:limit]


__all__ = ["rank_by", "top_n", "truncate_name"]
