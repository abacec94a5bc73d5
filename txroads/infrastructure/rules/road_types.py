"""Name-pattern classification of roadways into road types."""
from __future__ import annotations

import re
from typing import Callable

from txroads.utils.logger import logger

Predicate = Callable[[str], bool]

OTHER = "Other"

_INTERSTATE_SHORTHAND = re.compile(r"^i\s\d")


def _contains(*needles: str) -> Predicate:
    def predicate(lowered: str) -> bool:
        return any(needle in lowered for needle in needles)

    return predicate


def _is_interstate(lowered: str) -> bool:
    return (
        "ih" in lowered
        or "interstate" in lowered
        or lowered.startswith("i-")
        or _INTERSTATE_SHORTHAND.match(lowered) is not None
    )


# Order matters: the first matching rule wins and the short unanchored tokens
# ("st", "dr", "rd", "us") also match inside unrelated words.
ROAD_TYPE_RULES: tuple[tuple[Predicate, str], ...] = (
    (_is_interstate, "Interstate"),
    (_contains("sh", "state highway"), "State Highway"),
    (_contains("us", "u.s."), "US Highway"),
    (_contains("fm", "farm to market"), "Farm to Market"),
    (_contains("lp", "loop"), "Loop"),
    (_contains("spur"), "Spur"),
    (_contains("blvd", "boulevard"), "Boulevard"),
    (_contains("pkwy", "parkway"), "Parkway"),
    (_contains("dr", "drive"), "Drive"),
    (_contains("rd", "road"), "Road"),
    (_contains("ave", "avenue"), "Avenue"),
    (_contains("st", "street"), "Street"),
)

ROAD_TYPES: tuple[str, ...] = tuple(tag for _, tag in ROAD_TYPE_RULES) + (OTHER,)


def classify_road_type(name: str) -> str:
    lowered = name.lower()
    for predicate, road_type in ROAD_TYPE_RULES:
        if predicate(lowered):
            logger.debug("Road '{}' classified as {}", name, road_type)
            return road_type
    return OTHER


__all__ = ["OTHER", "ROAD_TYPES", "ROAD_TYPE_RULES", "classify_road_type"]
