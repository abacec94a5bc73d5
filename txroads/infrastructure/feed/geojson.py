"""Mapping of TxDOT GeoJSON features into roadway records."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

from txroads.core.entities import RoadGeometry, RoadwayRecord
from txroads.utils.logger import logger


class MalformedFeatureError(ValueError):
    """Raised when a feature cannot be mapped to a ``RoadwayRecord``."""


class MalformedFeedError(ValueError):
    """Raised when a payload is not a GeoJSON FeatureCollection."""


_TEXT_FIELDS: Mapping[str, str] = {
    "name": "RD_NM",
    "district": "DIST_NM",
}
_INTEGER_FIELDS: Mapping[str, str] = {
    "rank": "RANK",
    "truck_rank": "TRK_RANK",
    "year": "YR",
}
# Metrics are quantities of delay or money and must be non-negative.
_METRIC_FIELDS: Mapping[str, str] = {
    "delay_per_mile": "DLAY_MILE",
    "congestion_index": "TCI",
    "cost_of_delay": "COST_DLAY",
    "truck_delay": "TRK_DLY",
    "cost_of_truck_delay": "COST_TRK",
}


@dataclass(frozen=True)
class ParsedFeed:
    records: tuple[RoadwayRecord, ...]
    rejected: int = 0


def _require(properties: Mapping[str, Any], key: str) -> Any:
    if key not in properties or properties[key] is None:
        raise MalformedFeatureError(f"Missing property {key}")
    return properties[key]


def _as_text(properties: Mapping[str, Any], key: str) -> str:
    value = _require(properties, key)
    if not isinstance(value, str):
        raise MalformedFeatureError(f"Property {key} must be a string, got {value!r}")
    return value


def _as_number(value: Any, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedFeatureError(f"Property {key} must be numeric, got {value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise MalformedFeatureError(f"Property {key} must be finite, got {value!r}")
    return number


def _as_integer(value: Any, key: str) -> int:
    number = _as_number(value, key)
    if not number.is_integer():
        raise MalformedFeatureError(f"Property {key} must be an integer, got {value!r}")
    return int(number)


def _as_metric(properties: Mapping[str, Any], key: str) -> float:
    number = _as_number(_require(properties, key), key)
    if number < 0:
        raise MalformedFeatureError(f"Property {key} must be non-negative, got {number}")
    return number


def _as_geometry(raw: Any) -> RoadGeometry:
    if not isinstance(raw, Mapping):
        raise MalformedFeatureError("Feature geometry must be an object")
    geometry_type = raw.get("type")
    coordinates = raw.get("coordinates")
    if not isinstance(geometry_type, str) or not isinstance(coordinates, list):
        raise MalformedFeatureError("Feature geometry needs a type and a coordinate list")
    return RoadGeometry(type=geometry_type, coordinates=coordinates)


def map_feature(feature: Mapping[str, Any]) -> RoadwayRecord:
    """Convert one raw feature into a ``RoadwayRecord``.

    The feed schema is fixed; any missing, mistyped, non-finite or negative
    value raises ``MalformedFeatureError`` instead of leaking into aggregates.
    """

    if not isinstance(feature, Mapping):
        raise MalformedFeatureError("Feature must be an object")
    properties = feature.get("properties")
    if not isinstance(properties, Mapping):
        raise MalformedFeatureError("Feature has no properties object")

    values: dict[str, Any] = {"id": _as_integer(_require(feature, "id"), "id")}
    for field_name, key in _TEXT_FIELDS.items():
        values[field_name] = _as_text(properties, key)
    for field_name, key in _INTEGER_FIELDS.items():
        values[field_name] = _as_integer(_require(properties, key), key)
    for field_name, key in _METRIC_FIELDS.items():
        values[field_name] = _as_metric(properties, key)
    values["geometry"] = _as_geometry(feature.get("geometry"))
    return RoadwayRecord(**values)


def parse_feature_collection(payload: Any) -> ParsedFeed:
    """Map every feature of ``payload`` in order, skipping malformed ones."""

    if not isinstance(payload, Mapping) or not isinstance(payload.get("features"), list):
        raise MalformedFeedError("Payload is not a GeoJSON FeatureCollection")

    records: list[RoadwayRecord] = []
    rejected = 0
    for index, feature in enumerate(payload["features"]):
        try:
            records.append(map_feature(feature))
        except MalformedFeatureError as error:
            rejected += 1
            logger.warning("Skipping feature #{}: {}", index, error)

    logger.debug("Mapped {} feature(s), rejected {}", len(records), rejected)
    return ParsedFeed(records=tuple(records), rejected=rejected)


__all__ = [
    "MalformedFeatureError",
    "MalformedFeedError",
    "ParsedFeed",
    "map_feature",
    "parse_feature_collection",
]
