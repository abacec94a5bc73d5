"""Pytest configuration and shared roadway factories."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from txroads.core.entities import RoadGeometry, RoadwayRecord  # noqa: E402


@pytest.fixture
def make_feature() -> Callable[..., dict[str, Any]]:
    def factory(feature_id: int = 1, **overrides: Any) -> dict[str, Any]:
        properties: dict[str, Any] = {
            "SEG_ID": 1000 + feature_id,
            "RANK": feature_id,
            "TRK_RANK": feature_id + 10,
            "RD_NM": "IH 35",
            "DLAY_MILE": 250000.0,
            "TCI": 1.8,
            "COST_DLAY": 60000000.0,
            "DIST_NM": "Austin",
            "YR": 2023,
            "TRK_DLY": 40000.0,
            "COST_TRK": 9000000.0,
            "FID": feature_id,
            "Shape_Leng": 0.05,
            "Shape__Length": 6000.0,
        }
        properties.update(overrides)
        return {
            "type": "Feature",
            "id": feature_id,
            "geometry": {
                "type": "LineString",
                "coordinates": [[-97.74, 30.26], [-97.72, 30.30]],
            },
            "properties": properties,
        }

    return factory


@pytest.fixture
def make_record() -> Callable[..., RoadwayRecord]:
    def factory(record_id: int = 1, **overrides: Any) -> RoadwayRecord:
        values: dict[str, Any] = {
            "id": record_id,
            "name": f"Road {record_id}",
            "rank": record_id,
            "truck_rank": record_id,
            "district": "Houston",
            "delay_per_mile": 100.0,
            "congestion_index": 1.2,
            "cost_of_delay": 1000.0,
            "truck_delay": 48.0,
            "cost_of_truck_delay": 200.0,
            "year": 2023,
            "geometry": RoadGeometry(type="LineString", coordinates=[[-95.0, 29.0], [-95.2, 29.4]]),
        }
        values.update(overrides)
        return RoadwayRecord(**values)

    return factory
