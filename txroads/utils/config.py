"""YAML configuration loading for scripts and the dashboard."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, TypedDict

import yaml

DEFAULT_FEED_URL = (
    "https://services.arcgis.com/KTcxiTD9dsQw4r7Z/arcgis/rest/services/"
    "TxDOT_Top_100_Congested_Roadways/FeatureServer/0/query"
    "?outFields=*&where=1%3D1&f=geojson"
)


class FeedConfig(TypedDict, total=False):
    url: str
    timeout: float
    snapshot_path: str


class PathsConfig(TypedDict, total=False):
    processed_roadways: str
    metrics: str
    figures_dir: str
    notebook: str


class ViewsConfig(TypedDict, total=False):
    top_congested: int
    rankings: int
    ranking_name_limit: int
    commuter_impacts: int
    commuter_name_limit: int
    road_types: int
    roads_per_type: int
    district_comparison: int
    district_metric: int
    district_costs: int


class LoggingConfig(TypedDict, total=False):
    level: str


class AppConfig(TypedDict, total=False):
    feed: FeedConfig
    paths: PathsConfig
    views: ViewsConfig
    logging: LoggingConfig


DEFAULT_CONFIG: AppConfig = {
    "feed": {
        "url": DEFAULT_FEED_URL,
        "timeout": 30.0,
        "snapshot_path": "data/raw/top100_congested_roadways.geojson",
    },
    "paths": {
        "processed_roadways": "data/processed/roadways.csv",
        "metrics": "reports/metrics/congestion_summary.json",
        "figures_dir": "reports/figures",
        "notebook": "notebooks/congestion_report.ipynb",
    },
    "views": {},
    "logging": {"level": "INFO"},
}


def _merge(defaults: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    merged: dict[str, Any] = dict(defaults)
    for key, value in overrides.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Path) -> AppConfig:
    """Read ``config_path`` and fill in any missing section with defaults."""

    with Path(config_path).open("r", encoding="utf-8") as file:
        raw = yaml.safe_load(file) or {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"Configuration file must contain a mapping: {config_path}")
    return _merge(DEFAULT_CONFIG, raw)  # type: ignore[return-value]


__all__ = [
    "AppConfig",
    "DEFAULT_CONFIG",
    "DEFAULT_FEED_URL",
    "FeedConfig",
    "LoggingConfig",
    "PathsConfig",
    "ViewsConfig",
    "load_config",
]
