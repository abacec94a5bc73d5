"""Download the roadway feed and store a raw snapshot plus a processed CSV."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Iterable, Protocol

if __package__ is None or __package__ == "":
    _SCRIPT_PARENT = Path(__file__).resolve().parents[1]
    _SCRIPT_PARENT_STR = str(_SCRIPT_PARENT)
    if _SCRIPT_PARENT_STR not in sys.path:
        sys.path.insert(0, _SCRIPT_PARENT_STR)

from scripts.bootstrap import bootstrap_project

_PROJECT_ROOT = bootstrap_project()

from txroads.core.entities import RoadwayRecord
from txroads.infrastructure.feed.client import ArcGISRoadwayFeed
from txroads.infrastructure.feed.geojson import parse_feature_collection
from txroads.infrastructure.reports import records_to_frame
from txroads.utils.config import AppConfig, load_config
from txroads.utils.logger import configure_logging, logger


class PayloadSource(Protocol):
    def fetch_payload(self) -> Any:
        ...


def save_snapshot(payload: Any, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as file:
        json.dump(payload, file, ensure_ascii=False)
    logger.info("Saved raw roadway snapshot to {}", path)
    return path


def export_roadways(records: Iterable[RoadwayRecord], path: Path) -> Path:
    frame = records_to_frame(records)
    path.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(path, index=False)
    logger.info("Saved {} processed roadway(s) to {}", len(frame), path)
    return path


def _resolve(path: str, root: Path) -> Path:
    candidate = Path(path)
    return candidate if candidate.is_absolute() else root / candidate


def build_snapshot(
    config: AppConfig, source: PayloadSource | None = None, root: Path = _PROJECT_ROOT
) -> tuple[Path, Path]:
    """Save the raw feed payload and a CSV of its valid roadways below ``root``."""

    feed_config = config["feed"]
    if source is None:
        source = ArcGISRoadwayFeed(url=feed_config["url"], timeout=float(feed_config["timeout"]))

    payload = source.fetch_payload()
    parsed = parse_feature_collection(payload)
    if parsed.rejected:
        logger.warning("{} feature(s) were rejected as malformed", parsed.rejected)

    snapshot_path = save_snapshot(payload, _resolve(feed_config["snapshot_path"], root))
    csv_path = export_roadways(
        parsed.records, _resolve(config["paths"]["processed_roadways"], root)
    )
    return snapshot_path, csv_path


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Download the TxDOT top congested roadways feed")
    parser.add_argument("--config", type=Path, default=Path("configs/config.yaml"))
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    config = load_config(_resolve(str(args.config), _PROJECT_ROOT))
    configure_logging(config["logging"]["level"])
    build_snapshot(config)


if __name__ == "__main__":
    main()
