"""Integration test for the snapshot and report pipeline."""
from __future__ import annotations

import json

import pytest

pytest.importorskip("matplotlib")
pd = pytest.importorskip("pandas")

from scripts.fetch_roadways import build_snapshot
from txroads.infrastructure.feed.client import GeoJSONFileFeed
from txroads.infrastructure.reports import (
    CongestionReportAnalyzer,
    FileSystemReportRepository,
    SimpleNotebookFactory,
)
from txroads.use_cases.generate_reports import GenerateCongestionReportsUseCase


class StubSource:
    def __init__(self, payload: dict) -> None:
        self._payload = payload

    def fetch_payload(self) -> dict:
        return self._payload


def test_full_pipeline(tmp_path, make_feature):
    payload = {
        "type": "FeatureCollection",
        "features": [
            make_feature(1, RD_NM="IH 35", TCI=2.7, DIST_NM="Austin"),
            make_feature(2, RD_NM="US 59", TCI=1.6, DIST_NM="Houston"),
            make_feature(3, RD_NM="Loop 610", TCI=1.1, DIST_NM="Houston"),
            make_feature(4, TCI="bad"),
        ],
    }
    config = {
        "feed": {"url": "unused", "timeout": 1, "snapshot_path": "raw/roadways.geojson"},
        "paths": {"processed_roadways": "processed/roadways.csv"},
        "logging": {"level": "INFO"},
    }

    snapshot_path, csv_path = build_snapshot(config, source=StubSource(payload), root=tmp_path)

    assert snapshot_path == tmp_path / "raw" / "roadways.geojson"
    assert json.loads(snapshot_path.read_text(encoding="utf-8")) == payload
    processed = pd.read_csv(csv_path)
    assert processed["id"].tolist() == [1, 2, 3]
    assert processed["district"].tolist() == ["Austin", "Houston", "Houston"]

    notebook_path = tmp_path / "notebooks" / "report.ipynb"
    use_case = GenerateCongestionReportsUseCase(
        feed=GeoJSONFileFeed(snapshot_path),
        analyzer=CongestionReportAnalyzer(),
        notebook_factory=SimpleNotebookFactory(notebook_path),
        repository=FileSystemReportRepository(
            metrics_path=tmp_path / "metrics" / "summary.json",
            figures_dir=tmp_path / "figures",
        ),
    )
    reports = use_case.execute()

    metrics = json.loads(reports.metrics_path.read_text(encoding="utf-8"))
    assert metrics["total_roadways"] == 3
    assert metrics["rejected_features"] == 1
    assert metrics["feed_error"] is None
    assert [district["name"] for district in metrics["districts"]] == ["Houston", "Austin"]
    assert [item["id"] for item in metrics["top_congested"]] == [1, 2, 3]

    assert set(reports.figure_paths) == {
        "severity_distribution",
        "district_costs",
        "road_type_counts",
        "top_congested",
    }
    for path in reports.figure_paths.values():
        assert path.exists()

    notebook = json.loads(reports.notebook_path.read_text(encoding="utf-8"))
    assert notebook["nbformat"] == 4
    assert notebook["cells"][0]["source"].startswith("# Texas Top 100 Congested Roadways")


def test_pipeline_survives_missing_snapshot(tmp_path):
    use_case = GenerateCongestionReportsUseCase(
        feed=GeoJSONFileFeed(tmp_path / "missing.geojson"),
        analyzer=CongestionReportAnalyzer(),
        notebook_factory=SimpleNotebookFactory(tmp_path / "report.ipynb"),
        repository=FileSystemReportRepository(
            metrics_path=tmp_path / "summary.json", figures_dir=tmp_path / "figures"
        ),
    )

    reports = use_case.execute()

    metrics = json.loads(reports.metrics_path.read_text(encoding="utf-8"))
    assert metrics["total_roadways"] == 0
    assert metrics["feed_error"]
    assert "year_range" not in metrics
    assert reports.figure_paths == {}
