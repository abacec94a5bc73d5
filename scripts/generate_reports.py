"""Command-line entry point to generate congestion report artefacts."""
from __future__ import annotations

import argparse
from pathlib import Path

from scripts.bootstrap import bootstrap_project

_PROJECT_ROOT = bootstrap_project()

from txroads.infrastructure.feed.client import ArcGISRoadwayFeed, GeoJSONFileFeed  # noqa: E402
from txroads.infrastructure.reports import (  # noqa: E402
    CongestionReportAnalyzer,
    FileSystemReportRepository,
    SimpleNotebookFactory,
)
from txroads.use_cases.build_congestion_story import StoryLimits  # noqa: E402
from txroads.use_cases.generate_reports import GenerateCongestionReportsUseCase  # noqa: E402
from txroads.utils.config import load_config  # noqa: E402
from txroads.utils.logger import configure_logging, logger  # noqa: E402


def _resolve_path(path: Path) -> Path:
    if path.is_absolute():
        return path
    return (_PROJECT_ROOT / path).resolve()


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate metrics, figures and a notebook for the congested roadways"
    )
    parser.add_argument("--config", type=Path, default=Path("configs/config.yaml"))
    parser.add_argument(
        "--snapshot",
        type=Path,
        default=None,
        help="Read a saved GeoJSON snapshot instead of the live feed",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    config = load_config(_resolve_path(args.config))
    configure_logging(config["logging"]["level"])

    paths = config["paths"]
    metrics_path = _resolve_path(Path(paths["metrics"]))
    figures_dir = _resolve_path(Path(paths["figures_dir"]))
    notebook_path = _resolve_path(Path(paths["notebook"]))
    if args.snapshot is not None:
        feed = GeoJSONFileFeed(_resolve_path(args.snapshot))
    else:
        feed_config = config["feed"]
        feed = ArcGISRoadwayFeed(url=feed_config["url"], timeout=float(feed_config["timeout"]))

    use_case = GenerateCongestionReportsUseCase(
        feed=feed,
        analyzer=CongestionReportAnalyzer(),
        notebook_factory=SimpleNotebookFactory(notebook_path),
        repository=FileSystemReportRepository(metrics_path=metrics_path, figures_dir=figures_dir),
        limits=StoryLimits.from_config(config.get("views")),
    )

    reports = use_case.execute()
    logger.info("Metrics saved to {}", reports.metrics_path)
    for name, path in reports.figure_paths.items():
        logger.info("Figure '{}' saved to {}", name, path)
    logger.info("Notebook written to {}", reports.notebook_path)


if __name__ == "__main__":
    main()
