"""Concrete implementations for generating congestion report artefacts."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

import matplotlib

matplotlib.use("Agg", force=True)
import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.figure import Figure

from txroads.core.entities import RankedRoadway, RoadwayRecord
from txroads.use_cases.build_congestion_story import CongestionStory
from txroads.use_cases.generate_reports import NotebookDocument
from txroads.utils.formatting import format_currency, format_number, format_percent
from txroads.utils.logger import logger

ROADWAY_COLUMNS: tuple[str, ...] = (
    "id",
    "name",
    "rank",
    "truck_rank",
    "district",
    "delay_per_mile",
    "congestion_index",
    "cost_of_delay",
    "truck_delay",
    "cost_of_truck_delay",
    "year",
)


def records_to_frame(records: Iterable[RoadwayRecord]) -> pd.DataFrame:
    """Tabulate records without their geometry."""
    rows = [{column: getattr(record, column) for column in ROADWAY_COLUMNS} for record in records]
    return pd.DataFrame(rows, columns=list(ROADWAY_COLUMNS))


def _ranking_rows(ranking: Sequence[RankedRoadway]) -> list[dict[str, Any]]:
    return [
        {
            "position": item.position,
            "id": item.record.id,
            "name": item.full_name,
            "district": item.record.district,
            "value": float(item.value),
        }
        for item in ranking
    ]


class CongestionReportAnalyzer:
    """Compute JSON-ready metrics and illustrative figures for a story."""

    def compute_metrics(self, story: CongestionStory) -> Mapping[str, Any]:
        frame = records_to_frame(story.records)
        overview = story.cost_overview

        metrics: dict[str, Any] = {
            "total_roadways": int(len(frame)),
            "rejected_features": story.rejected,
            "feed_error": story.feed_error,
            "congestion_index": self._describe(frame["congestion_index"]),
            "delay_per_mile": self._describe(frame["delay_per_mile"]),
            "cost_overview": {
                "total_cost": overview.total_cost,
                "total_truck_cost": overview.total_truck_cost,
                "total_commuter_cost": overview.total_commuter_cost,
                "truck_share": round(overview.truck_share, 2),
                "cost_per_capita": round(overview.cost_per_capita, 2),
                "cost_per_commuter": round(overview.cost_per_commuter, 2),
                "commuter_cost_per_commuter": round(overview.commuter_cost_per_commuter, 2),
                "truck_cost_per_truck": round(overview.truck_cost_per_truck, 2),
            },
            "districts": [
                {
                    "name": district.name,
                    "road_count": district.road_count,
                    "avg_delay_per_mile": round(district.avg_delay_per_mile, 2),
                    "total_cost_of_delay": district.total_cost_of_delay,
                    "avg_congestion_index": round(district.avg_congestion_index, 3),
                }
                for district in story.districts_by_road_count
            ],
            "district_costs": [
                {
                    "name": district.name,
                    "road_count": district.road_count,
                    "total_cost": district.total_cost,
                    "truck_cost": district.truck_cost,
                    "commuter_cost": district.commuter_cost,
                }
                for district in story.district_costs
            ],
            "severity": [
                {
                    "label": bucket.label,
                    "road_count": bucket.road_count,
                    "total_commuters": bucket.total_commuters,
                    "total_cost": bucket.total_cost,
                    "avg_time_wasted": round(bucket.avg_time_wasted, 2),
                }
                for bucket in story.severity
            ],
            "road_types": [
                {
                    "road_type": bucket.road_type,
                    "count": bucket.count,
                    "avg_congestion": round(bucket.avg_congestion, 3),
                    "avg_delay": round(bucket.avg_delay, 2),
                    "total_cost": bucket.total_cost,
                    "cost_percentage": round(bucket.cost_percentage, 2),
                }
                for bucket in story.road_types
            ],
            "top_congested": _ranking_rows(story.top_congested),
            "cost_ranking": _ranking_rows(story.cost_ranking),
            "commuter_impacts": [
                {
                    "position": impact.position,
                    "name": impact.full_name,
                    "estimated_commuters": impact.estimated_commuters,
                    "cost_per_commuter": round(impact.cost_per_commuter, 2),
                    "time_wasted": round(impact.time_wasted, 2),
                }
                for impact in story.commuter_impacts
            ],
            "cost_violations": [record.id for record in story.cost_violations],
        }
        if not frame.empty:
            metrics["year_range"] = {
                "start": int(frame["year"].min()),
                "end": int(frame["year"].max()),
            }
        return metrics

    @staticmethod
    def _describe(series: pd.Series) -> Mapping[str, float]:
        if series.empty:
            return {"min": 0.0, "max": 0.0, "mean": 0.0, "median": 0.0, "std": 0.0}
        return {
            "min": round(float(series.min()), 3),
            "max": round(float(series.max()), 3),
            "mean": round(float(series.mean()), 3),
            "median": round(float(series.median()), 3),
            "std": round(float(series.std(ddof=0)), 3),
        }

    def build_figures(self, story: CongestionStory) -> Mapping[str, Figure]:
        figures: dict[str, Figure] = {}
        if story.is_empty:
            return figures

        severity = pd.DataFrame(
            {
                "label": [bucket.label for bucket in story.severity],
                "road_count": [bucket.road_count for bucket in story.severity],
            }
        ).set_index("label")
        fig_severity, ax_severity = plt.subplots(figsize=(8, 4))
        severity["road_count"].plot(
            kind="bar", ax=ax_severity, color=[bucket.color for bucket in story.severity]
        )
        ax_severity.set_title("Roadways by congestion severity")
        ax_severity.set_xlabel("Severity")
        ax_severity.set_ylabel("Number of roadways")
        fig_severity.tight_layout()
        figures["severity_distribution"] = fig_severity

        costs = pd.DataFrame(
            {
                "Commuters": [item.commuter_cost / 1e6 for item in story.district_costs],
                "Trucks": [item.truck_cost / 1e6 for item in story.district_costs],
            },
            index=[item.name for item in story.district_costs],
        )
        fig_costs, ax_costs = plt.subplots(figsize=(8, 4))
        costs.plot(kind="bar", stacked=True, ax=ax_costs, color=["#ff4e50", "#fc913a"])
        ax_costs.set_title("Annual cost of delay by district")
        ax_costs.set_xlabel("District")
        ax_costs.set_ylabel("Cost (millions USD)")
        ax_costs.tick_params(axis="x", rotation=45)
        fig_costs.tight_layout()
        figures["district_costs"] = fig_costs

        road_types = pd.Series(
            [bucket.count for bucket in story.road_types],
            index=[bucket.road_type for bucket in story.road_types],
        )
        fig_types, ax_types = plt.subplots(figsize=(8, 4))
        road_types.plot(kind="bar", ax=ax_types, color="#4bb5c1")
        ax_types.set_title("Roadways by road type")
        ax_types.set_xlabel("Road type")
        ax_types.set_ylabel("Number of roadways")
        fig_types.tight_layout()
        figures["road_type_counts"] = fig_types

        top = pd.Series(
            [item.value for item in story.top_congested],
            index=[item.display_name for item in story.top_congested],
        ).iloc[::-1]
        fig_top, ax_top = plt.subplots(figsize=(8, 5))
        top.plot(kind="barh", ax=ax_top, color="#ff4e50")
        ax_top.set_title("Most congested roadways")
        ax_top.set_xlabel("Travel time index")
        fig_top.tight_layout()
        figures["top_congested"] = fig_top

        return figures


@dataclass(frozen=True)
class _NotebookContent:
    title: str
    narrative: list[str]
    severity_table: list[str]
    district_table: list[str]
    road_type_table: list[str]
    ranking_table: list[str]


class SimpleNotebookFactory:
    """Render story highlights into a lightweight Jupyter notebook."""

    def __init__(self, output_path: Path) -> None:
        self._output_path = Path(output_path)

    def build(self, story: CongestionStory, metrics: Mapping[str, Any]) -> NotebookDocument:
        content = self._prepare_content(story, metrics)
        return NotebookDocument(path=self._output_path, content=self._render_notebook(content))

    def _prepare_content(
        self, story: CongestionStory, metrics: Mapping[str, Any]
    ) -> _NotebookContent:
        overview = story.cost_overview
        narrative = [
            f"- Roadways analysed: **{metrics.get('total_roadways', len(story.records))}**",
            f"- Total annual cost of delay: **{format_currency(overview.total_cost)}**",
            f"- Share caused by trucks: **{format_percent(overview.truck_share)}**",
            f"- Cost per commuter: **{format_currency(overview.cost_per_commuter)}**",
            "- Commuter cost per commuter: "
            f"**{format_currency(overview.commuter_cost_per_commuter)}**",
            f"- Truck cost per truck: **{format_currency(overview.truck_cost_per_truck)}**",
        ]
        if story.feed_error:
            narrative.append(f"- Feed unavailable: `{story.feed_error}`")
        if story.cost_violations:
            narrative.append(
                f"- Data quality alerts (truck cost above total): **{len(story.cost_violations)}**"
            )

        severity_table = self._build_markdown_table(
            headers=("Severity", "Roadways", "Commuters", "Cost", "Avg. hours wasted"),
            rows=[
                (
                    bucket.label,
                    str(bucket.road_count),
                    format_number(bucket.total_commuters),
                    format_currency(bucket.total_cost),
                    format_number(round(bucket.avg_time_wasted)),
                )
                for bucket in story.severity
            ],
        )
        district_table = self._build_markdown_table(
            headers=("District", "Roadways", "Avg. TTI", "Cost"),
            rows=[
                (
                    district.name,
                    str(district.road_count),
                    f"{district.avg_congestion_index:.2f}",
                    format_currency(district.total_cost_of_delay),
                )
                for district in story.districts_by_road_count
            ],
        )
        road_type_table = self._build_markdown_table(
            headers=("Road type", "Roadways", "Avg. TTI", "Cost share"),
            rows=[
                (
                    bucket.road_type,
                    str(bucket.count),
                    f"{bucket.avg_congestion:.2f}",
                    format_percent(bucket.cost_percentage),
                )
                for bucket in story.road_types
            ],
        )
        ranking_table = self._build_markdown_table(
            headers=("#", "Roadway", "District", "TTI"),
            rows=[
                (str(item.position), item.display_name, item.record.district, f"{item.value:.2f}")
                for item in story.top_congested
            ],
        )
        return _NotebookContent(
            title="Texas Top 100 Congested Roadways",
            narrative=narrative,
            severity_table=severity_table,
            district_table=district_table,
            road_type_table=road_type_table,
            ranking_table=ranking_table,
        )

    def _render_notebook(self, content: _NotebookContent) -> Mapping[str, Any]:
        cells = [
            self._markdown_cell(f"# {content.title}\n"),
            self._markdown_cell("## Summary\n" + "\n".join(content.narrative)),
            self._markdown_cell("## Congestion Severity\n" + "\n".join(content.severity_table)),
            self._markdown_cell("## Districts\n" + "\n".join(content.district_table)),
            self._markdown_cell("## Road Types\n" + "\n".join(content.road_type_table)),
            self._markdown_cell("## Most Congested Roadways\n" + "\n".join(content.ranking_table)),
        ]
        return {
            "cells": cells,
            "metadata": {
                "kernelspec": {
                    "display_name": "Python 3",
                    "language": "python",
                    "name": "python3",
                },
                "language_info": {"name": "python"},
            },
            "nbformat": 4,
            "nbformat_minor": 5,
        }

    def _markdown_cell(self, content: str) -> Mapping[str, Any]:
        return {"cell_type": "markdown", "metadata": {}, "source": content}

    def _build_markdown_table(
        self, headers: Iterable[str], rows: Iterable[Iterable[str]]
    ) -> list[str]:
        headers_tuple = tuple(headers)
        header_row = "| " + " | ".join(headers_tuple) + " |"
        separator = "| " + " | ".join(["---"] * len(headers_tuple)) + " |"
        body_rows = ["| " + " | ".join(row) + " |" for row in rows]
        return [header_row, separator, *body_rows]


class FileSystemReportRepository:
    """Write report artefacts below local directories, creating them on demand."""

    def __init__(self, metrics_path: Path, figures_dir: Path, dpi: int = 150) -> None:
        self._metrics_path = Path(metrics_path)
        self._figures_dir = Path(figures_dir)
        self._dpi = dpi

    def save_metrics(self, metrics: Mapping[str, Any]) -> Path:
        self._metrics_path.parent.mkdir(parents=True, exist_ok=True)
        self._metrics_path.write_text(
            json.dumps(metrics, ensure_ascii=False, indent=2, allow_nan=False), encoding="utf-8"
        )
        logger.debug("Wrote metrics to {}", self._metrics_path)
        return self._metrics_path

    def save_figures(self, figures: Mapping[str, Figure]) -> Mapping[str, Path]:
        self._figures_dir.mkdir(parents=True, exist_ok=True)
        saved: dict[str, Path] = {}
        for name, figure in figures.items():
            destination = self._figures_dir / f"{name}.png"
            try:
                figure.savefig(destination, dpi=self._dpi, bbox_inches="tight")
            finally:
                plt.close(figure)
            saved[name] = destination
        logger.debug("Wrote {} figure(s) to {}", len(saved), self._figures_dir)
        return saved

    def save_notebook(self, notebook: NotebookDocument) -> Path:
        notebook.path.parent.mkdir(parents=True, exist_ok=True)
        with notebook.path.open("w", encoding="utf-8") as file:
            json.dump(notebook.content, file, ensure_ascii=False, indent=1)
        return notebook.path


__all__ = [
    "CongestionReportAnalyzer",
    "FileSystemReportRepository",
    "SimpleNotebookFactory",
    "records_to_frame",
]
