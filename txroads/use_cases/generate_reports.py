"""Use case orchestrating metric, figure and notebook generation."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Protocol

from txroads.use_cases.build_congestion_story import (
    BuildCongestionStoryUseCase,
    CongestionStory,
    RoadwayFeed,
    StoryLimits,
)
from txroads.utils.logger import logger


@dataclass(frozen=True)
class NotebookDocument:
    """In-memory notebook ready to be written to ``path``."""

    path: Path
    content: Mapping[str, Any]


@dataclass(frozen=True)
class GeneratedReports:
    metrics_path: Path
    figure_paths: Mapping[str, Path]
    notebook_path: Path


class StoryAnalyzer(Protocol):
    def compute_metrics(self, story: CongestionStory) -> Mapping[str, Any]:
        ...

    def build_figures(self, story: CongestionStory) -> Mapping[str, Any]:
        ...


class NotebookFactory(Protocol):
    def build(self, story: CongestionStory, metrics: Mapping[str, Any]) -> NotebookDocument:
        ...


class ReportRepository(Protocol):
    def save_metrics(self, metrics: Mapping[str, Any]) -> Path:
        ...

    def save_figures(self, figures: Mapping[str, Any]) -> Mapping[str, Path]:
        ...

    def save_notebook(self, notebook: NotebookDocument) -> Path:
        ...


class GenerateCongestionReportsUseCase:
    """Fetch the feed, derive the story and persist every report artefact."""

    def __init__(
        self,
        feed: RoadwayFeed,
        analyzer: StoryAnalyzer,
        notebook_factory: NotebookFactory,
        repository: ReportRepository,
        limits: StoryLimits | None = None,
    ) -> None:
        self._story_builder = BuildCongestionStoryUseCase(feed, limits)
        self._analyzer = analyzer
        self._notebook_factory = notebook_factory
        self._repository = repository

    def execute(self) -> GeneratedReports:
        story = self._story_builder.execute()
        if story.is_empty:
            logger.warning("No roadway data available; reports will contain empty views")

        metrics = self._analyzer.compute_metrics(story)
        figures = self._analyzer.build_figures(story)
        notebook = self._notebook_factory.build(story, metrics)

        metrics_path = self._repository.save_metrics(metrics)
        figure_paths = self._repository.save_figures(figures)
        notebook_path = self._repository.save_notebook(notebook)
        return GeneratedReports(
            metrics_path=metrics_path,
            figure_paths=figure_paths,
            notebook_path=notebook_path,
        )


__all__ = [
    "GenerateCongestionReportsUseCase",
    "GeneratedReports",
    "NotebookDocument",
]
