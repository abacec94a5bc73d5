"""Tests for the GenerateCongestionReportsUseCase orchestration."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from txroads.infrastructure.feed.client import FeedResult
from txroads.use_cases.build_congestion_story import CongestionStory
from txroads.use_cases.generate_reports import (
    GenerateCongestionReportsUseCase,
    GeneratedReports,
    NotebookDocument,
)


class StubFeed:
    def __init__(self, result: FeedResult) -> None:
        self._result = result

    def fetch(self) -> FeedResult:
        return self._result


class StubAnalyzer:
    def __init__(self) -> None:
        self.calls: list[str] = []
        self.stories: list[CongestionStory] = []

    def compute_metrics(self, story: CongestionStory) -> dict:
        self.calls.append("metrics")
        self.stories.append(story)
        return {"total_roadways": len(story.records)}

    def build_figures(self, story: CongestionStory) -> dict:
        self.calls.append("figures")
        return {"severity_distribution": object()}


@dataclass
class StubNotebookFactory:
    document: NotebookDocument

    def build(self, story: CongestionStory, metrics: dict) -> NotebookDocument:
        return self.document


class StubRepository:
    def __init__(self, base: Path) -> None:
        self.metrics_path = base / "metrics.json"
        self.saved_metrics: dict = {}
        self.saved_figures: dict[str, Path] = {}

    def save_metrics(self, metrics: dict) -> Path:
        self.saved_metrics = dict(metrics)
        return self.metrics_path

    def save_figures(self, figures: dict) -> dict[str, Path]:
        self.saved_figures = {name: Path(f"{name}.png") for name in figures}
        return self.saved_figures

    def save_notebook(self, notebook: NotebookDocument) -> Path:
        return notebook.path


def test_use_case_generates_reports(tmp_path: Path, make_record) -> None:
    feed = StubFeed(FeedResult(records=(make_record(1), make_record(2))))
    analyzer = StubAnalyzer()
    document = NotebookDocument(path=tmp_path / "report.ipynb", content={"cells": []})
    repository = StubRepository(tmp_path)

    use_case = GenerateCongestionReportsUseCase(feed, analyzer, StubNotebookFactory(document), repository)
    result = use_case.execute()

    assert isinstance(result, GeneratedReports)
    assert result.metrics_path == repository.metrics_path
    assert result.figure_paths == repository.saved_figures
    assert result.notebook_path == document.path
    assert analyzer.calls == ["metrics", "figures"]
    assert repository.saved_metrics == {"total_roadways": 2}


def test_use_case_reports_empty_feed(tmp_path: Path) -> None:
    analyzer = StubAnalyzer()
    document = NotebookDocument(path=tmp_path / "report.ipynb", content={})
    repository = StubRepository(tmp_path)
    use_case = GenerateCongestionReportsUseCase(
        StubFeed(FeedResult(error="timeout")), analyzer, StubNotebookFactory(document), repository
    )

    result = use_case.execute()

    assert result.notebook_path == document.path
    assert analyzer.stories[0].is_empty
    assert analyzer.stories[0].feed_error == "timeout"
