"""Infrastructure helpers for generating congestion reports."""

from .congestion_report import (
    CongestionReportAnalyzer,
    FileSystemReportRepository,
    SimpleNotebookFactory,
    records_to_frame,
)

__all__ = [
    "CongestionReportAnalyzer",
    "FileSystemReportRepository",
    "SimpleNotebookFactory",
    "records_to_frame",
]
