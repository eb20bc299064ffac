"""Win-rate statistics from benchmark harness reports, rendered as HTML."""

from cgbench_report.aggregate import extract_stats, find_reports, summarize
from cgbench_report.config import ReportSettings, load_settings
from cgbench_report.models import CodeSummary, Dataset, Encounter, Stats
from cgbench_report.report import ReportRenderer, build_datasets, write_report

__all__ = [
    "CodeSummary",
    "Dataset",
    "Encounter",
    "ReportRenderer",
    "ReportSettings",
    "Stats",
    "build_datasets",
    "extract_stats",
    "find_reports",
    "load_settings",
    "summarize",
    "write_report",
]
