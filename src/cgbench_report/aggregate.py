"""Fold every report in a directory into a single Stats aggregate."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from cgbench_report.config import ReportSettings
from cgbench_report.models import CodeSummary, Stats
from cgbench_report.parsing import (
    CodeNameError,
    extract_code_name,
    extract_encounter_file,
    extract_enemy_list_file,
    is_report_file,
)

logger = logging.getLogger(__name__)


def find_reports(directory: Path, settings: ReportSettings | None = None) -> list[Path]:
    """Benchmark reports directly inside *directory*, sorted by name.

    Raises OSError if the directory cannot be listed.
    """
    settings = settings or ReportSettings()
    return [p for p in sorted(directory.iterdir()) if is_report_file(p, settings)]


def add_report(stats: Stats, path: Path, settings: ReportSettings | None = None) -> int:
    """Merge one report's encounters into *stats*. Returns how many were added."""
    settings = settings or ReportSettings()
    try:
        code = extract_code_name(path.name)
    except CodeNameError as exc:
        logger.warning("Skipping %s: %s", path, exc)
        return 0

    added = 0
    for enemy in extract_enemy_list_file(path):
        encounter = extract_encounter_file(path, enemy, settings.decimal_separator)
        if encounter is not None:
            stats.add(code, enemy, encounter)
            added += 1
    logger.debug("%s: %d encounter(s) for %s", path.name, added, code)
    return added


def extract_stats(directory: Path, settings: ReportSettings | None = None) -> Stats:
    """Scan *directory* (non-recursive) and aggregate every report found."""
    settings = settings or ReportSettings()
    t0 = time.perf_counter()

    stats = Stats()
    reports = find_reports(directory, settings)
    logger.info("Found %d report(s) in %s", len(reports), directory)
    for path in reports:
        add_report(stats, path, settings)

    elapsed_ms = (time.perf_counter() - t0) * 1000
    logger.info("Stats parsing took %.0f ms", elapsed_ms)
    return stats


def summarize(stats: Stats) -> list[CodeSummary]:
    """Per-code totals across all enemies, in code discovery order."""
    summaries: list[CodeSummary] = []
    for code in stats.codes:
        encounters = stats.encounters_for(code).values()
        played = sum(e.total_played_games for e in encounters)
        won = sum(e.total_won_games for e in encounters)
        summaries.append(CodeSummary(
            code=code,
            played_games=played,
            won_games=won,
            win_rate=100.0 * won / played if played > 0 else None,
        ))
    return summaries
