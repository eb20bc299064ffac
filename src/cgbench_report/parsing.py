"""Pattern-based extraction from benchmark harness text reports.

A report is a plain-text log. Its first line lists the enemies the code
was benchmarked against as ``<nick>_<index>`` tokens; body lines carry
per-enemy records such as::

    Enemy[2]   GW=57.5%  ... [240]

The line-level functions here take plain strings or line iterables so
they can be exercised without touching the file system; the ``*_file``
wrappers add I/O and turn per-file failures into logged skips.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from cgbench_report.config import ReportSettings
from cgbench_report.models import Encounter

logger = logging.getLogger(__name__)

CODE_NAME_RE = re.compile(r"(.*)-\d+\.\d+(?:_\d+)*\.txt")
ENEMY_TOKEN_RE = re.compile(r"\s+([\w\[\]]+_\d+)")
_PERCENT_CHARS = "0-9,."


class ReportError(ValueError):
    """Base class for report extraction failures."""


class ReportParseError(ReportError):
    """A matched record holds a number that cannot be parsed."""


class CodeNameError(ReportError):
    """A report filename does not follow ``<name>-<major>.<minor>(_<build>)*.txt``."""


# =====================================================================
# Report classification
# =====================================================================

def is_report_text(lines: Iterable[str], settings: ReportSettings | None = None) -> bool:
    """True if any line announces a benchmark run (e.g. "Testing ... against ...")."""
    settings = settings or ReportSettings()
    for line in lines:
        if settings.versus_marker in line and any(
            marker in line for marker in settings.action_markers
        ):
            return True
    return False


def is_report_file(path: Path, settings: ReportSettings | None = None) -> bool:
    """Decide whether *path* is a benchmark report.

    Directories and files without a report extension are rejected
    without being opened. Unreadable files are logged and rejected.
    """
    settings = settings or ReportSettings()
    if path.is_dir() or path.suffix not in settings.report_extensions:
        return False
    try:
        with path.open(encoding="utf-8", errors="replace") as f:
            return is_report_text(f, settings)
    except OSError as exc:
        logger.error("Could not read %s: %s", path, exc)
        return False


# =====================================================================
# Code names
# =====================================================================

def extract_code_name(filename: str) -> str:
    """Strip the version suffix from a report filename.

    ``"BotA-1.0.txt"`` → ``"BotA"``
    ``"my-bot-2.13_4_1.txt"`` → ``"my-bot"``
    """
    match = CODE_NAME_RE.fullmatch(filename)
    if match is None:
        raise CodeNameError(f"Unexpected report filename: {filename!r}")
    return match.group(1)


# =====================================================================
# Enemy list
# =====================================================================

def extract_enemy_list(header: str) -> list[str]:
    """Enemy tokens of a report's first line, in order of appearance.

    Each token must be preceded by whitespace. Duplicates are kept.
    """
    return [m.group(1) for m in ENEMY_TOKEN_RE.finditer(header)]


def extract_enemy_list_file(path: Path) -> list[str]:
    try:
        with path.open(encoding="utf-8", errors="replace") as f:
            header = f.readline()
    except OSError as exc:
        logger.error("Could not read enemy list from %s: %s", path, exc)
        return []
    return extract_enemy_list(header)


# =====================================================================
# Encounters
# =====================================================================

def parse_percentage(text: str, decimal_separator: str = ".") -> float:
    """Parse a percentage using one explicit decimal separator.

    ``parse_percentage("57.5")`` → ``57.5``
    ``parse_percentage("57,5", ",")`` → ``57.5``
    """
    other = "," if decimal_separator == "." else "."
    if not text or other in text or text.count(decimal_separator) > 1:
        raise ReportParseError(f"Invalid percentage {text!r}")
    normalized = text.replace(decimal_separator, ".")
    if normalized == ".":
        raise ReportParseError(f"Invalid percentage {text!r}")
    return float(normalized)


def enemy_nick(enemy: str) -> str:
    """``"Enemy[2]_3"`` → ``"Enemy[2]"``"""
    nick, sep, _ = enemy.rpartition("_")
    return nick if sep else enemy


def encounter_pattern(enemy: str) -> re.Pattern[str]:
    """Line pattern for *enemy*'s record: ``<nick> GW=<pct>% ... [<played>]``."""
    return re.compile(
        r"\s*" + re.escape(enemy_nick(enemy))
        + r"\s*GW=([" + _PERCENT_CHARS + r"]+)%.*\[(\d+)\]"
    )


def best_encounter(
    lines: Iterable[str],
    enemy: str,
    decimal_separator: str = ".",
) -> Encounter | None:
    """Pick the record for *enemy* with the most played games.

    Returns None when no line matches. Ties keep the first matching line.
    Raises ReportParseError when a matching line has an unparseable
    percentage.
    """
    pattern = encounter_pattern(enemy)
    best: tuple[int, float] | None = None
    for line in lines:
        match = pattern.search(line)
        if match is None:
            continue
        win_rate = parse_percentage(match.group(1), decimal_separator)
        played = int(match.group(2))
        if best is None or played > best[0]:
            best = (played, win_rate)
    if best is None:
        return None
    return Encounter.from_win_rate(*best)


def extract_encounter_file(
    path: Path,
    enemy: str,
    decimal_separator: str = ".",
) -> Encounter | None:
    """File wrapper around best_encounter; read and parse failures yield None."""
    try:
        with path.open(encoding="utf-8", errors="replace") as f:
            encounter = best_encounter(f, enemy, decimal_separator)
    except (OSError, ReportParseError) as exc:
        logger.error("Skipping %s in %s: %s", enemy, path, exc)
        return None
    if encounter is None:
        logger.debug("No record for %s in %s", enemy, path)
    return encounter
