"""Shared fixtures for building benchmark reports on disk."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


def report_text(enemies: list[str], records: list[str], code: str = "Bot") -> str:
    """Text of a harness report: enemy header, launch line, result records."""
    lines = [
        "Enemies: " + " ".join(enemies),
        f"Testing {code} against {len(enemies)} enemies",
        *records,
    ]
    return "\n".join(lines) + "\n"


@pytest.fixture()
def write_report(tmp_path: Path) -> Callable[..., Path]:
    """Write a report file into tmp_path and return its path."""

    def _write(filename: str, enemies: list[str], records: list[str]) -> Path:
        path = tmp_path / filename
        path.write_text(report_text(enemies, records), encoding="utf-8")
        return path

    return _write
