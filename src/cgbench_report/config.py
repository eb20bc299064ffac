"""Report settings: parsing policy and chart presentation.

Defaults reproduce the harness conventions. A JSON file can override any
subset of fields::

    {"decimal_separator": ",", "max_point_radius": 20}
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_PALETTE: tuple[str, ...] = (
    "#000000", "#FF0000", "#00FF00", "#0000FF", "#ABAB57",
    "#00FFFF", "#FF00FF", "#C0C0C0", "#808080", "#800000",
    "#808000", "#008000", "#800080", "#008080", "#000080",
)

MAX_POINT_RADIUS = 35


class ReportSettings(BaseModel):
    """Settings for one report run."""

    model_config = ConfigDict(extra="forbid")

    # Classification
    report_extensions: list[str] = [".txt"]
    action_markers: list[str] = ["Testing", "Launching"]
    versus_marker: str = "against"

    # Parsing
    decimal_separator: str = "."

    # Presentation
    palette: list[str] = list(DEFAULT_PALETTE)
    max_point_radius: int = MAX_POINT_RADIUS

    # Output
    output_basename: str = "statistics"
    output_suffix: str = ".html"
    template_path: Path | None = None
    """Custom page template; the bundled one is used when unset."""

    @field_validator("decimal_separator")
    @classmethod
    def _validate_decimal_separator(cls, v: str) -> str:
        if v not in (".", ","):
            raise ValueError("decimal_separator must be '.' or ','")
        return v

    @field_validator("palette")
    @classmethod
    def _validate_palette(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("palette needs at least one color")
        return v

    @field_validator("max_point_radius")
    @classmethod
    def _validate_max_point_radius(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_point_radius must be at least 1")
        return v


def load_settings(path: Path) -> ReportSettings:
    """Load settings from a JSON file."""
    data = json.loads(path.read_text(encoding="utf-8"))
    return ReportSettings.model_validate(data)
