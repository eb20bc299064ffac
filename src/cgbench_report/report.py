"""Report assembly: chart datasets, games-played table, HTML page.

Takes a Stats aggregate and renders one self-contained HTML document:
a Chart.js line chart (one series per code along the sorted enemy axis)
and a table of games played per (code, enemy) pair.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from cgbench_report.config import ReportSettings
from cgbench_report.models import Dataset, Stats

logger = logging.getLogger(__name__)

_TEMPLATE_DIR = Path(__file__).parent / "templates"
PAGE_TEMPLATE = "statistics.html.j2"
TABLE_TEMPLATE = "extra_info_table.html.j2"


def point_radius(played_games: int, max_played_games: int, max_radius: int) -> int:
    """Radius of a chart point, truncated; fewer games played gives a larger point.

    The pair with the most games gets 1, a pair with no games would get
    *max_radius*.
    """
    if max_played_games <= 0:
        return max_radius
    ratio = min(played_games / max_played_games, 1.0)
    return int(1 + (max_radius - 1) * (1 - ratio))


def build_datasets(
    stats: Stats,
    enemies: list[str] | None = None,
    settings: ReportSettings | None = None,
) -> list[Dataset]:
    """One Dataset per code, aligned positionally to *enemies*.

    Missing pairs (or pairs with no games) become a None gap with a
    radius of 0. Colors cycle through the palette in code order.
    """
    settings = settings or ReportSettings()
    if enemies is None:
        enemies = stats.enemies()
    max_played = stats.max_played_games()
    palette = settings.palette

    datasets: list[Dataset] = []
    for idx, code in enumerate(stats.codes):
        color = palette[idx % len(palette)]
        dataset = Dataset(label=code, border_color=color, background_color=color)
        for enemy in enemies:
            encounter = stats.get(code, enemy)
            if encounter is not None and encounter.total_played_games > 0:
                radius = point_radius(
                    encounter.total_played_games, max_played, settings.max_point_radius,
                )
                dataset.data.append(encounter.win_rate)
                dataset.point_radius.append(radius)
                dataset.point_hover_radius.append(radius)
            else:
                dataset.data.append(None)
                dataset.point_radius.append(0)
                dataset.point_hover_radius.append(0)
        datasets.append(dataset)
    return datasets


def played_games_rows(stats: Stats, enemies: list[str]) -> list[tuple[str, list[int]]]:
    """Table rows: ``(code, [played games per enemy])`` with 0 for absent pairs."""
    rows: list[tuple[str, list[int]]] = []
    for code in stats.codes:
        counts = []
        for enemy in enemies:
            encounter = stats.get(code, enemy)
            counts.append(encounter.total_played_games if encounter is not None else 0)
        rows.append((code, counts))
    return rows


class ReportRenderer:
    """Renders Stats into the HTML report page.

    Usage::

        renderer = ReportRenderer(settings)
        html = renderer.render(stats)
        write_report(html, Path("."), settings)
    """

    def __init__(self, settings: ReportSettings | None = None):
        self.settings = settings or ReportSettings()

        search_path = [str(_TEMPLATE_DIR)]
        self._page_template = PAGE_TEMPLATE
        if self.settings.template_path is not None:
            custom = Path(self.settings.template_path)
            search_path.insert(0, str(custom.parent))
            self._page_template = custom.name

        self._jinja = Environment(
            loader=FileSystemLoader(search_path),
            keep_trailing_newline=True,
        )

    def render_table(self, stats: Stats, enemies: list[str]) -> str:
        template = self._jinja.get_template(TABLE_TEMPLATE)
        return template.render(
            enemies=enemies,
            rows=played_games_rows(stats, enemies),
        ).strip()

    def render(self, stats: Stats) -> str:
        """Render the full page for *stats*."""
        enemies = stats.enemies()
        datasets = build_datasets(stats, enemies, self.settings)

        template = self._jinja.get_template(self._page_template)
        return template.render(
            label_list=json.dumps(enemies),
            dataset_list=json.dumps([d.model_dump(by_alias=True) for d in datasets]),
            extra_info=self.render_table(stats, enemies),
        )


def available_report_path(directory: Path, settings: ReportSettings | None = None) -> Path:
    """First of ``statistics.html``, ``statistics_0.html``, ``statistics_1.html``... not on disk."""
    settings = settings or ReportSettings()
    base, suffix = settings.output_basename, settings.output_suffix
    path = directory / f"{base}{suffix}"
    n = 0
    while path.exists():
        path = directory / f"{base}_{n}{suffix}"
        n += 1
    return path


def write_report(
    content: str,
    directory: Path,
    settings: ReportSettings | None = None,
) -> Path | None:
    """Write *content* without overwriting an earlier report.

    Returns the written path, or None if writing failed.
    """
    path = available_report_path(directory, settings)
    logger.info("Writing final report to %s", path)
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        logger.warning("An error occurred when writing the final report: %s", exc)
        return None
    return path
