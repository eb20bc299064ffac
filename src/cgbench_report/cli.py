"""Generate an HTML statistics report from benchmark harness logs.

Usage:
    cgbench-report [directory] [--output-dir DIR] [--config settings.json]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from cgbench_report.aggregate import extract_stats, summarize
from cgbench_report.config import ReportSettings, load_settings
from cgbench_report.report import ReportRenderer, write_report

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cgbench-report",
        description="Aggregate benchmark reports into an HTML statistics page",
    )
    parser.add_argument("directory", nargs="?", default=".", help="Directory holding the .txt reports")
    parser.add_argument("--output-dir", type=str, default=None, help="Where to write the report (default: directory)")
    parser.add_argument("--config", type=str, default=None, help="JSON settings file")
    parser.add_argument("--template", type=str, default=None, help="Custom page template")
    parser.add_argument("--verbose", action="store_true", help="Log per-file details")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(Path(args.config)) if args.config else ReportSettings()
    except (OSError, ValueError) as exc:
        logger.error("Invalid settings file %s: %s", args.config, exc)
        return 1
    if args.template:
        settings = settings.model_copy(update={"template_path": Path(args.template)})
    if settings.template_path is not None and not Path(settings.template_path).is_file():
        logger.error("Template not found: %s", settings.template_path)
        return 1

    directory = Path(args.directory)
    try:
        stats = extract_stats(directory, settings)
    except OSError as exc:
        logger.error("Cannot list %s: %s", directory, exc)
        return 1

    html = ReportRenderer(settings).render(stats)
    out_dir = Path(args.output_dir) if args.output_dir else directory
    write_report(html, out_dir, settings)

    for s in summarize(stats):
        wr = f"{s.win_rate:.1f}%" if s.win_rate is not None else "n/a"
        print(f"{s.code:30s}  played={s.played_games:<8d} won={s.won_games:<8g} wr={wr}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
