"""Command-line entry point.

Fetches the feed once and writes the rendered map page (and optionally a
PNG snapshot) to disk. With --all-views, one HTML file is written per
filter selection from the same single fetch.

Usage:
    python -m src.main --output quakes.html
    python -m src.main --filter strong --snapshot strong.png
    python -m src.main --all-views --output-dir out/

Environment:
    CONFIG_PATH: Path to config file (default: config/config.yaml)
    LOG_LEVEL: Logging level (default: INFO)
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from src.controller import FeedViewController
from src.core.filters import FilterSelection, parse_filter_selection
from src.core.formatter import format_count, format_event_summary
from src.core.view_state import WidgetStatus
from src.shell.config_loader import ConfigError, get_config, load_config


logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure root logging from LOG_LEVEL."""
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render recent earthquakes from the USGS feed on a world map",
    )
    parser.add_argument(
        "--filter",
        default="all",
        help="Severity to show: all, minor, moderate, strong (default: all)",
    )
    parser.add_argument(
        "--output",
        default="earthquakes.html",
        help="HTML file to write (default: earthquakes.html)",
    )
    parser.add_argument(
        "--all-views",
        action="store_true",
        help="Write one HTML file per filter selection into --output-dir",
    )
    parser.add_argument(
        "--output-dir",
        default=".",
        help="Directory for --all-views output (default: current directory)",
    )
    parser.add_argument(
        "--snapshot",
        help="Also write a PNG snapshot of the filtered map to this path",
    )
    parser.add_argument(
        "--config",
        help="Path to YAML config file (default: CONFIG_PATH or environment)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print one line per displayed earthquake",
    )
    return parser


def write_all_views(controller: FeedViewController, output_dir: Path) -> list[Path]:
    """Write one page per filter selection, re-filtering the same data."""
    output_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for selection in FilterSelection:
        controller.select_filter(selection)
        path = output_dir / f"earthquakes-{selection.value}.html"
        path.write_text(controller.render_page(), encoding="utf-8")
        logger.info("Wrote %s (%d earthquakes)", path, controller.view.count)
        written.append(path)
    return written


def run(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.all_views and (args.snapshot or args.list):
        parser.error("--all-views cannot be combined with --snapshot or --list")

    try:
        selection = parse_filter_selection(args.filter)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        config = load_config(args.config) if args.config else get_config()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    controller = FeedViewController(config)
    view = controller.load()

    if view.status is WidgetStatus.ERROR:
        print(f"Error: {view.error}", file=sys.stderr)
        return 1

    if args.all_views:
        for path in write_all_views(controller, Path(args.output_dir)):
            print(f"Wrote {path}")
        return 0

    controller.select_filter(selection)

    output = Path(args.output)
    output.write_text(controller.render_page(), encoding="utf-8")
    print(f"{format_count(controller.view.count)} -> {output}")

    if args.list:
        for record in controller.view.visible:
            print(f"  {format_event_summary(record)}")

    if args.snapshot:
        result = controller.render_snapshot()
        if not result.success:
            print(f"Error: snapshot failed: {result.error}", file=sys.stderr)
            return 1
        Path(args.snapshot).write_bytes(result.image_bytes or b"")
        print(f"Snapshot -> {args.snapshot}")

    return 0


def main() -> None:
    configure_logging()
    sys.exit(run())


if __name__ == "__main__":
    main()
