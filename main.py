# main.py

"""Entry point for the sales_watch tracker (TUI or headless CLI)."""

import argparse
import locale
import logging
import math
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from src.config.logging_config import setup_logging
from src.filters.product_sorter import SortDirection, SortKey

if TYPE_CHECKING:
    from src.services.tracker import SalesTracker

logger = logging.getLogger("sales_watch.main")


def _positive_seconds(value: str) -> float:
    """argparse type for a refresh interval greater than zero."""
    try:
        seconds = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"invalid interval: {value!r}"
        ) from None
    if not (math.isfinite(seconds) and seconds > 0):
        raise argparse.ArgumentTypeError(
            f"interval must be greater than 0, got {value}"
        )
    return seconds


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    sort_keys = ", ".join(k.value for k in SortKey)

    parser = argparse.ArgumentParser(
        prog="sales_watch",
        description=(
            "Track per-product sales on a marketplace seller dashboard."
        ),
        epilog=f"Sort keys: {sort_keys}",
    )
    command = parser.add_mutually_exclusive_group()
    command.add_argument(
        "--refresh",
        action="store_true",
        default=False,
        help="Scrape the dashboard, reconcile and print the result.",
    )
    command.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Print the stored snapshot without scraping.",
    )
    command.add_argument(
        "--export",
        action="store_true",
        default=False,
        help="Append changed products to the Google Sheet.",
    )
    command.add_argument(
        "--clear",
        action="store_true",
        default=False,
        help="Delete all stored data.",
    )
    command.add_argument(
        "--watch",
        type=_positive_seconds,
        default=None,
        metavar="SECONDS",
        help="Refresh repeatedly at this interval.",
    )
    parser.add_argument(
        "--html",
        default=None,
        dest="html_path",
        help=(
            "Parse a saved dashboard page instead of fetching it "
            "(with --refresh only)."
        ),
    )
    parser.add_argument(
        "--state",
        default=None,
        dest="state_file",
        help="State file path (default: data/state.json).",
    )
    parser.add_argument(
        "--sort",
        default=SortKey.NAME.value,
        dest="sort_key",
        help="Sort key for printed output (default: name).",
    )
    parser.add_argument(
        "--desc",
        action="store_true",
        default=False,
        help="Sort descending.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    return parser


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse and cross-check command-line arguments."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.html_path is not None and not args.refresh:
        parser.error("--html can only be used with --refresh")
    return args


def _make_tracker(state_file: str | None) -> "SalesTracker":
    """Build a tracker, optionally on a custom state file."""
    from src.services.tracker import SalesTracker
    from src.storage.state_store import StateStore

    store = StateStore(Path(state_file)) if state_file else None
    return SalesTracker(store=store)


def _run_tui(args: argparse.Namespace) -> None:
    """Launch the interactive Textual TUI."""
    from src.ui.app import SalesWatchApp

    try:
        app = SalesWatchApp(tracker=_make_tracker(args.state_file))
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("sales_watch TUI shutting down")


def _run_cli(args: argparse.Namespace) -> None:
    """Run one headless command and exit."""
    from src.cli import runner

    tracker = _make_tracker(args.state_file)
    direction = (
        SortDirection.DESCENDING if args.desc else SortDirection.ASCENDING
    )

    if args.refresh:
        exit_code = runner.run_refresh(
            tracker,
            args.html_path,
            args.output_format,
            args.sort_key,
            direction,
        )
    elif args.export:
        exit_code = runner.run_export(tracker)
    elif args.clear:
        exit_code = runner.run_clear(tracker)
    elif args.watch is not None:
        exit_code = runner.run_watch(tracker, args.watch)
    else:
        exit_code = runner.run_show(
            tracker, args.output_format, args.sort_key, direction
        )
    sys.exit(exit_code)


def main() -> None:
    """Route to the TUI (no command) or a headless CLI command."""
    log_file = setup_logging()
    logger.info("sales_watch starting, log file: %s", log_file)

    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        logger.warning("System locale unavailable, using C collation")

    args = _parse_args()

    commands = (args.refresh, args.show, args.export, args.clear)
    if any(commands) or args.watch is not None:
        _run_cli(args)
    else:
        _run_tui(args)


if __name__ == "__main__":
    main()
