# src/cli/runner.py

"""Headless CLI commands built on the SalesTracker service."""

import json
import logging
import sys
import time
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from src.filters.product_sorter import (
    ProductSorter,
    SortDirection,
    SortKey,
)
from src.models.snapshot import Snapshot
from src.services.tracker import SalesTracker, TrackerResult
from src.ui.formatting import format_difference, format_last_updated

logger = logging.getLogger("sales_watch.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _report(result: TrackerResult) -> None:
    """Print a tracker status message to stderr."""
    if not result.message:
        return
    colour = "green" if result.success else "red"
    _err.print(f"[{colour}]{result.message}[/{colour}]")


def _snapshot_to_dict(
    snapshot: Snapshot,
    sort_key: str,
    direction: SortDirection,
) -> dict[str, Any]:
    """Serialise a snapshot with its products in display order."""
    data = snapshot.to_dict()
    ordered = ProductSorter.sort_products(
        snapshot.products, sort_key, direction
    )
    data["products"] = [p.to_dict() for p in ordered]
    return data


def _print_table(
    snapshot: Snapshot,
    sort_key: str,
    direction: SortDirection,
) -> None:
    """Render the dashboard totals and a Rich product table to stdout."""
    totals = snapshot.dashboard_totals
    console = Console()
    console.print(
        f"[bold]Total sales:[/bold] {totals.total_sales}   "
        f"[bold]Total earnings:[/bold] {totals.total_earnings}   "
        f"[dim]Last updated: "
        f"{format_last_updated(snapshot.last_scraped)}[/dim]"
    )

    table = Table(
        title="Products",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Product", max_width=50)
    table.add_column("Sales", justify="right")
    table.add_column("Today", justify="right")
    table.add_column("Change", justify="right")
    table.add_column("URL", overflow="fold", style="dim")

    ordered = ProductSorter.sort_products(
        snapshot.products, sort_key, direction
    )
    for idx, p in enumerate(ordered, 1):
        text, style = format_difference(p.sales_difference)
        table.add_row(
            str(idx),
            escape(p.name),
            str(p.total_sales),
            str(p.todays_sales),
            f"[{style}]{text}[/{style}]" if style else text,
            escape(p.product_url) or "-",
        )

    console.print(table)


def _output(
    snapshot: Snapshot | None,
    output_format: str,
    sort_key: str,
    direction: SortDirection,
) -> None:
    if snapshot is None:
        return
    if output_format == "table":
        _print_table(snapshot, sort_key, direction)
    else:
        json.dump(
            _snapshot_to_dict(snapshot, sort_key, direction),
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")


def run_refresh(
    tracker: SalesTracker,
    html_path: str | None,
    output_format: str = "json",
    sort_key: str = SortKey.NAME.value,
    direction: SortDirection = SortDirection.ASCENDING,
) -> int:
    """Scrape (or read a saved page), reconcile and print the result."""
    html: str | None = None
    if html_path is not None:
        try:
            html = Path(html_path).read_text(encoding="utf-8")
        except OSError as exc:
            logger.error("Cannot read %s: %s", html_path, exc)
            _err.print(f"[red]Cannot read {html_path}: {exc}[/red]")
            return 1

    _err.print("[bold]Refreshing data...[/bold]")
    result = tracker.refresh(html)
    _report(result)
    if not result.success:
        return 1

    _err.print(f"[dim]{result.changed_count} products changed[/dim]")
    _output(result.snapshot, output_format, sort_key, direction)
    return 0


def run_show(
    tracker: SalesTracker,
    output_format: str = "json",
    sort_key: str = SortKey.NAME.value,
    direction: SortDirection = SortDirection.ASCENDING,
) -> int:
    """Print the stored snapshot without scraping."""
    result = tracker.load()
    _report(result)
    if not result.success:
        return 1
    _output(result.snapshot, output_format, sort_key, direction)
    return 0


def run_export(tracker: SalesTracker) -> int:
    """Append changed products to the Google Sheet."""
    _err.print("[bold]Exporting to Google Sheet...[/bold]")
    result = tracker.export()
    _report(result)
    return 0 if result.success else 1


def run_clear(tracker: SalesTracker) -> int:
    """Delete the stored snapshot."""
    result = tracker.clear()
    _report(result)
    return 0 if result.success else 1


def run_watch(
    tracker: SalesTracker,
    interval: float,
    max_runs: int | None = None,
) -> int:
    """Refresh every *interval* seconds until interrupted.

    A failed refresh is reported and the loop waits for the next tick.
    """
    if interval <= 0:
        _err.print("[red]Watch interval must be greater than 0[/red]")
        return 1

    _err.print(
        f"[bold]Watching dashboard every {interval:.0f}s[/bold] "
        "[dim](Ctrl+C to stop)[/dim]"
    )
    runs = 0
    try:
        while max_runs is None or runs < max_runs:
            result = tracker.refresh()
            _report(result)
            if result.success:
                logger.info(
                    "Watch refresh: %d products changed",
                    result.changed_count,
                )
            runs += 1
            if max_runs is not None and runs >= max_runs:
                break
            time.sleep(interval)
    except KeyboardInterrupt:
        _err.print("[dim]Stopped.[/dim]")
    return 0
