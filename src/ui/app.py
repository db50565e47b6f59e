# src/ui/app.py

"""Terminal UI for the sales_watch tracker."""

import asyncio
import logging
import webbrowser
from typing import cast

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Static,
)

from src.config.settings import Settings
from src.filters.product_sorter import (
    ProductSorter,
    SortDirection,
    SortKey,
)
from src.models.product import ProductRecord
from src.models.snapshot import Snapshot
from src.services.tracker import SalesTracker, TrackerResult
from src.ui.formatting import format_difference, format_last_updated

logger = logging.getLogger("sales_watch.ui")

# Button id -> sort key
_SORT_BUTTONS: dict[str, SortKey] = {
    "sort_name": SortKey.NAME,
    "sort_total_sales": SortKey.TOTAL_SALES,
    "sort_todays_sales": SortKey.TODAYS_SALES,
    "sort_sales_difference": SortKey.SALES_DIFFERENCE,
}


class ConfirmClearScreen(ModalScreen[bool]):
    """Asks before wiping the stored snapshot."""

    def compose(self) -> ComposeResult:
        yield Container(
            Static("Are you sure you want to clear all stored data?"),
            Horizontal(
                Button("Clear", variant="error", id="confirm_yes"),
                Button("Cancel", id="confirm_no"),
                id="confirm_buttons",
            ),
            id="confirm_dialog",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "confirm_yes")


class SalesWatchApp(App[object]):
    """Dashboard totals, tracked products and the refresh/export controls."""

    CSS_PATH = "styles.css"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "refresh", "Refresh"),
        Binding("e", "export", "Export"),
        Binding("x", "clear", "Clear"),
        Binding("n", "sort('name')", "Name"),
        Binding("t", "sort('totalSales')", "Total"),
        Binding("d", "sort('todaysSales')", "Today"),
        Binding("c", "sort('salesDifference')", "Change"),
    ]

    def __init__(self, tracker: SalesTracker | None = None) -> None:
        super().__init__()
        self.tracker = tracker or SalesTracker()
        self.settings = Settings()
        self.snapshot: Snapshot | None = None
        self.rows: list[ProductRecord] = []
        self.sort_key: SortKey = SortKey.NAME
        self.sort_direction: SortDirection = SortDirection.ASCENDING

    def compose(self) -> ComposeResult:
        """Build the widget tree for the TUI."""
        yield Header()
        yield Container(
            Static("📈 Seller Dashboard Sales", id="title"),
            Horizontal(
                Static("Total sales: N/A", id="total_sales"),
                Static("Total earnings: N/A", id="total_earnings"),
                Static("Last updated: Never", id="last_updated"),
                id="stats",
            ),
            Horizontal(
                Button("Refresh", variant="primary", id="refresh_btn"),
                Button("Export to Sheet", id="export_btn"),
                Button("Clear Data", variant="error", id="clear_btn"),
                id="actions",
            ),
            Horizontal(
                Button("Name", id="sort_name", classes="filter-btn"),
                Button(
                    "Total Sales",
                    id="sort_total_sales",
                    classes="filter-btn",
                ),
                Button(
                    "Today's Sales",
                    id="sort_todays_sales",
                    classes="filter-btn",
                ),
                Button(
                    "Change",
                    id="sort_sales_difference",
                    classes="filter-btn",
                ),
                id="sort_bar",
            ),
            Static("Ready", id="status"),
            cast(
                DataTable[str | Text],
                DataTable(
                    id="products_table",
                    zebra_stripes=True,
                    cursor_type="row",
                ),
            ),
            id="main_container",
        )
        yield Footer()

    def on_mount(self) -> None:
        """Set up columns, show stored data and start the refresh timer."""
        table = cast(
            DataTable[str | Text],
            self.query_one("#products_table", DataTable),
        )
        table.add_columns("Product", "Sales", "Today", "Change")
        self._mark_active_sort()
        self.load_stored_data()

        interval = self.settings.AUTO_REFRESH_INTERVAL
        if interval > 0:
            logger.info("Auto refresh every %.0fs", interval)
            self.set_interval(interval, self.perform_refresh)

    # ── Data flow ────────────────────────────────────────

    def load_stored_data(self) -> None:
        """Show whatever snapshot is already stored."""
        result = self.tracker.load()
        if result.snapshot is None:
            self._set_status(
                result.message or "No data available",
                error=not result.success,
            )
        self.display_snapshot(result.snapshot)

    def display_snapshot(self, snapshot: Snapshot | None) -> None:
        """Update totals and the product table from *snapshot*."""
        self.snapshot = snapshot
        if snapshot is None:
            self.query_one("#total_sales", Static).update(
                "Total sales: N/A"
            )
            self.query_one("#total_earnings", Static).update(
                "Total earnings: N/A"
            )
            self.query_one("#last_updated", Static).update(
                "Last updated: Never"
            )
        else:
            totals = snapshot.dashboard_totals
            self.query_one("#total_sales", Static).update(
                f"Total sales: {totals.total_sales}"
            )
            self.query_one("#total_earnings", Static).update(
                f"Total earnings: {totals.total_earnings}"
            )
            self.query_one("#last_updated", Static).update(
                "Last updated: "
                f"{format_last_updated(snapshot.last_scraped)}"
            )
        self.populate_table()

    def populate_table(self) -> None:
        """Fill the DataTable in the current sort order."""
        table = cast(
            DataTable[str | Text],
            self.query_one("#products_table", DataTable),
        )
        table.clear()
        products = self.snapshot.products if self.snapshot else []
        self.rows = ProductSorter.sort_products(
            products, self.sort_key, self.sort_direction
        )
        for p in self.rows:
            text, style = format_difference(p.sales_difference)
            table.add_row(
                p.name[:60],
                str(p.total_sales),
                str(p.todays_sales),
                Text(text, style=style),
            )

    def _set_status(self, message: str, error: bool = False) -> None:
        status = self.query_one("#status", Static)
        status.update(f"❌ {message}" if error else message)

    def _show_result(self, result: TrackerResult) -> None:
        self._set_status(result.message, error=not result.success)
        if not result.success:
            self.notify(result.message, severity="error")

    async def perform_refresh(self) -> None:
        """Scrape the dashboard in a worker thread and show the result."""
        self._set_status("🔄 Refreshing data...")
        result = await asyncio.to_thread(self.tracker.refresh)
        self._show_result(result)
        if result.success:
            self.display_snapshot(result.snapshot)

    async def perform_export(self) -> None:
        """Export changed products without blocking the UI."""
        self._set_status("📤 Exporting to Google Sheet...")
        result = await asyncio.to_thread(self.tracker.export)
        self._show_result(result)

    def _on_clear_confirmed(self, confirmed: bool | None) -> None:
        if not confirmed:
            return
        result = self.tracker.clear()
        self._show_result(result)
        if result.success:
            self.display_snapshot(None)

    # ── Sorting ──────────────────────────────────────────

    def set_sort(self, key: SortKey) -> None:
        """Apply a sort click: same key flips, new key starts fresh."""
        self.sort_key, self.sort_direction = ProductSorter.next_sort_state(
            self.sort_key, self.sort_direction, key
        )
        self._mark_active_sort()
        self.populate_table()

    def _mark_active_sort(self) -> None:
        for button_id, key in _SORT_BUTTONS.items():
            button = self.query_one(f"#{button_id}", Button)
            button.set_class(key is self.sort_key, "active")

    # ── Events and actions ───────────────────────────────

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button click events."""
        button_id = event.button.id or ""
        if button_id == "refresh_btn":
            await self.perform_refresh()
        elif button_id == "export_btn":
            await self.perform_export()
        elif button_id == "clear_btn":
            self.action_clear()
        elif button_id in _SORT_BUTTONS:
            self.set_sort(_SORT_BUTTONS[button_id])

    def on_data_table_row_selected(
        self, event: DataTable.RowSelected
    ) -> None:
        """Open the selected product's page in the default browser."""
        if 0 <= event.cursor_row < len(self.rows):
            url = self.rows[event.cursor_row].product_url
            if url:
                webbrowser.open(url)

    async def action_refresh(self) -> None:
        await self.perform_refresh()

    async def action_export(self) -> None:
        await self.perform_export()

    def action_clear(self) -> None:
        self.push_screen(ConfirmClearScreen(), self._on_clear_confirmed)

    def action_sort(self, key: str) -> None:
        sort_key = SortKey.parse(key)
        if sort_key is not None:
            self.set_sort(sort_key)
