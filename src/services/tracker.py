# src/services/tracker.py

"""Coordinates scraping, reconciliation, persistence and export."""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, tzinfo

from src.filters.export_selector import ExportSelector
from src.models.snapshot import ScrapeResult, Snapshot
from src.scrapers.base_scraper import ScrapeError
from src.scrapers.dashboard_scraper import DashboardScraper
from src.services.reconciler import reconcile
from src.services.sheet_exporter import SheetExporter, SheetExportError
from src.storage.state_store import StateStore, StateStoreError

logger = logging.getLogger("sales_watch.tracker")


@dataclass
class TrackerResult:
    """Outcome of one tracker operation, shown to the user as-is."""

    success: bool
    message: str
    snapshot: Snapshot | None = None
    changed_count: int = 0
    exported_count: int = 0


class SalesTracker:
    """Runs refresh, export and clear against one state store.

    Every read-modify-write of the store happens under a single lock,
    and a refresh holds it from the scrape through the write, so a
    timer-driven refresh and a manual one cannot interleave.
    Failures come back as ``TrackerResult(success=False)`` and are not
    retried.
    """

    def __init__(
        self,
        store: StateStore | None = None,
        scraper: DashboardScraper | None = None,
        exporter: SheetExporter | None = None,
        tz: tzinfo | None = None,
    ) -> None:
        self.store = store or StateStore()
        self._scraper = scraper
        self._exporter = exporter
        self.tz = tz
        self._lock = threading.Lock()

    @property
    def scraper(self) -> DashboardScraper:
        if self._scraper is None:
            self._scraper = DashboardScraper()
        return self._scraper

    @property
    def exporter(self) -> SheetExporter:
        if self._exporter is None:
            self._exporter = SheetExporter()
        return self._exporter

    # ── Reading ──────────────────────────────────────────

    def load(self) -> TrackerResult:
        """Return the stored snapshot without scraping."""
        try:
            snapshot = self.store.get()
        except StateStoreError as exc:
            logger.error("Load failed: %s", exc, exc_info=True)
            return TrackerResult(success=False, message=str(exc))
        if snapshot is None:
            return TrackerResult(
                success=True,
                message="No data available. Refresh to scrape data.",
            )
        return TrackerResult(
            success=True, message="", snapshot=snapshot
        )

    # ── Refresh ──────────────────────────────────────────

    def _commit(self, scrape: ScrapeResult) -> TrackerResult:
        """Reconcile *scrape* and persist it.  Caller holds the lock."""
        try:
            previous = self.store.get()
            snapshot = reconcile(
                previous,
                scrape.observations,
                now=scrape.scraped_at,
                totals=scrape.totals,
                tz=self.tz,
            )
            self.store.set(snapshot)
        except StateStoreError as exc:
            logger.error("Refresh failed: %s", exc, exc_info=True)
            return TrackerResult(
                success=False,
                message=f"Failed to refresh data: {exc}",
            )

        changed = sum(
            1 for p in snapshot.products if p.sales_difference != 0
        )
        return TrackerResult(
            success=True,
            message="Data refreshed successfully!",
            snapshot=snapshot,
            changed_count=changed,
        )

    def ingest(self, scrape: ScrapeResult) -> TrackerResult:
        """Reconcile a scrape against the stored snapshot and persist it."""
        with self._lock:
            return self._commit(scrape)

    def refresh(self, html: str | None = None) -> TrackerResult:
        """Scrape the dashboard (or parse *html*) and reconcile it.

        The lock is held from the scrape through the store write, so
        overlapping refreshes commit in the order they scraped.
        """
        with self._lock:
            try:
                if html is None:
                    scrape = self.scraper.scrape()
                else:
                    scrape = self.scraper.parse(html)
            except ScrapeError as exc:
                logger.error("Scrape failed: %s", exc, exc_info=True)
                return TrackerResult(
                    success=False,
                    message=f"Failed to refresh data: {exc}",
                )
            return self._commit(scrape)

    # ── Export ───────────────────────────────────────────

    def export(self, now: datetime | None = None) -> TrackerResult:
        """Append every changed product to the configured sheet."""
        with self._lock:
            try:
                snapshot = self.store.get()
            except StateStoreError as exc:
                logger.error("Export failed: %s", exc, exc_info=True)
                return TrackerResult(success=False, message=str(exc))

        if snapshot is None or not snapshot.products:
            return TrackerResult(
                success=True,
                message="No data available to export.",
            )

        rows = ExportSelector.select_for_export(snapshot, now)
        if not rows:
            return TrackerResult(
                success=True,
                message="No products with sales changes to export.",
                snapshot=snapshot,
            )

        try:
            self.exporter.append_rows(rows)
        except SheetExportError as exc:
            logger.error("Export failed: %s", exc)
            return TrackerResult(
                success=False,
                message=f"Failed to export data: {exc}",
                snapshot=snapshot,
            )

        return TrackerResult(
            success=True,
            message="Data exported to Google Sheet successfully!",
            snapshot=snapshot,
            exported_count=len(rows),
        )

    # ── Clear ────────────────────────────────────────────

    def clear(self) -> TrackerResult:
        """Delete the stored snapshot."""
        with self._lock:
            try:
                self.store.clear()
            except StateStoreError as exc:
                logger.error("Clear failed: %s", exc, exc_info=True)
                return TrackerResult(success=False, message=str(exc))
        return TrackerResult(
            success=True, message="All stored data has been cleared."
        )
