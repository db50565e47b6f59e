# src/filters/export_selector.py

"""Select changed products and render them as spreadsheet rows."""

import logging
from datetime import datetime, tzinfo

from src.config.settings import Settings
from src.models.export_row import ExportRow
from src.models.snapshot import Snapshot

logger = logging.getLogger("sales_watch.filters")


class ExportSelector:
    """Pick the products worth exporting from a snapshot."""

    @staticmethod
    def select_for_export(
        snapshot: Snapshot,
        now: datetime | None = None,
    ) -> list[ExportRow]:
        """Return one row per product whose sales changed.

        Snapshot order is preserved.  An empty list means there is
        nothing to export; it is not an error.
        """
        stamp = now or datetime.now().astimezone()
        rows = [
            ExportRow(
                name=p.name,
                total_sales=p.total_sales,
                todays_sales=p.todays_sales,
                sales_difference=p.sales_difference,
                product_url=p.product_url,
                timestamp=stamp,
            )
            for p in snapshot.products
            if p.sales_difference != 0
        ]
        logger.debug(
            "Selected %d of %d products for export",
            len(rows),
            len(snapshot.products),
        )
        return rows

    @staticmethod
    def to_sheet_row(
        row: ExportRow,
        tz: tzinfo | None = None,
    ) -> list[str | int]:
        """Render ``[timestamp, name, total, today, difference]``."""
        stamp = row.timestamp
        if stamp.tzinfo is not None:
            stamp = stamp.astimezone(tz)
        return [
            stamp.strftime(Settings.EXPORT_TIMESTAMP_FORMAT),
            row.name,
            row.total_sales,
            row.todays_sales,
            row.sales_difference,
        ]
