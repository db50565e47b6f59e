# src/models/snapshot.py

"""Persisted snapshot model and the scrape batch that feeds it."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.models.product import (
    ProductRecord,
    RawObservation,
    format_timestamp,
    parse_timestamp,
)

NOT_AVAILABLE = "N/A"


def _total_text(value: object) -> str:
    return NOT_AVAILABLE if value is None else str(value)


@dataclass
class DashboardTotals:
    """Seller-level totals shown on the dashboard, kept verbatim."""

    total_sales: str = NOT_AVAILABLE
    total_earnings: str = NOT_AVAILABLE


@dataclass
class Snapshot:
    """The complete tracked state at one point in time."""

    products: list[ProductRecord] = field(
        default_factory=lambda: list[ProductRecord]()
    )
    dashboard_totals: DashboardTotals = field(
        default_factory=DashboardTotals
    )
    last_scraped: datetime | None = None

    def get(self, name: str) -> ProductRecord | None:
        """Return the record for *name*, or ``None``."""
        for record in self.products:
            if record.name == name:
                return record
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the stored ``productData`` layout."""
        return {
            "products": [p.to_dict() for p in self.products],
            "dashboardData": {
                "totalSales": self.dashboard_totals.total_sales,
                "totalEarnings": self.dashboard_totals.total_earnings,
                "lastScraped": format_timestamp(self.last_scraped),
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Snapshot":
        """Rebuild a snapshot from its stored layout."""
        raw_products = data.get("products") or []
        dashboard: dict[str, Any] = data.get("dashboardData") or {}
        return cls(
            products=[
                ProductRecord.from_dict(p)
                for p in raw_products
                if isinstance(p, dict)
            ],
            dashboard_totals=DashboardTotals(
                total_sales=_total_text(dashboard.get("totalSales")),
                total_earnings=_total_text(
                    dashboard.get("totalEarnings")
                ),
            ),
            last_scraped=parse_timestamp(dashboard.get("lastScraped")),
        )


@dataclass
class ScrapeResult:
    """Everything one dashboard scrape produced."""

    observations: list[RawObservation]
    totals: DashboardTotals
    scraped_at: datetime
