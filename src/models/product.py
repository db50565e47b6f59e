# src/models/product.py

"""Product data models shared by the scraper, engine and presentation."""

import logging
import math
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any

logger = logging.getLogger("sales_watch.models")

# Leading integer, parseInt-style ("12 sales" -> 12)
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def to_count(value: object) -> int:
    """Coerce a scraped or stored counter to ``int``.

    Unparseable values become ``0`` rather than failing the batch.
    """
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        match = _LEADING_INT_RE.match(value.replace(",", ""))
        if match:
            return int(match.group(1))
    if value not in (None, ""):
        logger.debug("Coerced unparseable counter %r to 0", value)
    return 0


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO-8601 timestamp, returning ``None`` when invalid."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        return None
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        logger.debug("Ignoring unparseable timestamp %r", value)
        return None


def format_timestamp(value: datetime | None) -> str | None:
    """Serialise a timestamp for storage."""
    return value.isoformat() if value is not None else None


@dataclass
class RawObservation:
    """One product reading from a single dashboard scrape."""

    name: str
    total_sales: int
    pending_requests: int = 0
    product_url: str = ""
    observed_at: datetime | None = None


@dataclass
class ProductRecord:
    """Persisted view of a product across reconciliations."""

    name: str
    total_sales: int = 0
    previous_sales: int = 0
    sales_difference: int = 0
    todays_sales: int = 0
    last_updated: datetime | None = None
    product_url: str = ""
    pending_requests: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Serialise using the persisted camelCase field names."""
        return {
            "name": self.name,
            "totalSales": self.total_sales,
            "previousSales": self.previous_sales,
            "salesDifference": self.sales_difference,
            "todaysSales": self.todays_sales,
            "lastUpdated": format_timestamp(self.last_updated),
            "productUrl": self.product_url,
            "pendingRequests": self.pending_requests,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProductRecord":
        """Rebuild a record from stored data, coercing bad counters to 0."""
        return cls(
            name=str(data.get("name", "")),
            total_sales=to_count(data.get("totalSales")),
            previous_sales=to_count(data.get("previousSales")),
            sales_difference=to_count(data.get("salesDifference")),
            todays_sales=to_count(data.get("todaysSales")),
            last_updated=parse_timestamp(data.get("lastUpdated")),
            product_url=str(data.get("productUrl") or ""),
            pending_requests=to_count(data.get("pendingRequests")),
        )
