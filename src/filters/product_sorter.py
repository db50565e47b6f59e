# src/filters/product_sorter.py

"""Display ordering for tracked products."""

import locale
import logging
from collections.abc import Sequence
from enum import Enum

from src.models.product import ProductRecord, to_count

logger = logging.getLogger("sales_watch.filters")


class SortKey(str, Enum):
    """Columns the product list can be ordered by."""

    NAME = "name"
    TOTAL_SALES = "totalSales"
    TODAYS_SALES = "todaysSales"
    SALES_DIFFERENCE = "salesDifference"

    @classmethod
    def parse(cls, value: "str | SortKey") -> "SortKey | None":
        """Resolve a key from its value or a dashed alias.

        ``"total-sales"``, ``"total_sales"`` and ``"totalSales"`` all
        map to :attr:`TOTAL_SALES`.  Unknown keys return ``None``.
        """
        if isinstance(value, cls):
            return value
        wanted = str(value).replace("-", "").replace("_", "").lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        return None


class SortDirection(str, Enum):
    """Sort order."""

    ASCENDING = "asc"
    DESCENDING = "desc"

    def toggled(self) -> "SortDirection":
        """Return the opposite direction."""
        if self is SortDirection.ASCENDING:
            return SortDirection.DESCENDING
        return SortDirection.ASCENDING


_NUMERIC_FIELDS: dict[SortKey, str] = {
    SortKey.TOTAL_SALES: "total_sales",
    SortKey.TODAYS_SALES: "todays_sales",
    SortKey.SALES_DIFFERENCE: "sales_difference",
}


def _name_key(record: ProductRecord) -> str:
    name = getattr(record, "name", "") or ""
    return locale.strxfrm(name.casefold())


class ProductSorter:
    """Order product records for display without touching the input."""

    @staticmethod
    def sort_products(
        products: Sequence[ProductRecord],
        key: "SortKey | str",
        direction: SortDirection = SortDirection.ASCENDING,
    ) -> list[ProductRecord]:
        """Return a new list of *products* ordered by *key*.

        Names compare case-insensitively with locale collation; numeric
        keys compare as integers with unparseable values treated as 0.
        The sort is stable and *direction* never changes the relative
        order of ties.  An unrecognised *key* returns the input order.
        """
        sort_key = SortKey.parse(key)
        if sort_key is None:
            logger.debug("Ignoring unknown sort key %r", key)
            return list(products)

        descending = direction == SortDirection.DESCENDING
        if sort_key is SortKey.NAME:
            return sorted(products, key=_name_key, reverse=descending)

        field_name = _NUMERIC_FIELDS[sort_key]
        return sorted(
            products,
            key=lambda p: to_count(getattr(p, field_name, 0)),
            reverse=descending,
        )

    @staticmethod
    def next_sort_state(
        current_key: SortKey,
        current_direction: SortDirection,
        clicked_key: SortKey,
    ) -> tuple[SortKey, SortDirection]:
        """Work out the sort after the user picks *clicked_key*.

        Picking the active key flips the direction.  Picking a new key
        starts names ascending and sales figures descending.
        """
        if clicked_key is current_key:
            return current_key, current_direction.toggled()
        if clicked_key is SortKey.NAME:
            return clicked_key, SortDirection.ASCENDING
        return clicked_key, SortDirection.DESCENDING
