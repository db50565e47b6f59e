# tests/test_product_model.py

"""Tests for the product and snapshot models."""

import unittest
from datetime import datetime, timezone

from src.models.product import (
    ProductRecord,
    RawObservation,
    parse_timestamp,
    to_count,
)
from src.models.snapshot import DashboardTotals, Snapshot


class TestToCount(unittest.TestCase):
    """Counter coercion."""

    def test_ints_pass_through(self) -> None:
        """Plain integers are returned unchanged."""
        self.assertEqual(to_count(7), 7)
        self.assertEqual(to_count(-3), -3)

    def test_numeric_strings(self) -> None:
        """Digits with padding, separators and suffixes parse."""
        self.assertEqual(to_count(" 12 "), 12)
        self.assertEqual(to_count("1,234"), 1234)
        self.assertEqual(to_count("15 sales"), 15)

    def test_unparseable_is_zero(self) -> None:
        """Anything without a leading integer becomes 0."""
        for value in ("", "N/A", None, "abc", [], float("nan")):
            with self.subTest(value=value):
                self.assertEqual(to_count(value), 0)

    def test_float_truncates(self) -> None:
        """Floats are truncated."""
        self.assertEqual(to_count(4.9), 4)


class TestParseTimestamp(unittest.TestCase):
    """Timestamp parsing from storage."""

    def test_iso_with_z_suffix(self) -> None:
        """JavaScript-style ``Z`` timestamps parse as UTC."""
        parsed = parse_timestamp("2026-10-19T08:00:00.000Z")
        self.assertEqual(
            parsed, datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc)
        )

    def test_invalid_is_none(self) -> None:
        """Garbage and empty values give None."""
        self.assertIsNone(parse_timestamp("yesterday"))
        self.assertIsNone(parse_timestamp(""))
        self.assertIsNone(parse_timestamp(None))


class TestProductRecord(unittest.TestCase):
    """ProductRecord serialisation."""

    def test_defaults(self) -> None:
        """Counters default to 0 and text to empty."""
        record = ProductRecord(name="X")
        self.assertEqual(record.total_sales, 0)
        self.assertEqual(record.previous_sales, 0)
        self.assertEqual(record.sales_difference, 0)
        self.assertEqual(record.todays_sales, 0)
        self.assertIsNone(record.last_updated)
        self.assertEqual(record.product_url, "")

    def test_to_dict_uses_stored_names(self) -> None:
        """Keys follow the persisted camelCase layout."""
        record = ProductRecord(
            name="X",
            total_sales=5,
            last_updated=datetime(2026, 10, 19, 8, 0),
        )
        data = record.to_dict()
        self.assertEqual(data["totalSales"], 5)
        self.assertEqual(data["lastUpdated"], "2026-10-19T08:00:00")
        self.assertIn("salesDifference", data)
        self.assertIn("pendingRequests", data)

    def test_from_dict_coerces_bad_counters(self) -> None:
        """Malformed numbers in storage load as 0."""
        record = ProductRecord.from_dict(
            {"name": "X", "totalSales": "lots", "todaysSales": None}
        )
        self.assertEqual(record.total_sales, 0)
        self.assertEqual(record.todays_sales, 0)

    def test_round_trip(self) -> None:
        """to_dict followed by from_dict gives an equal record."""
        record = ProductRecord(
            name="Pack",
            total_sales=10,
            previous_sales=8,
            sales_difference=2,
            todays_sales=2,
            last_updated=datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc),
            product_url="https://example.com/pack",
            pending_requests=1,
        )
        self.assertEqual(ProductRecord.from_dict(record.to_dict()), record)


class TestSnapshot(unittest.TestCase):
    """Snapshot helpers and serialisation."""

    def test_get_by_name(self) -> None:
        """get() finds a record by exact name."""
        snapshot = Snapshot(products=[ProductRecord(name="A")])
        self.assertIsNotNone(snapshot.get("A"))
        self.assertIsNone(snapshot.get("a"))

    def test_from_dict_missing_dashboard(self) -> None:
        """Missing dashboard data falls back to N/A and no timestamp."""
        snapshot = Snapshot.from_dict({"products": []})
        self.assertEqual(
            snapshot.dashboard_totals, DashboardTotals("N/A", "N/A")
        )
        self.assertIsNone(snapshot.last_scraped)

    def test_round_trip(self) -> None:
        """Serialising and loading keeps every field."""
        snapshot = Snapshot(
            products=[
                ProductRecord(name="A", total_sales=3, todays_sales=1),
                ProductRecord(name="B", total_sales=9, sales_difference=-1),
            ],
            dashboard_totals=DashboardTotals("12", "$340.00"),
            last_scraped=datetime(2026, 10, 19, 9, 15),
        )
        self.assertEqual(Snapshot.from_dict(snapshot.to_dict()), snapshot)


class TestRawObservation(unittest.TestCase):
    """RawObservation defaults."""

    def test_defaults(self) -> None:
        """Optional fields default to empty values."""
        obs = RawObservation(name="A", total_sales=1)
        self.assertEqual(obs.pending_requests, 0)
        self.assertEqual(obs.product_url, "")
        self.assertIsNone(obs.observed_at)


if __name__ == "__main__":
    unittest.main()
