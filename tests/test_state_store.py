# tests/test_state_store.py

"""Tests for the JSON state store."""

import json
import tempfile
import unittest
from datetime import datetime
from pathlib import Path

from src.models.product import ProductRecord
from src.models.snapshot import DashboardTotals, Snapshot
from src.storage.state_store import StateStore, StateStoreError


def _sample_snapshot() -> Snapshot:
    """Return a small populated snapshot."""
    return Snapshot(
        products=[
            ProductRecord(
                name="Divi Layout Pack",
                total_sales=42,
                previous_sales=40,
                sales_difference=2,
                todays_sales=5,
                last_updated=datetime(2026, 10, 19, 9, 30),
                product_url="https://example.com/divi",
                pending_requests=1,
            ),
            ProductRecord(
                name="Footer Builder",
                total_sales=15,
                previous_sales=16,
                sales_difference=-1,
                todays_sales=0,
                last_updated=datetime(2026, 10, 19, 9, 30),
            ),
        ],
        dashboard_totals=DashboardTotals("57", "$1,482.50"),
        last_scraped=datetime(2026, 10, 19, 9, 30),
    )


class TestStateStore(unittest.TestCase):
    """get / set / clear against a temp file."""

    def setUp(self) -> None:
        """Point the store at a fresh temp directory."""
        self.tmp_dir = tempfile.mkdtemp()
        self.path = Path(self.tmp_dir) / "state.json"
        self.store = StateStore(path=self.path)

    def test_get_without_file_is_none(self) -> None:
        """First run: nothing stored."""
        self.assertIsNone(self.store.get())

    def test_round_trip(self) -> None:
        """A stored snapshot loads back identical."""
        snapshot = _sample_snapshot()
        self.store.set(snapshot)
        self.assertEqual(self.store.get(), snapshot)

    def test_set_replaces_whole_snapshot(self) -> None:
        """A later set fully replaces the earlier one."""
        self.store.set(_sample_snapshot())
        replacement = Snapshot(products=[ProductRecord(name="Only")])
        self.store.set(replacement)
        loaded = self.store.get()
        assert loaded is not None
        self.assertEqual([p.name for p in loaded.products], ["Only"])

    def test_stored_under_fixed_key(self) -> None:
        """The file holds the snapshot under productData."""
        self.store.set(_sample_snapshot())
        with open(self.path, encoding="utf-8") as f:
            data = json.load(f)
        self.assertIn("productData", data)
        self.assertEqual(
            data["productData"]["dashboardData"]["totalSales"], "57"
        )

    def test_clear_removes_snapshot(self) -> None:
        """After clear, get returns None."""
        self.store.set(_sample_snapshot())
        self.assertTrue(self.store.clear())
        self.assertIsNone(self.store.get())

    def test_clear_when_empty(self) -> None:
        """Clearing nothing reports False."""
        self.assertFalse(self.store.clear())

    def test_clear_keeps_other_keys(self) -> None:
        """Only the snapshot key is removed from the file."""
        self.path.write_text(
            json.dumps({"productData": {}, "other": 1}),
            encoding="utf-8",
        )
        self.store.clear()
        with open(self.path, encoding="utf-8") as f:
            self.assertEqual(json.load(f), {"other": 1})

    def test_corrupt_file_raises(self) -> None:
        """Unreadable JSON is reported, not silently reset."""
        self.path.write_text("{not json", encoding="utf-8")
        with self.assertRaises(StateStoreError):
            self.store.get()

    def test_non_object_file_raises(self) -> None:
        """A JSON list is not a valid store."""
        self.path.write_text("[]", encoding="utf-8")
        with self.assertRaises(StateStoreError):
            self.store.get()

    def test_no_temp_files_left(self) -> None:
        """Writes leave only the state file behind."""
        self.store.set(_sample_snapshot())
        self.assertEqual(
            sorted(p.name for p in Path(self.tmp_dir).iterdir()),
            ["state.json"],
        )

    def test_failed_write_leaves_no_temp_file(self) -> None:
        """An unserialisable snapshot keeps the old file and no leftovers."""
        good = _sample_snapshot()
        self.store.set(good)
        bad = Snapshot(
            products=[ProductRecord(name="A", product_url=object())]  # type: ignore[arg-type]
        )

        with self.assertRaises(StateStoreError):
            self.store.set(bad)

        self.assertEqual(
            sorted(p.name for p in Path(self.tmp_dir).iterdir()),
            ["state.json"],
        )
        self.assertEqual(self.store.get(), good)

    def test_custom_key(self) -> None:
        """Stores with different keys do not see each other."""
        other = StateStore(path=self.path, key="otherData")
        self.store.set(_sample_snapshot())
        self.assertIsNone(other.get())


if __name__ == "__main__":
    unittest.main()
