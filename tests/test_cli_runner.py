# tests/test_cli_runner.py

"""Tests for the headless CLI commands."""

import io
import json
import tempfile
import unittest
from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock, patch

from src.cli import runner
from src.filters.product_sorter import SortDirection
from src.models.product import ProductRecord
from src.models.snapshot import DashboardTotals, Snapshot
from src.services.tracker import TrackerResult


def _snapshot() -> Snapshot:
    """Two tracked products."""
    return Snapshot(
        products=[
            ProductRecord(name="Beta", total_sales=3, sales_difference=1),
            ProductRecord(name="Alpha", total_sales=9, sales_difference=0),
        ],
        dashboard_totals=DashboardTotals("12", "$99"),
        last_scraped=datetime(2026, 10, 19, 9, 0),
    )


class TestRunRefresh(unittest.TestCase):
    """runner.run_refresh exit codes and output."""

    def test_success_prints_sorted_json(self) -> None:
        """Products are printed in the requested order."""
        tracker = MagicMock()
        tracker.refresh.return_value = TrackerResult(
            success=True,
            message="Data refreshed successfully!",
            snapshot=_snapshot(),
            changed_count=1,
        )

        with patch("sys.stdout", new_callable=io.StringIO) as out:
            code = runner.run_refresh(
                tracker, None, "json", "name", SortDirection.ASCENDING
            )

        self.assertEqual(code, 0)
        data = json.loads(out.getvalue())
        self.assertEqual(
            [p["name"] for p in data["products"]], ["Alpha", "Beta"]
        )
        self.assertEqual(data["dashboardData"]["totalSales"], "12")
        tracker.refresh.assert_called_once_with(None)

    def test_failure_exit_code(self) -> None:
        """A failed refresh returns 1."""
        tracker = MagicMock()
        tracker.refresh.return_value = TrackerResult(
            success=False, message="Failed to refresh data: HTTP 503"
        )
        self.assertEqual(runner.run_refresh(tracker, None), 1)

    def test_reads_saved_html(self) -> None:
        """--html contents are passed to the tracker."""
        tmp = Path(tempfile.mkdtemp()) / "page.html"
        tmp.write_text("<html>saved</html>", encoding="utf-8")
        tracker = MagicMock()
        tracker.refresh.return_value = TrackerResult(
            success=True, message="ok", snapshot=_snapshot()
        )

        with patch("sys.stdout", new_callable=io.StringIO):
            runner.run_refresh(tracker, str(tmp))

        tracker.refresh.assert_called_once_with("<html>saved</html>")

    def test_missing_html_file(self) -> None:
        """An unreadable --html path fails without refreshing."""
        tracker = MagicMock()
        code = runner.run_refresh(tracker, "/nonexistent/page.html")
        self.assertEqual(code, 1)
        tracker.refresh.assert_not_called()

    def test_table_output(self) -> None:
        """Table format renders without error."""
        tracker = MagicMock()
        tracker.refresh.return_value = TrackerResult(
            success=True, message="ok", snapshot=_snapshot()
        )
        with patch.object(runner, "Console") as console_cls:
            code = runner.run_refresh(tracker, None, "table")
        self.assertEqual(code, 0)
        self.assertTrue(console_cls.return_value.print.called)


class TestOtherCommands(unittest.TestCase):
    """show / export / clear / watch."""

    def test_show_without_data(self) -> None:
        """Nothing stored prints nothing and succeeds."""
        tracker = MagicMock()
        tracker.load.return_value = TrackerResult(
            success=True, message="No data available."
        )
        with patch("sys.stdout", new_callable=io.StringIO) as out:
            code = runner.run_show(tracker)
        self.assertEqual(code, 0)
        self.assertEqual(out.getvalue(), "")

    def test_export_exit_codes(self) -> None:
        """Export mirrors the tracker's success flag."""
        tracker = MagicMock()
        tracker.export.return_value = TrackerResult(True, "done")
        self.assertEqual(runner.run_export(tracker), 0)
        tracker.export.return_value = TrackerResult(False, "Failed")
        self.assertEqual(runner.run_export(tracker), 1)

    def test_clear(self) -> None:
        """Clear delegates to the tracker."""
        tracker = MagicMock()
        tracker.clear.return_value = TrackerResult(True, "cleared")
        self.assertEqual(runner.run_clear(tracker), 0)
        tracker.clear.assert_called_once()

    def test_watch_runs_until_limit(self) -> None:
        """Watch refreshes repeatedly, failures included."""
        tracker = MagicMock()
        tracker.refresh.side_effect = [
            TrackerResult(True, "ok", changed_count=1),
            TrackerResult(False, "Failed to refresh data"),
            TrackerResult(True, "ok"),
        ]
        code = runner.run_watch(tracker, 60, max_runs=3)
        self.assertEqual(code, 0)
        self.assertEqual(tracker.refresh.call_count, 3)

    def test_watch_rejects_non_positive_interval(self) -> None:
        """A zero interval would hammer the dashboard."""
        tracker = MagicMock()
        self.assertEqual(runner.run_watch(tracker, 0, max_runs=3), 1)
        tracker.refresh.assert_not_called()

    def test_watch_stops_on_interrupt(self) -> None:
        """Ctrl+C ends the loop cleanly."""
        tracker = MagicMock()
        tracker.refresh.side_effect = KeyboardInterrupt
        self.assertEqual(runner.run_watch(tracker, 5), 0)


if __name__ == "__main__":
    unittest.main()
