# src/models/export_row.py

"""Row model for spreadsheet export."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class ExportRow:
    """A product whose sales changed, ready to append to the sheet."""

    name: str
    total_sales: int
    todays_sales: int
    sales_difference: int
    product_url: str
    timestamp: datetime
