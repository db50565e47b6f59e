# src/config/settings.py

"""Central configuration for the sales_watch tracker."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the sales_watch tracker."""

    # --- Dashboard ---
    DASHBOARD_URL: str = os.getenv(
        "DASHBOARD_URL",
        "https://www.elegantthemes.com/marketplace/seller-dashboard/",
    )
    DASHBOARD_URL_MARKER: str = "elegantthemes.com/marketplace/seller-dashboard"
    DASHBOARD_COOKIE: str = os.getenv("DASHBOARD_COOKIE", "")

    # --- HTTP ---
    REQUEST_TIMEOUT: int = 15           # Seconds before a request times out
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": (
            "text/html,application/xhtml+xml,"
            "application/xml;q=0.9,image/avif,"
            "image/webp,image/apng,*/*;q=0.8"
        ),
        "Accept-Language": "en-US,en;q=0.9",
        "sec-ch-ua": (
            '"Google Chrome";v="131", '
            '"Chromium";v="131", '
            '"Not_A Brand";v="24"'
        ),
        "sec-ch-ua-mobile": "?0",
        "sec-ch-ua-platform": '"Windows"',
        "sec-fetch-dest": "document",
        "sec-fetch-mode": "navigate",
        "sec-fetch-site": "none",
        "sec-fetch-user": "?1",
        "Upgrade-Insecure-Requests": "1",
    }

    # --- Google Sheets export ---
    SHEET_ID: str = os.getenv(
        "SHEET_ID", "1EjLA92fMblcp3ONeorWJHGnA0k4NKPjHcc4cVSaYDhg"
    )
    SHEET_TAB: str = os.getenv("SHEET_TAB", "Sheet1")
    SHEETS_SCOPES: list[str] = [
        "https://www.googleapis.com/auth/spreadsheets",
    ]
    EXPORT_TIMESTAMP_FORMAT: str = "%Y-%m-%d %H:%M:%S"

    # --- State ---
    STATE_KEY: str = "productData"      # Single persisted snapshot key

    # --- Logging ---
    CONSOLE_LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING").upper()

    # --- UI ---
    AUTO_REFRESH_INTERVAL: float = float(
        os.getenv("AUTO_REFRESH_INTERVAL", "0")
    )                                   # Seconds; 0 disables the timer

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    SELECTORS_PATH: Path = BASE_DIR / "src" / "config" / "selectors.json"
    DATA_DIR: Path = BASE_DIR / "data"
    LOGS_DIR: Path = BASE_DIR / "logs"
    STATE_FILE: Path = Path(
        os.getenv("STATE_FILE", str(DATA_DIR / "state.json"))
    )
    SERVICE_ACCOUNT_FILE: Path = Path(
        os.getenv(
            "GOOGLE_SERVICE_ACCOUNT_FILE",
            str(BASE_DIR / "service_account.json"),
        )
    )
