# src/scrapers/base_scraper.py

"""Base class for dashboard scrapers."""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any

from bs4 import BeautifulSoup
from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.models.snapshot import ScrapeResult


class ScrapeError(Exception):
    """Raised when a page cannot be fetched or is not the expected page."""


class BaseScraper(ABC):
    """Shared session, selector loading and page fetching.

    Fetches are attempted once.  A failure raises :class:`ScrapeError`
    and is left to the caller to report.
    """

    def __init__(self, source_name: str) -> None:
        self.source_name = source_name
        self.logger = logging.getLogger(
            f"sales_watch.{source_name}"
        )
        self.settings = Settings()
        self.selectors: dict[str, str] = self._load_selectors()
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._request_timeout: int = self.settings.REQUEST_TIMEOUT

    def _load_selectors(self) -> dict[str, str]:
        """Load CSS selectors for this source from selectors.json."""
        with open(self.settings.SELECTORS_PATH) as f:
            all_selectors: dict[str, Any] = json.load(f)
        result: dict[str, str] = all_selectors.get(
            self.source_name, {}
        )
        return result

    def _request_headers(self) -> dict[str, str]:
        headers: dict[str, str] = dict(self.settings.DEFAULT_HEADERS)
        if self.settings.DASHBOARD_COOKIE:
            headers["Cookie"] = self.settings.DASHBOARD_COOKIE
        return headers

    def _get_page(self, url: str) -> BeautifulSoup:
        """Fetch *url* and parse it, raising ``ScrapeError`` on failure."""
        try:
            resp = self.session.get(
                url,
                headers=self._request_headers(),
                timeout=self._request_timeout,
            )
        except Exception as exc:
            self.logger.error(
                "[%s] Request to %s failed: %s",
                self.source_name,
                url,
                exc,
                exc_info=True,
            )
            raise ScrapeError(f"Request failed: {exc}") from exc

        if resp.status_code != 200:
            self.logger.warning(
                "[%s] HTTP %d from %s",
                self.source_name,
                resp.status_code,
                url,
            )
            raise ScrapeError(f"HTTP {resp.status_code} from {url}")

        return BeautifulSoup(resp.text, "lxml")

    @abstractmethod
    def scrape(self) -> ScrapeResult:
        """Fetch the live page and return its observations."""
        ...
