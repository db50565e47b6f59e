# src/scrapers/dashboard_scraper.py

"""Scraper for the marketplace seller dashboard."""

from datetime import datetime
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from src.models.product import RawObservation, to_count
from src.models.snapshot import NOT_AVAILABLE, DashboardTotals, ScrapeResult
from src.scrapers.base_scraper import BaseScraper, ScrapeError


class DashboardScraper(BaseScraper):
    """Reads per-product sales counters from the seller dashboard.

    The dashboard is only served to a logged-in seller, so live fetches
    send the session cookie from ``DASHBOARD_COOKIE``.  A saved copy of
    the page can be fed to :meth:`parse` instead.
    """

    def __init__(self, dashboard_url: str | None = None) -> None:
        super().__init__("dashboard")
        self.dashboard_url: str = (
            dashboard_url or self.settings.DASHBOARD_URL
        )

    def scrape(self) -> ScrapeResult:
        """Fetch the live dashboard and parse it."""
        if self.settings.DASHBOARD_URL_MARKER not in self.dashboard_url:
            raise ScrapeError(
                "Not a seller dashboard URL: " + self.dashboard_url
            )
        soup = self._get_page(self.dashboard_url)
        if soup.select_one("input[type=password]") is not None:
            raise ScrapeError(
                "Dashboard returned a login page; "
                "check DASHBOARD_COOKIE"
            )
        return self.parse_soup(soup, datetime.now().astimezone())

    def parse(
        self, html: str, scraped_at: datetime | None = None,
    ) -> ScrapeResult:
        """Parse dashboard HTML captured elsewhere."""
        soup = BeautifulSoup(html, "lxml")
        return self.parse_soup(
            soup, scraped_at or datetime.now().astimezone()
        )

    def parse_soup(
        self, soup: BeautifulSoup, scraped_at: datetime,
    ) -> ScrapeResult:
        """Extract observations and seller totals from a parsed page."""
        cards = soup.select(self.selectors["product_card"])
        observations = [
            self._parse_card(card, scraped_at) for card in cards
        ]
        totals = DashboardTotals(
            total_sales=self._text_or_na(
                soup, self.selectors["seller_total_sales"]
            ),
            total_earnings=self._text_or_na(
                soup, self.selectors["seller_total_earned"]
            ),
        )
        self.logger.info(
            "[%s] Parsed %d products (total sales %s)",
            self.source_name,
            len(observations),
            totals.total_sales,
        )
        return ScrapeResult(
            observations=observations,
            totals=totals,
            scraped_at=scraped_at,
        )

    def _parse_card(
        self, card: Tag, scraped_at: datetime,
    ) -> RawObservation:
        name_el = card.select_one(self.selectors["product_name"])
        name = name_el.get_text(strip=True) if name_el else "Unknown"

        sales_el = card.select_one(self.selectors["total_sales"])
        pending_el = card.select_one(self.selectors["pending_requests"])

        link = card.select_one(
            self.selectors["product_link"]
        ) or card.select_one(self.selectors["fallback_link"])
        href = str(link.get("href") or "") if link else ""

        return RawObservation(
            name=name,
            total_sales=to_count(sales_el.get_text()) if sales_el else 0,
            pending_requests=(
                to_count(pending_el.get_text()) if pending_el else 0
            ),
            product_url=urljoin(self.dashboard_url, href) if href else "",
            observed_at=scraped_at,
        )

    @staticmethod
    def _text_or_na(soup: BeautifulSoup, selector: str) -> str:
        element = soup.select_one(selector)
        return element.get_text(strip=True) if element else NOT_AVAILABLE
