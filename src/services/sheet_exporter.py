# src/services/sheet_exporter.py

"""Append export rows to a Google Sheet."""

import logging
from typing import Any

import gspread
import requests
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials

from src.config.settings import Settings
from src.filters.export_selector import ExportSelector
from src.models.export_row import ExportRow

logger = logging.getLogger("sales_watch.sheets")


class SheetExportError(Exception):
    """Raised when authentication or the append call fails."""


class SheetExporter:
    """Appends rows to one worksheet of the configured spreadsheet.

    The gspread client is authorised lazily from the service-account
    file.  Each append is attempted once; failures raise
    :class:`SheetExportError`.
    """

    def __init__(
        self,
        sheet_id: str | None = None,
        worksheet: str | None = None,
        client: gspread.Client | None = None,
    ) -> None:
        self.settings = Settings()
        self.sheet_id: str = sheet_id or self.settings.SHEET_ID
        self.worksheet: str = worksheet or self.settings.SHEET_TAB
        self._client = client

    @property
    def client(self) -> gspread.Client:
        if self._client is None:
            try:
                creds = Credentials.from_service_account_file(
                    str(self.settings.SERVICE_ACCOUNT_FILE),
                    scopes=self.settings.SHEETS_SCOPES,
                )
            except (OSError, ValueError) as exc:
                logger.error("Cannot load service account: %s", exc)
                raise SheetExportError(
                    f"Authentication failed: {exc}"
                ) from exc
            self._client = gspread.authorize(creds)
        return self._client

    def append_rows(self, rows: list[ExportRow]) -> dict[str, Any]:
        """Append *rows* to the worksheet and return the API response."""
        if not rows:
            return {}

        values = [ExportSelector.to_sheet_row(r) for r in rows]
        try:
            ws = self.client.open_by_key(self.sheet_id).worksheet(
                self.worksheet
            )
            result = ws.append_rows(
                values, value_input_option="USER_ENTERED"
            )
        except gspread.WorksheetNotFound as exc:
            logger.error("Worksheet %r not found", self.worksheet)
            raise SheetExportError(
                f"Worksheet not found: {self.worksheet}"
            ) from exc
        except gspread.exceptions.APIError as exc:
            logger.error("Sheets API error: %s", exc, exc_info=True)
            raise SheetExportError(
                f"Google Sheets API error: {exc}"
            ) from exc
        except GoogleAuthError as exc:
            logger.error("Google authentication failed: %s", exc)
            raise SheetExportError(
                f"Authentication failed: {exc}"
            ) from exc
        except requests.RequestException as exc:
            logger.error("Sheets request failed: %s", exc, exc_info=True)
            raise SheetExportError(f"Request failed: {exc}") from exc

        logger.info(
            "Appended %d rows to sheet %s (%s)",
            len(values),
            self.sheet_id,
            self.worksheet,
        )
        return dict(result or {})
