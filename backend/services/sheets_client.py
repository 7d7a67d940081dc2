"""
HTTP client for reading the missing list from a public Google Sheet.

The sheet must be published to the web or shared as "Anyone with the link can
view". One column is exported as CSV through the gviz endpoint; the first row
is treated as a header.
"""

import logging
import re
from typing import List, Optional
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

SHEETS_BASE_URL = "https://docs.google.com/spreadsheets/d"

_SHEET_ID_PATTERN = re.compile(r"/spreadsheets/d/([a-zA-Z0-9_-]+)")


class SheetsClientError(Exception):
    """Base exception for sheet client errors."""

    pass


class InvalidSheetUrlError(SheetsClientError):
    """Raised when a URL does not look like a Google Sheets URL."""

    pass


class SheetsUnavailableError(SheetsClientError):
    """Raised when Google Sheets cannot be reached."""

    pass


class SheetsAPIError(SheetsClientError):
    """Raised when Google Sheets returns an error response."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class SheetNotFoundError(SheetsAPIError):
    """Raised on 404, usually because the sheet is not public."""

    def __init__(self, message: str = "Sheet not found. Make sure the sheet is public."):
        super().__init__(message, 404)


def extract_sheet_id(url: str) -> Optional[str]:
    """
    Extract the sheet ID from a Google Sheets URL.

    >>> extract_sheet_id("https://docs.google.com/spreadsheets/d/1AbC-d_9/edit#gid=0")
    '1AbC-d_9'
    """
    match = _SHEET_ID_PATTERN.search(url or "")
    return match.group(1) if match else None


def build_csv_url(sheet_id: str, sheet_tab: str = "", column: str = "A") -> str:
    """Build the CSV export URL for one column of a sheet."""
    url = f"{SHEETS_BASE_URL}/{sheet_id}/gviz/tq?tqx=out:csv&range={column}:{column}"
    if sheet_tab and sheet_tab.strip():
        url += f"&sheet={quote(sheet_tab.strip(), safe='')}"
    return url


def parse_sheet_csv(csv_text: str) -> List[str]:
    """
    Parse a single-column CSV export into card names.

    Skips the header row and blank cells, strips one pair of surrounding
    quotes and unescapes doubled quotes.
    """
    names: List[str] = []
    for line in csv_text.split("\n")[1:]:
        value = line.strip()
        if value.startswith('"') and value.endswith('"'):
            value = value[1:-1]
        value = value.replace('""', '"')
        if value:
            names.append(value)
    return names


class SheetsClient:
    """
    HTTP client for the Google Sheets CSV export.

    Implements application.ports.CanonicalListSource.
    """

    def __init__(self, timeout: float = 30.0):
        """
        Initialize the sheets client.

        Args:
            timeout: Request timeout in seconds
        """
        self._timeout = timeout

    async def fetch_missing_list(
        self,
        sheet_url: str,
        sheet_tab: str = "",
        column: str = "A",
    ) -> List[str]:
        """
        Fetch the missing list from a public Google Sheet.

        Args:
            sheet_url: Google Sheets URL (any URL containing /spreadsheets/d/<id>)
            sheet_tab: Tab name; empty for the first tab
            column: Column letter holding card names

        Returns:
            Card names in sheet order

        Raises:
            InvalidSheetUrlError: If the URL has no sheet ID
            SheetNotFoundError: If the sheet does not exist or is private
            SheetsAPIError: If Google returns another error response
            SheetsUnavailableError: If Google Sheets is not reachable or the transfer fails
        """
        sheet_id = extract_sheet_id(sheet_url)
        if not sheet_id:
            raise InvalidSheetUrlError(
                "Invalid Google Sheets URL. Please check the URL format."
            )

        url = build_csv_url(sheet_id, sheet_tab, column or "A")
        logger.info(f"Fetching missing list from {url}")

        try:
            async with httpx.AsyncClient(timeout=self._timeout, follow_redirects=True) as client:
                response = await client.get(url)

                if response.status_code == 200:
                    names = parse_sheet_csv(response.text)
                    logger.info(f"Loaded {len(names)} cards from sheet {sheet_id}")
                    return names
                elif response.status_code == 404:
                    logger.error(f"Sheet {sheet_id} not found")
                    raise SheetNotFoundError()
                else:
                    logger.error(
                        f"Google Sheets error: {response.status_code} - {response.text}"
                    )
                    raise SheetsAPIError(
                        f"Failed to fetch sheet: {response.reason_phrase or response.status_code}",
                        response.status_code,
                    )

        except httpx.ConnectError as e:
            logger.error(f"Google Sheets unavailable: {e}")
            raise SheetsUnavailableError(
                "Failed to fetch sheet data. Make sure the sheet is publicly accessible."
            ) from e
        except httpx.TimeoutException as e:
            logger.error(f"Google Sheets timeout: {e}")
            raise SheetsUnavailableError("Google Sheets request timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"Google Sheets transport error: {e}")
            raise SheetsUnavailableError(f"Google Sheets request failed: {e}") from e
