"""
Unit tests for SheetsClient.

Tests URL handling, CSV parsing and the HTTP error mapping for the Google
Sheets missing-list source.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from backend.services.sheets_client import (
    InvalidSheetUrlError,
    SheetNotFoundError,
    SheetsAPIError,
    SheetsClient,
    SheetsClientError,
    SheetsUnavailableError,
    build_csv_url,
    extract_sheet_id,
    parse_sheet_csv,
)


SHEET_URL = "https://docs.google.com/spreadsheets/d/1AbC-d_9xyz/edit#gid=0"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sheets_client():
    """Create a SheetsClient instance for testing."""
    return SheetsClient(timeout=5.0)


def _mock_http(get_response=None, get_side_effect=None):
    mock_client = AsyncMock()
    mock_client.get = AsyncMock(return_value=get_response, side_effect=get_side_effect)
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=None)
    return mock_client


# ---------------------------------------------------------------------------
# URL helpers
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestExtractSheetId:

    def test_edit_url(self):
        assert extract_sheet_id(SHEET_URL) == "1AbC-d_9xyz"

    def test_bare_url(self):
        assert extract_sheet_id("https://docs.google.com/spreadsheets/d/abc123") == "abc123"

    @pytest.mark.parametrize("url", ["", "https://example.com/sheet", "not a url", None])
    def test_invalid_url_gives_none(self, url):
        assert extract_sheet_id(url) is None


@pytest.mark.unit
class TestBuildCsvUrl:

    def test_default_column_and_first_tab(self):
        url = build_csv_url("abc")
        assert url == "https://docs.google.com/spreadsheets/d/abc/gviz/tq?tqx=out:csv&range=A:A"

    def test_column(self):
        assert build_csv_url("abc", column="B").endswith("&range=B:B")

    def test_tab_is_url_encoded(self):
        url = build_csv_url("abc", sheet_tab="My Collection")
        assert url.endswith("&sheet=My%20Collection")

    def test_blank_tab_is_omitted(self):
        assert "&sheet=" not in build_csv_url("abc", sheet_tab="   ")


# ---------------------------------------------------------------------------
# CSV parsing
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestParseSheetCsv:

    def test_skips_header_and_strips_quotes(self):
        csv_text = '"Card Name"\n"Pikachu"\n"Charizard"'
        assert parse_sheet_csv(csv_text) == ["Pikachu", "Charizard"]

    def test_skips_blank_cells(self):
        csv_text = '"Name"\n"Pikachu"\n""\n\n"Mewtwo"\n'
        assert parse_sheet_csv(csv_text) == ["Pikachu", "Mewtwo"]

    def test_unescapes_doubled_quotes(self):
        csv_text = '"Name"\n"Pikachu ""Promo"""'
        assert parse_sheet_csv(csv_text) == ['Pikachu "Promo"']

    def test_unquoted_values_and_crlf(self):
        csv_text = "Name\r\nPikachu\r\nMr. Mime\r\n"
        assert parse_sheet_csv(csv_text) == ["Pikachu", "Mr. Mime"]

    def test_header_only(self):
        assert parse_sheet_csv('"Name"') == []

    def test_empty_text(self):
        assert parse_sheet_csv("") == []


# ---------------------------------------------------------------------------
# SheetsClient.fetch_missing_list
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestSheetsClientFetch:
    """Tests for fetch_missing_list."""

    @pytest.mark.asyncio
    async def test_fetch_success(self, sheets_client):
        """200 response is parsed into names."""
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.text = '"Name"\n"Pikachu"\n"Charizard"'

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = _mock_http(get_response=mock_response)
            mock_client_class.return_value = mock_client

            names = await sheets_client.fetch_missing_list(SHEET_URL, "My Collection", "B")

            assert names == ["Pikachu", "Charizard"]
            url = mock_client.get.call_args.args[0]
            assert "/1AbC-d_9xyz/gviz/tq" in url
            assert "range=B:B" in url
            assert "sheet=My%20Collection" in url

    @pytest.mark.asyncio
    async def test_fetch_uses_timeout_and_follows_redirects(self, sheets_client):
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.text = '"Name"'

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = _mock_http(get_response=mock_response)

            await sheets_client.fetch_missing_list(SHEET_URL)

            mock_client_class.assert_called_once_with(timeout=5.0, follow_redirects=True)

    @pytest.mark.asyncio
    async def test_invalid_url_raises_before_request(self, sheets_client):
        with patch("httpx.AsyncClient") as mock_client_class:
            with pytest.raises(InvalidSheetUrlError):
                await sheets_client.fetch_missing_list("https://example.com/list")
            mock_client_class.assert_not_called()

    @pytest.mark.asyncio
    async def test_not_found(self, sheets_client):
        """404 raises SheetNotFoundError."""
        mock_response = MagicMock()
        mock_response.status_code = 404
        mock_response.text = "Not Found"

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = _mock_http(get_response=mock_response)

            with pytest.raises(SheetNotFoundError) as exc_info:
                await sheets_client.fetch_missing_list(SHEET_URL)

            assert exc_info.value.status_code == 404
            assert "public" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_other_error_status(self, sheets_client):
        """Non-404 error raises SheetsAPIError carrying the status."""
        mock_response = MagicMock()
        mock_response.status_code = 500
        mock_response.reason_phrase = "Internal Server Error"
        mock_response.text = "boom"

        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = _mock_http(get_response=mock_response)

            with pytest.raises(SheetsAPIError) as exc_info:
                await sheets_client.fetch_missing_list(SHEET_URL)

            assert exc_info.value.status_code == 500
            assert str(exc_info.value) == "Failed to fetch sheet: Internal Server Error"

    @pytest.mark.asyncio
    async def test_connection_error(self, sheets_client):
        """Connection error raises SheetsUnavailableError."""
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = _mock_http(
                get_side_effect=httpx.ConnectError("Connection refused")
            )

            with pytest.raises(SheetsUnavailableError):
                await sheets_client.fetch_missing_list(SHEET_URL)

    @pytest.mark.asyncio
    async def test_timeout(self, sheets_client):
        """Timeout raises SheetsUnavailableError."""
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = _mock_http(
                get_side_effect=httpx.TimeoutException("Timeout")
            )

            with pytest.raises(SheetsUnavailableError):
                await sheets_client.fetch_missing_list(SHEET_URL)

    @pytest.mark.asyncio
    async def test_protocol_error(self, sheets_client):
        """Other transport failures raise SheetsUnavailableError."""
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_class.return_value = _mock_http(
                get_side_effect=httpx.RemoteProtocolError("Server disconnected without sending a response.")
            )

            with pytest.raises(SheetsUnavailableError) as exc_info:
                await sheets_client.fetch_missing_list(SHEET_URL)

            assert "Server disconnected" in str(exc_info.value)


@pytest.mark.unit
class TestSheetsErrorHierarchy:

    def test_all_errors_share_a_base(self):
        for error_class in (InvalidSheetUrlError, SheetsUnavailableError, SheetsAPIError, SheetNotFoundError):
            assert issubclass(error_class, SheetsClientError)

    def test_not_found_is_an_api_error(self):
        assert isinstance(SheetNotFoundError(), SheetsAPIError)
