"""
Canonical List Source Interface (Port).

Where the missing list comes from. The production implementation reads a
public Google Sheet (backend.services.sheets_client.SheetsClient).
"""
from typing import List, Protocol


class CanonicalListSource(Protocol):
    """Yields the ordered list of card names the collector is missing."""

    async def fetch_missing_list(
        self,
        sheet_url: str,
        sheet_tab: str = "",
        column: str = "A",
    ) -> List[str]:
        """
        Fetch the missing list.

        Args:
            sheet_url: Locator of the tabular source (a Google Sheets URL)
            sheet_tab: Tab name; empty for the first tab
            column: Column letter holding the card names

        Returns:
            Card names in source order, empty cells already dropped
        """
        ...
