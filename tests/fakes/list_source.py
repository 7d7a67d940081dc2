"""
Fake missing-list source for testing.

Returns a fixed list (or raises a configured error) and records what it was
asked for.
"""
from typing import Any, Dict, List, Optional


class FakeCanonicalListSource:
    """
    In-memory fake implementation of CanonicalListSource.

    Usage:
        source = FakeCanonicalListSource(["Pikachu", "Charizard"])
        names = await source.fetch_missing_list("https://...", "", "A")
    """

    def __init__(self, names: Optional[List[str]] = None, error: Optional[Exception] = None):
        self.names: List[str] = list(names or [])
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def fetch_missing_list(
        self,
        sheet_url: str,
        sheet_tab: str = "",
        column: str = "A",
    ) -> List[str]:
        self.calls.append({"sheet_url": sheet_url, "sheet_tab": sheet_tab, "column": column})
        if self.error is not None:
            raise self.error
        return list(self.names)
