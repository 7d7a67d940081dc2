"""
Scanner Store Interface (Port).

Durable storage for user settings and the last loaded missing list.
"""
from typing import List, Protocol

from domain.models.scan import ScannerSettings


class ScannerStore(Protocol):
    """Persists scanner settings and the missing list across sessions."""

    def load_settings(self) -> ScannerSettings:
        """Return stored settings, or defaults if nothing usable is stored."""
        ...

    def save_settings(self, settings: ScannerSettings) -> None:
        """Replace the stored settings."""
        ...

    def load_missing_list(self) -> List[str]:
        """Return the stored missing list, or [] if nothing usable is stored."""
        ...

    def save_missing_list(self, names: List[str]) -> None:
        """Replace the stored missing list."""
        ...
