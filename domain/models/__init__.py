"""
Domain models for the card scanner.

- ScannerSettings: user configuration persisted between sessions
- ScanResult / ScanStatus: one card found in a photo
- ScanReport: everything found in one photo plus a user-facing message

Usage:
    >>> from domain.models import ScanResult
    >>> ScanResult(name="Pikachu").status.value
    'need'
"""
from domain.models.scan import ScannerSettings, ScanReport, ScanResult, ScanStatus

__all__ = [
    "ScannerSettings",
    "ScanReport",
    "ScanResult",
    "ScanStatus",
]
