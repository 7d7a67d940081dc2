"""Backend services for the card scanner: sheet and vision clients, scan orchestration."""

from backend.services.scanner import ScannerService, ScanPreconditionError
from backend.services.sheets_client import SheetsClient, SheetsClientError
from backend.services.vision_client import GeminiVisionClient, VisionClientError

__all__ = [
    "ScannerService",
    "ScanPreconditionError",
    "SheetsClient",
    "SheetsClientError",
    "GeminiVisionClient",
    "VisionClientError",
]
