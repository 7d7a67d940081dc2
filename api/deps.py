"""
FastAPI Dependency Providers for the card scanner API.

Providers return interface types (Protocols) where one exists, so tests can
swap in fakes:

    app.dependency_overrides[get_scanner_store] = lambda: FakeScannerStore()
"""

from typing import Callable

from fastapi import Depends

from application.ports import CanonicalListSource, ScannerStore, VisionDetector
from backend.services.scanner import ScannerService
from backend.services.sheets_client import SheetsClient
from backend.services.vision_client import GeminiVisionClient
from backend.settings import Settings, get_settings as _get_settings
from infrastructure import YamlScannerStore


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    """
    return _get_settings()


# =============================================================================
# Collaborator Providers
# =============================================================================


def get_scanner_store(settings: Settings = Depends(get_settings)) -> ScannerStore:
    """Store for user settings and the missing list."""
    return YamlScannerStore(settings.scanner_store_path)


def get_sheets_client(settings: Settings = Depends(get_settings)) -> CanonicalListSource:
    """Google Sheets missing-list source."""
    return SheetsClient(timeout=settings.sheets_timeout)


def get_vision_factory(
    settings: Settings = Depends(get_settings),
) -> Callable[[str], VisionDetector]:
    """Factory building a Gemini client for a given API key."""

    def factory(api_key: str) -> VisionDetector:
        return GeminiVisionClient(
            api_key=api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
            max_output_tokens=settings.vision_max_output_tokens,
            timeout=settings.vision_timeout,
        )

    return factory


# =============================================================================
# Service Providers
# =============================================================================


def get_scanner_service(
    store: ScannerStore = Depends(get_scanner_store),
    sheets: CanonicalListSource = Depends(get_sheets_client),
    vision_factory: Callable[[str], VisionDetector] = Depends(get_vision_factory),
    settings: Settings = Depends(get_settings),
) -> ScannerService:
    """Scanner service wired to the configured collaborators."""
    return ScannerService(
        store=store,
        sheets=sheets,
        vision_factory=vision_factory,
        fallback_api_key=settings.gemini_api_key,
    )


__all__ = [
    "get_settings",
    "get_scanner_store",
    "get_sheets_client",
    "get_vision_factory",
    "get_scanner_service",
]
