"""
Router package for the card scanner API.

This package contains all API routers organized by concern:
- health: Liveness and scan readiness
- matching: Name normalization, resolution and batch reconciliation
- missing_list: Stored missing list and sheet reload
- scan: Photo scanning against the missing list
- settings: Saved sheet location and API key
"""

from api.routers.health import router as health_router
from api.routers.matching import router as matching_router
from api.routers.missing_list import router as missing_list_router
from api.routers.scan import router as scan_router
from api.routers.settings import router as settings_router

__all__ = [
    "health_router",
    "matching_router",
    "missing_list_router",
    "scan_router",
    "settings_router",
]
