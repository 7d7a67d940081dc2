"""
API package for the card scanner.

This package contains:
- deps.py: FastAPI dependency providers for DI
- errors.py: collaborator error -> HTTP status mapping
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_scanner_store,
    get_sheets_client,
    get_vision_factory,
    get_scanner_service,
)

__all__ = [
    "get_settings",
    "get_scanner_store",
    "get_sheets_client",
    "get_vision_factory",
    "get_scanner_service",
]
