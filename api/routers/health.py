"""
Health check router.

- /health: liveness, no dependencies
- /health/ready: whether a scan could run right now (key and missing list present)
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.deps import get_scanner_service
from backend.services.scanner import ScannerService

router = APIRouter(
    tags=["Health"],
)


class ReadinessResponse(BaseModel):
    """Scan readiness."""
    ready: bool
    api_key_configured: bool
    missing_list_count: int


@router.get("/health")
def health():
    """
    Simple liveness endpoint for the card scanner API.

    Returns:
        dict: Status indicator for health checks
    """
    return {"status": "ok"}


@router.get("/health/ready", response_model=ReadinessResponse)
def readiness(scanner: ScannerService = Depends(get_scanner_service)) -> ReadinessResponse:
    """Report whether the preconditions for a scan are met."""
    has_key = scanner.resolve_api_key() is not None
    count = len(scanner.missing_list())
    return ReadinessResponse(
        ready=has_key and count > 0,
        api_key_configured=has_key,
        missing_list_count=count,
    )
