"""
Mapping of collaborator errors to HTTP responses.

- ScanPreconditionError / InvalidSheetUrlError -> 400
- SheetNotFoundError -> 404
- SheetsAPIError / VisionAPIError -> 502
- SheetsUnavailableError / VisionUnavailableError -> 503
"""
from fastapi import HTTPException, status

from backend.services.scanner import ScanPreconditionError
from backend.services.sheets_client import (
    InvalidSheetUrlError,
    SheetNotFoundError,
    SheetsAPIError,
    SheetsUnavailableError,
)
from backend.services.vision_client import VisionAPIError, VisionUnavailableError


def to_http_exception(error: Exception) -> HTTPException:
    """Translate a scanner/collaborator error into an HTTPException."""
    if isinstance(error, (ScanPreconditionError, InvalidSheetUrlError)):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(error, SheetNotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, (SheetsAPIError, VisionAPIError)):
        code = status.HTTP_502_BAD_GATEWAY
    elif isinstance(error, (SheetsUnavailableError, VisionUnavailableError)):
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=code, detail=str(error))
