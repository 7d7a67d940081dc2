"""
Missing list router.

This router provides endpoints for:
- Reading the stored missing list (with optional search)
- Reloading the list from the configured Google Sheet
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from api.deps import get_scanner_service
from api.errors import to_http_exception
from backend.services.scanner import ScannerService, ScanPreconditionError
from backend.services.sheets_client import SheetsClientError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/missing-list",
    tags=["Missing List"],
)


class MissingListResponse(BaseModel):
    """Response model for the missing list."""
    names: List[str]
    count: int


class LoadSheetResponse(BaseModel):
    """Response for a successful sheet load."""
    message: str
    count: int


@router.get("", response_model=MissingListResponse)
def get_missing_list(
    search: str = Query("", description="Case-insensitive substring filter"),
    scanner: ScannerService = Depends(get_scanner_service),
) -> MissingListResponse:
    """Return the stored missing list."""
    names = scanner.missing_list(search)
    return MissingListResponse(names=names, count=len(names))


@router.post("/load", response_model=LoadSheetResponse)
async def load_missing_list(
    scanner: ScannerService = Depends(get_scanner_service),
) -> LoadSheetResponse:
    """
    Reload the missing list from the configured Google Sheet.

    Raises:
        HTTPException: 400 without a sheet URL, 404 if the sheet is not
            public, 502/503 if Google Sheets fails
    """
    try:
        names = await scanner.load_missing_list()
    except (ScanPreconditionError, SheetsClientError) as e:
        logger.warning(f"Failed to load missing list: {e}")
        raise to_http_exception(e) from e
    return LoadSheetResponse(message=f"Loaded {len(names)} cards from sheet", count=len(names))
