"""
Scan router: find missing-list cards in a photo.
"""
import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from api.deps import get_scanner_service
from api.errors import to_http_exception
from backend.services.scanner import ScannerService, ScanPreconditionError
from backend.services.vision_client import VisionClientError
from domain.models.scan import ScanReport

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/scan",
    tags=["Scan"],
)


class ScanRequest(BaseModel):
    """Request model for scanning a photo."""
    image: str = Field(
        ...,
        description="Image as a data URL (data:image/jpeg;base64,...) or bare base64",
    )


@router.post("", response_model=ScanReport)
async def scan_image(
    request: ScanRequest,
    scanner: ScannerService = Depends(get_scanner_service),
) -> ScanReport:
    """
    Send the photo and the missing list to the vision model and return the
    missing-list cards it found.

    Raises:
        HTTPException: 400 if no API key or missing list is configured,
            502/503 if the vision model call fails
    """
    try:
        return await scanner.scan(request.image)
    except (ScanPreconditionError, VisionClientError) as e:
        logger.warning(f"Scan failed: {e}")
        raise to_http_exception(e) from e
