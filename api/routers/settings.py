"""
Settings router for the scanner's saved configuration.

Provides GET/PUT endpoints for the sheet location and the Gemini API key.
The key is write-only: GET reports whether one is saved, never its value.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field, ValidationError

from api.deps import get_scanner_service
from backend.services.scanner import ScannerService
from domain.models.scan import ScannerSettings

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/settings",
    tags=["settings"],
)


class SettingsRequest(BaseModel):
    """Request model for updating scanner settings."""
    sheet_url: str = Field(default="", description="Google Sheets URL")
    sheet_tab: str = Field(default="", description="Tab name; empty for the first tab")
    sheet_column: str = Field(default="A", description="Column letter holding card names")
    vision_api_key: Optional[str] = Field(
        default=None,
        description="Gemini API key; omit to keep the saved key, empty string to clear it",
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "sheet_url": "https://docs.google.com/spreadsheets/d/<id>/edit",
                "sheet_tab": "My Collection",
                "sheet_column": "B",
            }
        }
    }


class SettingsResponse(BaseModel):
    """Response model for scanner settings."""
    sheet_url: str
    sheet_tab: str
    sheet_column: str
    has_api_key: bool

    @classmethod
    def from_settings(cls, settings: ScannerSettings) -> "SettingsResponse":
        return cls(
            sheet_url=settings.sheet_url,
            sheet_tab=settings.sheet_tab,
            sheet_column=settings.sheet_column,
            has_api_key=settings.has_api_key,
        )


class SettingsUpdateResponse(BaseModel):
    """Response for successful settings update."""
    message: str
    settings: SettingsResponse


@router.get("", response_model=SettingsResponse)
def get_scanner_settings(
    scanner: ScannerService = Depends(get_scanner_service),
) -> SettingsResponse:
    """Return the saved settings (API key redacted)."""
    return SettingsResponse.from_settings(scanner.get_settings())


@router.put("", response_model=SettingsUpdateResponse)
def update_scanner_settings(
    request: SettingsRequest,
    scanner: ScannerService = Depends(get_scanner_service),
) -> SettingsUpdateResponse:
    """
    Replace the saved settings.

    Raises:
        HTTPException: 422 for an invalid column, 500 if the store cannot be written
    """
    current = scanner.get_settings()
    api_key = current.vision_api_key if request.vision_api_key is None else request.vision_api_key

    try:
        updated = ScannerSettings(
            sheet_url=request.sheet_url.strip(),
            sheet_tab=request.sheet_tab,
            sheet_column=request.sheet_column,
            vision_api_key=api_key,
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=e.errors(include_url=False, include_context=False),
        ) from e

    try:
        scanner.update_settings(updated)
    except OSError as e:
        logger.error(f"Failed to save scanner settings: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to save settings: {str(e)}",
        ) from e

    return SettingsUpdateResponse(
        message="Settings updated successfully",
        settings=SettingsResponse.from_settings(updated),
    )
