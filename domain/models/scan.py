"""
Scan domain models: user settings, per-card scan results and scan reports.
"""
from enum import Enum
from typing import List

from pydantic import BaseModel, Field, field_validator


class ScanStatus(str, Enum):
    """Whether a card seen in a photo is still needed by the collector."""
    NEED = "need"
    HAVE = "have"
    UNKNOWN = "unknown"


class ScanResult(BaseModel):
    """One card name found in a photo."""

    name: str = Field(..., description="Canonical name from the missing list")
    status: ScanStatus = Field(default=ScanStatus.NEED)
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)


class ScanReport(BaseModel):
    """Outcome of scanning one photo."""

    results: List[ScanResult] = Field(default_factory=list)
    message: str = ""

    @property
    def names(self) -> List[str]:
        return [r.name for r in self.results]


class ScannerSettings(BaseModel):
    """
    User configuration persisted between sessions.

    Examples:
        >>> ScannerSettings(sheet_url="https://docs.google.com/spreadsheets/d/abc/edit").sheet_column
        'A'
    """

    sheet_url: str = Field(default="", description="Google Sheets URL holding the missing list")
    vision_api_key: str = Field(default="", description="Gemini API key")
    sheet_tab: str = Field(default="", description="Tab (sheet) name; empty means the first tab")
    sheet_column: str = Field(default="A", description="Column letter holding card names")

    @field_validator("sheet_column")
    @classmethod
    def validate_sheet_column(cls, v: str) -> str:
        """Column must be letters only (A, B, ..., AA); blank falls back to A."""
        v = (v or "").strip().upper()
        if not v:
            return "A"
        if not v.isalpha() or not v.isascii():
            raise ValueError(f"Invalid sheet column '{v}'. Use a column letter such as A or B.")
        return v

    @property
    def has_api_key(self) -> bool:
        return bool(self.vision_api_key.strip())
