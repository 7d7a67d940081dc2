"""
Scanner service: ties the missing-list sheet, the vision model and storage
together.

Flow for one scan:
1. Read the stored missing list
2. Send image + list to the vision model
3. Reconcile the model's answer against the list (backend.core.reconcile)
4. Report the surviving names as cards the collector still needs
"""
import logging
from typing import Callable, List, Optional

from application.ports import CanonicalListSource, ScannerStore, VisionDetector
from backend.core.reconcile import reconcile_batch
from domain.models.scan import ScannerSettings, ScanReport, ScanResult, ScanStatus

logger = logging.getLogger(__name__)


class ScanPreconditionError(Exception):
    """Raised when a scan or sheet load is attempted without the needed setup."""

    pass


class ScannerService:
    """
    Loads the missing list and scans photos against it.
    """

    def __init__(
        self,
        store: ScannerStore,
        sheets: CanonicalListSource,
        vision_factory: Callable[[str], VisionDetector],
        fallback_api_key: Optional[str] = None,
    ):
        """
        Initialize the scanner service.

        Args:
            store: Where settings and the missing list are persisted
            sheets: Source of the missing list
            vision_factory: Builds a vision detector for a given API key
            fallback_api_key: Key used when none is saved in the settings
        """
        self._store = store
        self._sheets = sheets
        self._vision_factory = vision_factory
        self._fallback_api_key = fallback_api_key

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def get_settings(self) -> ScannerSettings:
        return self._store.load_settings()

    def update_settings(self, settings: ScannerSettings) -> ScannerSettings:
        self._store.save_settings(settings)
        return settings

    def resolve_api_key(self, settings: Optional[ScannerSettings] = None) -> Optional[str]:
        """Saved key first, then the environment key."""
        settings = settings or self._store.load_settings()
        if settings.has_api_key:
            return settings.vision_api_key.strip()
        return self._fallback_api_key or None

    # ------------------------------------------------------------------
    # Missing list
    # ------------------------------------------------------------------

    def missing_list(self, search: str = "") -> List[str]:
        """Stored missing list, optionally filtered by a case-insensitive substring."""
        names = self._store.load_missing_list()
        query = (search or "").lower()
        if not query:
            return names
        return [name for name in names if query in name.lower()]

    async def load_missing_list(self, settings: Optional[ScannerSettings] = None) -> List[str]:
        """
        Fetch the missing list from the configured sheet and store it.

        Raises:
            ScanPreconditionError: If no sheet URL is configured
            SheetsClientError: If the sheet cannot be fetched
        """
        settings = settings or self._store.load_settings()
        if not settings.sheet_url.strip():
            raise ScanPreconditionError("Please enter a Google Sheet URL")

        names = await self._sheets.fetch_missing_list(
            settings.sheet_url,
            settings.sheet_tab or "",
            settings.sheet_column or "A",
        )
        self._store.save_missing_list(names)
        logger.info(f"Loaded {len(names)} cards from sheet")
        return names

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    async def scan(self, image: str) -> ScanReport:
        """
        Find missing-list cards in a photo.

        Args:
            image: Data URL or bare base64 image

        Returns:
            ScanReport with one ScanResult per reconciled name

        Raises:
            ScanPreconditionError: If there is no image, no API key or no missing list
            VisionClientError: If the vision model call fails
        """
        if not image:
            raise ScanPreconditionError("Please capture or select an image first")

        settings = self._store.load_settings()
        api_key = self.resolve_api_key(settings)
        if not api_key:
            raise ScanPreconditionError("Please enter your Gemini API key in Settings")

        missing = self._store.load_missing_list()
        if not missing:
            raise ScanPreconditionError(
                "Please load your missing list from Google Sheets first"
            )

        detector = self._vision_factory(api_key)
        candidates = await detector.detect_names(image, missing)
        found = reconcile_batch(candidates, missing)

        dropped = len(candidates) - len(found)
        if dropped:
            logger.info(f"Dropped {dropped} detected names not on the missing list")

        results = [
            ScanResult(name=name, status=ScanStatus.NEED, confidence=1.0)
            for name in found
        ]
        if results:
            message = f"Found {len(results)} cards from your missing list!"
        else:
            message = "No missing cards found in this image"

        return ScanReport(results=results, message=message)
