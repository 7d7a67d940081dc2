"""
Vision Detector Interface (Port).

Reads card names off a photo. The production implementation calls Gemini
(backend.services.vision_client.GeminiVisionClient).
"""
from typing import List, Protocol, Sequence

from backend.core.reconcile import UnvalidatedCandidate


class VisionDetector(Protocol):
    """Returns the names a vision model believes are visible in an image."""

    async def detect_names(
        self,
        image: str,
        canonical_list: Sequence[str],
    ) -> List[UnvalidatedCandidate]:
        """
        Detect card names in an image.

        Args:
            image: Image as a data URL (data:image/png;base64,...) or bare base64
            canonical_list: The missing list, passed to the model as context

        Returns:
            Untrusted names; callers must reconcile them against the list
        """
        ...
