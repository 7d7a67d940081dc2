"""
Fake vision detector for testing.

Answers with a scripted list of names instead of calling a model.
"""
from typing import Any, Dict, List, Optional, Sequence

from backend.core.reconcile import UnvalidatedCandidate


class FakeVisionDetector:
    """
    In-memory fake implementation of VisionDetector.

    Usage:
        detector = FakeVisionDetector(["Pikachu", "Not On List"])
        service = ScannerService(store, source, vision_factory=lambda key: detector)
    """

    def __init__(self, names: Optional[List[str]] = None, error: Optional[Exception] = None):
        self.names: List[str] = list(names or [])
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def detect_names(
        self,
        image: str,
        canonical_list: Sequence[str],
    ) -> List[UnvalidatedCandidate]:
        self.calls.append({"image": image, "canonical_list": list(canonical_list)})
        if self.error is not None:
            raise self.error
        return [UnvalidatedCandidate(name) for name in self.names]


class RecordingVisionFactory:
    """Vision factory that hands out one detector and remembers the keys it was given."""

    def __init__(self, detector: FakeVisionDetector):
        self.detector = detector
        self.api_keys: List[str] = []

    def __call__(self, api_key: str) -> FakeVisionDetector:
        self.api_keys.append(api_key)
        return self.detector
