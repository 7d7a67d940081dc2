"""
Fake implementations of the application ports for testing.

All fakes satisfy the same Protocols as the real implementations and keep
everything in memory. No filesystem, network or API key required.

Usage:
    from tests.fakes import create_scanner

    scanner, store, source, factory = create_scanner(
        missing_list=["Pikachu", "Charizard"],
        detected=["pikachu"],
    )
"""
from typing import List, Optional, Tuple

from backend.services.scanner import ScannerService
from tests.fakes.list_source import FakeCanonicalListSource
from tests.fakes.scanner_store import FakeScannerStore
from tests.fakes.vision_detector import FakeVisionDetector, RecordingVisionFactory


def create_scanner(
    missing_list: Optional[List[str]] = None,
    detected: Optional[List[str]] = None,
    sheet_names: Optional[List[str]] = None,
    api_key: str = "test-key",
    fallback_api_key: Optional[str] = None,
    **settings,
) -> Tuple[ScannerService, FakeScannerStore, FakeCanonicalListSource, RecordingVisionFactory]:
    """
    Build a ScannerService wired to fakes.

    Args:
        missing_list: Names already in the store
        detected: Names the fake vision model will report
        sheet_names: Names the fake sheet will return
        api_key: Saved API key ("" for none)
        fallback_api_key: Environment key passed to the service
        **settings: Extra ScannerSettings fields to seed

    Returns:
        (service, store, source, vision_factory)
    """
    store = FakeScannerStore()
    store.seed(missing_list=missing_list, vision_api_key=api_key, **settings)
    source = FakeCanonicalListSource(sheet_names)
    factory = RecordingVisionFactory(FakeVisionDetector(detected))
    service = ScannerService(
        store=store,
        sheets=source,
        vision_factory=factory,
        fallback_api_key=fallback_api_key,
    )
    return service, store, source, factory


__all__ = [
    "FakeScannerStore",
    "FakeCanonicalListSource",
    "FakeVisionDetector",
    "RecordingVisionFactory",
    "create_scanner",
]
