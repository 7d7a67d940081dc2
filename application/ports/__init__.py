"""
Application ports (Protocols).

These define what the scanner needs from the outside world:
- CanonicalListSource: where the missing list comes from
- VisionDetector: reads card names off a photo
- ScannerStore: persists settings and the missing list

Concrete implementations live in backend.services and infrastructure;
in-memory fakes for tests live in tests.fakes.
"""
from application.ports.canonical_list_source import CanonicalListSource
from application.ports.vision_detector import VisionDetector
from application.ports.scanner_store import ScannerStore

__all__ = [
    "CanonicalListSource",
    "VisionDetector",
    "ScannerStore",
]
