"""
Infrastructure layer for the card scanner.

This package contains concrete implementations of application ports:
- storage/: YAML file store for settings and the missing list
"""

from infrastructure.storage import YamlScannerStore

__all__ = [
    "YamlScannerStore",
]
