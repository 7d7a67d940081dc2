"""
Local storage for scanner settings and the missing list.
"""
from infrastructure.storage.yaml_store import YamlScannerStore

__all__ = ["YamlScannerStore"]
