"""
Unit tests for api/deps.py dependency providers.

These tests verify that the dependency providers are properly wired and
return the correct types.
"""

import pytest

from api.deps import (
    get_scanner_service,
    get_scanner_store,
    get_settings,
    get_sheets_client,
    get_vision_factory,
)
from backend.services.scanner import ScannerService
from backend.services.sheets_client import SheetsClient
from backend.services.vision_client import GeminiVisionClient
from backend.settings import Settings
from infrastructure import YamlScannerStore
from tests.fakes import FakeCanonicalListSource, FakeScannerStore

# All tests in this module are pure logic tests - mark as unit
pytestmark = pytest.mark.unit


@pytest.fixture
def settings(tmp_path):
    return Settings(
        environment="test",
        gemini_api_key="env-key",
        gemini_model="gemini-2.5-flash",
        scanner_store_path=tmp_path / "store.yaml",
        sheets_timeout=7.0,
        _env_file=None,
    )


class TestSettingsProvider:

    def test_get_settings_returns_settings(self):
        assert isinstance(get_settings(), Settings)


class TestCollaboratorProviders:

    def test_store_uses_configured_path(self, settings):
        store = get_scanner_store(settings)
        assert isinstance(store, YamlScannerStore)
        assert store.path == settings.scanner_store_path

    def test_sheets_client(self, settings):
        assert isinstance(get_sheets_client(settings), SheetsClient)

    def test_vision_factory_builds_configured_client(self, settings):
        factory = get_vision_factory(settings)
        client = factory("user-key")
        assert isinstance(client, GeminiVisionClient)
        assert client.model == "gemini-2.5-flash"


class TestServiceProviders:

    def test_scanner_service_falls_back_to_env_key(self, settings):
        scanner = get_scanner_service(
            store=FakeScannerStore(),
            sheets=FakeCanonicalListSource(),
            vision_factory=get_vision_factory(settings),
            settings=settings,
        )
        assert isinstance(scanner, ScannerService)
        assert scanner.resolve_api_key() == "env-key"
