"""
Shared fixtures: an API app with every collaborator replaced by a fake.

Usage:
    def test_something(api_client, fake_store):
        fake_store.seed(missing_list=["Pikachu"])
        response = api_client.get("/missing-list")
"""

from typing import Any, Callable

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api import deps
from backend.main import create_app
from backend.settings import Settings
from tests.fakes import (
    FakeCanonicalListSource,
    FakeScannerStore,
    FakeVisionDetector,
    RecordingVisionFactory,
)


def override_dependency(app: FastAPI, getter: Callable[..., Any], implementation: Any) -> None:
    """
    Override a FastAPI dependency with a fake instance.

    Example:
        override_dependency(app, deps.get_scanner_store, FakeScannerStore())
    """
    app.dependency_overrides[getter] = lambda: implementation


@pytest.fixture
def fake_store() -> FakeScannerStore:
    return FakeScannerStore()


@pytest.fixture
def fake_source() -> FakeCanonicalListSource:
    return FakeCanonicalListSource()


@pytest.fixture
def fake_detector() -> FakeVisionDetector:
    return FakeVisionDetector()


@pytest.fixture
def api_app(tmp_path, fake_store, fake_source, fake_detector) -> FastAPI:
    """App with every collaborator replaced by a fake."""
    settings = Settings(
        environment="test",
        gemini_api_key=None,
        scanner_store_path=tmp_path / "store.yaml",
        _env_file=None,
    )
    app = create_app(settings=settings)
    override_dependency(app, deps.get_scanner_store, fake_store)
    override_dependency(app, deps.get_sheets_client, fake_source)
    override_dependency(app, deps.get_vision_factory, RecordingVisionFactory(fake_detector))
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def api_client(api_app) -> TestClient:
    return TestClient(api_app)
