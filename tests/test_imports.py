"""Verify all modules can be imported without errors."""
import pytest

# All tests in this module are pure import checks - mark as unit tests
pytestmark = pytest.mark.unit


def test_core_logic_imports():
    """Import core matching modules."""
    import backend.core
    import backend.core.match
    import backend.core.normalize
    import backend.core.reconcile


def test_service_imports():
    """Import services and entry points."""
    import backend.cli
    import backend.main
    import backend.services
    import backend.services.scanner
    import backend.services.sheets_client
    import backend.services.vision_client
    import backend.settings


def test_layer_imports():
    """Import api, application, domain and infrastructure packages."""
    import api
    import api.deps
    import api.errors
    import api.routers
    import application.ports
    import domain.models
    import infrastructure
    import infrastructure.storage.yaml_store


def test_core_public_api():
    from backend.core import (
        MatchMethod,
        MatchResult,
        UnvalidatedCandidate,
        levenshtein_distance,
        normalize_name,
        reconcile_batch,
        resolve,
        suggest_matches,
    )

    assert callable(resolve)
