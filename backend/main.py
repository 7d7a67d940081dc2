"""
FastAPI application factory for the card scanner API.

    from backend.main import create_app
    from backend.settings import Settings

    app = create_app()  # settings from the environment

    # tests: isolated store, no .env
    test_app = create_app(Settings(environment="test", _env_file=None))

Settings passed explicitly are also what every router sees through
api.deps.get_settings, so two apps built with different settings never share
a store file or API key.
"""

import logging
from typing import Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)

LOCAL_DEV_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
]


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure a card scanner application.

    Args:
        settings: Optional Settings instance. If not provided, uses get_settings()
                  which loads from environment variables.

    Returns:
        Configured FastAPI application instance.
    """
    explicit_settings = settings is not None
    if settings is None:
        settings = get_settings()

    _init_sentry(settings)

    app = FastAPI(
        title="Card Scanner API",
        description="Find cards from your missing list in a photo",
        version="1.0.0",
    )

    _configure_cors(app, settings)
    _include_routers(app)

    if explicit_settings:
        from api.deps import get_settings as deps_get_settings
        app.dependency_overrides[deps_get_settings] = lambda: settings

    _log_startup(settings)

    return app


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,
        )
        logger.info("Sentry initialized for card-scanner")


def _configure_cors(app: FastAPI, settings: Settings) -> None:
    """Allow the local dev servers plus any origins from CORS_ALLOWED_ORIGINS."""
    origins = LOCAL_DEV_ORIGINS + [
        origin for origin in settings.cors_origins_list if origin not in LOCAL_DEV_ORIGINS
    ]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _include_routers(app: FastAPI) -> None:
    from api.routers import (
        health_router,
        matching_router,
        missing_list_router,
        scan_router,
        settings_router,
    )

    app.include_router(health_router)
    app.include_router(matching_router)
    app.include_router(missing_list_router)
    app.include_router(scan_router)
    app.include_router(settings_router)


def _log_startup(settings: Settings) -> None:
    logger.info(
        f"Card scanner starting (environment={settings.environment}, "
        f"model={settings.gemini_model}, store={settings.scanner_store_path})"
    )
    if not settings.gemini_api_key:
        logger.info("GEMINI_API_KEY not set; scans need a key saved in settings")


# Default app instance for uvicorn: uvicorn backend.main:app --reload
app = create_app()
