"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance, wires the shared
persistence gateway and mailer into app state, and manages their lifetime.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI

from confreg import __version__
from confreg.adapters.repository.sqlite import SqliteRegistrationRepository
from confreg.api.dependencies import build_mailer, get_repository
from confreg.api.models import HealthResponse
from confreg.api.routes import router
from confreg.config.settings import Configuration, get_configuration
from confreg.domain.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "registration",
        "description": "Conference registration form - submit, store and confirm by mail",
    },
]


def create_app(configuration: Configuration | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        configuration: Preloaded configuration; when omitted it is loaded
            from $CONFREG_CONFIG at startup
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        FastAPI lifespan context manager.

        Manages application startup and shutdown:
        - Loads the configuration (fatal on failure)
        - Checks that the template folder exists
        - Opens the single database connection and ensures the schema
        - Selects the mailer adapter
        - Closes the database connection on shutdown
        """
        config = configuration if configuration is not None else get_configuration()

        logger.info("Starting application...")

        if not Path(config.template_folder).is_dir():
            raise ConfigurationError(f"Template folder {config.template_folder} not found")

        logger.info("Opening database %s...", config.db_filename)

        repository = SqliteRegistrationRepository(config.db_filename)
        repository.ensure_schema()

        app.state.configuration = config
        app.state.repository = repository
        app.state.mailer = build_mailer(config)

        logger.info("Application startup complete (mail backend: %s)", config.email_backend)

        yield

        logger.info("Shutting down application...")
        repository.close()

    app = FastAPI(
        title="confreg",
        description="Conference registration - validates, stores and confirms form submissions",
        version=__version__,
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )
    app.include_router(router)

    @app.get("/health", response_model=HealthResponse)
    def health_check(
        repository: SqliteRegistrationRepository = Depends(get_repository),
    ) -> HealthResponse:
        """
        Health check endpoint with database validation.

        Raises PersistenceError if the store cannot be queried.
        """
        return HealthResponse(status="healthy", registrations=repository.count())

    return app


app = create_app()
