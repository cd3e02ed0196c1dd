"""FastAPI application factory."""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from links_app.api import health, links, redirect
from links_app.api.errors import register_exception_handlers
from links_app.config import Settings, settings as default_settings
from links_app.database.connection import Database
from links_app.middleware.logging import LoggingMiddleware
from links_app.services.short_code import RandomCodeGenerator

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Create and configure the FastAPI application.
    
    The Database (and its connection pool) is created here and attached to
    ``app.state``; its schema is created on startup and its pool disposed on
    shutdown.
    
    Args:
        settings: Configuration; defaults to the environment-loaded settings
        database: Pre-built Database, mainly for tests
        
    Returns:
        Configured FastAPI app
    """
    settings = settings or default_settings
    database = database or Database(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.create_schema()
        logger.info("%s %s started (%s)", settings.app_name, settings.app_version, settings.environment)
        try:
            yield
        finally:
            database.dispose()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="A URL shortener service built with FastAPI",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Store instances in app state for access in dependencies
    app.state.settings = settings
    app.state.database = database
    app.state.code_generator = RandomCodeGenerator(
        length=settings.code_length,
        max_attempts=settings.max_code_attempts,
    )
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    register_exception_handlers(app)

    ######## Include routers
    # The redirect catch-all goes last so API paths take precedence
    app.include_router(health.router)
    app.include_router(links.router)
    app.include_router(redirect.router)

    return app
