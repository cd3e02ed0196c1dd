"""
Database wiring.

The engine (and therefore the connection pool) lives inside a ``Database``
instance that the app factory builds at startup and disposes at shutdown.
Routes reach it through ``request.app.state.database`` via ``get_db``, so
there is no module-level engine to share between apps or tests.
"""

import logging
from typing import Any, Dict, Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from links_app.config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def engine_options(url: URL, settings: Settings) -> Dict[str, Any]:
    """Keyword arguments for ``create_engine``: pool limits, timeouts, TLS."""
    if url.get_backend_name() == "sqlite":
        # SQLite: FastAPI runs sync routes in a threadpool, and the busy
        # timeout bounds how long a writer waits for the file lock
        return {
            "connect_args": {
                "check_same_thread": False,
                "timeout": settings.db_pool_timeout,
            },
            "pool_pre_ping": True,
        }

    connect_args: Dict[str, Any] = {}
    if url.get_backend_name() == "postgresql":
        connect_args["connect_timeout"] = settings.db_connect_timeout
        connect_args["options"] = (
            f"-c statement_timeout={settings.db_statement_timeout_ms}"
        )
        if settings.use_database_ssl:
            connect_args["sslmode"] = "require"

    return {
        "connect_args": connect_args,
        "pool_pre_ping": True,
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_timeout": settings.db_pool_timeout,
        "pool_recycle": settings.db_pool_recycle,
    }


class Database:
    """Owns the SQLAlchemy engine and session factory for one application."""

    def __init__(self, settings: Settings):
        self.url = make_url(settings.database_url)
        self.engine: Engine = create_engine(
            self.url, **engine_options(self.url, settings)
        )
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine,
        )

    def create_schema(self) -> None:
        """Create tables and indexes that do not exist yet (idempotent)."""
        # Import models to ensure they're registered with Base
        from links_app import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database schema ready (%s)", self.url.render_as_string(hide_password=True))

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database connection pool closed")


def get_db(request: Request) -> Iterator[Session]:
    """FastAPI dependency: one session per request, always closed."""
    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    finally:
        db.close()
