"""Database connection and session management.

This module wraps the SQLAlchemy engine and session factory in an explicitly
constructed handle. The application creates one ``Database`` at startup,
attaches it to ``app.state`` and disposes it on shutdown.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

import config
from models.base import Base
# Import models to ensure they are registered with Base.metadata
import models  # noqa: F401

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine and hands out sessions."""

    def __init__(self, url: Optional[str] = None, echo: bool = config.SQL_ECHO):
        self.url = url or config.DATABASE_URL
        connect_args = {}
        parsed_url = make_url(self.url)
        if parsed_url.get_backend_name() == "sqlite":
            connect_args["check_same_thread"] = False
            if parsed_url.database and parsed_url.database != ":memory:":
                # Ensure the directory holding the database file exists
                Path(parsed_url.database).parent.mkdir(parents=True, exist_ok=True)

        self.engine: Engine = create_engine(
            self.url, connect_args=connect_args, echo=echo
        )
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine
        )

    def init(self) -> None:
        """Create tables that do not exist yet."""
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database initialised: %s", self.engine.url.render_as_string())

    def dispose(self) -> None:
        """Close every pooled connection."""
        self.engine.dispose()
        logger.info("Database connections disposed")

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Open a session that is closed when the block exits."""
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()


def get_database(request: Request) -> Database:
    """Dependency returning the application's database handle."""
    return request.app.state.database


def get_db(request: Request) -> Iterator[Session]:
    """Dependency for getting a database session."""
    with get_database(request).session() as db:
        yield db
