"""SQLite database operations.

Handles database connection, session management and statement timing.
"""

import logging
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..config import MEMORY_DB, get_config
from .models import Base

logger = logging.getLogger(__name__)

_QUERY_START_KEY = "shelfscan_query_start"


def _log_query(statement: str, elapsed_ms: float, threshold_ms: float) -> None:
    """Log statement timing; warn if above the slow-query threshold."""
    if elapsed_ms > threshold_ms:
        logger.warning("SLOW QUERY (%.1fms): %s", elapsed_ms, statement[:200])
    else:
        logger.debug("Query (%.1fms): %s", elapsed_ms, statement[:200])


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    """Turn on foreign key enforcement for each new SQLite connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def install_query_timing(engine: Engine, threshold_ms: float) -> None:
    """Attach cursor-execute listeners that log how long each statement took."""

    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault(_QUERY_START_KEY, []).append(time.perf_counter())

    def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        start = conn.info[_QUERY_START_KEY].pop()
        _log_query(statement, (time.perf_counter() - start) * 1000, threshold_ms)

    event.listen(engine, "before_cursor_execute", before_cursor_execute)
    event.listen(engine, "after_cursor_execute", after_cursor_execute)


class Database:
    """Database connection and session manager."""

    def __init__(
        self,
        db_path: Optional[str] = None,
        echo: Optional[bool] = None,
        slow_query_ms: Optional[float] = None,
    ):
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file, or ":memory:". If None,
                     uses SHELFSCAN_DB_PATH env var or default location.
            echo: Echo SQL statements. Defaults to SHELFSCAN_ECHO_SQL.
            slow_query_ms: Threshold above which statements log a warning.
        """
        config = get_config()
        if db_path is None:
            db_path = str(config.db_path)
        if echo is None:
            echo = config.echo_sql
        if slow_query_ms is None:
            slow_query_ms = config.slow_query_ms

        self.db_path = Path(db_path)
        self._is_memory = str(db_path) == MEMORY_DB

        if not self._is_memory:
            self._ensure_directory()

        # For in-memory databases, use StaticPool to reuse the same connection
        # so that all sessions see the same data
        if self._is_memory:
            self.engine = create_engine(
                "sqlite:///:memory:",
                echo=echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            self.engine = create_engine(
                f"sqlite:///{self.db_path}",
                echo=echo,
                connect_args={"check_same_thread": False},
            )

        event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        install_query_timing(self.engine, slow_query_ms)

        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)
        logger.debug("Opened database at %s", db_path)

    def _ensure_directory(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def create_tables(self) -> None:
        """Create all database tables."""
        Base.metadata.create_all(self.engine)

    def drop_tables(self) -> None:
        """Drop all database tables. Use with caution!"""
        Base.metadata.drop_all(self.engine)

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Get a database session context manager."""
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


# Global database instance
_db: Optional[Database] = None


def get_db(db_path: Optional[str] = None) -> Database:
    """Get or create the global database instance."""
    global _db
    if _db is None:
        _db = Database(db_path)
        _db.create_tables()
    return _db


def reset_db() -> None:
    """Reset the global database instance. Used for testing."""
    global _db
    if _db is not None:
        _db.engine.dispose()
    _db = None
