"""Tests for the Database wrapper and statement logging."""

import logging

import pytest
from sqlalchemy import inspect, select, text

from shelfscan.db.models import SeriesRecord
from shelfscan.db.sqlite import Database, get_db, reset_db


class TestDatabaseCreation:
    """Tests for database creation."""

    def test_database_creates_tables(self, db: Database):
        """Test that all tables are created."""
        tables = set(inspect(db.engine).get_table_names())

        assert {"series", "series_metadata", "collections", "collection_series"} <= tables

    def test_file_database_path_created(self, tmp_path):
        """Test the parent directory of a file database is created."""
        db_path = tmp_path / "nested" / "shelfscan.db"

        database = Database(str(db_path))
        database.create_tables()

        assert db_path.parent.exists()
        database.engine.dispose()

    def test_foreign_keys_enabled(self, db: Database):
        """Test SQLite enforces foreign keys."""
        with db.get_session() as session:
            assert session.execute(text("PRAGMA foreign_keys")).scalar() == 1

    def test_drop_tables(self, db: Database):
        """Test dropping all tables."""
        db.drop_tables()

        assert inspect(db.engine).get_table_names() == []


class TestSessions:
    """Tests for session handling."""

    def test_session_rolls_back_on_error(self, db: Database, new_series):
        """Test a failing session leaves no partial writes."""
        with pytest.raises(RuntimeError):
            with db.get_session() as session:
                session.add(SeriesRecord(
                    id="partial",
                    name="Partial",
                    url="file:///comics/partial",
                    file_last_modified=new_series("Partial").file_last_modified,
                    library_id="library-1",
                ))
                session.flush()
                raise RuntimeError("boom")

        with db.get_session() as session:
            assert session.scalar(select(SeriesRecord).where(SeriesRecord.id == "partial")) is None


class TestGlobalDatabase:
    """Tests for the global database instance."""

    def test_get_db_reuses_instance(self, file_db_env):
        """Test get_db returns the same instance until reset."""
        first = get_db()

        assert get_db() is first
        assert first.db_path == file_db_env

        reset_db()

        assert get_db() is not first


class TestQueryLogging:
    """Tests for statement timing logs."""

    def test_fast_query_logged_at_debug(self, caplog):
        """Test statements under the threshold log at DEBUG."""
        database = Database(":memory:", slow_query_ms=60_000)
        caplog.set_level(logging.DEBUG, logger="shelfscan.db.sqlite")

        with database.get_session() as session:
            session.execute(text("SELECT 1"))

        messages = [r.getMessage() for r in caplog.records if r.levelno == logging.DEBUG]
        assert any(m.startswith("Query (") and "SELECT 1" in m for m in messages)
        database.engine.dispose()

    def test_slow_query_logged_as_warning(self, caplog):
        """Test statements over the threshold log a warning."""
        database = Database(":memory:", slow_query_ms=0)
        caplog.set_level(logging.WARNING, logger="shelfscan.db.sqlite")

        with database.get_session() as session:
            session.execute(text("SELECT 1"))

        warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert any(m.startswith("SLOW QUERY") for m in warnings)
        database.engine.dispose()
