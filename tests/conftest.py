"""Pytest configuration and shared fixtures.

This module provides fixtures for testing shelfscan, including an
in-memory database, DAOs and sample series.
"""

import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Callable, Generator, Optional

import pytest

from shelfscan.collections import CollectionDao
from shelfscan.config import reset_config
from shelfscan.db.sqlite import Database, reset_db
from shelfscan.metadata import SeriesMetadata, SeriesMetadataDao, SeriesStatus
from shelfscan.series import Series, SeriesDao


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture(scope="function")
def db() -> Generator[Database, None, None]:
    """Create an in-memory database for testing."""
    reset_db()
    reset_config()

    database = Database(":memory:")
    database.create_tables()
    yield database

    database.engine.dispose()
    reset_config()


@pytest.fixture(scope="function")
def temp_db_path() -> Generator[Path, None, None]:
    """Create a temporary database file path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)
    yield db_path
    # Cleanup
    if db_path.exists():
        db_path.unlink()


@pytest.fixture(scope="function")
def file_db_env(temp_db_path: Path) -> Generator[Path, None, None]:
    """Point SHELFSCAN_DB_PATH at a temporary file and reset globals."""
    reset_db()
    reset_config()
    os.environ["SHELFSCAN_DB_PATH"] = str(temp_db_path)

    yield temp_db_path

    reset_db()
    reset_config()
    if "SHELFSCAN_DB_PATH" in os.environ:
        del os.environ["SHELFSCAN_DB_PATH"]


@pytest.fixture
def series_dao(db: Database) -> SeriesDao:
    """Create a SeriesDao with test database."""
    return SeriesDao(db)


@pytest.fixture
def metadata_dao(db: Database) -> SeriesMetadataDao:
    """Create a SeriesMetadataDao with test database."""
    return SeriesMetadataDao(db)


@pytest.fixture
def collection_dao(db: Database) -> CollectionDao:
    """Create a CollectionDao with test database."""
    return CollectionDao(db)


# ============================================================================
# Sample Data Fixtures
# ============================================================================


def build_series(
    name: str,
    library_id: str = "library-1",
    url: Optional[str] = None,
    **kwargs,
) -> Series:
    """Build a Series with a URL derived from its name."""
    return Series(
        name=name,
        url=url or f"file:///comics/{library_id}/{name.replace(' ', '_')}",
        file_last_modified=kwargs.pop("file_last_modified", datetime(2024, 5, 1, 12, 30)),
        library_id=library_id,
        **kwargs,
    )


@pytest.fixture
def make_series(series_dao: SeriesDao) -> Callable[..., Series]:
    """Factory that inserts a series and returns it."""

    def _make(name: str, library_id: str = "library-1", **kwargs) -> Series:
        series = build_series(name, library_id=library_id, **kwargs)
        series_dao.insert(series)
        return series

    return _make


@pytest.fixture
def make_metadata(metadata_dao: SeriesMetadataDao) -> Callable[..., SeriesMetadata]:
    """Factory that inserts metadata for an existing series."""

    def _make(
        series: Series,
        title: Optional[str] = None,
        status: SeriesStatus = SeriesStatus.ONGOING,
        publisher: str = "",
    ) -> SeriesMetadata:
        metadata = SeriesMetadata(
            series_id=series.id,
            title=title or series.name,
            status=status,
            publisher=publisher,
        )
        metadata_dao.insert(metadata)
        return metadata

    return _make


@pytest.fixture
def sample_library(make_series, make_metadata) -> dict[str, Series]:
    """A small two-library catalogue with metadata on most series."""
    batman = make_series("Batman", library_id="library-1")
    saga = make_series("Saga", library_id="library-1")
    sandman = make_series("The Sandman", library_id="library-1")
    bone = make_series("Bone", library_id="library-2")
    unsorted = make_series("Unsorted", library_id="library-2")

    make_metadata(batman, status=SeriesStatus.ONGOING, publisher="DC Comics")
    make_metadata(saga, status=SeriesStatus.HIATUS, publisher="Image")
    make_metadata(sandman, status=SeriesStatus.ENDED, publisher="Vertigo")
    make_metadata(bone, status=SeriesStatus.ENDED, publisher="Cartoon Books")

    return {
        "batman": batman,
        "saga": saga,
        "sandman": sandman,
        "bone": bone,
        "unsorted": unsorted,
    }


@pytest.fixture
def new_series() -> Callable[..., Series]:
    """Factory that builds a Series without storing it."""
    return build_series
