"""Database module for shelfscan."""

from .models import (
    Base,
    CollectionRecord,
    CollectionSeriesRecord,
    SeriesMetadataRecord,
    SeriesRecord,
)
from .sqlite import Database, get_db, reset_db

__all__ = [
    "Base",
    "CollectionRecord",
    "CollectionSeriesRecord",
    "Database",
    "SeriesMetadataRecord",
    "SeriesRecord",
    "get_db",
    "reset_db",
]
