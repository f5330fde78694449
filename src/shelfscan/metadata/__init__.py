"""Series metadata module."""

from .dao import SeriesMetadataDao
from .schemas import SeriesMetadata, SeriesStatus

__all__ = [
    "SeriesMetadata",
    "SeriesMetadataDao",
    "SeriesStatus",
]
