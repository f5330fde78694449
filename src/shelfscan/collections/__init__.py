"""Series collections module."""

from .dao import CollectionDao
from .schemas import SeriesCollection

__all__ = [
    "CollectionDao",
    "SeriesCollection",
]
