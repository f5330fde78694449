"""Series persistence module."""

from .dao import SeriesDao, search_condition
from .repository import SeriesRepository
from .schemas import Series, SeriesSearch

__all__ = [
    "Series",
    "SeriesDao",
    "SeriesRepository",
    "SeriesSearch",
    "search_condition",
]
