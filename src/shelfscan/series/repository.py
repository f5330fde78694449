"""Repository contract for series persistence.

Application services (library scanning, search, collection management)
depend on this interface and never issue queries themselves.
"""

from abc import ABC, abstractmethod
from collections.abc import Collection
from typing import Optional, Union

from pydantic import AnyUrl

from .schemas import Series, SeriesSearch

UrlLike = Union[AnyUrl, str]


class SeriesRepository(ABC):
    """Persistence operations for the Series entity."""

    @abstractmethod
    def find_all(self, search: Optional[SeriesSearch] = None) -> list[Series]:
        """Return every series, or the distinct series matching ``search``."""

    @abstractmethod
    def find_by_id_or_null(self, series_id: str) -> Optional[Series]:
        pass

    @abstractmethod
    def find_all_by_library_id(self, library_id: str) -> list[Series]:
        pass

    @abstractmethod
    def find_all_by_library_id_and_url_not_in(
        self, library_id: str, urls: Collection[UrlLike]
    ) -> list[Series]:
        """Series of a library whose URL is not in ``urls``.

        Used by a rescan to find folders that disappeared from disk.
        """

    @abstractmethod
    def find_by_library_id_and_url_or_null(
        self, library_id: str, url: UrlLike
    ) -> Optional[Series]:
        pass

    @abstractmethod
    def find_all_by_title(self, title: str) -> list[Series]:
        """Series whose metadata title equals ``title``, ignoring case."""

    @abstractmethod
    def get_library_id(self, series_id: str) -> Optional[str]:
        pass

    @abstractmethod
    def find_all_ids_by_library_id(self, library_id: str) -> list[str]:
        pass

    @abstractmethod
    def insert(self, series: Series) -> None:
        pass

    @abstractmethod
    def update(self, series: Series) -> int:
        """Overwrite the mutable fields of ``series``. Returns rows affected."""

    @abstractmethod
    def delete(self, series_id: str) -> int:
        pass

    @abstractmethod
    def delete_many(self, series_ids: Collection[str]) -> int:
        pass

    @abstractmethod
    def delete_all(self) -> int:
        pass

    @abstractmethod
    def count(self) -> int:
        pass
