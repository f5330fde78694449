"""SQLAlchemy implementation of the series repository.

Every method runs a single statement in its own session. Lookups that
miss return ``None``; updates and deletes that touch no rows are not
errors and simply report a row count of zero.
"""

import logging
from collections.abc import Collection
from typing import Optional

from pydantic import AnyUrl, TypeAdapter
from sqlalchemy import and_, delete, func, insert, select, true, update
from sqlalchemy.sql.elements import ColumnElement

from ..db.models import (
    CollectionSeriesRecord,
    SeriesMetadataRecord,
    SeriesRecord,
    to_local,
    to_utc_naive,
    utcnow,
)
from ..db.sqlite import Database
from .repository import SeriesRepository, UrlLike
from .schemas import Series, SeriesSearch

logger = logging.getLogger(__name__)

s = SeriesRecord
d = SeriesMetadataRecord
cs = CollectionSeriesRecord

_url_adapter = TypeAdapter(AnyUrl)


def url_to_str(url: UrlLike) -> str:
    """Normalize a URL to the text form stored in the ``url`` column."""
    return str(_url_adapter.validate_python(url))


def search_condition(search: SeriesSearch) -> ColumnElement[bool]:
    """Build the WHERE clause for a series search.

    Starts from TRUE and ANDs in one condition per filter that is set.
    The collection and metadata conditions reference the left-joined
    ``collection_series`` and ``series_metadata`` tables.
    """
    c: ColumnElement[bool] = true()

    if search.library_ids:
        c = and_(c, s.library_id.in_(search.library_ids))
    if search.collection_ids:
        c = and_(c, cs.collection_id.in_(search.collection_ids))
    if search.search_term:
        c = and_(c, d.title.icontains(search.search_term, autoescape=True))
    if search.metadata_status:
        c = and_(c, d.status.in_([status.value for status in search.metadata_status]))
    if search.publishers:
        c = and_(c, func.lower(d.publisher).in_([p.lower() for p in search.publishers]))

    return c


class SeriesDao(SeriesRepository):
    """Series repository backed by the ``series`` table."""

    def __init__(self, db: Database):
        self.db = db

    # ========================================================================
    # Queries
    # ========================================================================

    def find_all(self, search: Optional[SeriesSearch] = None) -> list[Series]:
        if search is None:
            query = select(s)
        else:
            query = (
                select(s)
                .distinct()
                .outerjoin(cs, s.id == cs.series_id)
                .outerjoin(d, s.id == d.series_id)
                .where(search_condition(search))
            )
        return self._fetch(query)

    def find_by_id_or_null(self, series_id: str) -> Optional[Series]:
        return self._fetch_one(select(s).where(s.id == series_id))

    def find_all_by_library_id(self, library_id: str) -> list[Series]:
        return self._fetch(select(s).where(s.library_id == library_id))

    def find_all_by_library_id_and_url_not_in(
        self, library_id: str, urls: Collection[UrlLike]
    ) -> list[Series]:
        condition = s.library_id == library_id
        if urls:
            condition = and_(condition, s.url.not_in([url_to_str(url) for url in urls]))
        return self._fetch(select(s).where(condition))

    def find_by_library_id_and_url_or_null(
        self, library_id: str, url: UrlLike
    ) -> Optional[Series]:
        return self._fetch_one(
            select(s).where(s.library_id == library_id, s.url == url_to_str(url))
        )

    def find_all_by_title(self, title: str) -> list[Series]:
        return self._fetch(
            select(s)
            .distinct()
            .outerjoin(d, s.id == d.series_id)
            .where(func.lower(d.title) == func.lower(title))
        )

    def get_library_id(self, series_id: str) -> Optional[str]:
        with self.db.get_session() as session:
            return session.scalar(select(s.library_id).where(s.id == series_id))

    def find_all_ids_by_library_id(self, library_id: str) -> list[str]:
        with self.db.get_session() as session:
            return list(session.scalars(select(s.id).where(s.library_id == library_id)))

    def count(self) -> int:
        with self.db.get_session() as session:
            return session.scalar(select(func.count()).select_from(s))

    # ========================================================================
    # Writes
    # ========================================================================

    def insert(self, series: Series) -> None:
        """Insert the core fields; counts and timestamps take table defaults."""
        with self.db.get_session() as session:
            session.execute(
                insert(s).values(
                    id=series.id,
                    name=series.name,
                    url=url_to_str(series.url),
                    file_last_modified=to_utc_naive(series.file_last_modified),
                    library_id=series.library_id,
                )
            )
        logger.debug("Inserted series %s (%s)", series.id, series.url)

    def update(self, series: Series) -> int:
        with self.db.get_session() as session:
            result = session.execute(
                update(s)
                .where(s.id == series.id)
                .values(
                    name=series.name,
                    url=url_to_str(series.url),
                    file_last_modified=to_utc_naive(series.file_last_modified),
                    library_id=series.library_id,
                    book_count=series.book_count,
                    last_modified_date=utcnow(),
                )
            )
        logger.debug("Updated series %s (%d rows)", series.id, result.rowcount)
        return result.rowcount

    def delete(self, series_id: str) -> int:
        with self.db.get_session() as session:
            result = session.execute(delete(s).where(s.id == series_id))
        logger.debug("Deleted series %s (%d rows)", series_id, result.rowcount)
        return result.rowcount

    def delete_many(self, series_ids: Collection[str]) -> int:
        if not series_ids:
            return 0
        with self.db.get_session() as session:
            result = session.execute(delete(s).where(s.id.in_(list(series_ids))))
        logger.debug("Deleted %d of %d series", result.rowcount, len(series_ids))
        return result.rowcount

    def delete_all(self) -> int:
        with self.db.get_session() as session:
            result = session.execute(delete(s))
        logger.info("Deleted all series (%d rows)", result.rowcount)
        return result.rowcount

    # ========================================================================
    # Helpers
    # ========================================================================

    def _fetch(self, query) -> list[Series]:
        with self.db.get_session() as session:
            return [self._to_domain(record) for record in session.scalars(query)]

    def _fetch_one(self, query) -> Optional[Series]:
        with self.db.get_session() as session:
            record = session.scalars(query).one_or_none()
            return self._to_domain(record) if record else None

    @staticmethod
    def _to_domain(record: SeriesRecord) -> Series:
        # A malformed stored URL raises pydantic.ValidationError here
        return Series(
            id=record.id,
            name=record.name,
            url=record.url,
            file_last_modified=record.file_last_modified,
            library_id=record.library_id,
            book_count=record.book_count,
            created_date=to_local(record.created_date),
            last_modified_date=to_local(record.last_modified_date),
        )
