"""SQLAlchemy data access for the ``series_metadata`` table."""

import logging
from collections.abc import Collection
from typing import Optional

from sqlalchemy import delete, func, insert, select, update

from ..db.models import SeriesMetadataRecord, to_local, utcnow
from ..db.sqlite import Database
from .schemas import SeriesMetadata, SeriesStatus

logger = logging.getLogger(__name__)

m = SeriesMetadataRecord


class SeriesMetadataDao:
    """Reads and writes series metadata rows."""

    def __init__(self, db: Database):
        self.db = db

    def find_by_id_or_null(self, series_id: str) -> Optional[SeriesMetadata]:
        with self.db.get_session() as session:
            record = session.scalars(select(m).where(m.series_id == series_id)).one_or_none()
            return self._to_domain(record) if record else None

    def insert(self, metadata: SeriesMetadata) -> None:
        with self.db.get_session() as session:
            session.execute(
                insert(m).values(
                    series_id=metadata.series_id,
                    title=metadata.title,
                    status=metadata.status.value,
                    publisher=metadata.publisher,
                )
            )

    def update(self, metadata: SeriesMetadata) -> int:
        """Overwrite title, status and publisher. Returns rows affected."""
        with self.db.get_session() as session:
            result = session.execute(
                update(m)
                .where(m.series_id == metadata.series_id)
                .values(
                    title=metadata.title,
                    status=metadata.status.value,
                    publisher=metadata.publisher,
                    last_modified_date=utcnow(),
                )
            )
            logger.debug("Updated metadata of series %s (%d rows)", metadata.series_id, result.rowcount)
            return result.rowcount

    def delete(self, series_id: str) -> int:
        with self.db.get_session() as session:
            return session.execute(delete(m).where(m.series_id == series_id)).rowcount

    def delete_many(self, series_ids: Collection[str]) -> int:
        if not series_ids:
            return 0
        with self.db.get_session() as session:
            return session.execute(delete(m).where(m.series_id.in_(list(series_ids)))).rowcount

    def count(self) -> int:
        with self.db.get_session() as session:
            return session.scalar(select(func.count()).select_from(m))

    @staticmethod
    def _to_domain(record: SeriesMetadataRecord) -> SeriesMetadata:
        return SeriesMetadata(
            series_id=record.series_id,
            title=record.title,
            status=SeriesStatus(record.status),
            publisher=record.publisher,
            created_date=to_local(record.created_date),
            last_modified_date=to_local(record.last_modified_date),
        )
