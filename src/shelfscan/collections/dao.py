"""SQLAlchemy data access for collections and their series membership."""

import logging
from collections.abc import Collection
from typing import Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.orm import Session

from ..db.models import CollectionRecord, CollectionSeriesRecord, to_local, utcnow
from ..db.sqlite import Database
from .schemas import SeriesCollection

logger = logging.getLogger(__name__)

c = CollectionRecord
cs = CollectionSeriesRecord


class CollectionDao:
    """Reads and writes collections together with their membership rows."""

    def __init__(self, db: Database):
        self.db = db

    def find_all(self) -> list[SeriesCollection]:
        with self.db.get_session() as session:
            records = session.scalars(select(c).order_by(c.name)).all()
            return [self._to_domain(session, record) for record in records]

    def find_by_id_or_null(self, collection_id: str) -> Optional[SeriesCollection]:
        with self.db.get_session() as session:
            record = session.scalars(select(c).where(c.id == collection_id)).one_or_none()
            return self._to_domain(session, record) if record else None

    def find_all_by_series_id(self, series_id: str) -> list[SeriesCollection]:
        """Collections that contain the given series."""
        with self.db.get_session() as session:
            records = session.scalars(
                select(c)
                .join(cs, c.id == cs.collection_id)
                .where(cs.series_id == series_id)
                .order_by(c.name)
            ).all()
            return [self._to_domain(session, record) for record in records]

    def insert(self, collection: SeriesCollection) -> None:
        with self.db.get_session() as session:
            session.execute(
                insert(c).values(
                    id=collection.id,
                    name=collection.name,
                    ordered=collection.ordered,
                )
            )
            self._insert_series(session, collection)

    def update(self, collection: SeriesCollection) -> int:
        """Overwrite name, ordering and membership. Returns rows affected."""
        with self.db.get_session() as session:
            result = session.execute(
                update(c)
                .where(c.id == collection.id)
                .values(
                    name=collection.name,
                    ordered=collection.ordered,
                    last_modified_date=utcnow(),
                )
            )
            if result.rowcount:
                session.execute(delete(cs).where(cs.collection_id == collection.id))
                self._insert_series(session, collection)
            return result.rowcount

    def remove_series_from_all(self, series_ids: Collection[str]) -> int:
        """Drop the given series from every collection."""
        if not series_ids:
            return 0
        with self.db.get_session() as session:
            result = session.execute(delete(cs).where(cs.series_id.in_(list(series_ids))))
        logger.debug("Removed %d collection memberships", result.rowcount)
        return result.rowcount

    def delete(self, collection_id: str) -> int:
        with self.db.get_session() as session:
            session.execute(delete(cs).where(cs.collection_id == collection_id))
            return session.execute(delete(c).where(c.id == collection_id)).rowcount

    def count(self) -> int:
        with self.db.get_session() as session:
            return session.scalar(select(func.count()).select_from(c))

    @staticmethod
    def _insert_series(session: Session, collection: SeriesCollection) -> None:
        if not collection.series_ids:
            return
        session.execute(
            insert(cs),
            [
                {"collection_id": collection.id, "series_id": series_id, "number": number}
                for number, series_id in enumerate(collection.series_ids)
            ],
        )

    @staticmethod
    def _to_domain(session: Session, record: CollectionRecord) -> SeriesCollection:
        series_ids = session.scalars(
            select(cs.series_id).where(cs.collection_id == record.id).order_by(cs.number)
        ).all()
        return SeriesCollection(
            id=record.id,
            name=record.name,
            ordered=record.ordered,
            series_ids=list(series_ids),
            created_date=to_local(record.created_date),
            last_modified_date=to_local(record.last_modified_date),
        )
