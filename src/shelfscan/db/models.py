"""SQLAlchemy ORM models for the shelfscan database.

Tables:
- series: One row per scanned series folder
- series_metadata: Descriptive fields, one-to-one with series
- collections: User-defined groupings of series
- collection_series: Many-to-many membership between collections and series

All timestamps are stored as naive UTC datetimes.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


def generate_uuid() -> str:
    """Generate a UUID string for primary keys."""
    return str(uuid4())


def utcnow() -> datetime:
    """Current UTC instant without tzinfo, as stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class SeriesRecord(Base):
    """Series row - a folder of books inside a library."""

    __tablename__ = "series"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    name: Mapped[str] = mapped_column(String(1000), nullable=False)
    url: Mapped[str] = mapped_column(String(2000), nullable=False)
    file_last_modified: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    library_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    book_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Timestamps
    created_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    last_modified_date: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )

    # A folder is scanned once per library
    __table_args__ = (
        UniqueConstraint("library_id", "url", name="uq_series_library_url"),
    )

    def __repr__(self) -> str:
        return f"<SeriesRecord(id={self.id}, name='{self.name}')>"


class SeriesMetadataRecord(Base):
    """Metadata row for a series."""

    __tablename__ = "series_metadata"

    series_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("series.id", ondelete="CASCADE"),
        primary_key=True,
    )
    title: Mapped[str] = mapped_column(String(1000), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="ONGOING", index=True)
    publisher: Mapped[str] = mapped_column(String(500), nullable=False, default="")

    # Timestamps
    created_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    last_modified_date: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )

    def __repr__(self) -> str:
        return f"<SeriesMetadataRecord(series_id={self.series_id}, title='{self.title}')>"


class CollectionRecord(Base):
    """Collection row - a user-defined grouping of series."""

    __tablename__ = "collections"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    name: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    ordered: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Timestamps
    created_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    last_modified_date: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )

    def __repr__(self) -> str:
        return f"<CollectionRecord(id={self.id}, name='{self.name}')>"


class CollectionSeriesRecord(Base):
    """Association table for collection-series many-to-many relationship."""

    __tablename__ = "collection_series"

    collection_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("collections.id", ondelete="CASCADE"),
        primary_key=True,
    )
    series_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("series.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    # Position within the collection
    number: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return (
            f"<CollectionSeriesRecord(collection_id={self.collection_id}, "
            f"series_id={self.series_id}, number={self.number})>"
        )


def to_local(value: datetime) -> datetime:
    """Convert a stored UTC datetime to an aware datetime in the local time zone."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone()


def local_now() -> datetime:
    """Current instant as an aware datetime in the local time zone."""
    return datetime.now(timezone.utc).astimezone()
