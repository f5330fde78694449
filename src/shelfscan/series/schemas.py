"""Pydantic schemas for series and series searches."""

from datetime import datetime
from typing import Optional

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, field_validator

from ..db.models import generate_uuid, local_now, to_utc_naive
from ..metadata.schemas import SeriesStatus


class Series(BaseModel):
    """A folder of books discovered while scanning a library.

    Instances are immutable; use ``model_copy(update=...)`` to derive a
    changed series before passing it to ``SeriesRepository.update``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    url: AnyUrl
    file_last_modified: datetime
    library_id: str
    id: str = Field(default_factory=generate_uuid)
    book_count: int = Field(0, ge=0)
    created_date: datetime = Field(default_factory=local_now)
    last_modified_date: datetime = Field(default_factory=local_now)

    @field_validator("file_last_modified")
    @classmethod
    def file_last_modified_as_utc(cls, v: datetime) -> datetime:
        """Store aware values as naive UTC so they survive the round trip."""
        return to_utc_naive(v)


class SeriesSearch(BaseModel):
    """Filters for ``SeriesRepository.find_all``.

    Every field is optional; ``None`` or an empty value means the filter
    is not applied. Present filters are combined with AND.
    """

    library_ids: Optional[list[str]] = None
    collection_ids: Optional[list[str]] = None
    search_term: Optional[str] = None  # case-insensitive substring of the title
    metadata_status: Optional[list[SeriesStatus]] = None
    publishers: Optional[list[str]] = None  # case-insensitive exact match
