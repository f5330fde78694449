"""Pydantic schemas for series collections."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..db.models import generate_uuid, local_now


class SeriesCollection(BaseModel):
    """A user-defined grouping of series.

    ``series_ids`` keeps the membership order; for ordered collections the
    position in the list is the reading order.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, max_length=500)
    ordered: bool = False
    series_ids: list[str] = Field(default_factory=list)
    id: str = Field(default_factory=generate_uuid)
    created_date: datetime = Field(default_factory=local_now)
    last_modified_date: datetime = Field(default_factory=local_now)

    @field_validator("series_ids")
    @classmethod
    def unique_series_ids(cls, v: list[str]) -> list[str]:
        """A series can only appear once in a collection."""
        duplicates = sorted({series_id for series_id in v if v.count(series_id) > 1})
        if duplicates:
            raise ValueError(f"Duplicate series ids: {', '.join(duplicates)}")
        return v
