"""Pydantic schemas for series metadata."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..db.models import local_now


class SeriesStatus(str, Enum):
    """Publication status of a series."""

    ENDED = "ENDED"
    ONGOING = "ONGOING"
    ABANDONED = "ABANDONED"
    HIATUS = "HIATUS"


class SeriesMetadata(BaseModel):
    """Descriptive fields attached one-to-one to a series."""

    model_config = ConfigDict(frozen=True)

    series_id: str
    title: str = Field(..., min_length=1, max_length=1000)
    status: SeriesStatus = SeriesStatus.ONGOING
    publisher: str = Field("", max_length=500)
    created_date: datetime = Field(default_factory=local_now)
    last_modified_date: datetime = Field(default_factory=local_now)
