"""
Pydantic models for event data.

``EventCreate`` and ``EventUpdate`` describe request bodies;
``EventRead`` is what the API returns and what the event store hands
to the banner aggregator.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .common import ensure_utc


END_BEFORE_START = "End date cannot be before start date"


class EventBase(BaseModel):
    title: str = Field(..., examples=["Gudstjeneste"])
    description: Optional[str] = Field(None, examples=["Søndagsgudstjeneste med nadver"])
    start_date: datetime = Field(..., examples=["2025-02-16T10:00:00Z"])
    end_date: Optional[datetime] = Field(None, examples=["2025-02-16T11:00:00Z"])
    location: Optional[str] = Field(None, examples=["Gislev Kirke"])
    image_url: Optional[str] = None
    is_featured_banner: bool = False

    @field_validator("start_date", "end_date")
    @classmethod
    def _to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)


class EventCreate(EventBase):
    """Schema for creating an event."""

    @field_validator("title")
    @classmethod
    def _title_present(cls, value: str) -> str:
        if not value:
            raise ValueError("Missing required field: title")
        return value

    @model_validator(mode="after")
    def _end_after_start(self) -> "EventCreate":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError(END_BEFORE_START)
        return self


class EventRead(EventBase):
    """Schema for reading an event from the API."""

    id: int
    tenant_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class EventUpdate(BaseModel):
    """Schema for updating an event.

    All fields are optional; only provided fields will be updated.
    Date ordering is checked by the service against the stored row.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    location: Optional[str] = None
    image_url: Optional[str] = None
    is_featured_banner: Optional[bool] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def _to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)
