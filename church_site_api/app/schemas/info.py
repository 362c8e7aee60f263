"""
Pydantic models for informational posts (news, announcements and
general notices).
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import ensure_utc


INFO_TYPES = ("news", "announcement", "general")
INVALID_INFO_TYPE = "Type must be one of: news, announcement, general"


def _check_info_type(value: Optional[str]) -> Optional[str]:
    if value is not None and value not in INFO_TYPES:
        raise ValueError(INVALID_INFO_TYPE)
    return value


class InfoCreate(BaseModel):
    """Schema for creating an info post.

    ``published_at`` defaults to the time of creation.
    """

    title: str = Field(..., examples=["Kirken søger frivillige"])
    content: str = Field(..., examples=["Vi søger frivillige til forskellige opgaver i kirken."])
    type: str = "general"
    image_url: Optional[str] = None
    is_featured_banner: bool = False
    published_at: Optional[datetime] = None

    @field_validator("title", "content")
    @classmethod
    def _present(cls, value: str, info) -> str:
        if not value:
            raise ValueError(f"Missing required field: {info.field_name}")
        return value

    @field_validator("type")
    @classmethod
    def _valid_type(cls, value: Optional[str]) -> Optional[str]:
        return _check_info_type(value)

    @field_validator("published_at")
    @classmethod
    def _to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)


class InfoUpdate(BaseModel):
    """All fields optional; only provided fields are updated."""

    title: Optional[str] = None
    content: Optional[str] = None
    type: Optional[str] = None
    image_url: Optional[str] = None
    is_featured_banner: Optional[bool] = None
    published_at: Optional[datetime] = None

    @field_validator("type")
    @classmethod
    def _valid_type(cls, value: Optional[str]) -> Optional[str]:
        return _check_info_type(value)

    @field_validator("published_at")
    @classmethod
    def _to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)


class InfoRead(BaseModel):
    id: int
    tenant_id: int
    title: str
    content: str
    type: str
    image_url: Optional[str] = None
    is_featured_banner: bool = False
    published_at: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("published_at")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)
