"""
Banner projections and banner request options.

A banner is a read‑only projection of a featured event or info post,
used by the homepage carousel.  ``(type, id)`` identifies a banner;
ids alone are not unique because they come from two tables.

``parse_banner_list_options`` and ``parse_banner_key`` turn raw query
and path strings into immutable option structs before the aggregator
runs, raising ``ValidationError`` with the wording clients rely on.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ..core.errors import ErrorKind, ValidationError
from .common import ensure_utc, parse_int


BannerType = Literal["event", "info"]
BANNER_TYPES = ("event", "info")

DEFAULT_BANNER_LIMIT = 10
MIN_BANNER_LIMIT = 1
MAX_BANNER_LIMIT = 50


class Banner(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    content: Optional[str] = None
    image_url: Optional[str] = None
    type: BannerType
    date: Optional[datetime] = None
    location: Optional[str] = None

    @field_validator("date")
    @classmethod
    def _to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)


class BannerListMeta(BaseModel):
    total: int
    limit: int
    events_count: int
    info_count: int


class BannerList(BaseModel):
    banners: List[Banner]
    meta: BannerListMeta


class BannerListOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    limit: int = DEFAULT_BANNER_LIMIT


class BannerKey(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: BannerType
    id: int


def parse_banner_list_options(raw_limit: Optional[str]) -> BannerListOptions:
    """Validate the ``limit`` query value; absent or empty means the default."""
    if raw_limit is None or raw_limit == "":
        return BannerListOptions()
    limit = parse_int(raw_limit)
    if limit is None or limit < MIN_BANNER_LIMIT or limit > MAX_BANNER_LIMIT:
        raise ValidationError(
            f"Limit must be between {MIN_BANNER_LIMIT} and {MAX_BANNER_LIMIT}",
            kind=ErrorKind.INVALID_LIMIT,
        )
    return BannerListOptions(limit=limit)


def parse_banner_key(raw_type: str, raw_id: str) -> BannerKey:
    """Validate a ``/banners/{type}/{id}`` pair.  The id is checked first."""
    banner_id = parse_int(raw_id)
    if banner_id is None:
        raise ValidationError("Invalid banner ID", kind=ErrorKind.INVALID_ID)
    # Exact match: "Event" is rejected.
    if raw_type not in BANNER_TYPES:
        raise ValidationError('Type must be either "event" or "info"', kind=ErrorKind.INVALID_TYPE)
    return BannerKey(type=raw_type, id=banner_id)
