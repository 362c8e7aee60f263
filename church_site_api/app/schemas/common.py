"""
Shared schema helpers: the response envelope, pagination metadata and
parsing of raw query/path values into validated option structs.

Query parameters are accepted as plain strings and parsed here rather
than by FastAPI so that invalid values produce the same envelope and
wording as every other client error.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

from ..core.errors import ErrorKind, ValidationError


_INTEGER = re.compile(r"[+-]?[0-9]+")


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC and normalise aware ones to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def success(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    """Build a ``{success: true, data?, message?}`` response body."""
    body: Dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    return body


def parse_int(raw: Optional[str]) -> Optional[int]:
    """Return ``raw`` as an int, or ``None`` unless it is plain ASCII digits."""
    if raw is None:
        return None
    text = str(raw).strip()
    if not _INTEGER.fullmatch(text):
        return None
    return int(text)


def parse_id(raw: str, message: str) -> int:
    value = parse_int(raw)
    if value is None:
        raise ValidationError(message, kind=ErrorKind.INVALID_ID)
    return value


def parse_featured(raw: Optional[str]) -> Optional[bool]:
    """``"true"``/``"false"`` select a filter; anything else means no filter."""
    if raw == "true":
        return True
    if raw == "false":
        return False
    return None


class PageOptions(BaseModel):
    """Validated pagination for list endpoints."""

    model_config = ConfigDict(frozen=True)

    limit: Optional[int] = None
    offset: Optional[int] = None


def parse_page_options(raw_limit: Optional[str], raw_offset: Optional[str], max_limit: int = 100) -> PageOptions:
    limit = offset = None
    if raw_limit:
        limit = parse_int(raw_limit)
        if limit is None or limit < 1 or limit > max_limit:
            raise ValidationError(f"Limit must be between 1 and {max_limit}", kind=ErrorKind.INVALID_LIMIT)
    if raw_offset:
        offset = parse_int(raw_offset)
        if offset is None or offset < 0:
            raise ValidationError("Offset must be 0 or greater", kind=ErrorKind.INVALID_OFFSET)
    return PageOptions(limit=limit, offset=offset)


class Pagination(BaseModel):
    total: int
    limit: int
    offset: int
    hasMore: bool

    @classmethod
    def build(cls, total: int, page: PageOptions) -> "Pagination":
        has_more = False
        if page.limit is not None and page.offset is not None:
            has_more = page.offset + page.limit < total
        return cls(
            total=total,
            limit=page.limit or total,
            offset=page.offset or 0,
            hasMore=has_more,
        )
