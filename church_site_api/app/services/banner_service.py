"""
Banner aggregation.

Banners are not stored anywhere.  Each request projects the tenant's
featured events and featured info posts into ``Banner`` objects,
merges them into one list ordered by date (newest first) and cuts it
to the requested size.  ``get_banner`` looks a single banner up by
``(type, id)`` and checks the featured flag again, so a post that was
unfeatured after a listing is no longer served.

Ordering
--------
Banners are sorted by date descending.  A banner without a date sorts
as if dated at the Unix epoch, i.e. after every dated banner.  Equal
dates keep events ahead of info posts and then order by ascending id,
which makes the result independent of the row order the stores return.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import List, Optional, Protocol, Sequence, Tuple

from ..core.errors import ErrorKind, NotFoundError, store_failure
from ..schemas.banner import Banner, BannerKey, BannerList, BannerListMeta, BannerListOptions
from ..schemas.event import EventRead
from ..schemas.info import InfoRead


logger = logging.getLogger(__name__)

BANNER_NOT_FOUND = "Banner not found or not featured"

_TYPE_RANK = {"event": 0, "info": 1}


class EventStore(Protocol):
    async def find_featured_by_tenant(self, tenant_id: int) -> List[EventRead]:
        ...

    async def find_by_id(self, event_id: int, tenant_id: int) -> Optional[EventRead]:
        ...


class InfoStore(Protocol):
    async def find_featured_by_tenant(self, tenant_id: int) -> List[InfoRead]:
        ...

    async def find_by_id(self, info_id: int, tenant_id: int) -> Optional[InfoRead]:
        ...


def event_to_banner(event: EventRead) -> Banner:
    return Banner(
        id=event.id,
        title=event.title,
        description=event.description or None,
        image_url=event.image_url or None,
        type="event",
        date=event.start_date,
        location=event.location or None,
    )


def info_to_banner(info: InfoRead) -> Banner:
    return Banner(
        id=info.id,
        title=info.title,
        content=info.content,
        image_url=info.image_url or None,
        type="info",
        date=info.published_at,
    )


def _sort_key(banner: Banner) -> Tuple[float, int, int]:
    timestamp = banner.date.timestamp() if isinstance(banner.date, datetime) else 0.0
    return (-timestamp, _TYPE_RANK[banner.type], banner.id)


def rank_banners(banners: Sequence[Banner], limit: int) -> List[Banner]:
    """Order banners newest first and keep the first ``limit``."""
    return sorted(banners, key=_sort_key)[:limit]


class BannerService:
    """Merge featured events and info posts into the banner feed."""

    def __init__(self, events: EventStore, info: InfoStore) -> None:
        self.events = events
        self.info = info

    async def list_banners(self, tenant_id: int, options: BannerListOptions) -> BannerList:
        """Return the ranked banner feed for a tenant.

        ``meta.total`` counts the banners returned; ``events_count``
        and ``info_count`` count every featured event and info post
        before the list is cut to ``options.limit``.  If either store
        fails the whole call fails with ``FetchFailure``.
        """
        with store_failure("Failed to fetch banners"):
            featured_events, featured_info = await asyncio.gather(
                self.events.find_featured_by_tenant(tenant_id),
                self.info.find_featured_by_tenant(tenant_id),
            )

        event_banners = [event_to_banner(event) for event in featured_events]
        info_banners = [info_to_banner(info) for info in featured_info]
        banners = rank_banners(event_banners + info_banners, options.limit)
        logger.debug(
            "Tenant %s banners: %d events, %d info, returning %d",
            tenant_id,
            len(event_banners),
            len(info_banners),
            len(banners),
        )
        return BannerList(
            banners=banners,
            meta=BannerListMeta(
                total=len(banners),
                limit=options.limit,
                events_count=len(event_banners),
                info_count=len(info_banners),
            ),
        )

    async def get_banner(self, key: BannerKey, tenant_id: int) -> Banner:
        """Return one featured banner.

        A missing entity and an entity that exists but is not featured
        raise the same ``NotFoundError`` so callers cannot tell them
        apart.
        """
        banner: Optional[Banner] = None
        with store_failure("Failed to fetch banner"):
            if key.type == "event":
                event = await self.events.find_by_id(key.id, tenant_id)
                if event is not None and event.is_featured_banner:
                    banner = event_to_banner(event)
            else:
                info = await self.info.find_by_id(key.id, tenant_id)
                if info is not None and info.is_featured_banner:
                    banner = info_to_banner(info)

        if banner is None:
            raise NotFoundError(BANNER_NOT_FOUND, kind=ErrorKind.BANNER_NOT_FOUND_OR_NOT_FEATURED)
        return banner
