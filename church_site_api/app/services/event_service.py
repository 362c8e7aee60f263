"""
Business logic for events.

``EventService`` is the event store: it reads and writes the
``events`` table through the ``Database`` handle it is constructed
with.  Every query is scoped by ``tenant_id``; callers obtain the
tenant from the request's tenant context, never from client input.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.db import Database, format_instant, is_storable_id
from ..core.errors import ErrorKind, StoreError, ValidationError
from ..schemas.event import END_BEFORE_START, EventCreate, EventRead


logger = logging.getLogger(__name__)

EVENT_COLUMNS = (
    "id, tenant_id, title, description, start_date, end_date, location, "
    "image_url, is_featured_banner, created_at, updated_at"
)


class EventService:
    """Tenant‑scoped access to events."""

    def __init__(self, db: Database) -> None:
        self.db = db

    @staticmethod
    def _row_to_event(row: Dict[str, Any]) -> EventRead:
        return EventRead(
            id=row["id"],
            tenant_id=row["tenant_id"],
            title=row["title"],
            description=row["description"],
            start_date=row["start_date"],
            end_date=row["end_date"],
            location=row["location"],
            image_url=row["image_url"],
            is_featured_banner=bool(row["is_featured_banner"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    async def find_by_tenant(
        self,
        tenant_id: int,
        featured: Optional[bool] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[EventRead]:
        """Return the tenant's events ordered by start date (earliest first).

        - ``featured`` filters on the banner flag when not ``None``.
        - ``limit`` and ``offset`` page through the result.
        """
        query = f"SELECT {EVENT_COLUMNS} FROM events WHERE tenant_id = ?"
        params: list = [tenant_id]
        if featured is not None:
            query += " AND is_featured_banner = ?"
            params.append(1 if featured else 0)
        query += " ORDER BY start_date ASC, id ASC"
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)
        if offset is not None:
            if limit is None:
                # SQLite only accepts OFFSET after a LIMIT clause.
                query += " LIMIT -1"
            query += " OFFSET ?"
            params.append(offset)
        rows = self.db.fetch_all(query, params)
        return [self._row_to_event(row) for row in rows]

    async def find_featured_by_tenant(self, tenant_id: int) -> List[EventRead]:
        return await self.find_by_tenant(tenant_id, featured=True)

    async def find_by_id(self, event_id: int, tenant_id: int) -> Optional[EventRead]:
        if not is_storable_id(event_id):
            return None
        row = self.db.fetch_one(
            f"SELECT {EVENT_COLUMNS} FROM events WHERE id = ? AND tenant_id = ?",
            (event_id, tenant_id),
        )
        return self._row_to_event(row) if row else None

    async def count_by_tenant(self, tenant_id: int, featured: Optional[bool] = None) -> int:
        query = "SELECT COUNT(*) AS total FROM events WHERE tenant_id = ?"
        params: list = [tenant_id]
        if featured is not None:
            query += " AND is_featured_banner = ?"
            params.append(1 if featured else 0)
        row = self.db.fetch_one(query, params)
        return int(row["total"]) if row else 0

    async def create(self, tenant_id: int, data: EventCreate) -> EventRead:
        """Insert a new event for the tenant and return it."""
        event_id, _ = self.db.execute(
            """
            INSERT INTO events (tenant_id, title, description, start_date, end_date, location, image_url, is_featured_banner)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                tenant_id,
                data.title,
                data.description,
                format_instant(data.start_date),
                format_instant(data.end_date) if data.end_date else None,
                data.location,
                data.image_url,
                int(data.is_featured_banner),
            ),
        )
        logger.info("Created event %s '%s' for tenant %s", event_id, data.title, tenant_id)
        created = await self.find_by_id(event_id, tenant_id)
        if created is None:
            raise StoreError(f"Inserted event {event_id} could not be read back")
        return created

    async def update(self, event_id: int, tenant_id: int, changes: Dict[str, Any]) -> Optional[EventRead]:
        """Update the given fields of an event.

        Returns ``None`` when the event does not exist for the tenant.
        An empty ``changes`` dict returns the current event.  Raises
        ``ValidationError`` if the update would put ``end_date`` before
        ``start_date``.
        """
        current = await self.find_by_id(event_id, tenant_id)
        if current is None:
            return None
        if not changes:
            return current

        start = changes.get("start_date", current.start_date)
        end = changes.get("end_date", current.end_date)
        if end is not None and end < start:
            raise ValidationError(END_BEFORE_START, kind=ErrorKind.INVALID_DATE)

        fields = []
        values: list = []
        for key, value in changes.items():
            fields.append(f"{key} = ?")
            if isinstance(value, bool):
                values.append(1 if value else 0)
            elif key in ("start_date", "end_date") and value is not None:
                values.append(format_instant(value))
            else:
                values.append(value)
        values.extend([event_id, tenant_id])
        self.db.execute(
            f"UPDATE events SET {', '.join(fields)}, updated_at = strftime('%Y-%m-%dT%H:%M:%SZ', 'now') "
            "WHERE id = ? AND tenant_id = ?",
            values,
        )
        logger.info("Updated event %s for tenant %s: %s", event_id, tenant_id, sorted(changes))
        return await self.find_by_id(event_id, tenant_id)

    async def delete(self, event_id: int, tenant_id: int) -> bool:
        if not is_storable_id(event_id):
            return False
        _, rowcount = self.db.execute(
            "DELETE FROM events WHERE id = ? AND tenant_id = ?",
            (event_id, tenant_id),
        )
        if rowcount:
            logger.info("Deleted event %s for tenant %s", event_id, tenant_id)
        return rowcount > 0
