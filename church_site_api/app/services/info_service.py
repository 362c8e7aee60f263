"""
Service layer for informational posts.

Info posts are news items, announcements and general notices.  Like
events they can be flagged as featured banners.  Listing returns the
most recently published posts first.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..core.db import Database, format_instant, is_storable_id
from ..core.errors import StoreError
from ..schemas.info import InfoCreate, InfoRead


logger = logging.getLogger(__name__)

INFO_COLUMNS = (
    "id, tenant_id, title, content, type, image_url, is_featured_banner, "
    "published_at, created_at, updated_at"
)


class InfoService:
    """Tenant‑scoped access to info posts."""

    def __init__(self, db: Database) -> None:
        self.db = db

    @staticmethod
    def _row_to_info(row: Dict[str, Any]) -> InfoRead:
        data = dict(row)
        data["is_featured_banner"] = bool(data["is_featured_banner"])
        return InfoRead(**data)

    @staticmethod
    def _filters(tenant_id: int, featured: Optional[bool], info_type: Optional[str]) -> tuple[str, list]:
        where = "tenant_id = ?"
        params: list = [tenant_id]
        if featured is not None:
            where += " AND is_featured_banner = ?"
            params.append(1 if featured else 0)
        if info_type:
            where += " AND type = ?"
            params.append(info_type)
        return where, params

    async def find_by_tenant(
        self,
        tenant_id: int,
        featured: Optional[bool] = None,
        info_type: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[InfoRead]:
        where, params = self._filters(tenant_id, featured, info_type)
        query = f"SELECT {INFO_COLUMNS} FROM info WHERE {where} ORDER BY published_at DESC, id ASC"
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)
        if offset is not None:
            if limit is None:
                query += " LIMIT -1"
            query += " OFFSET ?"
            params.append(offset)
        return [self._row_to_info(row) for row in self.db.fetch_all(query, params)]

    async def find_featured_by_tenant(self, tenant_id: int) -> List[InfoRead]:
        return await self.find_by_tenant(tenant_id, featured=True)

    async def find_by_id(self, info_id: int, tenant_id: int) -> Optional[InfoRead]:
        if not is_storable_id(info_id):
            return None
        row = self.db.fetch_one(
            f"SELECT {INFO_COLUMNS} FROM info WHERE id = ? AND tenant_id = ?",
            (info_id, tenant_id),
        )
        return self._row_to_info(row) if row else None

    async def count_by_tenant(
        self,
        tenant_id: int,
        featured: Optional[bool] = None,
        info_type: Optional[str] = None,
    ) -> int:
        where, params = self._filters(tenant_id, featured, info_type)
        row = self.db.fetch_one(f"SELECT COUNT(*) AS total FROM info WHERE {where}", params)
        return int(row["total"]) if row else 0

    async def create(self, tenant_id: int, data: InfoCreate) -> InfoRead:
        published_at = data.published_at or datetime.now(timezone.utc)
        info_id, _ = self.db.execute(
            """
            INSERT INTO info (tenant_id, title, content, type, image_url, is_featured_banner, published_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                tenant_id,
                data.title,
                data.content,
                data.type or "general",
                data.image_url,
                int(data.is_featured_banner),
                format_instant(published_at),
            ),
        )
        logger.info("Created info %s '%s' for tenant %s", info_id, data.title, tenant_id)
        created = await self.find_by_id(info_id, tenant_id)
        if created is None:
            raise StoreError(f"Inserted info {info_id} could not be read back")
        return created

    async def update(self, info_id: int, tenant_id: int, changes: Dict[str, Any]) -> Optional[InfoRead]:
        """Update the given fields; ``None`` when the post does not exist."""
        current = await self.find_by_id(info_id, tenant_id)
        if current is None or not changes:
            return current

        fields = []
        values: list = []
        for key, value in changes.items():
            fields.append(f"{key} = ?")
            if isinstance(value, bool):
                values.append(1 if value else 0)
            elif isinstance(value, datetime):
                values.append(format_instant(value))
            else:
                values.append(value)
        values.extend([info_id, tenant_id])
        self.db.execute(
            f"UPDATE info SET {', '.join(fields)}, updated_at = strftime('%Y-%m-%dT%H:%M:%SZ', 'now') "
            "WHERE id = ? AND tenant_id = ?",
            values,
        )
        logger.info("Updated info %s for tenant %s: %s", info_id, tenant_id, sorted(changes))
        return await self.find_by_id(info_id, tenant_id)

    async def delete(self, info_id: int, tenant_id: int) -> bool:
        if not is_storable_id(info_id):
            return False
        _, rowcount = self.db.execute(
            "DELETE FROM info WHERE id = ? AND tenant_id = ?",
            (info_id, tenant_id),
        )
        if rowcount:
            logger.info("Deleted info %s for tenant %s", info_id, tenant_id)
        return rowcount > 0
