"""
Tenant resolution.

All data is partitioned by tenant.  Which tenant a request belongs to
is decided by a ``TenantResolver``; the API currently serves a single
church, so ``ConstantTenantResolver`` always answers with the tenant
built from settings.  Domain‑ or header‑based resolvers can be plugged
into ``create_app`` later without touching the routes or services.

The tenant id is never taken from the client: routes receive it from
the ``get_current_tenant`` dependency.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Protocol

from fastapi import Request, Response

from .config import Settings
from .errors import AppError, ErrorKind


logger = logging.getLogger(__name__)

DEFAULT_TENANT_SETTINGS: Dict[str, Any] = {
    "theme": "default",
    "language": "da",
    "timezone": "Europe/Copenhagen",
}


@dataclass(frozen=True)
class Tenant:
    id: int
    name: str
    domain: str
    settings: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime(2025, 1, 1, tzinfo=timezone.utc))

    def settings_json(self) -> str:
        return json.dumps(self.settings, ensure_ascii=False)


class TenantResolver(Protocol):
    def resolve(self, request: Request) -> Tenant:
        ...


class ConstantTenantResolver:
    """Resolve every request to one fixed tenant."""

    def __init__(self, tenant: Tenant) -> None:
        self.tenant = tenant

    @classmethod
    def from_settings(cls, settings: Settings) -> "ConstantTenantResolver":
        return cls(
            Tenant(
                id=settings.tenant_id,
                name=settings.tenant_name,
                domain=settings.tenant_domain,
                settings=dict(DEFAULT_TENANT_SETTINGS),
            )
        )

    def resolve(self, request: Request) -> Tenant:
        return self.tenant

    def get_tenant_by_id(self, tenant_id: int) -> Optional[Tenant]:
        return self.tenant if tenant_id == self.tenant.id else None

    def get_tenant_by_domain(self, domain: str) -> Optional[Tenant]:
        return self.tenant if domain.lower() == self.tenant.domain.lower() else None


def get_current_tenant(request: Request, response: Response) -> Tenant:
    """FastAPI dependency returning the tenant of the current request.

    The resolved tenant is echoed in the ``X-Tenant-ID`` and
    ``X-Tenant-Name`` response headers to ease debugging.
    """
    resolver: TenantResolver = request.app.state.tenant_resolver
    try:
        tenant = resolver.resolve(request)
    except Exception as exc:
        logger.exception("Tenant resolution failed for %s", request.url.path)
        raise AppError("Failed to resolve tenant", kind=ErrorKind.TENANT_RESOLUTION_FAILURE) from exc
    response.headers["X-Tenant-ID"] = str(tenant.id)
    response.headers["X-Tenant-Name"] = tenant.name
    return tenant
