"""
Main entrypoint for the Church Site API.

This module assembles the FastAPI application, sets up logging,
wires the database handle, stores and tenant resolver, and includes
the routers.  ``create_app`` builds and configures the app, which is
then instantiated at module import time as ``app``, e.g.::

    uvicorn church_site_api.app.main:app --reload

Tests call ``create_app`` directly with their own ``Settings``,
``Database`` or ``TenantResolver``.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .api.endpoints import health
from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.db import Database, resolve_database_path
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .core.tenant import ConstantTenantResolver, TenantResolver
from .services.banner_service import BannerService
from .services.event_service import EventService
from .services.info_service import InfoService


logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    tenant_resolver: Optional[TenantResolver] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration; defaults to the environment‑derived settings.
    database : Optional[Database]
        Database handle; defaults to the file named by
        ``settings.database_url``.
    tenant_resolver : Optional[TenantResolver]
        Decides the tenant of each request; defaults to the single
        tenant described by settings.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None)

    database = database or Database(resolve_database_path(settings.database_url))
    tenant_resolver = tenant_resolver or ConstantTenantResolver.from_settings(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        database.init_schema()
        # Only a configured tenant can be seeded; custom resolvers own their rows.
        if isinstance(tenant_resolver, ConstantTenantResolver):
            tenant = tenant_resolver.tenant
            database.ensure_tenant(tenant.id, tenant.name, tenant.domain, tenant.settings_json())
        logger.info("%s %s started", settings.project_name, settings.api_version)
        yield

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    event_service = EventService(database)
    info_service = InfoService(database)
    app.state.settings = settings
    app.state.database = database
    app.state.tenant_resolver = tenant_resolver
    app.state.event_service = event_service
    app.state.info_service = info_service
    app.state.banner_service = BannerService(event_service, info_service)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_router, prefix="/api")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
