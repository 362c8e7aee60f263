"""
Dependency providers for route handlers.

Services are built once by ``create_app`` and stored on
``app.state``; these helpers hand them to handlers through
``Depends`` so tests can swap them with ``app.dependency_overrides``.
"""

from fastapi import Request

from ..services.banner_service import BannerService
from ..services.event_service import EventService
from ..services.info_service import InfoService


def get_event_service(request: Request) -> EventService:
    return request.app.state.event_service


def get_info_service(request: Request) -> InfoService:
    return request.app.state.info_service


def get_banner_service(request: Request) -> BannerService:
    return request.app.state.banner_service
