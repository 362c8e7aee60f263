"""
Top‑level API router.

This router aggregates the domain routers under a unified prefix.
When new domains are introduced, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import banners, events, info


router = APIRouter()

router.include_router(events.router, prefix="/events", tags=["events"])
router.include_router(info.router, prefix="/info", tags=["info"])
router.include_router(banners.router, prefix="/banners", tags=["banners"])
