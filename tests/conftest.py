"""Shared fixtures: a temporary SQLite database and an app wired to it."""

from typing import Any, Callable, Dict

import pytest
from fastapi.testclient import TestClient

from church_site_api.app.core.config import Settings
from church_site_api.app.core.db import Database
from church_site_api.app.main import create_app


TENANT_ID = 1


@pytest.fixture
def settings() -> Settings:
    return Settings(tenant_id=TENANT_ID, tenant_name="Gislev Kirke", tenant_domain="gislevkirke.dk")


@pytest.fixture
def database(tmp_path) -> Database:
    db = Database(str(tmp_path / "church_site_test.db"))
    db.init_schema()
    db.ensure_tenant(TENANT_ID, "Gislev Kirke", "gislevkirke.dk", "{}")
    db.ensure_tenant(2, "Other Church", "other.example", "{}")
    return db


@pytest.fixture
def app(settings, database):
    return create_app(settings, database=database)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_event(database) -> Callable[..., int]:
    """Insert an event row directly and return its id."""

    def _make(**overrides: Any) -> int:
        data: Dict[str, Any] = {
            "tenant_id": TENANT_ID,
            "title": "Test Event",
            "description": "Test event description",
            "start_date": "2025-12-25T10:00:00+00:00",
            "end_date": "2025-12-25T11:00:00+00:00",
            "location": "Test Location",
            "image_url": None,
            "is_featured_banner": False,
        }
        data.update(overrides)
        event_id, _ = database.execute(
            """
            INSERT INTO events (tenant_id, title, description, start_date, end_date, location, image_url, is_featured_banner)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                data["tenant_id"],
                data["title"],
                data["description"],
                data["start_date"],
                data["end_date"],
                data["location"],
                data["image_url"],
                int(data["is_featured_banner"]),
            ),
        )
        return event_id

    return _make


@pytest.fixture
def make_info(database) -> Callable[..., int]:
    """Insert an info row directly and return its id."""

    def _make(**overrides: Any) -> int:
        data: Dict[str, Any] = {
            "tenant_id": TENANT_ID,
            "title": "Test Info",
            "content": "Test info content",
            "type": "general",
            "image_url": None,
            "is_featured_banner": False,
            "published_at": "2025-01-01T09:00:00+00:00",
        }
        data.update(overrides)
        info_id, _ = database.execute(
            """
            INSERT INTO info (tenant_id, title, content, type, image_url, is_featured_banner, published_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                data["tenant_id"],
                data["title"],
                data["content"],
                data["type"],
                data["image_url"],
                int(data["is_featured_banner"]),
                data["published_at"],
            ),
        )
        return info_id

    return _make
