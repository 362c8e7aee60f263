"""Tests for app wiring: health, error envelope, tenant context and storage errors."""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from church_site_api.app.core.db import Database
from church_site_api.app.core.errors import StoreError
from church_site_api.app.core.tenant import ConstantTenantResolver, Tenant
from church_site_api.app.main import create_app


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    assert body["database"] == "ok"
    assert datetime.fromisoformat(body["timestamp"]).tzinfo is not None


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Route not found"}


def test_api_responses_carry_tenant_headers(client):
    response = client.get("/api/banners")

    assert response.headers["X-Tenant-ID"] == "1"
    assert response.headers["X-Tenant-Name"] == "Gislev Kirke"


def test_cors_allows_the_frontend(client, settings):
    response = client.get("/health", headers={"Origin": settings.frontend_url})

    assert response.headers["access-control-allow-origin"] == settings.frontend_url


def test_lifespan_seeds_configured_tenant(tmp_path, settings):
    database = Database(str(tmp_path / "fresh.db"))
    app = create_app(settings, database=database)

    with TestClient(app):
        row = database.fetch_one("SELECT id, name, domain, settings FROM tenants WHERE id = ?", (1,))

    assert row["name"] == "Gislev Kirke"
    assert row["domain"] == "gislevkirke.dk"
    assert '"language": "da"' in row["settings"]


class BrokenResolver:
    def resolve(self, request):
        raise RuntimeError("tenant lookup timed out")


def test_tenant_resolution_failure(settings, database):
    app = create_app(settings, database=database, tenant_resolver=BrokenResolver())

    with TestClient(app) as client:
        response = client.get("/api/events")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to resolve tenant"}


def test_custom_resolver_scopes_every_route(settings, database, make_event):
    make_event(title="Ours", tenant_id=1, is_featured_banner=True)
    make_event(title="Theirs", tenant_id=2, is_featured_banner=True)
    other = ConstantTenantResolver(Tenant(id=2, name="Other Church", domain="other.example"))
    app = create_app(settings, database=database, tenant_resolver=other)

    with TestClient(app) as client:
        events = client.get("/api/events").json()["data"]["events"]
        banners = client.get("/api/banners").json()["data"]["banners"]
        header = client.get("/api/info").headers["X-Tenant-ID"]

    assert [e["title"] for e in events] == ["Theirs"]
    assert [b["title"] for b in banners] == ["Theirs"]
    assert header == "2"


def test_constant_resolver_lookups(settings):
    resolver = ConstantTenantResolver.from_settings(settings)

    assert resolver.get_tenant_by_id(1).name == "Gislev Kirke"
    assert resolver.get_tenant_by_id(7) is None
    assert resolver.get_tenant_by_domain("GislevKirke.dk").id == 1
    assert resolver.get_tenant_by_domain("example.org") is None
    assert resolver.tenant.settings["timezone"] == "Europe/Copenhagen"


def test_sqlite_errors_become_store_errors(database):
    with pytest.raises(StoreError):
        database.fetch_all("SELECT * FROM no_such_table")


def test_unreachable_database_fails_health(tmp_path):
    # A directory cannot be opened as a database file.
    database = Database(str(tmp_path))

    assert database.health_check() is False


def test_store_failure_on_events_is_generic(tmp_path, settings):
    database = Database(str(tmp_path / "empty.db"))
    app = create_app(settings, database=database)
    client = TestClient(app)  # no lifespan: the schema is never created

    response = client.get("/api/events")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to fetch events"}
