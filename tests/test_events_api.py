"""Tests for the /api/events CRUD endpoints."""

import pytest


NEW_EVENT = {
    "title": "Dåbsgudstjeneste",
    "description": "Særlig gudstjeneste med dåb.",
    "start_date": "2025-02-02T10:00:00Z",
    "end_date": "2025-02-02T11:00:00Z",
    "location": "Gislev Kirke",
}


def test_create_event(client):
    response = client.post("/api/events", json=NEW_EVENT)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Event created successfully"
    event = body["data"]["event"]
    assert event["id"] > 0
    assert event["tenant_id"] == 1
    assert event["title"] == "Dåbsgudstjeneste"
    assert event["start_date"] == "2025-02-02T10:00:00Z"
    assert event["is_featured_banner"] is False


def test_create_then_fetch(client):
    event_id = client.post("/api/events", json=NEW_EVENT).json()["data"]["event"]["id"]

    response = client.get(f"/api/events/{event_id}")

    assert response.status_code == 200
    assert response.json()["data"]["event"]["location"] == "Gislev Kirke"


@pytest.mark.parametrize("missing", ["title", "start_date"])
def test_create_requires_fields(client, missing):
    payload = {k: v for k, v in NEW_EVENT.items() if k != missing}

    response = client.post("/api/events", json=payload)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": f"Missing required field: {missing}"}


def test_create_rejects_empty_title(client):
    response = client.post("/api/events", json={**NEW_EVENT, "title": ""})

    assert response.status_code == 400
    assert response.json()["error"] == "Missing required field: title"


@pytest.mark.parametrize("field", ["start_date", "end_date"])
def test_create_rejects_bad_dates(client, field):
    response = client.post("/api/events", json={**NEW_EVENT, field: "not-a-date"})

    assert response.status_code == 400
    assert response.json()["error"] == f"Invalid {field} format"


def test_create_rejects_end_before_start(client):
    payload = {**NEW_EVENT, "end_date": "2025-02-01T10:00:00Z"}

    response = client.post("/api/events", json=payload)

    assert response.status_code == 400
    assert response.json()["error"] == "End date cannot be before start date"


def test_list_events_ordered_by_start(client, make_event):
    make_event(title="Later", start_date="2025-03-01T10:00:00+00:00")
    make_event(title="Sooner", start_date="2025-01-01T10:00:00+00:00")
    make_event(title="Elsewhere", tenant_id=2)

    body = client.get("/api/events").json()

    assert [e["title"] for e in body["data"]["events"]] == ["Sooner", "Later"]
    assert body["data"]["pagination"] == {"total": 2, "limit": 2, "offset": 0, "hasMore": False}


def test_list_events_featured_filter(client, make_event):
    make_event(title="Featured", is_featured_banner=True)
    make_event(title="Plain", is_featured_banner=False)

    featured = client.get("/api/events?featured=true").json()["data"]
    plain = client.get("/api/events?featured=false").json()["data"]
    unfiltered = client.get("/api/events?featured=maybe").json()["data"]

    assert [e["title"] for e in featured["events"]] == ["Featured"]
    assert [e["title"] for e in plain["events"]] == ["Plain"]
    assert unfiltered["pagination"]["total"] == 2


def test_list_events_pagination(client, make_event):
    for day in range(1, 6):
        make_event(title=f"Event {day}", start_date=f"2025-01-0{day}T10:00:00+00:00")

    body = client.get("/api/events?limit=2&offset=1").json()["data"]

    assert [e["title"] for e in body["events"]] == ["Event 2", "Event 3"]
    assert body["pagination"] == {"total": 5, "limit": 2, "offset": 1, "hasMore": True}


def test_list_events_offset_without_limit(client, make_event):
    make_event(title="First", start_date="2025-01-01T10:00:00+00:00")
    make_event(title="Second", start_date="2025-01-02T10:00:00+00:00")

    body = client.get("/api/events?offset=1").json()["data"]

    assert [e["title"] for e in body["events"]] == ["Second"]
    assert body["pagination"]["hasMore"] is False


@pytest.mark.parametrize(
    "query,error",
    [
        ("limit=0", "Limit must be between 1 and 100"),
        ("limit=101", "Limit must be between 1 and 100"),
        ("limit=ten", "Limit must be between 1 and 100"),
        ("offset=-1", "Offset must be 0 or greater"),
    ],
)
def test_list_events_rejects_bad_pagination(client, query, error):
    response = client.get(f"/api/events?{query}")

    assert response.status_code == 400
    assert response.json()["error"] == error


def test_get_event_errors(client, make_event):
    other_tenant_event = make_event(tenant_id=2)

    assert client.get("/api/events/abc").json() == {"success": False, "error": "Invalid event ID"}
    assert client.get("/api/events/999").status_code == 404
    assert client.get(f"/api/events/{other_tenant_event}").json()["error"] == "Event not found"


def test_update_event(client, make_event):
    event_id = make_event(title="Old title")

    response = client.put(f"/api/events/{event_id}", json={"title": "New title", "is_featured_banner": True})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Event updated successfully"
    assert body["data"]["event"]["title"] == "New title"
    assert body["data"]["event"]["is_featured_banner"] is True
    assert body["data"]["event"]["location"] == "Test Location"


def test_update_makes_event_a_banner(client, make_event):
    event_id = make_event(is_featured_banner=False)
    assert client.get(f"/api/banners/event/{event_id}").status_code == 404

    client.put(f"/api/events/{event_id}", json={"is_featured_banner": True})

    assert client.get(f"/api/banners/event/{event_id}").status_code == 200


def test_update_checks_dates_against_stored_row(client, make_event):
    event_id = make_event(start_date="2025-12-25T10:00:00+00:00", end_date="2025-12-25T11:00:00+00:00")

    response = client.put(f"/api/events/{event_id}", json={"end_date": "2025-12-24T10:00:00Z"})

    assert response.status_code == 400
    assert response.json()["error"] == "End date cannot be before start date"


def test_update_missing_event(client):
    response = client.put("/api/events/4242", json={"title": "x"})

    assert response.status_code == 404
    assert response.json()["error"] == "Event not found"


def test_delete_event(client, make_event):
    event_id = make_event()

    response = client.delete(f"/api/events/{event_id}")

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Event deleted successfully"}
    assert client.get(f"/api/events/{event_id}").status_code == 404
    assert client.delete(f"/api/events/{event_id}").status_code == 404


def test_delete_is_tenant_scoped(client, make_event):
    event_id = make_event(tenant_id=2)

    assert client.delete(f"/api/events/{event_id}").status_code == 404


@pytest.mark.parametrize("method", ["get", "delete"])
def test_id_beyond_sqlite_range_is_not_found(client, method):
    response = getattr(client, method)("/api/events/99999999999999999999")

    assert response.status_code == 404
    assert response.json()["error"] == "Event not found"


def test_update_with_id_beyond_sqlite_range(client):
    response = client.put("/api/events/-99999999999999999999", json={"title": "x"})

    assert response.status_code == 404


def test_offset_beyond_sqlite_range_is_a_fetch_failure(client, make_event):
    make_event()

    response = client.get("/api/events?offset=99999999999999999999")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to fetch events"}


def test_create_fails_cleanly_when_row_cannot_be_read_back(app, client, monkeypatch):
    async def vanished(event_id, tenant_id):
        return None

    monkeypatch.setattr(app.state.event_service, "find_by_id", vanished)

    response = client.post("/api/events", json=NEW_EVENT)

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to create event"}
