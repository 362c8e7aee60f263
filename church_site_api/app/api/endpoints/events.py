"""
Event endpoints.

CRUD operations on the current tenant's events.  Responses use the
``{success, data, message}`` envelope; errors are rendered by the
handlers in ``core.errors``.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, status

from ...core.errors import NotFoundError, store_failure
from ...core.tenant import Tenant, get_current_tenant
from ...schemas.common import Pagination, parse_featured, parse_id, parse_page_options, success
from ...schemas.event import EventCreate, EventUpdate
from ...services.event_service import EventService
from ..deps import get_event_service


router = APIRouter()

INVALID_EVENT_ID = "Invalid event ID"
EVENT_NOT_FOUND = "Event not found"


@router.get("")
async def list_events(
    featured: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    tenant: Tenant = Depends(get_current_tenant),
    events: EventService = Depends(get_event_service),
) -> Dict[str, Any]:
    """List events with optional ``featured`` filter and pagination.

    - **featured** — ``true``/``false``; any other value is ignored.
    - **limit** — 1 to 100.
    - **offset** — 0 or greater.
    """
    featured_filter = parse_featured(featured)
    page = parse_page_options(limit, offset)
    with store_failure("Failed to fetch events"):
        items = await events.find_by_tenant(tenant.id, featured_filter, page.limit, page.offset)
        total = await events.count_by_tenant(tenant.id, featured_filter)
    return success(
        {
            "events": [item.model_dump(mode="json") for item in items],
            "pagination": Pagination.build(total, page).model_dump(),
        }
    )


@router.get("/{event_id}")
async def get_event(
    event_id: str,
    tenant: Tenant = Depends(get_current_tenant),
    events: EventService = Depends(get_event_service),
) -> Dict[str, Any]:
    parsed_id = parse_id(event_id, INVALID_EVENT_ID)
    with store_failure("Failed to fetch event"):
        event = await events.find_by_id(parsed_id, tenant.id)
    if event is None:
        raise NotFoundError(EVENT_NOT_FOUND)
    return success({"event": event.model_dump(mode="json")})


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_event(
    body: EventCreate,
    tenant: Tenant = Depends(get_current_tenant),
    events: EventService = Depends(get_event_service),
) -> Dict[str, Any]:
    """Create an event.  ``title`` and ``start_date`` are required."""
    with store_failure("Failed to create event"):
        event = await events.create(tenant.id, body)
    return success({"event": event.model_dump(mode="json")}, "Event created successfully")


@router.put("/{event_id}")
async def update_event(
    event_id: str,
    updates: EventUpdate,
    tenant: Tenant = Depends(get_current_tenant),
    events: EventService = Depends(get_event_service),
) -> Dict[str, Any]:
    """Update an event.  Fields left out of the body are unchanged."""
    parsed_id = parse_id(event_id, INVALID_EVENT_ID)
    changes = {k: v for k, v in updates.model_dump(exclude_unset=True).items() if v is not None}
    with store_failure("Failed to update event"):
        event = await events.update(parsed_id, tenant.id, changes)
    if event is None:
        raise NotFoundError(EVENT_NOT_FOUND)
    return success({"event": event.model_dump(mode="json")}, "Event updated successfully")


@router.delete("/{event_id}")
async def delete_event(
    event_id: str,
    tenant: Tenant = Depends(get_current_tenant),
    events: EventService = Depends(get_event_service),
) -> Dict[str, Any]:
    parsed_id = parse_id(event_id, INVALID_EVENT_ID)
    with store_failure("Failed to delete event"):
        deleted = await events.delete(parsed_id, tenant.id)
    if not deleted:
        raise NotFoundError(EVENT_NOT_FOUND)
    return success(message="Event deleted successfully")
