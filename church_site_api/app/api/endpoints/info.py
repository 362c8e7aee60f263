"""
Info endpoints.

CRUD operations on news, announcements and general notices for the
current tenant.  Listing supports filtering by ``featured`` and
``type`` and returns the newest posts first.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, status

from ...core.errors import ErrorKind, NotFoundError, ValidationError, store_failure
from ...core.tenant import Tenant, get_current_tenant
from ...schemas.common import Pagination, parse_featured, parse_id, parse_page_options, success
from ...schemas.info import INFO_TYPES, INVALID_INFO_TYPE, InfoCreate, InfoUpdate
from ...services.info_service import InfoService
from ..deps import get_info_service


router = APIRouter()

INVALID_INFO_ID = "Invalid info ID"
INFO_NOT_FOUND = "Info not found"


@router.get("")
async def list_info(
    featured: Optional[str] = Query(None),
    type: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    tenant: Tenant = Depends(get_current_tenant),
    info: InfoService = Depends(get_info_service),
) -> Dict[str, Any]:
    """List info posts, newest first.

    - **featured** — ``true``/``false``; any other value is ignored.
    - **type** — one of ``news``, ``announcement``, ``general``.
    - **limit** — 1 to 100; **offset** — 0 or greater.
    """
    featured_filter = parse_featured(featured)
    page = parse_page_options(limit, offset)
    if type and type not in INFO_TYPES:
        raise ValidationError(INVALID_INFO_TYPE, kind=ErrorKind.INVALID_TYPE)
    with store_failure("Failed to fetch info"):
        items = await info.find_by_tenant(tenant.id, featured_filter, type or None, page.limit, page.offset)
        total = await info.count_by_tenant(tenant.id, featured_filter, type or None)
    return success(
        {
            "info": [item.model_dump(mode="json") for item in items],
            "pagination": Pagination.build(total, page).model_dump(),
        }
    )


@router.get("/{info_id}")
async def get_info(
    info_id: str,
    tenant: Tenant = Depends(get_current_tenant),
    info: InfoService = Depends(get_info_service),
) -> Dict[str, Any]:
    parsed_id = parse_id(info_id, INVALID_INFO_ID)
    with store_failure("Failed to fetch info"):
        post = await info.find_by_id(parsed_id, tenant.id)
    if post is None:
        raise NotFoundError(INFO_NOT_FOUND)
    return success({"info": post.model_dump(mode="json")})


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_info(
    body: InfoCreate,
    tenant: Tenant = Depends(get_current_tenant),
    info: InfoService = Depends(get_info_service),
) -> Dict[str, Any]:
    """Create an info post.  ``title`` and ``content`` are required."""
    with store_failure("Failed to create info"):
        post = await info.create(tenant.id, body)
    return success({"info": post.model_dump(mode="json")}, "Info created successfully")


@router.put("/{info_id}")
async def update_info(
    info_id: str,
    updates: InfoUpdate,
    tenant: Tenant = Depends(get_current_tenant),
    info: InfoService = Depends(get_info_service),
) -> Dict[str, Any]:
    parsed_id = parse_id(info_id, INVALID_INFO_ID)
    changes = {k: v for k, v in updates.model_dump(exclude_unset=True).items() if v is not None}
    with store_failure("Failed to update info"):
        post = await info.update(parsed_id, tenant.id, changes)
    if post is None:
        raise NotFoundError(INFO_NOT_FOUND)
    return success({"info": post.model_dump(mode="json")}, "Info updated successfully")


@router.delete("/{info_id}")
async def delete_info(
    info_id: str,
    tenant: Tenant = Depends(get_current_tenant),
    info: InfoService = Depends(get_info_service),
) -> Dict[str, Any]:
    parsed_id = parse_id(info_id, INVALID_INFO_ID)
    with store_failure("Failed to delete info"):
        deleted = await info.delete(parsed_id, tenant.id)
    if not deleted:
        raise NotFoundError(INFO_NOT_FOUND)
    return success(message="Info deleted successfully")
