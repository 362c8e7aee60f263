"""
Banner endpoints.

``GET /banners`` returns the merged feed of featured events and info
posts; ``GET /banners/{type}/{id}`` returns one featured item.  Query
and path values are parsed into option structs before the service is
called, so invalid input never reaches the stores.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from ...core.tenant import Tenant, get_current_tenant
from ...schemas.banner import parse_banner_key, parse_banner_list_options
from ...schemas.common import success
from ...services.banner_service import BannerService
from ..deps import get_banner_service


router = APIRouter()


@router.get("")
async def list_banners(
    limit: Optional[str] = Query(None, description="Number of banners, 1 to 50 (default 10)"),
    tenant: Tenant = Depends(get_current_tenant),
    banners: BannerService = Depends(get_banner_service),
) -> Dict[str, Any]:
    options = parse_banner_list_options(limit)
    result = await banners.list_banners(tenant.id, options)
    return success(result.model_dump(mode="json", exclude_none=True))


@router.get("/{banner_type}/{banner_id}")
async def get_banner(
    banner_type: str,
    banner_id: str,
    tenant: Tenant = Depends(get_current_tenant),
    banners: BannerService = Depends(get_banner_service),
) -> Dict[str, Any]:
    """Return a featured event or info post as a banner.

    Responds 404 both when the item does not exist and when it exists
    but is not featured.
    """
    key = parse_banner_key(banner_type, banner_id)
    banner = await banners.get_banner(key, tenant.id)
    return success({"banner": banner.model_dump(mode="json", exclude_none=True)})
