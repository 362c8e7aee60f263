"""Health check endpoint (served outside ``/api``, no tenant needed)."""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Request


router = APIRouter()


@router.get("/health")
async def health(request: Request) -> Dict[str, Any]:
    database = request.app.state.database
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "ok" if database.health_check() else "unavailable",
    }
