"""Health check endpoint."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Request

from app.db.mongo import ping

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check() -> Dict[str, str]:
    """
    Health check endpoint.

    Returns:
        Health status
    """
    return {"status": "healthy"}


@router.get("/ready")
async def readiness_check(request: Request) -> Dict[str, Any]:
    """
    Readiness check.
    Reports whether MongoDB answers; the inference APIs are not probed.
    """
    db_ok = await ping(request.app.state.db)
    return {
        "status": "ready" if db_ok else "degraded",
        "dependencies": {"mongodb": "ok" if db_ok else "unavailable"},
    }
