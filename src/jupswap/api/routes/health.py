"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from jupswap import __version__
from jupswap.web.services import ServiceContainer, get_services

router = APIRouter()


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "OK", "timestamp": _timestamp()}


@router.get("/health/detailed")
async def detailed_health(services: ServiceContainer = Depends(get_services)):
    """Detailed health check with configuration info."""
    return {
        "status": "OK",
        "timestamp": _timestamp(),
        "service": "jupswap",
        "version": __version__,
        "config": services.settings.get_safe_dict(),
    }
