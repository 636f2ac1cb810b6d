"""
Health check routes.
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from asocsemi.api.deps import get_backend, get_identity
from asocsemi.core.backend import DataBackend
from asocsemi.core.config import settings
from asocsemi.schemas.base import BaseSchema
from asocsemi.services.identity_service import IdentityProvider

router = APIRouter(tags=["health"])


class HealthResponse(BaseSchema):
    """Health check response."""

    status: str
    timestamp: str
    checks: dict


@router.get("/health", response_model=HealthResponse)
async def health_check(
    identity: IdentityProvider = Depends(get_identity),
    backend: DataBackend = Depends(get_backend),
):
    """
    Report which integrations are configured.

    An unconfigured backend leaves the site usable, so it only degrades the status.
    """
    checks = {
        "backend": "configured" if backend.configured else "not_configured",
        "storage": "configured" if settings.storage_configured else "not_configured",
        "google_sign_in": "configured" if settings.google_configured else "not_configured",
        "identity": "ready" if not identity.loading else "starting",
    }

    all_ready = checks["backend"] == "configured" and checks["identity"] == "ready"

    return HealthResponse(
        status="healthy" if all_ready else "degraded",
        timestamp=datetime.now(timezone.utc).isoformat(),
        checks=checks,
    )
