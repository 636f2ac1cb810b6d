"""
API Routes package.
"""
from fastapi import APIRouter

from asocsemi.api.routes.admin import router as admin_router
from asocsemi.api.routes.applications import router as applications_router
from asocsemi.api.routes.auth import router as auth_router
from asocsemi.api.routes.contacts import router as contacts_router
from asocsemi.api.routes.health import router as health_router

# Main API router
api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(contacts_router)
api_router.include_router(applications_router)
api_router.include_router(admin_router)

__all__ = [
    "api_router",
    "admin_router",
    "applications_router",
    "auth_router",
    "contacts_router",
    "health_router",
]
