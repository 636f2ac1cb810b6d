"""
Admin routes - dashboard listing, statistics and application review.
"""
from fastapi import APIRouter, Depends, Query, Request

from asocsemi.api.deps import get_admin_state, get_backend
from asocsemi.core.backend import DataBackend
from asocsemi.core.rate_limit import RATE_DEFAULT, limiter
from asocsemi.schemas.admin import ApplicationList, ContactList, DashboardStats
from asocsemi.schemas.application import JobApplication, StatusUpdate
from asocsemi.schemas.auth import AuthState
from asocsemi.services.admin_service import AdminDashboard

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    state: AuthState = Depends(get_admin_state),
    backend: DataBackend = Depends(get_backend),
):
    """Counts shown on the dashboard cards."""
    dashboard = AdminDashboard(backend, access_token=state.access_token)
    await dashboard.load()
    return dashboard.stats()


@router.get("/applications", response_model=ApplicationList)
async def list_applications(
    q: str = Query("", description="Matches name, email or position"),
    status: str = Query("", description="pending, reviewing, approved, rejected"),
    state: AuthState = Depends(get_admin_state),
    backend: DataBackend = Depends(get_backend),
):
    """All applications, newest first, filtered in memory."""
    dashboard = AdminDashboard(backend, access_token=state.access_token)
    await dashboard.load_applications()
    items = dashboard.filtered_applications(q, status)
    return ApplicationList(items=items, total=len(items), errors=dashboard.errors)


@router.get("/contacts", response_model=ContactList)
async def list_contacts(
    q: str = Query("", description="Matches name, email or company"),
    state: AuthState = Depends(get_admin_state),
    backend: DataBackend = Depends(get_backend),
):
    """All contact messages, newest first, filtered in memory."""
    dashboard = AdminDashboard(backend, access_token=state.access_token)
    await dashboard.load_contacts()
    items = dashboard.filtered_contacts(q)
    return ContactList(items=items, total=len(items), errors=dashboard.errors)


@router.patch("/applications/{application_id}", response_model=JobApplication)
@limiter.limit(RATE_DEFAULT)
async def update_application_status(
    request: Request,
    application_id: str,
    body: StatusUpdate,
    state: AuthState = Depends(get_admin_state),
    backend: DataBackend = Depends(get_backend),
):
    """
    Change one application's status.

    Backend failures come back as error responses so the dashboard can show them.
    """
    dashboard = AdminDashboard(backend, access_token=state.access_token)
    return await dashboard.update_status(application_id, body.status)
