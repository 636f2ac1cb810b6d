"""
Admin dashboard - access rule, listing, filtering and status changes.

Filtering is done here over the full fetched lists; the backend is never
asked to search or paginate.
"""
from typing import List, Optional

from asocsemi.core.backend import DataBackend
from asocsemi.core.exceptions import APIException, BackendException, BackendNotConfiguredException
from asocsemi.core.logging import get_logger
from asocsemi.repositories.application_repository import ApplicationRepository
from asocsemi.repositories.contact_repository import ContactRepository
from asocsemi.schemas.admin import DashboardStats
from asocsemi.schemas.application import ApplicationStatus, JobApplication
from asocsemi.schemas.auth import AuthState
from asocsemi.schemas.contact import Contact
from asocsemi.services.application_service import ApplicationService

logger = get_logger(__name__)


def can_view_admin(state: AuthState) -> bool:
    """Only a signed-in user holding the admin role may see the dashboard."""
    return state.user is not None and state.user.is_admin


def _contains(value: Optional[str], needle: str) -> bool:
    return value is not None and needle in value.lower()


def filter_applications(
    applications: List[JobApplication],
    query: str = "",
    status: str = "",
) -> List[JobApplication]:
    """Case-insensitive match on name, email or position; exact status match when given."""
    needle = (query or "").lower()
    return [
        app
        for app in applications
        if (
            _contains(app.full_name, needle)
            or _contains(app.email, needle)
            or _contains(app.position, needle)
        )
        and (not status or app.status == status)
    ]


def filter_contacts(contacts: List[Contact], query: str = "") -> List[Contact]:
    """Case-insensitive match on name, email or company."""
    needle = (query or "").lower()
    return [
        contact
        for contact in contacts
        if _contains(contact.name, needle)
        or _contains(contact.email, needle)
        or _contains(contact.company, needle)
    ]


class AdminDashboard:
    """
    State behind one admin dashboard view.

    Both lists start empty. load() fetches them independently: a failing
    fetch is logged and recorded in errors, and the other one still runs.
    """

    def __init__(
        self,
        backend: DataBackend,
        *,
        access_token: Optional[str] = None,
        application_service: Optional[ApplicationService] = None,
    ):
        self.backend = backend
        self.access_token = access_token
        self.application_service = application_service or ApplicationService()
        self.application_repo = ApplicationRepository()
        self.contact_repo = ContactRepository()
        self.applications: List[JobApplication] = []
        self.contacts: List[Contact] = []
        self.errors: List[str] = []
        self.loading = False

    async def load(self) -> None:
        """Fetch applications and contacts."""
        self.loading = True
        self.errors = []
        try:
            await self.load_applications()
            await self.load_contacts()
        finally:
            self.loading = False

    async def load_applications(self) -> None:
        self.applications = await self._fetch(self.application_repo)

    async def load_contacts(self) -> None:
        self.contacts = await self._fetch(self.contact_repo)

    async def _fetch(self, repo) -> list:
        try:
            return await repo.get_many(self.backend, access_token=self.access_token)
        except (BackendException, BackendNotConfiguredException) as exc:
            logger.error("admin_fetch_failed", collection=repo.collection, error=exc.message)
            self.errors.append(exc.message)
            return []

    def filtered_applications(self, query: str = "", status: str = "") -> List[JobApplication]:
        return filter_applications(self.applications, query, status)

    def filtered_contacts(self, query: str = "") -> List[Contact]:
        return filter_contacts(self.contacts, query)

    def stats(self) -> DashboardStats:
        return DashboardStats(
            total_applications=len(self.applications),
            pending_review=sum(
                1 for app in self.applications if app.status == ApplicationStatus.PENDING.value
            ),
            contact_messages=len(self.contacts),
        )

    async def update_status(self, application_id: str, status: ApplicationStatus) -> JobApplication:
        """
        Change one row's status and patch the local list once the backend confirms.

        Failures propagate to the caller and leave the local list untouched.
        """
        try:
            updated = await self.application_service.update_status(
                self.backend,
                application_id,
                status,
                access_token=self.access_token,
            )
        except APIException as exc:
            logger.error(
                "application_status_update_failed",
                application_id=application_id,
                status=status.value,
                error=exc.message,
            )
            raise
        self.applications = [
            app.model_copy(update={"status": status.value}) if app.id == application_id else app
            for app in self.applications
        ]
        return updated
