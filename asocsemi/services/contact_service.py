"""
Contact service - stores Contact form submissions.
"""
from asocsemi.core.backend import DataBackend
from asocsemi.core.logging import get_logger
from asocsemi.repositories.contact_repository import ContactRepository
from asocsemi.schemas.contact import Contact, ContactCreate

logger = get_logger(__name__)


class ContactService:
    """Handles Contact form submissions."""

    def __init__(self):
        self.contact_repo = ContactRepository()

    async def submit(self, backend: DataBackend, data: ContactCreate) -> Contact:
        """
        Insert one contacts row.

        No deduplication: submitting twice stores two rows.

        Raises:
            BackendException / BackendNotConfiguredException: On remote failure.
        """
        contact = await self.contact_repo.create(backend, data.model_dump(mode="json"))
        logger.info("contact_submitted", contact_id=contact.id)
        return contact
