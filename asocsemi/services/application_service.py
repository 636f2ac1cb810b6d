"""
Application service - job applications from the Careers page and their
status changes from the admin dashboard.
"""
import os
from dataclasses import dataclass
from typing import Optional

from asocsemi.core import storage
from asocsemi.core.backend import DataBackend
from asocsemi.core.config import Settings, settings as default_settings
from asocsemi.core.exceptions import (
    ApplicationNotFoundException,
    BackendException,
    BackendNotConfiguredException,
    ValidationException,
)
from asocsemi.core.logging import get_logger
from asocsemi.repositories.application_repository import ApplicationRepository
from asocsemi.schemas.application import (
    ApplicationStatus,
    JobApplication,
    JobApplicationCreate,
)
from asocsemi.schemas.auth import AuthUser

logger = get_logger(__name__)

ALLOWED_RESUME_EXTENSIONS = {".pdf", ".doc", ".docx"}


@dataclass
class ResumeFile:
    """Uploaded resume as received from the form."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


class ApplicationService:
    """Handles job application submission and review."""

    def __init__(self, settings: Settings = default_settings):
        self.settings = settings
        self.application_repo = ApplicationRepository()

    async def submit(
        self,
        backend: DataBackend,
        data: JobApplicationCreate,
        *,
        user: Optional[AuthUser] = None,
        resume: Optional[ResumeFile] = None,
        access_token: Optional[str] = None,
    ) -> JobApplication:
        """
        Store an application with status "pending".

        The resume, when attached, is uploaded first and its public URL saved
        on the row. user_id links the signed-in user, if any, and is not
        checked against the users collection.
        """
        resume_url = await self.upload_resume(backend, resume) if resume else None

        record = data.model_dump(mode="json")
        record.update(
            user_id=user.id if user else None,
            resume_url=resume_url,
            status=ApplicationStatus.PENDING.value,
        )
        application = await self.application_repo.create(
            backend, record, access_token=access_token
        )
        logger.info(
            "application_submitted",
            application_id=application.id,
            position=application.position,
            has_resume=resume_url is not None,
        )
        return application

    async def upload_resume(self, backend: DataBackend, resume: ResumeFile) -> str:
        """
        Upload a resume to the resume bucket and return its public URL.

        Raises:
            ValidationException: Wrong file type or too large.
        """
        extension = os.path.splitext(resume.filename)[1].lower()
        if extension not in ALLOWED_RESUME_EXTENSIONS:
            raise ValidationException("Resume must be a PDF or Word document")
        if not resume.content:
            raise ValidationException("Resume file is empty")
        if len(resume.content) > self.settings.max_resume_size_bytes:
            raise ValidationException(
                f"Resume must be at most {self.settings.max_resume_size_mb} MB"
            )

        bucket = self.settings.resume_bucket
        result = await backend.upload(
            bucket,
            storage.build_object_key(resume.filename),
            resume.content,
            resume.content_type,
        )
        if not result.success:
            if not backend.configured:
                raise BackendNotConfiguredException(result.error)
            raise BackendException(result.error)
        return result.data

    async def update_status(
        self,
        backend: DataBackend,
        application_id: str,
        status: ApplicationStatus,
        *,
        access_token: Optional[str] = None,
    ) -> JobApplication:
        """
        Issue exactly one update scoped to application_id.

        Raises:
            ApplicationNotFoundException: If the store matched no row.
        """
        updated = await self.application_repo.set_status(
            backend, application_id, status, access_token=access_token
        )
        if updated is None:
            raise ApplicationNotFoundException()
        logger.info(
            "application_status_updated",
            application_id=application_id,
            status=status.value,
        )
        return updated
