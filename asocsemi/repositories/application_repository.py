"""
Job application repository - data access for the job_applications collection.
"""
from typing import Optional

from asocsemi.core.backend import DataBackend
from asocsemi.repositories.base import BaseRepository
from asocsemi.schemas.application import ApplicationStatus, JobApplication


class ApplicationRepository(BaseRepository[JobApplication]):
    def __init__(self):
        super().__init__("job_applications", JobApplication)

    async def set_status(
        self,
        backend: DataBackend,
        id: str,
        status: ApplicationStatus,
        *,
        access_token: Optional[str] = None,
    ) -> Optional[JobApplication]:
        """
        Change one application's status.

        Returns the updated row, or None when the store matched no row.
        """
        rows = await self.update(backend, id, access_token=access_token, status=status.value)
        return rows[0] if rows else None
