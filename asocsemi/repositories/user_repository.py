"""
User repository - profile rows kept in sync with the identity backend.
"""
from datetime import datetime, timezone
from typing import Optional

from asocsemi.core.backend import DataBackend
from asocsemi.repositories.base import BaseRepository
from asocsemi.schemas.auth import AuthUser
from asocsemi.schemas.user import User


class UserRepository(BaseRepository[User]):
    def __init__(self):
        super().__init__("users", User)

    async def upsert_profile(
        self,
        backend: DataBackend,
        user: AuthUser,
        *,
        access_token: Optional[str] = None,
    ) -> Optional[User]:
        """Create the profile on first sign-in, refresh it afterwards."""
        result = await backend.upsert(
            self.collection,
            {
                "id": user.id,
                "email": user.email,
                "full_name": user.full_name,
                "avatar_url": user.avatar_url,
                "updated_at": datetime.now(timezone.utc).isoformat(),
            },
            access_token=access_token,
        )
        row = self._unwrap(backend, result)
        return self.schema.model_validate(row) if row else None
