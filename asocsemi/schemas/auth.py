"""
Authentication and session schemas.
"""
from enum import Enum
from typing import List, Optional

from pydantic import EmailStr, Field

from asocsemi.schemas.base import BaseSchema


class Role(str, Enum):
    MEMBER = "member"
    ADMIN = "admin"


class AuthEvent(str, Enum):
    """Session-change notifications emitted by the identity provider."""

    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


class AuthUser(BaseSchema):
    """Signed-in identity with its role claims."""

    id: str
    email: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    roles: List[Role] = Field(default_factory=lambda: [Role.MEMBER])

    @property
    def is_admin(self) -> bool:
        return Role.ADMIN in self.roles

    @property
    def display_name(self) -> str:
        return self.full_name or self.email


class AuthSession(BaseSchema):
    """Live session: the user plus the backend tokens acting on their behalf."""

    user: AuthUser
    access_token: str
    refresh_token: Optional[str] = None


class AuthState(BaseSchema):
    """What page consumers see: the current user (if any) and a loading flag."""

    user: Optional[AuthUser] = None
    access_token: Optional[str] = None
    loading: bool = False

    @property
    def signed_in(self) -> bool:
        return self.user is not None


class LoginRequest(BaseSchema):
    """Login request body."""

    email: EmailStr
    password: str = Field(..., min_length=6)


class RegisterRequest(BaseSchema):
    """Registration request body."""

    email: EmailStr
    password: str = Field(..., min_length=6)
    confirm_password: Optional[str] = None
    first_name: str = Field("", max_length=120)
    last_name: str = Field("", max_length=120)

    @property
    def full_name(self) -> Optional[str]:
        name = f"{self.first_name.strip()} {self.last_name.strip()}".strip()
        return name or None


class SessionResponse(BaseSchema):
    """Returned by the JSON login/register endpoints."""

    user: Optional[AuthUser] = None
    session_token: Optional[str] = None  # also usable as a Bearer token
    message: Optional[str] = None


class OAuthRedirectResponse(BaseSchema):
    url: str


class GoogleProfile(BaseSchema):
    """Profile returned by Google sign-in, kept in the google_user cookie."""

    id: str
    email: str
    name: Optional[str] = None
    picture: Optional[str] = None
