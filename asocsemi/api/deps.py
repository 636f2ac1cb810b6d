"""
API dependencies for dependency injection.

The backend, identity provider and Google sign-in helper are created in the
application lifespan and stored on app.state; routes reach them only
through these dependencies.
"""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from asocsemi.core.backend import DataBackend
from asocsemi.core.config import settings
from asocsemi.core.exceptions import AdminAccessRequiredException, UnauthorizedException
from asocsemi.core.oauth import GoogleSignIn
from asocsemi.schemas.auth import AuthState, AuthUser
from asocsemi.services.admin_service import can_view_admin
from asocsemi.services.identity_service import IdentityProvider


# Security scheme
security = HTTPBearer(auto_error=False)


def get_backend(request: Request) -> DataBackend:
    return request.app.state.backend


def get_identity(request: Request) -> IdentityProvider:
    return request.app.state.identity


def get_google_sign_in(request: Request) -> GoogleSignIn:
    return request.app.state.google_sign_in


async def get_auth_state(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    identity: IdentityProvider = Depends(get_identity),
) -> AuthState:
    """
    Resolve the visitor's session from a Bearer token or the session cookie.

    Never raises: visitors without a valid session get a signed-out state.
    """
    if credentials:
        token = credentials.credentials
    else:
        token = request.cookies.get(settings.session_cookie_name)

    state = identity.resolve(token)
    if state.user:
        request.state.current_user = state.user
    return state


async def get_current_user(
    state: AuthState = Depends(get_auth_state),
) -> AuthUser:
    """
    Get the signed-in user.

    Raises:
        UnauthorizedException: If nobody is signed in
    """
    if not state.user:
        raise UnauthorizedException("Authentication required")
    return state.user


async def get_admin_state(
    state: AuthState = Depends(get_auth_state),
) -> AuthState:
    """
    Get the auth state, ensuring the user holds the admin role.

    Raises:
        UnauthorizedException: If nobody is signed in
        AdminAccessRequiredException: If the user is not an admin
    """
    if not state.user:
        raise UnauthorizedException("Authentication required")
    if not can_view_admin(state):
        raise AdminAccessRequiredException()
    return state
