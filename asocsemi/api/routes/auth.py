"""
Authentication routes.
"""
from fastapi import APIRouter, Depends, Request, Response, status

from asocsemi.api.cookies import (
    clear_session_cookie,
    set_oauth_verifier_cookie,
    set_session_cookie,
)
from asocsemi.api.deps import get_auth_state, get_current_user, get_identity
from asocsemi.core.config import settings
from asocsemi.core.exceptions import PasswordMismatchException
from asocsemi.core.rate_limit import RATE_AUTH, limiter
from asocsemi.schemas.auth import (
    AuthState,
    AuthUser,
    LoginRequest,
    OAuthRedirectResponse,
    RegisterRequest,
    SessionResponse,
)
from asocsemi.schemas.base import MessageResponse
from asocsemi.services.identity_service import IdentityProvider

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=SessionResponse)
@limiter.limit(RATE_AUTH)
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    identity: IdentityProvider = Depends(get_identity),
):
    """
    Login with email and password.

    Sets the session cookie and returns the same token for Bearer use.
    """
    session = await identity.sign_in(body.email, body.password)
    token = identity.issue_token(session)
    set_session_cookie(response, token)
    return SessionResponse(user=session.user, session_token=token)


@router.post("/register", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_AUTH)
async def register(
    request: Request,
    response: Response,
    body: RegisterRequest,
    identity: IdentityProvider = Depends(get_identity),
):
    """
    Register a new account.

    When the backend requires email confirmation no session is returned.
    """
    if body.confirm_password is not None and body.confirm_password != body.password:
        raise PasswordMismatchException()

    session = await identity.sign_up(body.email, body.password, body.full_name)
    if session is None:
        return SessionResponse(message="Check your email to confirm your account.")

    token = identity.issue_token(session)
    set_session_cookie(response, token)
    return SessionResponse(user=session.user, session_token=token)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    state: AuthState = Depends(get_auth_state),
    identity: IdentityProvider = Depends(get_identity),
):
    """Sign out and drop the session cookie."""
    await identity.sign_out(state)
    clear_session_cookie(response)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=AuthUser)
async def me(current_user: AuthUser = Depends(get_current_user)):
    """The signed-in user with role claims."""
    return current_user


@router.get("/oauth/{provider}", response_model=OAuthRedirectResponse)
async def oauth_start(
    provider: str,
    response: Response,
    identity: IdentityProvider = Depends(get_identity),
):
    """
    Start an OAuth sign-in through the backend.

    The PKCE verifier is kept in a short-lived signed cookie until /auth/callback.
    """
    flow = await identity.sign_in_with_oauth(provider, settings.oauth_redirect_uri)
    set_oauth_verifier_cookie(response, flow["code_verifier"])
    return OAuthRedirectResponse(url=flow["url"])
