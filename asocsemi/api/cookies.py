"""
Cookie helpers shared by the JSON API and the HTML pages.
"""
from datetime import timedelta
from typing import Optional

from pydantic import ValidationError
from starlette.requests import Request
from starlette.responses import Response

from asocsemi.core.config import settings
from asocsemi.core.security import (
    GOOGLE_PROFILE_TOKEN,
    GOOGLE_STATE_TOKEN,
    OAUTH_VERIFIER_TOKEN,
    create_signed_token,
    decode_signed_token,
)
from asocsemi.schemas.auth import GoogleProfile

OAUTH_STATE_TTL = timedelta(minutes=10)


def set_cookie(response: Response, name: str, value: str, max_age: int) -> None:
    response.set_cookie(
        name,
        value,
        max_age=max_age,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


def _read_claim(request: Request, cookie_name: str, token_type: str, claim: str) -> Optional[str]:
    token = request.cookies.get(cookie_name)
    payload = decode_signed_token(token, token_type) if token else None
    return payload.get(claim) if payload else None


# Session

def set_session_cookie(response: Response, token: str) -> None:
    set_cookie(
        response,
        settings.session_cookie_name,
        token,
        max_age=settings.session_expire_minutes * 60,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(settings.session_cookie_name)


# Backend OAuth (PKCE verifier)

def set_oauth_verifier_cookie(response: Response, verifier: str) -> None:
    set_cookie(
        response,
        settings.oauth_verifier_cookie_name,
        create_signed_token({"verifier": verifier}, OAUTH_VERIFIER_TOKEN, OAUTH_STATE_TTL),
        max_age=int(OAUTH_STATE_TTL.total_seconds()),
    )


def read_oauth_verifier(request: Request) -> Optional[str]:
    return _read_claim(
        request, settings.oauth_verifier_cookie_name, OAUTH_VERIFIER_TOKEN, "verifier"
    )


# Google sign-in

def set_google_state_cookie(response: Response, state: str) -> None:
    set_cookie(
        response,
        settings.google_state_cookie_name,
        create_signed_token({"state": state}, GOOGLE_STATE_TOKEN, OAUTH_STATE_TTL),
        max_age=int(OAUTH_STATE_TTL.total_seconds()),
    )


def read_google_state(request: Request) -> Optional[str]:
    return _read_claim(request, settings.google_state_cookie_name, GOOGLE_STATE_TOKEN, "state")


def set_google_user_cookie(response: Response, profile: GoogleProfile) -> None:
    """Persist the Google profile under the fixed google_user key."""
    set_cookie(
        response,
        settings.google_user_cookie_name,
        create_signed_token({"profile": profile.model_dump()}, GOOGLE_PROFILE_TOKEN),
        max_age=settings.session_expire_minutes * 60,
    )


def read_google_user(request: Request) -> Optional[GoogleProfile]:
    token = request.cookies.get(settings.google_user_cookie_name)
    payload = decode_signed_token(token, GOOGLE_PROFILE_TOKEN) if token else None
    if not payload:
        return None
    try:
        return GoogleProfile.model_validate(payload.get("profile") or {})
    except ValidationError:
        return None


def clear_google_user_cookie(response: Response) -> None:
    response.delete_cookie(settings.google_user_cookie_name)
