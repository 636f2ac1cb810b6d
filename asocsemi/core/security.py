"""
Signed cookie tokens.

The visitor's session and the Google profile are both stored client-side as
JWTs signed with the session secret, so the server keeps no per-visitor state.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Any
from jose import JWTError, jwt

from asocsemi.core.config import settings


SESSION_TOKEN = "session"
GOOGLE_PROFILE_TOKEN = "google_profile"
OAUTH_VERIFIER_TOKEN = "oauth_verifier"
GOOGLE_STATE_TOKEN = "google_state"


def create_signed_token(
    data: dict[str, Any],
    token_type: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed JWT for cookie storage.

    Args:
        data: Payload data to encode in the token
        token_type: One of the *_TOKEN constants, checked on decode
        expires_delta: Custom expiration time

    Returns:
        Encoded JWT token string
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.session_expire_minutes
        )

    to_encode.update({"exp": expire, "type": token_type})
    return jwt.encode(
        to_encode,
        settings.session_secret_key,
        algorithm=settings.session_algorithm,
    )


def decode_signed_token(token: str, token_type: str) -> Optional[dict[str, Any]]:
    """
    Decode and validate a signed cookie token.

    Returns:
        Decoded payload, or None if invalid, expired or of another type
    """
    try:
        payload = jwt.decode(
            token,
            settings.session_secret_key,
            algorithms=[settings.session_algorithm],
        )
    except JWTError:
        return None

    if payload.get("type") != token_type:
        return None
    return payload
