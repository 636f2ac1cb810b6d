"""
Google sign-in through the google-auth-oauthlib SDK.

The resulting profile is not linked to a backend session; the login pages
store it in a signed cookie under the fixed google_user key.
"""
from typing import Optional

import requests
from google_auth_oauthlib.flow import Flow
from oauthlib.oauth2.rfc6749.errors import OAuth2Error
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from asocsemi.core.config import Settings
from asocsemi.core.exceptions import AuthenticationException
from asocsemi.core.logging import get_logger
from asocsemi.schemas.auth import GoogleProfile

logger = get_logger(__name__)

GOOGLE_SCOPES = [
    "openid",
    "https://www.googleapis.com/auth/userinfo.email",
    "https://www.googleapis.com/auth/userinfo.profile",
]
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"

GOOGLE_NOT_CONFIGURED = (
    "Please check if Google OAuth is properly configured. "
    "Google sign-in requires a client ID and secret from Google Cloud Console."
)
FACEBOOK_NOT_AVAILABLE = "Facebook OAuth would be implemented here with proper credentials"


class GoogleSignIn:
    """Builds the consent redirect and turns the callback code into a profile."""

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def configured(self) -> bool:
        return self.settings.google_configured

    def _flow(self, state: Optional[str] = None) -> Flow:
        return Flow.from_client_config(
            {
                "web": {
                    "client_id": self.settings.google_client_id,
                    "client_secret": self.settings.google_client_secret,
                    "auth_uri": "https://accounts.google.com/o/oauth2/auth",
                    "token_uri": "https://oauth2.googleapis.com/token",
                    "redirect_uris": [self.settings.google_redirect_uri],
                }
            },
            scopes=GOOGLE_SCOPES,
            state=state,
            redirect_uri=self.settings.google_redirect_uri,
            autogenerate_code_verifier=False,
        )

    def authorization_url(self) -> tuple[str, str]:
        """Return (consent_url, state)."""
        if not self.configured:
            raise AuthenticationException(GOOGLE_NOT_CONFIGURED)
        return self._flow().authorization_url(
            prompt="select_account",
            include_granted_scopes="true",
        )

    def _fetch_profile_sync(self, code: str, state: str) -> GoogleProfile:
        flow = self._flow(state=state)
        flow.fetch_token(code=code)
        response = flow.authorized_session().get(GOOGLE_USERINFO_URL)
        response.raise_for_status()
        return GoogleProfile.model_validate(response.json())

    async def fetch_profile(self, code: str, state: str) -> GoogleProfile:
        """
        Exchange the callback code for tokens and fetch the user's profile.

        Raises:
            AuthenticationException: If the code exchange or the profile lookup fails.
        """
        if not self.configured:
            raise AuthenticationException(GOOGLE_NOT_CONFIGURED)
        try:
            return await run_in_threadpool(self._fetch_profile_sync, code, state)
        except (OAuth2Error, requests.RequestException, Warning, ValidationError) as exc:
            logger.warning("google_sign_in_failed", error=str(exc))
            raise AuthenticationException(GOOGLE_NOT_CONFIGURED) from exc
