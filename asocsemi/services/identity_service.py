"""
Identity provider - owns the visitor session lifecycle.

Created once per application in the lifespan handler and handed to routes
through dependencies. start() must run before any operation; close() drops
the session-change subscribers.

Sessions are carried in a signed cookie, so the provider itself keeps no
per-visitor state. resolve() turns the cookie back into an AuthState.
"""
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError

from asocsemi.core.backend import DataBackend
from asocsemi.core.config import Settings
from asocsemi.core.exceptions import (
    AuthenticationException,
    BackendException,
    BackendNotConfiguredException,
    UnsupportedOAuthProviderException,
)
from asocsemi.core.logging import get_logger
from asocsemi.core.security import SESSION_TOKEN, create_signed_token, decode_signed_token
from asocsemi.repositories.user_repository import UserRepository
from asocsemi.schemas.auth import AuthEvent, AuthSession, AuthState, AuthUser, Role

logger = get_logger(__name__)

SUPPORTED_OAUTH_PROVIDERS = ("google", "github", "facebook")

Listener = Callable[[AuthEvent, Optional[AuthUser]], None]


def resolve_roles(user_payload: Dict[str, Any], settings: Settings) -> List[Role]:
    """
    Role claims for a backend user.

    Roles granted in app_metadata are kept; admin is also granted to the
    configured admin emails and to emails containing the admin marker.
    """
    roles = [Role.MEMBER]
    claimed = (user_payload.get("app_metadata") or {}).get("roles") or []
    for value in claimed:
        try:
            role = Role(value)
        except ValueError:
            continue
        if role not in roles:
            roles.append(role)

    email = (user_payload.get("email") or "").lower()
    admin_emails = {address.lower() for address in settings.admin_emails}
    marker = (settings.admin_email_marker or "").lower()
    if email and (email in admin_emails or (marker and marker in email)):
        if Role.ADMIN not in roles:
            roles.append(Role.ADMIN)
    return roles


def build_auth_user(user_payload: Dict[str, Any], settings: Settings) -> AuthUser:
    """Map a backend user object onto AuthUser."""
    metadata = user_payload.get("user_metadata") or {}
    return AuthUser(
        id=str(user_payload["id"]),
        email=user_payload.get("email") or "",
        full_name=metadata.get("full_name") or metadata.get("name"),
        avatar_url=metadata.get("avatar_url") or metadata.get("picture"),
        roles=resolve_roles(user_payload, settings),
    )


class IdentityProvider:
    """Sign-in, sign-up, OAuth and sign-out on top of the data backend."""

    def __init__(self, backend: DataBackend, settings: Settings):
        self.backend = backend
        self.settings = settings
        self.user_repo = UserRepository()
        self.loading = True
        self._started = False
        self._listeners: List[Listener] = []

    # ── Lifecycle ─────────────────────────────────────────────────────────

    async def start(self) -> None:
        """Probe the backend for an existing session and announce the initial state."""
        result = await self.backend.get_user(None)
        self._started = True
        self.loading = False
        logger.info(
            "identity_provider_started",
            backend_configured=self.backend.configured,
            session_found=bool(result.data),
        )
        self._emit(AuthEvent.INITIAL_SESSION, None)

    async def close(self) -> None:
        self._listeners.clear()
        self._started = False
        logger.info("identity_provider_closed")

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a session-change listener. Returns its unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: AuthEvent, user: Optional[AuthUser]) -> None:
        for listener in list(self._listeners):
            listener(event, user)

    def _require_started(self) -> None:
        if not self._started:
            raise RuntimeError("IdentityProvider.start() has not been called")

    # ── Operations ────────────────────────────────────────────────────────

    async def sign_in(self, email: str, password: str) -> AuthSession:
        """
        Email/password sign-in.

        Raises:
            AuthenticationException: With the backend's message, verbatim.
        """
        self._require_started()
        result = await self.backend.sign_in_with_password(email, password)
        if not result.success:
            raise AuthenticationException(result.error)
        return await self._establish(result.data)

    async def sign_up(
        self,
        email: str,
        password: str,
        full_name: Optional[str] = None,
    ) -> Optional[AuthSession]:
        """
        Create an account.

        Returns None when the backend wants the email confirmed first.
        """
        self._require_started()
        metadata = {"full_name": full_name} if full_name else {}
        result = await self.backend.sign_up(email, password, metadata)
        if not result.success:
            raise AuthenticationException(result.error)
        if not (result.data or {}).get("access_token"):
            logger.info("sign_up_pending_confirmation", email=email)
            return None
        return await self._establish(result.data)

    async def sign_in_with_oauth(self, provider: str, redirect_to: str) -> Dict[str, str]:
        """Start an OAuth flow. Returns {"url", "code_verifier"}."""
        self._require_started()
        if provider not in SUPPORTED_OAUTH_PROVIDERS:
            raise UnsupportedOAuthProviderException(provider)
        result = await self.backend.authorize_url(provider, redirect_to)
        if not result.success:
            raise AuthenticationException(result.error)
        return result.data

    async def complete_oauth(self, code: str, code_verifier: str) -> AuthSession:
        self._require_started()
        result = await self.backend.exchange_code(code, code_verifier)
        if not result.success:
            raise AuthenticationException(result.error)
        return await self._establish(result.data)

    async def sign_out(self, state: AuthState) -> None:
        self._require_started()
        result = await self.backend.sign_out(state.access_token)
        if not result.success:
            # The cookie is dropped anyway; the backend token simply expires.
            logger.warning("sign_out_failed", error=result.error)
        self._emit(AuthEvent.SIGNED_OUT, state.user)

    async def _establish(self, payload: Dict[str, Any]) -> AuthSession:
        access_token = (payload or {}).get("access_token")
        user_payload = (payload or {}).get("user")
        if not access_token or not user_payload:
            raise AuthenticationException("The backend did not return a session")

        user = build_auth_user(user_payload, self.settings)
        await self._sync_profile(user, access_token)
        logger.info("signed_in", user_id=user.id, roles=[role.value for role in user.roles])
        self._emit(AuthEvent.SIGNED_IN, user)
        return AuthSession(
            user=user,
            access_token=access_token,
            refresh_token=payload.get("refresh_token"),
        )

    async def _sync_profile(self, user: AuthUser, access_token: str) -> None:
        try:
            await self.user_repo.upsert_profile(self.backend, user, access_token=access_token)
        except (BackendException, BackendNotConfiguredException) as exc:
            logger.warning("user_profile_sync_failed", user_id=user.id, error=exc.message)

    # ── Cookie round trip ─────────────────────────────────────────────────

    def issue_token(self, session: AuthSession) -> str:
        """Serialize a session into the signed cookie value."""
        user = session.user
        return create_signed_token(
            {
                "sub": user.id,
                "email": user.email,
                "full_name": user.full_name,
                "avatar_url": user.avatar_url,
                "roles": [role.value for role in user.roles],
                "access_token": session.access_token,
                "refresh_token": session.refresh_token,
            },
            SESSION_TOKEN,
        )

    def resolve(self, token: Optional[str]) -> AuthState:
        """Current auth state for a session cookie; signed out when missing or invalid."""
        if not token:
            return AuthState(loading=self.loading)

        payload = decode_signed_token(token, SESSION_TOKEN)
        if not payload:
            return AuthState(loading=self.loading)

        try:
            user = AuthUser(
                id=payload["sub"],
                email=payload.get("email") or "",
                full_name=payload.get("full_name"),
                avatar_url=payload.get("avatar_url"),
                roles=payload.get("roles") or [Role.MEMBER],
            )
        except (KeyError, ValidationError):
            return AuthState(loading=self.loading)

        return AuthState(
            user=user,
            access_token=payload.get("access_token"),
            loading=self.loading,
        )
