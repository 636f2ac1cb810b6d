"""
Remote data client for the hosted backend (auth, tables, file storage).

Two variants share the DataBackend interface and are picked once at startup
by create_backend():

- HostedBackend talks to the backend's REST endpoints (/rest/v1, /auth/v1)
  over httpx and to its S3-compatible storage endpoint through aioboto3.
- UnconfiguredBackend is used when credentials are absent or still the demo
  placeholders. Every data operation fails with a message naming the target
  collection or bucket; session lookups and sign-out resolve as "signed out".

Operations never raise for remote or transport failures. They return a
BackendResult and the caller decides how to surface the error.
"""
import base64
import hashlib
import secrets
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx
from botocore.exceptions import BotoCoreError, ClientError

from asocsemi.core import storage
from asocsemi.core.config import Settings
from asocsemi.core.logging import get_logger

logger = get_logger(__name__)

SETUP_HINT = "Set SUPABASE_URL and SUPABASE_ANON_KEY to connect the backend."


@dataclass
class BackendResult:
    """Outcome of a backend call: data on success, error message on failure."""

    data: Any = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


class DataBackend(ABC):
    """Record, file and auth operations against the hosted backend."""

    configured: bool = False

    # ── Tables ────────────────────────────────────────────────────────────

    @abstractmethod
    async def insert(
        self,
        collection: str,
        record: Dict[str, Any],
        *,
        access_token: Optional[str] = None,
    ) -> BackendResult:
        """Insert one row. data = the stored row, with id/created_at filled in."""

    @abstractmethod
    async def select(
        self,
        collection: str,
        *,
        order_by: str = "created_at",
        descending: bool = True,
        access_token: Optional[str] = None,
    ) -> BackendResult:
        """Fetch all rows. data = list of rows, newest first by default."""

    @abstractmethod
    async def update(
        self,
        collection: str,
        id: str,
        patch: Dict[str, Any],
        *,
        access_token: Optional[str] = None,
    ) -> BackendResult:
        """Patch the row with the given id. data = list of updated rows."""

    @abstractmethod
    async def upsert(
        self,
        collection: str,
        record: Dict[str, Any],
        *,
        access_token: Optional[str] = None,
    ) -> BackendResult:
        """Insert or merge by primary key. data = the stored row."""

    # ── Storage ───────────────────────────────────────────────────────────

    @abstractmethod
    async def upload(
        self,
        bucket: str,
        path: str,
        content: bytes,
        content_type: str,
    ) -> BackendResult:
        """Store a file. data = its public URL."""

    @abstractmethod
    def public_url(self, bucket: str, path: str) -> str:
        pass

    # ── Auth ──────────────────────────────────────────────────────────────

    @abstractmethod
    async def get_user(self, access_token: Optional[str]) -> BackendResult:
        """Look up the user behind an access token. data = user dict or None."""

    @abstractmethod
    async def sign_in_with_password(self, email: str, password: str) -> BackendResult:
        """data = session dict (access_token, refresh_token, user)."""

    @abstractmethod
    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> BackendResult:
        """data = session dict, or a bare user dict when email confirmation is pending."""

    @abstractmethod
    async def authorize_url(self, provider: str, redirect_to: str) -> BackendResult:
        """data = {"url": ..., "code_verifier": ...} for a PKCE OAuth redirect."""

    @abstractmethod
    async def exchange_code(self, code: str, code_verifier: str) -> BackendResult:
        """Finish a PKCE OAuth flow. data = session dict."""

    @abstractmethod
    async def sign_out(self, access_token: Optional[str]) -> BackendResult:
        pass

    async def aclose(self) -> None:
        """Release network resources."""


# ── Unconfigured variant ─────────────────────────────────────────────────────


class UnconfiguredBackend(DataBackend):
    """Stand-in used when no backend credentials are configured."""

    configured = False

    async def insert(self, collection, record, *, access_token=None):
        return BackendResult(
            error=f"Backend is not configured: cannot store data in {collection}. {SETUP_HINT}"
        )

    async def select(self, collection, *, order_by="created_at", descending=True, access_token=None):
        return BackendResult(
            data=[],
            error=f"Backend is not configured: cannot read data from {collection}. {SETUP_HINT}",
        )

    async def update(self, collection, id, patch, *, access_token=None):
        return BackendResult(
            error=f"Backend is not configured: cannot update data in {collection}. {SETUP_HINT}"
        )

    async def upsert(self, collection, record, *, access_token=None):
        return BackendResult(
            error=f"Backend is not configured: cannot store data in {collection}. {SETUP_HINT}"
        )

    async def upload(self, bucket, path, content, content_type):
        return BackendResult(
            error=f"Backend storage is not configured: cannot upload files to {bucket}. {SETUP_HINT}"
        )

    def public_url(self, bucket, path):
        return ""

    async def get_user(self, access_token):
        return BackendResult(data=None)

    async def sign_in_with_password(self, email, password):
        return BackendResult(
            error=f"Backend is not configured: authentication is disabled. {SETUP_HINT}"
        )

    async def sign_up(self, email, password, metadata=None):
        return BackendResult(
            error=f"Backend is not configured: authentication is disabled. {SETUP_HINT}"
        )

    async def authorize_url(self, provider, redirect_to):
        return BackendResult(
            error=f"Backend is not configured: OAuth sign-in is disabled. {SETUP_HINT}"
        )

    async def exchange_code(self, code, code_verifier):
        return BackendResult(
            error=f"Backend is not configured: OAuth sign-in is disabled. {SETUP_HINT}"
        )

    async def sign_out(self, access_token):
        return BackendResult()


# ── Configured variant ───────────────────────────────────────────────────────


def _error_message(response: httpx.Response) -> str:
    """Pull the human-readable message out of a backend error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"Backend returned HTTP {response.status_code}"

    if isinstance(body, dict):
        for key in ("message", "msg", "error_description", "error"):
            if body.get(key):
                return str(body[key])
    return f"Backend returned HTTP {response.status_code}"


def _pkce_pair() -> tuple[str, str]:
    """Return (code_verifier, code_challenge) for the S256 method."""
    verifier = secrets.token_urlsafe(64)
    digest = hashlib.sha256(verifier.encode("ascii")).digest()
    challenge = base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")
    return verifier, challenge


class HostedBackend(DataBackend):
    """Backend client speaking to the hosted REST, auth and storage endpoints."""

    configured = True

    def __init__(
        self,
        url: str,
        anon_key: str,
        *,
        timeout: float = 15,
        storage_enabled: bool = False,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.url = url.rstrip("/")
        self.anon_key = anon_key
        self.storage_enabled = storage_enabled
        self._client = client or httpx.AsyncClient(timeout=timeout)

    def _headers(self, access_token: Optional[str], prefer: Optional[str]) -> Dict[str, str]:
        headers = {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {access_token or self.anon_key}",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        access_token: Optional[str] = None,
        prefer: Optional[str] = None,
        **kwargs: Any,
    ) -> BackendResult:
        try:
            response = await self._client.request(
                method,
                f"{self.url}{path}",
                headers=self._headers(access_token, prefer),
                **kwargs,
            )
        except httpx.HTTPError as exc:
            logger.warning("backend_unreachable", method=method, path=path, error=str(exc))
            return BackendResult(error=f"Could not reach the backend: {exc}")

        if response.is_error:
            message = _error_message(response)
            logger.info(
                "backend_error",
                method=method,
                path=path,
                status=response.status_code,
                message=message,
            )
            return BackendResult(error=message)

        if not response.content:
            return BackendResult()
        return BackendResult(data=response.json())

    # Tables

    async def insert(self, collection, record, *, access_token=None):
        result = await self._request(
            "POST",
            f"/rest/v1/{collection}",
            access_token=access_token,
            prefer="return=representation",
            json=[record],
        )
        if result.success and isinstance(result.data, list):
            result.data = result.data[0] if result.data else None
        return result

    async def select(self, collection, *, order_by="created_at", descending=True, access_token=None):
        direction = "desc" if descending else "asc"
        result = await self._request(
            "GET",
            f"/rest/v1/{collection}",
            access_token=access_token,
            params={"select": "*", "order": f"{order_by}.{direction}"},
        )
        if not result.success:
            result.data = []
        return result

    async def update(self, collection, id, patch, *, access_token=None):
        return await self._request(
            "PATCH",
            f"/rest/v1/{collection}",
            access_token=access_token,
            prefer="return=representation",
            params={"id": f"eq.{id}"},
            json=patch,
        )

    async def upsert(self, collection, record, *, access_token=None):
        result = await self._request(
            "POST",
            f"/rest/v1/{collection}",
            access_token=access_token,
            prefer="resolution=merge-duplicates,return=representation",
            json=[record],
        )
        if result.success and isinstance(result.data, list):
            result.data = result.data[0] if result.data else None
        return result

    # Storage

    async def upload(self, bucket, path, content, content_type):
        if not self.storage_enabled:
            return BackendResult(
                error=(
                    f"Backend storage is not configured: cannot upload files to {bucket}. "
                    "Set STORAGE_S3_ACCESS_KEY_ID and STORAGE_S3_SECRET_ACCESS_KEY."
                )
            )
        try:
            url = await storage.upload_bytes(bucket, path, content, content_type)
        except (BotoCoreError, ClientError) as exc:
            logger.warning("storage_upload_failed", bucket=bucket, path=path, error=str(exc))
            return BackendResult(error=f"Upload to {bucket} failed: {exc}")
        return BackendResult(data=url)

    def public_url(self, bucket, path):
        return storage.public_url(bucket, path)

    # Auth

    async def get_user(self, access_token):
        if not access_token:
            return BackendResult(data=None)
        return await self._request("GET", "/auth/v1/user", access_token=access_token)

    async def sign_in_with_password(self, email, password):
        return await self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )

    async def sign_up(self, email, password, metadata=None):
        return await self._request(
            "POST",
            "/auth/v1/signup",
            json={"email": email, "password": password, "data": metadata or {}},
        )

    async def authorize_url(self, provider, redirect_to):
        verifier, challenge = _pkce_pair()
        query = urlencode({
            "provider": provider,
            "redirect_to": redirect_to,
            "code_challenge": challenge,
            "code_challenge_method": "s256",
        })
        return BackendResult(data={
            "url": f"{self.url}/auth/v1/authorize?{query}",
            "code_verifier": verifier,
        })

    async def exchange_code(self, code, code_verifier):
        return await self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "pkce"},
            json={"auth_code": code, "code_verifier": code_verifier},
        )

    async def sign_out(self, access_token):
        if not access_token:
            return BackendResult()
        return await self._request("POST", "/auth/v1/logout", access_token=access_token)

    async def aclose(self):
        await self._client.aclose()


def create_backend(settings: Settings) -> DataBackend:
    """Pick the backend variant for these settings. Called once at startup."""
    if not settings.backend_configured:
        logger.warning(
            "backend_not_configured",
            hint=SETUP_HINT,
        )
        return UnconfiguredBackend()

    return HostedBackend(
        settings.supabase_url,
        settings.supabase_anon_key,
        timeout=settings.backend_timeout_seconds,
        storage_enabled=settings.storage_configured,
    )
