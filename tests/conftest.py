"""
Shared fixtures: an in-memory backend and a test client wired to it.
"""
import os

# Settings are read at import time
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SUPABASE_URL"] = ""
os.environ["SUPABASE_ANON_KEY"] = ""
os.environ["GOOGLE_CLIENT_ID"] = ""
os.environ["GOOGLE_CLIENT_SECRET"] = ""

import uuid
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from asocsemi.core.backend import BackendResult, DataBackend
from asocsemi.main import create_app

FAKE_VERIFIER = "verifier-123"
FAKE_OAUTH_CODE = "good-code"


class FakeBackend(DataBackend):
    """
    In-memory DataBackend.

    Every call is recorded in `calls`. Put a message in
    failures[(operation, collection_or_bucket)] to make that call fail.
    """

    configured = True

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
        self.calls: List[tuple] = []
        self.failures: Dict[tuple, str] = {}
        self.accounts: Dict[str, Dict[str, Any]] = {}
        self.files: Dict[str, bytes] = {}
        self.confirm_email = False

    # Helpers

    def calls_to(self, operation: str, target: Optional[str] = None) -> List[tuple]:
        return [
            call for call in self.calls
            if call[0] == operation and (target is None or call[1] == target)
        ]

    def seed(self, collection: str, **row: Any) -> Dict[str, Any]:
        row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("created_at", datetime.now(timezone.utc).isoformat())
        self.tables[collection].append(row)
        return row

    def add_account(
        self,
        email: str,
        password: str = "secret123",
        *,
        full_name: Optional[str] = None,
        roles: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        user = {
            "id": str(uuid.uuid4()),
            "email": email,
            "user_metadata": {"full_name": full_name} if full_name else {},
            "app_metadata": {"roles": roles or []},
        }
        self.accounts[email] = {"password": password, "user": user}
        return user

    def _session(self, user: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "access_token": f"access-{user['id']}",
            "refresh_token": f"refresh-{user['id']}",
            "user": user,
        }

    # Tables

    async def insert(self, collection, record, *, access_token=None):
        self.calls.append(("insert", collection, dict(record)))
        if ("insert", collection) in self.failures:
            return BackendResult(error=self.failures[("insert", collection)])
        row = self.seed(collection, **record)
        return BackendResult(data=dict(row))

    async def select(self, collection, *, order_by="created_at", descending=True, access_token=None):
        self.calls.append(("select", collection))
        if ("select", collection) in self.failures:
            return BackendResult(data=[], error=self.failures[("select", collection)])
        rows = sorted(self.tables[collection], key=lambda row: row[order_by], reverse=descending)
        return BackendResult(data=[dict(row) for row in rows])

    async def update(self, collection, id, patch, *, access_token=None):
        self.calls.append(("update", collection, id, dict(patch)))
        if ("update", collection) in self.failures:
            return BackendResult(error=self.failures[("update", collection)])
        updated = []
        for row in self.tables[collection]:
            if row["id"] == id:
                row.update(patch)
                updated.append(dict(row))
        return BackendResult(data=updated)

    async def upsert(self, collection, record, *, access_token=None):
        self.calls.append(("upsert", collection, dict(record)))
        if ("upsert", collection) in self.failures:
            return BackendResult(error=self.failures[("upsert", collection)])
        for row in self.tables[collection]:
            if row["id"] == record["id"]:
                row.update(record)
                return BackendResult(data=dict(row))
        row = self.seed(collection, **record)
        return BackendResult(data=dict(row))

    # Storage

    async def upload(self, bucket, path, content, content_type):
        self.calls.append(("upload", bucket, path, content_type))
        if ("upload", bucket) in self.failures:
            return BackendResult(error=self.failures[("upload", bucket)])
        self.files[f"{bucket}/{path}"] = content
        return BackendResult(data=self.public_url(bucket, path))

    def public_url(self, bucket, path):
        return f"https://files.test/{bucket}/{path}"

    # Auth

    async def get_user(self, access_token):
        self.calls.append(("get_user", access_token))
        return BackendResult(data=None)

    async def sign_in_with_password(self, email, password):
        self.calls.append(("sign_in", email))
        account = self.accounts.get(email)
        if not account or account["password"] != password:
            return BackendResult(error="Invalid login credentials")
        return BackendResult(data=self._session(account["user"]))

    async def sign_up(self, email, password, metadata=None):
        self.calls.append(("sign_up", email, metadata))
        if email in self.accounts:
            return BackendResult(error="User already registered")
        user = self.add_account(email, password, full_name=(metadata or {}).get("full_name"))
        if self.confirm_email:
            return BackendResult(data=user)
        return BackendResult(data=self._session(user))

    async def authorize_url(self, provider, redirect_to):
        self.calls.append(("authorize_url", provider, redirect_to))
        return BackendResult(data={
            "url": f"https://auth.test/authorize?provider={provider}",
            "code_verifier": FAKE_VERIFIER,
        })

    async def exchange_code(self, code, code_verifier):
        self.calls.append(("exchange_code", code, code_verifier))
        if code != FAKE_OAUTH_CODE or code_verifier != FAKE_VERIFIER:
            return BackendResult(error="invalid flow state, no valid flow state found")
        account = self.accounts.get("oauth@example.com") or {
            "user": self.add_account("oauth@example.com", full_name="OAuth User")
        }
        return BackendResult(data=self._session(account["user"]))

    async def sign_out(self, access_token):
        self.calls.append(("sign_out", access_token))
        return BackendResult()


def application_row(backend: FakeBackend, full_name: str, email: str, **fields: Any) -> Dict[str, Any]:
    """Seed one job_applications row."""
    row = {
        "full_name": full_name,
        "email": email,
        "phone": "+1 555 0100",
        "position": "DevOps Engineer",
        "experience": "3-5 years",
        "status": "pending",
        "user_id": None,
        "resume_url": None,
        "cover_letter": None,
    }
    row.update(fields)
    return backend.seed("job_applications", **row)


def contact_row(backend: FakeBackend, name: str, email: str, **fields: Any) -> Dict[str, Any]:
    row = {"name": name, "email": email, "phone": None, "company": None, "message": "Hello"}
    row.update(fields)
    return backend.seed("contacts", **row)


def ago(minutes: int) -> str:
    return (datetime.now(timezone.utc) - timedelta(minutes=minutes)).isoformat()


def login(client: TestClient, email: str, password: str = "secret123"):
    """Sign in through the JSON API; the session cookie lands in the client's jar."""
    response = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def app(backend):
    return create_app(backend=backend)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_client(client, backend):
    backend.add_account("admin@company.com", full_name="Site Admin")
    login(client, "admin@company.com")
    return client
