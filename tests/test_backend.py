"""
Remote data client: both variants and backend selection.
"""
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from asocsemi.core.backend import HostedBackend, UnconfiguredBackend, create_backend
from asocsemi.core.config import (
    PLACEHOLDER_SUPABASE_ANON_KEY,
    PLACEHOLDER_SUPABASE_URL,
    Settings,
)
from asocsemi.main import create_app

BASE_URL = "https://project.supabase.co"


def hosted(handler) -> HostedBackend:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HostedBackend(BASE_URL, "anon-key", client=client)


# ── Unconfigured ─────────────────────────────────────────────────────────────

@pytest.mark.parametrize("collection", ["contacts", "job_applications", "users"])
async def test_unconfigured_data_operations_fail_naming_the_collection(collection):
    backend = UnconfiguredBackend()

    inserted = await backend.insert(collection, {"name": "x"})
    selected = await backend.select(collection)
    updated = await backend.update(collection, "1", {"status": "approved"})

    for result in (inserted, selected, updated):
        assert not result.success
        assert collection in result.error
    assert selected.data == []


async def test_unconfigured_upload_names_the_bucket():
    result = await UnconfiguredBackend().upload("resumes", "a/cv.pdf", b"%PDF", "application/pdf")

    assert not result.success
    assert "resumes" in result.error


async def test_unconfigured_session_lookups_resolve_signed_out():
    backend = UnconfiguredBackend()

    user = await backend.get_user(None)
    signed_out = await backend.sign_out(None)

    assert user.success and user.data is None
    assert signed_out.success


async def test_unconfigured_sign_in_is_a_configuration_error():
    result = await UnconfiguredBackend().sign_in_with_password("a@b.com", "secret123")

    assert not result.success
    assert "not configured" in result.error


# ── Selection ────────────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "url, key",
    [
        (None, None),
        ("", "anon-key"),
        (PLACEHOLDER_SUPABASE_URL, "anon-key"),
        (BASE_URL, PLACEHOLDER_SUPABASE_ANON_KEY),
    ],
)
def test_placeholder_or_missing_credentials_pick_unconfigured(url, key):
    backend = create_backend(Settings(supabase_url=url, supabase_anon_key=key))

    assert isinstance(backend, UnconfiguredBackend)


async def test_real_credentials_pick_hosted():
    backend = create_backend(Settings(supabase_url=BASE_URL, supabase_anon_key="anon-key"))
    try:
        assert isinstance(backend, HostedBackend)
        assert backend.configured
    finally:
        await backend.aclose()


class RecordingLogger:
    def __init__(self):
        self.events = []

    def _record(self, event, **fields):
        self.events.append(event)

    debug = info = warning = error = exception = _record


def test_startup_without_credentials_logs_once(monkeypatch):
    recorder = RecordingLogger()
    monkeypatch.setattr("asocsemi.core.backend.logger", recorder)
    monkeypatch.setattr("asocsemi.main.logger", recorder)

    with TestClient(create_app()) as client:
        assert isinstance(client.app.state.backend, UnconfiguredBackend)

    assert recorder.events.count("backend_not_configured") == 1


# ── Hosted ───────────────────────────────────────────────────────────────────

async def test_insert_posts_one_row_and_returns_the_stored_row():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["prefer"] = request.headers.get("prefer")
        seen["apikey"] = request.headers.get("apikey")
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            201,
            json=[{"id": "42", "created_at": "2024-05-01T10:00:00+00:00", "name": "Ada"}],
        )

    backend = hosted(handler)
    result = await backend.insert("contacts", {"name": "Ada"})

    assert result.success
    assert result.data["id"] == "42"
    assert seen["method"] == "POST"
    assert seen["path"] == "/rest/v1/contacts"
    assert seen["prefer"] == "return=representation"
    assert seen["apikey"] == "anon-key"
    assert seen["body"] == [{"name": "Ada"}]
    await backend.aclose()


async def test_remote_error_message_is_passed_through_verbatim():
    message = 'new row violates row-level security policy for table "contacts"'

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, json={"code": "42501", "message": message})

    backend = hosted(handler)
    result = await backend.insert("contacts", {"name": "Ada"})

    assert not result.success
    assert result.error == message
    await backend.aclose()


async def test_transport_failure_becomes_a_failure_result():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    backend = hosted(handler)
    result = await backend.select("contacts")

    assert not result.success
    assert "connection refused" in result.error
    assert result.data == []
    await backend.aclose()


async def test_select_orders_newest_first():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=[])

    backend = hosted(handler)
    await backend.select("job_applications")

    assert seen["params"] == {"select": "*", "order": "created_at.desc"}
    await backend.aclose()


async def test_update_is_scoped_to_the_id_and_uses_the_caller_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["params"] = dict(request.url.params)
        seen["authorization"] = request.headers.get("authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=[{"id": "7", "status": "approved"}])

    backend = hosted(handler)
    result = await backend.update(
        "job_applications", "7", {"status": "approved"}, access_token="user-token"
    )

    assert result.data == [{"id": "7", "status": "approved"}]
    assert seen["method"] == "PATCH"
    assert seen["params"] == {"id": "eq.7"}
    assert seen["authorization"] == "Bearer user-token"
    assert seen["body"] == {"status": "approved"}
    await backend.aclose()


async def test_sign_in_uses_the_password_grant():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/auth/v1/token"
        assert request.url.params["grant_type"] == "password"
        return httpx.Response(400, json={"error": "invalid_grant", "error_description": "Invalid login credentials"})

    backend = hosted(handler)
    result = await backend.sign_in_with_password("a@b.com", "wrong-password")

    assert result.error == "Invalid login credentials"
    await backend.aclose()


async def test_authorize_url_carries_a_pkce_challenge():
    backend = hosted(lambda request: httpx.Response(500))
    result = await backend.authorize_url("github", "http://localhost:8000/auth/callback")

    url = httpx.URL(result.data["url"])
    assert url.path == "/auth/v1/authorize"
    assert url.params["provider"] == "github"
    assert url.params["code_challenge_method"] == "s256"
    assert url.params["code_challenge"]
    assert result.data["code_verifier"] not in str(url)
    await backend.aclose()


async def test_upload_without_storage_credentials_names_the_bucket():
    backend = hosted(lambda request: httpx.Response(500))
    result = await backend.upload("resumes", "a/cv.pdf", b"%PDF", "application/pdf")

    assert not result.success
    assert "resumes" in result.error
    await backend.aclose()
