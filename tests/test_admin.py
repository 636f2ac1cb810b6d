"""
Admin dashboard: access rule, filtering, statistics and status changes.
"""
import json
import re
from datetime import datetime, timezone

import pytest

from asocsemi.core.exceptions import BackendException
from asocsemi.schemas.application import ApplicationStatus, JobApplication
from asocsemi.schemas.contact import Contact
from asocsemi.services.admin_service import AdminDashboard, filter_applications, filter_contacts

from conftest import ago, application_row, contact_row, login


def make_application(full_name: str, email: str, **fields) -> JobApplication:
    data = {
        "id": email,
        "full_name": full_name,
        "email": email,
        "phone": "+1 555 0100",
        "position": "DevOps Engineer",
        "experience": "3-5 years",
        "created_at": datetime.now(timezone.utc),
    }
    data.update(fields)
    return JobApplication(**data)


# ── Access rule ──────────────────────────────────────────────────────────────

def test_non_admin_sees_access_denied_and_nothing_is_fetched(client, backend):
    backend.add_account("boss@company.com")
    login(client, "boss@company.com")

    response = client.get("/admin")

    assert response.status_code == 403
    assert "Access Denied" in response.text
    assert backend.calls_to("select") == []


def test_signed_out_visitor_sees_access_denied(client, backend):
    response = client.get("/admin")

    assert response.status_code == 403
    assert "Access Denied" in response.text
    assert backend.calls_to("select") == []


def test_admin_sees_the_dashboard(admin_client, backend):
    response = admin_client.get("/admin")

    assert response.status_code == 200
    assert "Admin Dashboard" in response.text
    assert backend.calls_to("select", "job_applications")
    assert backend.calls_to("select", "contacts")


def test_api_requires_sign_in(client):
    assert client.get("/api/v1/admin/stats").status_code == 401


def test_api_rejects_non_admins(client, backend):
    backend.add_account("boss@company.com")
    login(client, "boss@company.com")

    response = client.get("/api/v1/admin/applications")

    assert response.status_code == 403
    assert response.json()["error"] == "ADMIN_REQUIRED"


def test_api_accepts_a_bearer_session_token(client, backend):
    backend.add_account("admin@company.com")
    token = login(client, "admin@company.com").json()["session_token"]
    client.cookies.clear()

    response = client.get("/api/v1/admin/stats", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200


# ── Filtering ────────────────────────────────────────────────────────────────

def test_query_matches_name_case_insensitively():
    applications = [
        make_application("John Smith", "john@example.com"),
        make_application("Jane Doe", "jane@example.com"),
    ]

    result = filter_applications(applications, "smith")

    assert [app.full_name for app in result] == ["John Smith"]
    assert len(applications) == 2


def test_status_filter_is_exact_and_combines_with_query():
    applications = [
        make_application("John Smith", "john@example.com", status="approved"),
        make_application("Jo Smithers", "jo@example.com", status="pending"),
        make_application("Jane Doe", "jane@example.com", status="approved"),
    ]

    assert [a.full_name for a in filter_applications(applications, "", "approved")] == [
        "John Smith",
        "Jane Doe",
    ]
    assert [a.full_name for a in filter_applications(applications, "SMITH", "pending")] == [
        "Jo Smithers"
    ]


def test_query_matches_email_and_position():
    applications = [
        make_application("A", "a@asic.dev", position="UI/UX Designer"),
        make_application("B", "b@example.com", position="Senior VLSI Design Engineer"),
    ]

    assert len(filter_applications(applications, "asic")) == 1
    assert len(filter_applications(applications, "vlsi")) == 1


def test_contacts_without_company_never_match_on_company():
    contacts = [
        Contact(id="1", name="Ann", email="ann@example.com", company=None, message="hi",
                created_at=datetime.now(timezone.utc)),
        Contact(id="2", name="Bob", email="bob@example.com", company="Acme Corp", message="hi",
                created_at=datetime.now(timezone.utc)),
    ]

    assert [c.name for c in filter_contacts(contacts, "acme")] == ["Bob"]
    assert len(filter_contacts(contacts, "")) == 2


def admin_rows(html: str) -> dict:
    """Map each rendered row's first search field to whether it starts hidden."""
    rows = {}
    for tag in re.findall(r"<tr data-row [^>]*>", html):
        fields = json.loads(re.search(r"data-search='([^']*)'", tag).group(1))
        rows[fields[0]] = tag[:-1].rstrip().endswith("hidden")
    return rows


def test_dashboard_page_keeps_filtered_out_rows_hidden(admin_client, backend):
    application_row(backend, "John Smith", "john@example.com")
    application_row(backend, "Jane Doe", "jane@example.com")

    response = admin_client.get("/admin", params={"q": "smith"})

    assert admin_rows(response.text) == {"John Smith": False, "Jane Doe": True}


def test_dashboard_page_status_filter_hides_other_statuses(admin_client, backend):
    application_row(backend, "John Smith", "john@example.com", status="approved")
    application_row(backend, "Jane Doe", "jane@example.com")

    response = admin_client.get("/admin", params={"status": "approved"})

    assert admin_rows(response.text) == {"John Smith": False, "Jane Doe": True}


def test_dashboard_page_matches_within_a_single_field(admin_client, backend):
    application_row(backend, "John Smith", "john@example.com")

    response = admin_client.get("/admin", params={"q": "smith john"})

    assert """data-search='["John Smith", "john@example.com", "DevOps Engineer"]'""" in response.text
    assert admin_rows(response.text) == {"John Smith": True}
    assert re.search(r"<tr data-empty\s*>", response.text)


def test_contacts_tab_keeps_filtered_out_rows_hidden(admin_client, backend):
    contact_row(backend, "Ann", "ann@example.com", company="Acme")
    contact_row(backend, "Bob", "bob@example.com")

    response = admin_client.get("/admin", params={"tab": "contacts", "q": "acme"})

    assert admin_rows(response.text) == {"Ann": False, "Bob": True}
    assert re.search(r"<tr data-empty\s+hidden>", response.text)


def test_pending_card_is_marked_for_live_updates(admin_client, backend):
    application_row(backend, "John Smith", "john@example.com")
    application_row(backend, "Jane Doe", "jane@example.com", status="approved")

    response = admin_client.get("/admin")

    assert "data-stat-pending>1</span>" in response.text
    assert admin_rows(response.text) == {"John Smith": False, "Jane Doe": False}



def test_api_lists_filtered_applications(admin_client, backend):
    application_row(backend, "John Smith", "john@example.com", status="approved")
    application_row(backend, "Jane Doe", "jane@example.com")

    body = admin_client.get("/api/v1/admin/applications", params={"status": "approved"}).json()

    assert body["total"] == 1
    assert body["items"][0]["full_name"] == "John Smith"


# ── Loading ──────────────────────────────────────────────────────────────────

async def test_load_orders_newest_first_and_counts(backend):
    application_row(backend, "Old", "old@example.com", created_at=ago(60))
    application_row(backend, "New", "new@example.com", created_at=ago(1), status="reviewing")
    contact_row(backend, "Ann", "ann@example.com")
    dashboard = AdminDashboard(backend)

    await dashboard.load()

    assert not dashboard.loading
    assert [app.full_name for app in dashboard.applications] == ["New", "Old"]
    stats = dashboard.stats()
    assert stats.total_applications == 2
    assert stats.pending_review == 1
    assert stats.contact_messages == 1


async def test_one_failing_fetch_does_not_block_the_other(backend):
    contact_row(backend, "Ann", "ann@example.com")
    backend.failures[("select", "job_applications")] = "relation job_applications does not exist"
    dashboard = AdminDashboard(backend)

    await dashboard.load()

    assert dashboard.applications == []
    assert len(dashboard.contacts) == 1
    assert dashboard.errors == ["relation job_applications does not exist"]


def test_fetch_errors_are_shown_on_the_page(admin_client, backend):
    backend.failures[("select", "contacts")] = "permission denied for table contacts"

    response = admin_client.get("/admin")

    assert response.status_code == 200
    assert "permission denied for table contacts" in response.text


# ── Status changes ───────────────────────────────────────────────────────────

async def test_status_change_issues_one_update_and_patches_the_row(backend):
    target = application_row(backend, "John Smith", "john@example.com")
    application_row(backend, "Jane Doe", "jane@example.com")
    dashboard = AdminDashboard(backend)
    await dashboard.load()
    selects_before = len(backend.calls_to("select"))

    await dashboard.update_status(target["id"], ApplicationStatus.REVIEWING)

    assert backend.calls_to("update") == [
        ("update", "job_applications", target["id"], {"status": "reviewing"})
    ]
    assert len(backend.calls_to("select")) == selects_before
    statuses = {app.full_name: app.status for app in dashboard.applications}
    assert statuses == {"John Smith": "reviewing", "Jane Doe": "pending"}


async def test_failed_status_change_raises_and_leaves_the_row(backend):
    target = application_row(backend, "John Smith", "john@example.com")
    backend.failures[("update", "job_applications")] = "permission denied for table job_applications"
    dashboard = AdminDashboard(backend)
    await dashboard.load()

    with pytest.raises(BackendException) as excinfo:
        await dashboard.update_status(target["id"], ApplicationStatus.APPROVED)

    assert excinfo.value.message == "permission denied for table job_applications"
    assert dashboard.applications[0].status == "pending"


def test_api_status_change(admin_client, backend):
    target = application_row(backend, "John Smith", "john@example.com")

    response = admin_client.patch(
        f"/api/v1/admin/applications/{target['id']}",
        json={"status": "approved"},
    )

    assert response.status_code == 200
    assert response.json()["status"] == "approved"
    assert backend.tables["job_applications"][0]["status"] == "approved"


def test_api_status_change_for_unknown_id_is_not_found(admin_client):
    response = admin_client.patch(
        "/api/v1/admin/applications/does-not-exist",
        json={"status": "approved"},
    )

    assert response.status_code == 404
    assert response.json()["error"] == "APPLICATION_NOT_FOUND"


def test_api_rejects_unknown_statuses(admin_client, backend):
    target = application_row(backend, "John Smith", "john@example.com")

    response = admin_client.patch(
        f"/api/v1/admin/applications/{target['id']}",
        json={"status": "archived"},
    )

    assert response.status_code == 422
    assert backend.calls_to("update") == []
