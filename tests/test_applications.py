"""
Job applications from the Careers page and the JSON API.
"""
from conftest import login

VALID_FORM = {
    "full_name": "Grace Hopper",
    "email": "grace@example.com",
    "phone": "+1 555 0100",
    "position": "Hardware Verification Engineer",
    "experience": "5-10 years",
    "cover_letter": "",
}

PDF = ("cv.pdf", b"%PDF-1.4 resume", "application/pdf")


def test_submit_with_resume_uploads_then_inserts(client, backend):
    response = client.post("/careers/apply", data=VALID_FORM, files={"resume": PDF})

    assert response.status_code == 200
    assert "Application Submitted!" in response.text

    uploads = backend.calls_to("upload", "resumes")
    assert len(uploads) == 1
    assert uploads[0][2].endswith("/cv.pdf")

    inserts = backend.calls_to("insert", "job_applications")
    assert len(inserts) == 1
    record = inserts[0][2]
    assert record["status"] == "pending"
    assert record["user_id"] is None
    assert record["cover_letter"] is None
    assert record["resume_url"] == f"https://files.test/resumes/{uploads[0][2]}"


def test_submit_without_resume(client, backend):
    response = client.post("/careers/apply", data=VALID_FORM)

    assert response.status_code == 200
    assert backend.calls_to("upload") == []
    assert backend.calls_to("insert", "job_applications")[0][2]["resume_url"] is None


def test_signed_in_applicant_is_linked(client, backend):
    account = backend.add_account("grace@example.com", full_name="Grace Hopper")
    login(client, "grace@example.com")

    client.post("/careers/apply", data=VALID_FORM)

    assert backend.calls_to("insert", "job_applications")[0][2]["user_id"] == account["id"]


def test_missing_fields_keep_the_form_open(client, backend):
    response = client.post("/careers/apply", data={**VALID_FORM, "phone": "", "experience": ""})

    assert response.status_code == 422
    assert "Please fill in all required fields" in response.text
    assert 'aria-modal="true"' in response.text
    assert backend.calls_to("insert") == []


def test_unsupported_resume_type_is_rejected(client, backend):
    response = client.post(
        "/careers/apply",
        data=VALID_FORM,
        files={"resume": ("cv.exe", b"MZ", "application/octet-stream")},
    )

    assert response.status_code == 422
    assert "Resume must be a PDF or Word document" in response.text
    assert backend.calls_to("upload") == []
    assert backend.calls_to("insert") == []


def test_upload_failure_stops_the_submission(client, backend):
    backend.failures[("upload", "resumes")] = "The resource already exists"

    response = client.post("/careers/apply", data=VALID_FORM, files={"resume": PDF})

    assert response.status_code == 502
    assert "The resource already exists" in response.text
    assert backend.calls_to("insert") == []


def test_apply_link_opens_the_form_for_that_job(client):
    response = client.get("/careers", params={"apply": "DevOps Engineer"})

    assert response.status_code == 200
    assert "Apply for DevOps Engineer" in response.text


def test_careers_page_lists_openings_without_the_form(client):
    response = client.get("/careers")

    assert "Senior VLSI Design Engineer" in response.text
    assert 'aria-modal="true"' not in response.text


def test_api_submit(client, backend):
    response = client.post("/api/v1/applications/", data=VALID_FORM, files={"resume": PDF})

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "pending"
    assert body["resume_url"].startswith("https://files.test/resumes/")


def test_api_validation_error_lists_fields(client, backend):
    response = client.post("/api/v1/applications/", data={**VALID_FORM, "email": "nope"})

    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert [detail["field"] for detail in body["details"]] == ["email"]
    assert backend.calls_to("insert") == []
