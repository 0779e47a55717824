"""
Tests for job seeker endpoints: profile sync, applying and resume upload.
"""
import os
from datetime import datetime, timedelta, timezone

import pytest

from app.db.models.application import JobApplication
from app.db.models.job import Job
from app.db.models.user import User
from conftest import JOB_FIELDS, company_headers, register_company, user_headers

CLERK_PROFILE = {
    "id": "user_2abc",
    "first_name": "Jane",
    "last_name": "Doe",
    "username": "jdoe",
    "email_addresses": [{"email_address": "jane@example.com"}],
    "image_url": "https://img.clerk.com/jane.png",
}


@pytest.fixture
def jane(client, identity):
    identity.profiles["user_2abc"] = CLERK_PROFILE
    response = client.get("/api/users/user", headers=user_headers("user_2abc"))
    assert response.status_code == 200
    return response.json()["user"]


@pytest.fixture
def job(client):
    token = register_company(client).json()["token"]
    response = client.post("/api/company/post-job", json=JOB_FIELDS, headers=company_headers(token))
    return response.json()["newJob"]


def test_get_user_creates_from_provider(client, db_session, jane):
    assert jane == {
        "_id": "user_2abc",
        "name": "Jane Doe",
        "email": "jane@example.com",
        "image": "https://img.clerk.com/jane.png",
        "resume": "",
    }
    assert db_session.query(User).count() == 1


def test_get_user_existing_skips_provider(client, identity, jane):
    identity.lookup_error = "should not be called"

    response = client.get("/api/users/user", headers=user_headers("user_2abc"))

    assert response.status_code == 200
    assert response.json()["user"]["name"] == "Jane Doe"


def test_get_user_provider_failure(client, identity, db_session):
    identity.lookup_error = "503 Service Unavailable"

    response = client.get("/api/users/user", headers=user_headers("user_x"))

    assert response.status_code == 502
    assert "Failed to fetch user data from Clerk" in response.json()["message"]
    assert db_session.query(User).count() == 0


def test_get_user_without_email(client, identity, db_session):
    identity.profiles["user_x"] = {**CLERK_PROFILE, "email_addresses": []}

    response = client.get("/api/users/user", headers=user_headers("user_x"))

    assert response.status_code == 400
    assert response.json()["message"] == "Email is required from Clerk user data"
    assert db_session.query(User).count() == 0


def test_get_user_name_falls_back_to_username(client, identity):
    identity.profiles["user_x"] = {**CLERK_PROFILE, "last_name": None, "image_url": None}

    user = client.get("/api/users/user", headers=user_headers("user_x")).json()["user"]

    assert user["name"] == "jdoe"
    assert user["image"].endswith("default-avatar.png")


def test_user_routes_require_session(client):
    for method, path in [
        ("get", "/api/users/user"),
        ("post", "/api/users/apply/1"),
        ("get", "/api/users/applications"),
        ("post", "/api/users/update-resume"),
    ]:
        response = getattr(client, method)(path)
        assert response.status_code == 401, path
        assert response.json()["success"] is False


def test_user_routes_reject_bad_session(client):
    response = client.get("/api/users/user", headers={"Authorization": "Bearer forged"})

    assert response.status_code == 401
    assert response.json()["message"] == "Authentication required"


def test_apply_for_job(client, db_session, jane, job):
    response = client.post(f"/api/users/apply/{job['_id']}", headers=user_headers("user_2abc"))

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Application submitted successfully"
    assert data["application"]["status"] == "pending"
    assert data["application"]["userId"] == "user_2abc"
    assert data["application"]["jobId"] == job["_id"]
    assert data["application"]["companyId"] == job["companyId"]


def test_apply_twice_keeps_one_application(client, db_session, jane, job):
    first = client.post(f"/api/users/apply/{job['_id']}", headers=user_headers("user_2abc"))
    second = client.post(f"/api/users/apply/{job['_id']}", headers=user_headers("user_2abc"))

    assert first.status_code == 200
    assert second.status_code == 409
    assert second.json()["message"] == "You have already applied for this job"
    assert db_session.query(JobApplication).count() == 1


def test_apply_unknown_job(client, jane):
    response = client.post("/api/users/apply/999", headers=user_headers("user_2abc"))

    assert response.status_code == 404
    assert response.json()["message"] == "Job not found"


def test_apply_before_profile_sync(client, job):
    response = client.post(f"/api/users/apply/{job['_id']}", headers=user_headers("user_unknown"))

    assert response.status_code == 404
    assert response.json()["message"] == "User not found"


def test_applications_newest_first(client, db_session, jane, job):
    older_job = Job(**JOB_FIELDS, company_id=job["companyId"])
    older_job.title = "Older"
    db_session.add(older_job)
    db_session.commit()
    now = datetime.now(timezone.utc)
    db_session.add_all([
        JobApplication(user_id="user_2abc", job_id=older_job.id, company_id=job["companyId"], date=now - timedelta(days=3)),
        JobApplication(user_id="user_2abc", job_id=job["_id"], company_id=job["companyId"], date=now),
    ])
    db_session.commit()

    response = client.get("/api/users/applications", headers=user_headers("user_2abc"))

    applications = response.json()["applications"]
    assert [a["jobId"]["title"] for a in applications] == ["Engineer", "Older"]
    assert applications[0]["companyId"]["name"] == "Acme"
    assert applications[0]["jobId"]["description"] == JOB_FIELDS["description"]


def test_update_resume(client, db_session, storage, settings, jane):
    response = client.post(
        "/api/users/update-resume",
        files={"resume": ("cv.pdf", b"%PDF-1.4 cv", "application/pdf")},
        headers=user_headers("user_2abc"),
    )

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["resume"].startswith("https://res.cloudinary.com/demo/resumes/")
    assert storage.uploads[0]["pdf"] is True
    assert os.listdir(settings.upload_dir) == []
    db_session.expire_all()
    assert db_session.get(User, "user_2abc").resume == user["resume"]


def test_update_resume_rejects_non_pdf(client, db_session, storage, settings, jane):
    response = client.post(
        "/api/users/update-resume",
        files={"resume": ("cv.docx", b"PK docx", "application/vnd.openxmlformats-officedocument.wordprocessingml.document")},
        headers=user_headers("user_2abc"),
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Please upload a PDF file"
    assert storage.uploads == []
    assert os.listdir(settings.upload_dir) == []


def test_update_resume_upload_failure(client, db_session, storage, settings, jane):
    storage.error = RuntimeError("timeout")

    response = client.post(
        "/api/users/update-resume",
        files={"resume": ("cv.pdf", b"%PDF-1.4 cv", "application/pdf")},
        headers=user_headers("user_2abc"),
    )

    assert response.status_code == 502
    assert "timeout" in response.json()["message"]
    assert os.listdir(settings.upload_dir) == []
    db_session.expire_all()
    assert db_session.get(User, "user_2abc").resume == ""


def test_update_resume_without_file(client, jane):
    response = client.post("/api/users/update-resume", headers=user_headers("user_2abc"))

    assert response.status_code == 400
    assert response.json()["message"] == "Please upload a file"
