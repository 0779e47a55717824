"""
Shared fixtures: in-memory SQLite, fake hosted providers, and a TestClient
wired to them through dependency overrides.
"""
import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.core.config import Settings, get_settings
from app.core.errors import ProviderLookupFailed, Unauthenticated
from app.core.providers import get_identity_provider, get_storage
from app.core.rate_limit import rate_limit_store
from app.db.base import Base
from app.db import models  # noqa: F401
from app.db.session import get_db
from app.services.identity_provider import IdentityProvider
from app.services.media_storage import MediaStorage

# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


class FakeStorage(MediaStorage):
    """Records uploads instead of calling Cloudinary."""

    def __init__(self):
        self.uploads = []
        self.error = None
        self.secure_url = "https://res.cloudinary.com/demo/{folder}/{name}"

    def upload(self, file_path, folder, *, pdf=False):
        self.uploads.append({
            "path": file_path,
            "folder": folder,
            "pdf": pdf,
            "existed": os.path.exists(file_path),
        })
        if self.error is not None:
            raise self.error
        if self.secure_url is None:
            return {}
        return {"secure_url": self.secure_url.format(folder=folder, name=os.path.basename(file_path))}


class FakeIdentityProvider(IdentityProvider):
    """Accepts tokens of the form "session-<user_id>" and serves canned profiles."""

    def __init__(self):
        self.profiles = {}
        self.lookup_error = None

    def verify_session_token(self, token):
        if not token.startswith("session-"):
            raise Unauthenticated("Authentication required")
        return token[len("session-"):]

    def get_user(self, user_id):
        if self.lookup_error is not None:
            raise ProviderLookupFailed(f"Failed to fetch user data from Clerk: {self.lookup_error}")
        return self.profiles[user_id]


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=TEST_DATABASE_URL,
        secret_key="test-secret",
        upload_dir=str(tmp_path / "uploads"),
        clerk_webhook_secret="whsec_MfKQ9r8GKYqrTwjUPD8ILPZIo2LaLaSw",
    )


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def identity():
    return FakeIdentityProvider()


@pytest.fixture
def db_session():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=test_engine)
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session, settings, storage, identity):
    def override_get_db():
        db = TestSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_identity_provider] = lambda: identity
    rate_limit_store.clear()

    yield TestClient(app)

    app.dependency_overrides.clear()
    rate_limit_store.clear()


def register_company(client, name="Acme", email="hr@acme.com", password="acme-pass-123"):
    return client.post(
        "/api/company/register",
        data={"name": name, "email": email, "password": password},
        files={"image": ("logo.png", b"\x89PNG fake", "image/png")},
    )


def company_headers(token):
    return {"Authorization": f"Bearer {token}"}


def user_headers(user_id):
    return {"Authorization": f"Bearer session-{user_id}"}


JOB_FIELDS = {
    "title": "Engineer",
    "description": "<p>Build things.</p>",
    "location": "Remote",
    "salary": 120000,
    "level": "Senior level",
    "category": "Programming",
}
