"""
Pytest configuration and fixtures for backend tests.
"""

import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Set test environment variables before importing config
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["CORS_ORIGINS"] = '["http://localhost:3000"]'
os.environ["ADMIN_EMAIL"] = "admin@test.com"
os.environ["ADMIN_PASSWORD"] = "TestAdmin123!"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"

from authentication.auth import create_access_token, get_password_hash  # noqa: E402
from repositories.database import Base, get_db  # noqa: E402
import repositories.db_models as db_models  # noqa: E402

# Test database engine (in-memory SQLite)
TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Hashing is slow; every fixture user shares one hash
TEST_PASSWORD = "TestPassword123!"
TEST_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh in-memory database session for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db(db_session):
    """Alias for db_session."""
    return db_session


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with overridden database dependency."""
    from main import app
    from helpers.rate_limiter import limiter

    # Reset rate limiter storage before each test to prevent rate limit errors
    limiter.reset()

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _make_user(
    db_session,
    username: str,
    role: db_models.UserRole = db_models.UserRole.CITIZEN,
    is_active: bool = True,
) -> db_models.User:
    user = db_models.User(
        email=f"{username}@example.com",
        username=username,
        full_name=username.replace("_", " ").title(),
        hashed_password=TEST_PASSWORD_HASH,
        role=role,
        is_active=is_active,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def test_user(db_session) -> db_models.User:
    """Create a citizen user."""
    return _make_user(db_session, "citizen_one")


@pytest.fixture
def other_user(db_session) -> db_models.User:
    """Create a second citizen user."""
    return _make_user(db_session, "citizen_two")


@pytest.fixture
def official_user(db_session) -> db_models.User:
    """Create an official."""
    return _make_user(db_session, "official_one", role=db_models.UserRole.OFFICIAL)


@pytest.fixture
def admin_user(db_session) -> db_models.User:
    """Create an admin."""
    return _make_user(db_session, "admin_one", role=db_models.UserRole.ADMIN)


@pytest.fixture
def inactive_admin(db_session) -> db_models.User:
    """Create a deactivated admin."""
    return _make_user(
        db_session, "admin_gone", role=db_models.UserRole.ADMIN, is_active=False
    )


@pytest.fixture
def make_report(db_session):
    """Factory inserting reports directly, bypassing submission rules."""

    def _make_report(**overrides) -> db_models.Report:
        values = {
            "report_type": db_models.ReportType.ISSUE,
            "category": "roads_highways",
            "title": "Broken streetlight",
            "description": "The streetlight outside number 12 has been out for a week.",
            "affected_areas": ["Downtown"],
            "status": db_models.ReportStatus.NEW,
            "is_anonymous": False,
        }
        values.update(overrides)
        updated_at = values.pop("updated_at", None)
        report = db_models.Report(**values)
        db_session.add(report)
        db_session.flush()
        report.report_number = f"CP-{report.id:06d}"
        db_session.commit()
        if updated_at is not None:
            # Set explicitly so the onupdate default does not overwrite it
            db_session.query(db_models.Report).filter(
                db_models.Report.id == report.id
            ).update({"updated_at": updated_at}, synchronize_session=False)
            db_session.commit()
        db_session.refresh(report)
        return report

    return _make_report


@pytest.fixture
def test_report(make_report, test_user) -> db_models.Report:
    """Create an issue report owned by test_user."""
    return make_report(
        user_id=test_user.id,
        contact_phone="555-0100",
        contact_email="reporter@example.com",
    )


@pytest.fixture
def compliment_report(make_report, test_user) -> db_models.Report:
    """Create a compliment report (no workflow)."""
    return make_report(
        user_id=test_user.id,
        report_type=db_models.ReportType.COMPLIMENT,
        category="parking",
        title="Great new parking signs",
    )


def _headers_for(user: db_models.User) -> dict:
    token = create_access_token(data={"sub": user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(test_user) -> dict:
    """Get authentication headers for test user."""
    return _headers_for(test_user)


@pytest.fixture
def other_auth_headers(other_user) -> dict:
    return _headers_for(other_user)


@pytest.fixture
def official_headers(official_user) -> dict:
    return _headers_for(official_user)


@pytest.fixture
def admin_headers(admin_user) -> dict:
    return _headers_for(admin_user)
