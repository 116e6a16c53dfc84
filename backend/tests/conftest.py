"""
Pytest configuration and fixtures for backend tests.
"""

import os
import sys
from datetime import datetime, timezone
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
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["CORS_ORIGINS"] = "http://localhost:3000"
os.environ["ADMIN_EMAIL"] = "admin@test.com"
os.environ["ADMIN_PASSWORD"] = "TestAdmin123!"
os.environ.pop("SENTRY_DSN", None)

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

# Hashing once keeps the fixtures fast; bcrypt is deliberately slow
TEST_PASSWORD = "testpassword123"
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


@pytest.fixture
def make_user(db_session):
    """Factory fixture to create users."""

    def _make_user(
        email: str,
        ward: str = "Lindi",
        role: db_models.UserRole = db_models.UserRole.RESIDENT,
        status: db_models.UserStatus = db_models.UserStatus.VERIFIED,
        full_name: str = "Test Resident",
    ) -> db_models.User:
        user = db_models.User(
            full_name=full_name,
            email=email,
            phone="0712345678",
            ward=ward,
            estate_street="",
            hashed_password=TEST_PASSWORD_HASH,
            role=role,
            status=status,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def test_user(make_user) -> db_models.User:
    """Create a verified resident."""
    return make_user("resident@example.com", full_name="Amina Otieno")


@pytest.fixture
def other_user(make_user) -> db_models.User:
    """Create a second verified resident, in another ward."""
    return make_user("other@example.com", ward="Makina", full_name="Brian Mwangi")


@pytest.fixture
def suspended_user(make_user) -> db_models.User:
    """Create a suspended resident."""
    return make_user(
        "suspended@example.com",
        status=db_models.UserStatus.SUSPENDED,
        full_name="Suspended Resident",
    )


@pytest.fixture
def admin_user(make_user) -> db_models.User:
    """Create an admin."""
    return make_user(
        "admin@example.com",
        ward="all",
        role=db_models.UserRole.ADMIN,
        full_name="Ward Administrator",
    )


@pytest.fixture
def make_report(db_session, test_user):
    """Factory fixture to create reports directly in the store."""

    def _make_report(
        title: str = "Broken street light",
        description: str = "The light outside the market has been off for a week.",
        category: db_models.ReportCategory = db_models.ReportCategory.SECURITY,
        ward: str = "Lindi",
        status: db_models.ReportStatus = db_models.ReportStatus.PENDING,
        vote_count: int = 0,
        created_at: datetime | None = None,
        user_id: int | None = None,
    ) -> db_models.Report:
        report = db_models.Report(
            user_id=user_id or test_user.id,
            title=title,
            description=description,
            category=category,
            ward=ward,
            status=status,
            vote_count=vote_count,
        )
        if created_at is not None:
            report.created_at = created_at
        db_session.add(report)
        db_session.commit()
        db_session.refresh(report)
        return report

    return _make_report


@pytest.fixture
def test_report(make_report) -> db_models.Report:
    """Create a pending report."""
    return make_report()


@pytest.fixture
def make_announcement(db_session, admin_user):
    """Factory fixture to create announcements directly in the store."""

    def _make_announcement(
        title_en: str,
        priority: db_models.AnnouncementPriority = db_models.AnnouncementPriority.NORMAL,
        target_ward: str = db_models.ALL_WARDS,
        created_at: datetime | None = None,
        expires_at: datetime | None = None,
    ) -> db_models.Announcement:
        announcement = db_models.Announcement(
            admin_id=admin_user.id,
            title_en=title_en,
            message_en=f"{title_en} details",
            priority=priority,
            target_ward=target_ward,
            expires_at=expires_at,
            created_at=created_at or datetime.now(timezone.utc),
        )
        db_session.add(announcement)
        db_session.commit()
        db_session.refresh(announcement)
        return announcement

    return _make_announcement


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
def suspended_auth_headers(suspended_user) -> dict:
    return _headers_for(suspended_user)


@pytest.fixture
def admin_auth_headers(admin_user) -> dict:
    """Get authentication headers for admin user."""
    return _headers_for(admin_user)
