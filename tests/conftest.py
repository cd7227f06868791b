"""
Pytest configuration and fixtures for UniHub API tests.
"""
import os

# Keep the application engine off the filesystem; tests use their own engine below
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_DEPARTMENTS", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from unihub.database import Base, get_db
from unihub.limiter import limiter
from unihub.main import app
from unihub.models.user import User
from unihub.auth import get_password_hash, create_tokens
from unihub.services import DepartmentDirectory, FeedEngine

# Disable rate limiting for tests
limiter.enabled = False

# Use in-memory SQLite for tests with shared connection
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Global session for sharing across requests
_test_session = None


def get_test_db():
    """Get the shared test database session."""
    yield _test_session


@pytest.fixture(scope="function")
def db():
    """Create a fresh database with seeded departments for each test."""
    global _test_session

    Base.metadata.create_all(bind=engine)
    _test_session = TestingSessionLocal()
    DepartmentDirectory(_test_session).seed()

    app.dependency_overrides[get_db] = get_test_db

    yield _test_session

    app.dependency_overrides.clear()
    _test_session.close()
    _test_session = None

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Create a test client."""
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="function")
def feed_engine(db):
    """A feed engine bound to the test session."""
    return FeedEngine(db)


@pytest.fixture(scope="function")
def departments(db):
    """Department ids keyed by code."""
    return {d.code: d.id for d in DepartmentDirectory(db).list()}


def make_user(db, username, role="student", department_id=None, password="testpassword123"):
    user = User(
        username=username,
        email=f"{username}@university.edu",
        hashed_password=get_password_hash(password),
        role=role,
        department_id=department_id,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def headers_for(user):
    access_token, _ = create_tokens(user.id)
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture(scope="function")
def test_user(db):
    """A student account."""
    return make_user(db, "test_student")


@pytest.fixture(scope="function")
def other_user(db):
    return make_user(db, "other_student")


@pytest.fixture(scope="function")
def faculty_user(db):
    return make_user(db, "prof_faculty", role="faculty")


@pytest.fixture(scope="function")
def auth_headers(test_user):
    """Auth headers for the student account."""
    return headers_for(test_user)


@pytest.fixture(scope="function")
def other_headers(other_user):
    return headers_for(other_user)


@pytest.fixture(scope="function")
def faculty_headers(faculty_user):
    return headers_for(faculty_user)
