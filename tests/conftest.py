"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Seeded users, jobs and technologies
- Bearer tokens for a regular user and an admin
"""

import pytest
from types import SimpleNamespace
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobly.application import create_app
from jobly.core.config import Settings
from jobly.core.database import Base, enable_sqlite_foreign_keys, get_db, init_db
from jobly.core.security import create_token, get_password_hash
from jobly.models import Application, ApplicationState, Job, Technology, User


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
init_db(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def test_settings():
    return Settings(
        SECRET_KEY="test-secret-key",
        SQLALCHEMY_DATABASE_URI="sqlite://",
        JSON_LOGS=False,
    )


@pytest.fixture
def db_session():
    """
    Create a fresh database session for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def app(test_settings, db_session):
    """FastAPI app with the database dependency pointed at the test session."""
    application = create_app(test_settings)

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    application.dependency_overrides[get_db] = override_get_db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seed_users(db_session):
    """
    u1 / password1 and u2 / password2 are regular users; admin / adminpass is an admin.
    """
    users = [
        User(
            username="u1",
            first_name="U1F",
            last_name="U1L",
            email="user1@user.com",
            hashed_password=get_password_hash("password1"),
            is_admin=False,
        ),
        User(
            username="u2",
            first_name="U2F",
            last_name="U2L",
            email="user2@user.com",
            hashed_password=get_password_hash("password2"),
            is_admin=False,
        ),
        User(
            username="admin",
            first_name="AdminF",
            last_name="AdminL",
            email="admin@user.com",
            hashed_password=get_password_hash("adminpass"),
            is_admin=True,
        ),
    ]
    db_session.add_all(users)
    db_session.commit()
    return {user.username: user for user in users}


@pytest.fixture
def seed_jobs(db_session):
    """
    Four jobs; titles sort as Backend Developer, Data Scientist,
    Office Manager, Software Engineer.
    """
    python = Technology(name="Python")
    postgres = Technology(name="PostgreSQL")

    jobs = {
        "engineer": Job(title="Software Engineer", salary=100000, equity=0.05,
                        company_handle="erickson-inc", technologies=[python, postgres]),
        "scientist": Job(title="Data Scientist", salary=120000, equity=0.2,
                         company_handle="testcompany", technologies=[python]),
        "backend": Job(title="Backend Developer", salary=95000, equity=0,
                       company_handle="testcompany"),
        "manager": Job(title="Office Manager", salary=None, equity=None,
                       company_handle="acme"),
    }
    db_session.add_all(jobs.values())
    db_session.commit()
    return {key: job.id for key, job in jobs.items()}


@pytest.fixture
def seed_application(db_session, seed_users, seed_jobs):
    """u1 has applied for the Software Engineer job."""
    db_session.add(Application(username="u1", job_id=seed_jobs["engineer"], state=ApplicationState.APPLIED))
    db_session.commit()
    return seed_jobs["engineer"]


def _bearer(username, is_admin, settings):
    token = create_token(SimpleNamespace(username=username, is_admin=is_admin), settings)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def u1_headers(test_settings):
    return _bearer("u1", False, test_settings)


@pytest.fixture
def u2_headers(test_settings):
    return _bearer("u2", False, test_settings)


@pytest.fixture
def admin_headers(test_settings):
    return _bearer("admin", True, test_settings)
