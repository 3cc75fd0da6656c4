"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown (in-memory SQLite, same schema as production)
- Seed data: companies c1..c3, users u1..u3, jobs job1..job3
- FastAPI test client
- Bearer tokens for an admin and a regular user
"""

import os

# Must be set before app.core.config is first imported
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.auth import create_token
from app.db.postgres import get_db
from app.db.tables import drop_schema, init_schema
from app.main import app
from app.models import company, job, user


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@event.listens_for(engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record):
    # ON DELETE CASCADE needs this on SQLite
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def seed(db):
    """Common data, mirroring what every test module expects."""
    for n in (1, 2, 3):
        company.create(db, {
            "handle": f"c{n}",
            "name": f"C{n}",
            "numEmployees": n,
            "description": f"Desc{n}",
            "logoUrl": f"http://c{n}.img",
        })

    for n in (1, 2, 3):
        user.create(db, {
            "username": f"u{n}",
            "firstName": f"U{n}F",
            "lastName": f"U{n}L",
            "email": f"user{n}@user.com",
            "password": f"password{n}",
            "isAdmin": n == 1,
        })

    job_ids = [
        job.create(db, {"title": "job1", "salary": 999, "equity": 0, "companyHandle": "c1"})["id"],
        job.create(db, {"title": "job2", "salary": 1999, "equity": 0.02, "companyHandle": "c2"})["id"],
        job.create(db, {"title": "job3", "salary": 2999, "equity": 0.02, "companyHandle": "c2"})["id"],
    ]

    user.apply_to_job(db, "u1", job_ids[0])
    user.apply_to_job(db, "u1", job_ids[1])
    return job_ids


@pytest.fixture
def db_session():
    """
    Create a fresh, seeded database session for each test.
    Tables are dropped after the test completes.
    """
    init_schema(engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        drop_schema(engine)


@pytest.fixture
def job_ids(db_session):
    """Ids of job1, job2, job3 (seeding happens here)."""
    return seed(db_session)


@pytest.fixture
def client(db_session, job_ids):
    """
    FastAPI test client with overridden database dependency.
    """
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
def admin_headers():
    """u1 is an admin"""
    return {"Authorization": f"Bearer {create_token({'username': 'u1', 'isAdmin': True})}"}


@pytest.fixture
def user_headers():
    """u2 is a regular user"""
    return {"Authorization": f"Bearer {create_token({'username': 'u2', 'isAdmin': False})}"}
