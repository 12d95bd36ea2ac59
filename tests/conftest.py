"""
Pytest configuration and shared fixtures.

Every test gets its own in-memory SQLite database, seeded with:
- companies c1, c2, c3
- users u1, u2, u3 and admin
- jobs Job1 (c1), Job2 (c1), Job3 (c2)
- applications from u1 to all three jobs
"""

from typing import List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text

from jobly.core.auth import create_token
from jobly.core.config import Settings
from jobly.db import Database, init_schema
from jobly.main import create_app
from jobly.services import CompanyService, JobService, UserService


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite://",
        jwt_secret_key="test-secret",
        jwt_expire_minutes=0,
        bcrypt_work_factor=4,
        log_level="WARNING",
    )


def seed(db: Database, settings: Settings) -> None:
    companies = CompanyService(db)
    for n in (1, 2, 3):
        companies.create({
            "handle": f"c{n}",
            "name": f"C{n}",
            "numEmployees": n,
            "description": f"Desc{n}",
            "logoUrl": f"http://c{n}.img",
        })

    users = UserService(db, settings)
    for n in (1, 2, 3):
        users.register({
            "username": f"u{n}",
            "firstName": f"U{n}F",
            "lastName": f"U{n}L",
            "email": f"user{n}@user.com",
            "password": f"password{n}",
        })
    users.register({
        "username": "admin",
        "firstName": "admin",
        "lastName": "admin",
        "email": "admin@user.com",
        "password": "password",
        "isAdmin": True,
    })

    jobs = JobService(db)
    ids = [
        jobs.create({"title": "Job1", "salary": 100000, "equity": "0.1", "companyHandle": "c1"})["id"],
        jobs.create({"title": "Job2", "salary": 200000, "equity": "0.2", "companyHandle": "c1"})["id"],
        jobs.create({"title": "Job3", "salary": 300000, "equity": "0", "companyHandle": "c2"})["id"],
    ]
    users.apply_many("u1", ids)


@pytest.fixture
def empty_db(settings):
    """A schema with no rows."""
    database = Database(settings.sqlalchemy_url)
    init_schema(database.engine)
    try:
        yield database
    finally:
        database.dispose()


@pytest.fixture
def db(empty_db, settings):
    seed(empty_db, settings)
    return empty_db


@pytest.fixture
def job_ids(db) -> List[int]:
    """Ids of Job1, Job2, Job3."""
    with db.session() as s:
        return list(s.execute(text("SELECT id FROM jobs ORDER BY id")).scalars())


@pytest.fixture
def app(db, settings):
    return create_app(settings, db=db)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def u1_token(settings) -> str:
    return create_token("u1", False, settings)


@pytest.fixture
def u2_token(settings) -> str:
    return create_token("u2", False, settings)


@pytest.fixture
def admin_token(settings) -> str:
    return create_token("admin", True, settings)