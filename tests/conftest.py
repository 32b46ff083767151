"""Test configuration and fixtures.

Every test gets a fresh schema on a single shared in-memory SQLite
connection, and bcrypt runs at its minimum cost.
"""

import asyncio
import os
from typing import Generator

# Set env flags BEFORE importing application modules
os.environ.setdefault("DEBUG", "1")
os.environ.setdefault("TESTING", "1")
os.environ.setdefault("TEST_DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")

import pytest
from fastapi.testclient import TestClient

import models  # noqa: F401  register tables
from database import Base, SessionLocal, engine, get_db
from main import app
from security import create_token_for
from services.users import UserRepository


@pytest.fixture()
def reset_db() -> Generator[None, None, None]:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture()
def db_session(reset_db) -> Generator:  # type: ignore
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def override_db_dependency(db_session):  # type: ignore
    """Override FastAPI dependency to use the test session."""
    def _get_db():
        try:
            yield db_session
        finally:
            pass
    app.dependency_overrides[get_db] = _get_db
    yield
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture(scope="session")
def client() -> TestClient:  # type: ignore
    return TestClient(app)


@pytest.fixture()
def users(db_session):
    """u1, u2 and u3 registered with passwords password1..3."""
    repo = UserRepository(db_session)

    async def _seed():
        for n in (1, 2, 3):
            await repo.register(username=f"u{n}", password=f"password{n}", email=f"user{n}@user.com")

    asyncio.run(_seed())
    return ["u1", "u2", "u3"]


@pytest.fixture()
def u1_headers():
    return {"Authorization": f"Bearer {create_token_for('u1')}"}


@pytest.fixture()
def u2_headers():
    return {"Authorization": f"Bearer {create_token_for('u2')}"}
