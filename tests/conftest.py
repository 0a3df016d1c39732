"""
Pytest configuration and fixtures.

Every test gets a fresh SQLite file; the app's get_db dependency is
overridden to use it, so nothing touches a real PostgreSQL instance.
"""
import os

# Must be set before weighin is imported (settings and engine are module-level)
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite:///./weighin-test.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-long-enough-1234")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from weighin.db.base import Base
from weighin.db.session import get_db
from weighin.main import app
from weighin.models import *  # noqa: F401, F403 - register all models

API = "/api/v1"


@pytest.fixture
def client(tmp_path):
    """Test client bound to an empty database."""
    db_path = tmp_path / "weighin.db"

    sync_engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    test_engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    session_maker = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(client):
    """Factory: sign up + sign in, returns {"id", "name", "headers"}."""

    def _make(name: str, password: str = "secret123") -> dict:
        email = f"{name.lower()}@weighin.dev"
        response = client.post(
            f"{API}/auth/signup",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        response = client.post(f"{API}/auth/signin", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        data = response.json()
        return {
            "id": data["user"]["id"],
            "name": name,
            "headers": {"Authorization": f"Bearer {data['access_token']}"},
        }

    return _make


@pytest.fixture
def alice(make_user):
    return make_user("Alice")


@pytest.fixture
def bob(make_user):
    return make_user("Bob")
