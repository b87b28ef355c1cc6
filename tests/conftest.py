from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.backend.core.config import Settings  # noqa: E402
from app.backend.main import create_app  # noqa: E402
from app.db.session import build_engine, create_all_tables  # noqa: E402

TEST_SECRET = "test-secret-key-for-the-tasktracker-suite-0123456789"


class FrozenClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        ENV="test",
        DATABASE_URL="sqlite://",
        JWT_SECRET_KEY=TEST_SECRET,
        JWT_ISSUER="TaskTrackerApi",
        JWT_AUDIENCE="TaskTrackerApiUsers",
        ACCESS_TOKEN_EXPIRE_MINUTES=60,
        BCRYPT_ROUNDS=4,
        DB_SSLMODE=None,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(settings):
    engine = build_engine(settings)
    create_all_tables(engine)
    with Session(engine) as s:
        yield s
    engine.dispose()


def register(client: TestClient, username: str, password: str = "Secret123"):
    return client.post("/api/auth/register", json={"username": username, "password": password})


def login(client: TestClient, username: str, password: str = "Secret123"):
    return client.post("/api/auth/login", json={"username": username, "password": password})


def auth_headers(client: TestClient, username: str, password: str = "Secret123") -> dict:
    register(client, username, password)
    token = login(client, username, password).json()["token"]
    return {"Authorization": f"Bearer {token}"}
