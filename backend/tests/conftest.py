import os

# Required settings must exist before ridealert.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SUPABASE_URL", "https://project.supabase.test")
os.environ.setdefault("SUPABASE_KEY", "test-service-role-key")
os.environ.setdefault("UMO_API_KEY", "test-umo-key")

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ridealert.core.security import get_current_user
from ridealert.db.database import Base, get_db
from ridealert.main import app
from ridealert.schemas.schedule import AuthUser
import ridealert.models  # noqa: F401

USER_A = "11111111-aaaa-4aaa-8aaa-000000000001"
USER_B = "22222222-bbbb-4bbb-8bbb-000000000002"

UMOIQ_PREFIX = "/api/pub/v1"


@pytest.fixture
def db_session():
    """In-memory SQLite shared across threads so TestClient requests see the same data."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def login():
    """Authenticate subsequent requests as the given user id."""
    def _login(user_id: str):
        app.dependency_overrides[get_current_user] = lambda: AuthUser(id=user_id, email=f"{user_id}@example.com")
    return _login


@pytest.fixture
def umoiq_transport():
    """
    Build an httpx.MockTransport answering UmoIQ paths from a dict.

    Values may be a JSON-able object (200), an (status, text) tuple, or an
    Exception instance to raise. Requested paths are recorded on ``.calls``.
    """
    def _build(responses):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            path = request.url.path[len(UMOIQ_PREFIX):]
            calls.append(path)
            if path not in responses:
                return httpx.Response(404, text=f"no such path {path}")
            value = responses[path]
            if isinstance(value, Exception):
                raise value
            if isinstance(value, tuple):
                status, text = value
                return httpx.Response(status, text=text)
            return httpx.Response(200, json=value)

        transport = httpx.MockTransport(handler)
        transport.calls = calls
        return transport

    return _build
