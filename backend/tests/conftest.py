"""
Pytest configuration for notice board tests.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from noticeboard.core.database import Base, get_db, import_models
from noticeboard.services import realtime_service
from noticeboard.services.realtime_service import ChangeNotifier


@pytest.fixture
def engine():
    """In-memory SQLite shared across threads."""
    import_models()
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def notifier(monkeypatch):
    """Fresh change notifier per test."""
    notifier = ChangeNotifier()
    monkeypatch.setattr(realtime_service, "_notifier", notifier)
    return notifier


@pytest.fixture
def client(session_factory, notifier):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_profile(client):
    def _make(full_name="Sarah Johnson", is_admin=False):
        response = client.post("/api/profiles/", json={"full_name": full_name, "is_admin": is_admin})
        assert response.status_code == 200, response.text
        return response.json()
    return _make


def viewer_headers(profile):
    return {"X-Viewer-Id": profile["id"]}
