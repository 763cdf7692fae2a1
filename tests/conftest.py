"""Shared fixtures for all tests.

Uses a throwaway SQLite database recreated for every test function, and a
generated background template so no real artwork is needed.
"""

import os

# Force SQLite and a generous rate limit before any app imports
os.environ["DATABASE_URL"] = "sqlite:///./test_tickets.db"
os.environ["ISSUE_RATE_LIMIT"] = "1000/minute"
os.environ["TICKET_TEMPLATE_PATH"] = "./missing-test-template.png"

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.database import Base, get_db
from app.dependencies import get_ticket_pipeline, get_ticket_store
from app.main import app
from app.services.pipeline import TicketPipeline
from app.stores.memory_store import InMemoryTicketStore

TEST_DATABASE_URL = "sqlite:///./test_tickets.db"

engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEMPLATE_SIZE = (1400, 700)


@pytest.fixture(autouse=True)
def setup_db():
    """Create all tables before each test, drop after."""
    from app import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    """Provide a database session for test helpers."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def template_path(tmp_path):
    """A plain background template written to disk."""
    path = tmp_path / "ticket.png"
    Image.new("RGB", TEMPLATE_SIZE, (24, 32, 64)).save(path)
    return path


@pytest.fixture
def pipeline(template_path):
    return TicketPipeline(template_path)


@pytest.fixture
def missing_pipeline(tmp_path):
    """Pipeline whose template file does not exist."""
    return TicketPipeline(tmp_path / "nope.png")


@pytest.fixture
def memory_store():
    return InMemoryTicketStore()


@pytest.fixture
def client(db, pipeline):
    """TestClient that uses the test database and the generated template."""

    def _override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_ticket_pipeline] = lambda: pipeline
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def use_store(client):
    """Swap the ticket store used by the API for the given one."""

    def _use(store):
        app.dependency_overrides[get_ticket_store] = lambda: store
        return store

    return _use


@pytest.fixture
def use_pipeline(client):
    """Swap the artifact pipeline used by the API for the given one."""

    def _use(p):
        app.dependency_overrides[get_ticket_pipeline] = lambda: p
        return p

    return _use
