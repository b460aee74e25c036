import os

# Keep the test run away from any developer database or real email account
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ.pop("SENDGRID_API_KEY", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from stability import models  # noqa: F401
from stability import session as session_registry
from stability.db import Base, get_db
from stability.main import app


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db(engine):
    SessionTesting = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
    s = SessionTesting()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture(autouse=True)
def clean_sessions():
    session_registry.reset()
    yield
    session_registry.reset()


@pytest.fixture
def client(db):
    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    # No context manager: startup hooks would touch the configured database
    c = TestClient(app)
    yield c
    app.dependency_overrides.clear()
