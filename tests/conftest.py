"""Pytest configuration for global fixtures and logging setup."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ["GEMINI_API_KEY"] = os.environ.get("GEMINI_API_KEY") or "test-gemini-key"
os.environ["DATABASE_URL"] = "sqlite://"

from aiservice.logging_config import configure_logging

configure_logging()

from aiservice.database import Base, get_db
from aiservice.main import app
from aiservice.models import database_models  # noqa: F401  # Register tables on Base.metadata.
from aiservice.models.schemas import Activity, ActivityType

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def gemini_fixture() -> Dict[str, Any]:
    """Return a complete Gemini generateContent envelope."""

    with (FIXTURES_DIR / "gemini_response.json").open("r", encoding="utf-8") as fh:
        return json.load(fh)


@pytest.fixture
def make_envelope() -> Callable[[str], str]:
    """Wrap candidate text in a minimal Gemini envelope, serialized as the API returns it."""

    def _make(text: str) -> str:
        return json.dumps({"candidates": [{"content": {"parts": [{"text": text}]}}]})

    return _make


@pytest.fixture
def running_activity() -> Activity:
    return Activity(
        id="act-1",
        user_id="user-1",
        type=ActivityType.RUNNING,
        duration=30,
        calories_burned=300,
        additional_metrics=None,
    )


@pytest.fixture
def db_session() -> Iterator[Session]:
    """In-memory SQLite session with the schema created."""

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture
def test_client(db_session: Session) -> Iterator[TestClient]:
    """FastAPI test client bound to the in-memory database."""

    def override_get_db():
        try:
            yield db_session
            db_session.commit()
        except Exception:
            db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
