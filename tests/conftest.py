"""Shared fixtures for SkillBadges tests."""

import os
import pytest
from typing import Generator

from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

# Force test settings before any app import
os.environ["SKILLBADGES_DATABASE_URL"] = "sqlite://"
os.environ["SKILLBADGES_DEBUG"] = "false"
os.environ["SKILLBADGES_LOG_LEVEL"] = "WARNING"
os.environ["SKILLBADGES_API_PREFIX"] = "/api"
os.environ["SKILLBADGES_AUTO_CREATE_SCHEMA"] = "false"

from skillbadges.models import SkillBadge  # noqa: F401
from skillbadges.database import build_engine, get_session
from skillbadges.main import app
from skillbadges.schemas import Badge, BadgeCreate
from skillbadges.store import SqlBadgeStore

API = "/api"


# ─── Database fixtures ───


@pytest.fixture(name="engine")
def fixture_engine():
    """In-memory SQLite engine for tests."""
    eng = build_engine("sqlite://")
    SQLModel.metadata.create_all(eng)
    return eng


@pytest.fixture(name="session")
def fixture_session(engine) -> Generator[Session, None, None]:
    """DB session backed by the in-memory engine."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="store")
def fixture_store(session) -> SqlBadgeStore:
    return SqlBadgeStore(session)


@pytest.fixture(name="client")
def fixture_client(engine) -> Generator[TestClient, None, None]:
    """FastAPI TestClient wired to the test database."""

    def _override_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _override_session
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ─── Factory helpers ───


def make_badge(session: Session, **overrides) -> Badge:
    """Create and persist a badge through the store."""
    data = {
        "student_id": 1,
        "badge_name": "Rust Basics",
        "badge_description": "Ownership and borrowing",
    }
    data.update(overrides)
    return SqlBadgeStore(session).create(BadgeCreate(**data))
