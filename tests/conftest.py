"""
Shared test fixtures and configuration for pytest.
"""

from datetime import date

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from forecast.models import housing_models, snapshot_models  # noqa: F401
from forecast.store.record_store import RecordStore


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database shared across threads."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture
def store(session):
    return RecordStore(session)


@pytest.fixture
def today():
    return date(2026, 3, 2)
