"""
Shared pytest fixtures for tests.

Provides in-memory SQLite engines and sessions with the scan results
table created.
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from a11y_reports.database import Base
from a11y_reports.infra.db.models.scan_result import ScanResultRecord  # noqa: F401 — register model


@pytest.fixture
def bare_engine():
    """In-memory SQLite engine with NO tables (store never provisioned)."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield eng
    eng.dispose()


@pytest.fixture
def engine(bare_engine):
    """In-memory SQLite engine with the scan results table created."""
    Base.metadata.create_all(bare_engine)
    return bare_engine


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine)


@pytest.fixture
def session(session_factory):
    """Function-scoped session bound to the in-memory engine."""
    sess = session_factory()
    yield sess
    sess.close()
