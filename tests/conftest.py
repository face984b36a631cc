"""Test configuration and fixtures."""

import os
import uuid
from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

# Set test environment variables BEFORE importing the app
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"

from exec_stats.main import app
from exec_stats.database.connection import get_db_session
from exec_stats.models.base import Base
from exec_stats.models.organization import Organization, OrgMember
from exec_stats.models.org_statistics import DailyStatisticRow, OrgStatistics
from exec_stats.security.tokens import create_access_token


# Each test gets its own SQLite file. NullPool keeps no connections around, so
# the async engine works from any event loop (pytest-asyncio or TestClient).

@pytest.fixture
def database_path(tmp_path):
    return tmp_path / "exec_stats_test.db"


@pytest.fixture
def sync_engine(database_path):
    engine = create_engine(
        f"sqlite:///{database_path}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def async_session_factory(sync_engine, database_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{database_path}",
        poolclass=NullPool,
    )
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def db_session(sync_engine):
    """Synchronous session used to seed test data."""
    session = sessionmaker(autocommit=False, autoflush=False, bind=sync_engine)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture
def client(async_session_factory) -> TestClient:
    """Create a test client with database override."""
    async def override_get_db_session():
        async with async_session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_org(db_session) -> Organization:
    """Create a sample organization with one member, ``user-1``."""
    org = Organization(name="Test Org")
    db_session.add(org)
    db_session.flush()
    db_session.add(OrgMember(org_id=org.id, user_id="user-1"))
    db_session.commit()
    db_session.refresh(org)
    return org


@pytest.fixture
def seed_statistics(db_session):
    """Factory storing an ``OrgStatistics`` row plus daily history for an org.

    ``history`` is a list of ``(workflow, finished, app, failed)`` tuples,
    oldest first; days are assigned backward from yesterday.
    """

    def _seed(org, history=(), **counters):
        db_session.add(OrgStatistics(org_id=org.id, **counters))
        yesterday = date(2024, 3, 31)
        for offset, (wf, wf_finished, app_runs, app_failed) in enumerate(history):
            db_session.add(
                DailyStatisticRow(
                    org_id=org.id,
                    day=yesterday - timedelta(days=len(history) - 1 - offset),
                    workflow_executions=wf,
                    workflow_executions_finished=wf_finished,
                    app_executions=app_runs,
                    app_executions_failed=app_failed,
                )
            )
        db_session.commit()

    return _seed


@pytest.fixture
def make_token():
    """Factory for Bearer access tokens."""

    def _make(org_id, user_id="user-1", support_access=False, username="tester"):
        return create_access_token(
            user_id=user_id,
            username=username,
            org_id=str(org_id),
            support_access=support_access,
        )

    return _make


@pytest.fixture
def auth_headers(make_token, sample_org):
    return {"Authorization": f"Bearer {make_token(sample_org.id)}"}


@pytest.fixture
def unknown_org_id() -> str:
    return str(uuid.uuid4())
