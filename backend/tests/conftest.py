from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

import wage_engine.models  # noqa: F401
from wage_engine.core.audit import MemoryAuditSink
from wage_engine.db.session import Base, get_session
from wage_engine.main import app
from wage_engine.models import Organization, Worker

from helpers import TestingSessionLocal, engine


def override_get_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session() -> Iterator[Session]:
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client() -> Iterator[TestClient]:
    app.dependency_overrides[get_session] = override_get_session
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def audit() -> MemoryAuditSink:
    return MemoryAuditSink()


@pytest.fixture
def org_setup(session: Session) -> dict:
    """Two organizations, two workers in org-1 and one in org-2."""
    session.add_all(
        [
            Organization(id="org-1", name="Main Office"),
            Organization(id="org-2", name="Second Site"),
        ]
    )
    session.flush()
    session.add_all(
        [
            Worker(id="w-1", organization_id="org-1", full_name="Hanako Sato"),
            Worker(id="w-2", organization_id="org-1", full_name="Taro Suzuki"),
            Worker(id="w-9", organization_id="org-2", full_name="Jiro Tanaka"),
        ]
    )
    session.commit()
    return {"organization_id": "org-1", "worker_id": "w-1"}
