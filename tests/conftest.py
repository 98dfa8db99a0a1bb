from __future__ import annotations

import random
from datetime import datetime, timedelta
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from starstation.database import Base, get_db
from starstation.game.catalog import BUILDINGS, EVENTS, seed_catalogs
from starstation.main import app
from starstation.routes.deps import get_now, get_rng

T0 = datetime(2026, 1, 1, 12, 0, 0)


class FakeClock:
    def __init__(self, start: datetime = T0) -> None:
        self.now = start

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def building_catalog():
    return dict(BUILDINGS)


@pytest.fixture
def event_catalog():
    return list(EVENTS)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(scope="function")
def db_engine():
    # One shared connection so the TestClient thread sees the same in-memory DB
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    TestingSessionLocal = sessionmaker(bind=db_engine, autoflush=False, autocommit=False)
    session = TestingSessionLocal()
    seed_catalogs(session)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_engine, db_session, clock) -> Generator[TestClient, None, None]:
    TestingSessionLocal = sessionmaker(bind=db_engine, autoflush=False, autocommit=False)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = clock
    app.dependency_overrides[get_rng] = lambda: random.Random(1234)

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def register_and_login(client):
    def _register_and_login(username: str = "commander", password: str = "hunter22") -> dict:
        r = client.post("/auth/register", json={"username": username, "password": password})
        assert r.status_code == 201, r.text
        r = client.post("/auth/login", json={"username": username, "password": password})
        assert r.status_code == 200, r.text
        return {"Authorization": f"Bearer {r.json()['token']}"}

    return _register_and_login
