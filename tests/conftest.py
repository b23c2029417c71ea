"""
测试公共 fixture：SQLite 内存库（StaticPool 共享同一连接）+ 覆盖 get_db
"""
import os

# 必须在导入 app 之前设置，避免连到真实数据库
os.environ.setdefault("ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from typing import Any, Dict, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.common import trace
from app.domain import models  # noqa: F401
from app.infra.db import Base, get_db
from app.main import app as fastapi_app


@pytest.fixture(autouse=True)
def _clean_trace_context() -> Generator[None, None, None]:
    trace.clear()
    yield
    trace.clear()


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory: sessionmaker) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def app(session_factory: sessionmaker):
    def _override_get_db() -> Generator[Session, None, None]:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    fastapi_app.dependency_overrides[get_db] = _override_get_db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def user_payload() -> Dict[str, Any]:
    return {
        "username": "alice",
        "password": "secret123",
        "email": "alice@example.com",
        "fullName": "Alice Liddell",
    }


@pytest.fixture
def create_user(client: TestClient):
    def _create(**overrides: Any) -> Dict[str, Any]:
        payload = {
            "username": "bob",
            "password": "secret123",
            "email": "bob@example.com",
        }
        payload.update(overrides)
        resp = client.post("/api/users", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _create
