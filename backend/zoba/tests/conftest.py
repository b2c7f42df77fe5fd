from collections.abc import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from zoba.api.deps import get_db, get_llm_client
from zoba.core.db import init_db
from zoba.main import app


@pytest.fixture()
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture()
def session(engine) -> Generator[Session, None, None]:
    with Session(engine) as db_session:
        yield db_session


@pytest.fixture()
def fake_llm() -> MagicMock:
    llm = MagicMock()
    llm.generate_chat = AsyncMock(return_value="No diagram changes needed.")
    return llm


@pytest.fixture()
def client(engine, fake_llm) -> Generator[TestClient, None, None]:
    def _get_db():
        with Session(engine) as db_session:
            yield db_session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_llm_client] = lambda: fake_llm
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
