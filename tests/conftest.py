import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from string_analyzer.crud.memory import InMemoryStringStore
from string_analyzer.crud.string_record import SqlStringStore
from string_analyzer.database import init_db, make_session_factory
from string_analyzer.main import create_app


@pytest.fixture
def memory_store():
    return InMemoryStringStore()


@pytest.fixture
def sql_store():
    # One shared connection so every session sees the same in-memory database
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield SqlStringStore(make_session_factory(engine))
    engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def store(request):
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def client(store):
    return TestClient(create_app(store=store))
