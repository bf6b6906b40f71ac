from contextlib import asynccontextmanager

import pytest
from httpx import ASGITransport, AsyncClient

from todos import config, database
from todos.dependencies import get_store
from todos.main import app
from todos.models.user import User
from todos.persistence.relational import RelationalBackend
from todos.persistence.session import SessionBackend
from todos.security import hash_password


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def engine(tmp_path):
    # a file database: load_todo_list reads over two connections at once
    engine = database.make_engine(f"sqlite+aiosqlite:///{tmp_path / 'todos.db'}")
    await database.init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def sessionmaker(engine):
    return database.make_sessionmaker(engine)


@pytest.fixture
def relational(sessionmaker):
    return RelationalBackend(sessionmaker)


@pytest.fixture
def session():
    return {}


@pytest.fixture
def session_store(session):
    return SessionBackend(session)


@pytest.fixture(params=["session", "relational"])
def store(request, session_store, relational):
    return session_store if request.param == "session" else relational


@pytest.fixture
async def alice(sessionmaker):
    async with sessionmaker() as db:
        db.add(User(username="alice", password_hash=hash_password("correct-horse")))
        await db.commit()
    return "alice"


@asynccontextmanager
async def app_client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def client(relational):
    app.dependency_overrides[get_store] = lambda: relational
    async with app_client() as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def session_client(monkeypatch):
    monkeypatch.setattr(config, "TODOS_BACKEND", "session")
    async with app_client() as ac:
        yield ac


@pytest.fixture(params=["relational", "session"])
async def api(request, relational, monkeypatch):
    if request.param == "session":
        monkeypatch.setattr(config, "TODOS_BACKEND", "session")
    else:
        app.dependency_overrides[get_store] = lambda: relational
    async with app_client() as ac:
        yield ac
    app.dependency_overrides.clear()
