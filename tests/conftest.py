import os

# Must be set before tradebook.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from contextlib import asynccontextmanager

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import tradebook.models  # noqa: F401
from tradebook.db.database import Base, get_db
from tradebook.main import app



@pytest_asyncio.fixture
async def async_engine():
    # One shared in-memory connection per test
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(async_engine):
    return async_sessionmaker(bind=async_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def async_session(session_factory):
    async with session_factory() as session:
        yield session


@asynccontextmanager
async def _client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture
async def make_client(session_factory):
    """
    Factory for logged-out API clients sharing one test database.
    Each client keeps its own session cookie.
    """

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    clients = []

    async def factory():
        cm = _client()
        c = await cm.__aenter__()
        clients.append(cm)
        return c

    yield factory

    for cm in clients:
        await cm.__aexit__(None, None, None)
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(make_client):
    return await make_client()
