from typing import AsyncIterator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from tradebook.config import config

# Async driver -> sync counterpart, used by Alembic
SYNC_DRIVERS = {
    "postgresql+asyncpg": "postgresql+psycopg2",
    "sqlite+aiosqlite": "sqlite",
}

# Create async engine
engine: AsyncEngine = create_async_engine(
    config.DATABASE_URL,
    echo=config.SQL_ECHO,
    future=True,
)

# Async session factory
AsyncSessionLocal: async_sessionmaker[AsyncSession] = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,
)

# Export declarative Base for models and alembic
Base = declarative_base()


def sync_database_url(url: str) -> str:
    """Same database, with the async driver swapped for a sync one."""
    parsed = make_url(url)
    driver = SYNC_DRIVERS.get(parsed.drivername)
    if driver:
        parsed = parsed.set(drivername=driver)
    return parsed.render_as_string(hide_password=False)


async def get_db() -> AsyncIterator[AsyncSession]:
    async with AsyncSessionLocal() as session:
        yield session
