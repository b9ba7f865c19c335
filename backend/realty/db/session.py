# realty/db/session.py
from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from realty.core.config import settings  # NOTE: instance import, NOT class


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE clauses unless this is on per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(url: str, **kwargs) -> AsyncEngine:
    eng = create_async_engine(url, echo=False, future=True, **kwargs)
    if url.startswith("sqlite"):
        event.listen(eng.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return eng


def make_session_factory(bind: AsyncEngine) -> sessionmaker:
    return sessionmaker(
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# Create engine using instance settings (NOT Settings.DATABASE_URL)
engine = make_engine(settings.DATABASE_URL)

# Session factory
AsyncSessionLocal = make_session_factory(engine)


# FastAPI dependency
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
