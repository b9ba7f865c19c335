"""Shared pytest fixtures: per-test SQLite database, API client and users."""

import os
import tempfile

# Must be set before anything from realty is imported
_TMP = tempfile.mkdtemp(prefix="realty-tests-")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_TMP}/default.db")
os.environ.setdefault("STATIC_DIR", os.path.join(_TMP, "static"))
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import NullPool

from realty.db import crud_users
from realty.db.base import Base
from realty.db.session import get_db, make_engine, make_session_factory
from realty.main import app

from factories import auth_headers


@pytest_asyncio.fixture
async def engine(tmp_path):
    eng = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    """
    Open short-lived sessions from tests. SQLite locks the whole file, so a
    session left open across API calls would block the app's writes.
    """
    return make_session_factory(engine)


@pytest_asyncio.fixture
async def client(session_factory):
    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session_factory):
    async def _make(email: str, role: str = "buyer", password: str = "secret123", **kwargs):
        async with session_factory() as db:
            return await crud_users.create_user(
                db,
                full_name=kwargs.pop("full_name", email.split("@")[0].title()),
                email=email,
                password=password,
                role=role,
                **kwargs,
            )

    return _make


@pytest_asyncio.fixture
async def admin(make_user):
    return await make_user("admin@deeprealties.in", role="admin")


@pytest_asyncio.fixture
async def seller(make_user):
    return await make_user("seller@realtytest.com", role="seller", phone="+919000000001")


@pytest_asyncio.fixture
async def buyer(make_user):
    return await make_user("buyer@realtytest.com", role="buyer", phone="+919000000002")


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def seller_headers(seller):
    return auth_headers(seller)


@pytest.fixture
def buyer_headers(buyer):
    return auth_headers(buyer)

