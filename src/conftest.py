from contextlib import asynccontextmanager

import jwt
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.auth.session import SessionUser
from src.config.settings import settings
from src.events.repository import orm_models  # noqa: F401 registers tables on the metadata
from src.main import app
from src.models.base import BaseModel

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
def client_factory():
    """Build a test client with the given dependency overrides."""

    @asynccontextmanager
    async def factory(overrides: dict | None = None):
        for dependency, override in (overrides or {}).items():
            app.dependency_overrides[dependency] = override
        transport = ASGITransport(app=app)
        try:
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                yield client
        finally:
            app.dependency_overrides.clear()

    return factory


@pytest.fixture
async def client(client_factory):
    """Create a test client without overrides."""
    async with client_factory() as ac:
        yield ac


@pytest.fixture
async def sqlite_session_maker():
    """Session maker bound to a fresh in-memory SQLite database."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    yield async_sessionmaker(engine, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_user() -> SessionUser:
    return SessionUser(user_id="user-1", name="Ada Lovelace", email="ada@example.com")


@pytest.fixture
def other_user() -> SessionUser:
    return SessionUser(user_id="user-2", name="Grace Hopper", email="grace@example.com")


def make_session_token(user: SessionUser, secret_key: str = settings.secret_key) -> str:
    claims = {"sub": user.user_id, "name": user.name, "email": user.email}
    return jwt.encode(claims, secret_key, algorithm=settings.algorithm)


@pytest.fixture
def auth_headers(session_user):
    """Authorization header carrying a valid session token for session_user."""
    return {"Authorization": f"Bearer {make_session_token(session_user)}"}


@pytest.fixture
def other_auth_headers(other_user):
    return {"Authorization": f"Bearer {make_session_token(other_user)}"}
