from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from libs.auth.models import Role
from libs.auth.tokens import issue_tokens
from libs.db.base import Base
from libs.db.session import get_async_db

# Register every table on Base.metadata
import services.accounts_service.models  # noqa: F401
import services.store_service.models  # noqa: F401

from tests.factories import UserFactory


@pytest_asyncio.fixture
async def test_engine():
    """
    A fresh in-memory database per test.

    StaticPool keeps a single connection open so every session sees the same
    in-memory database.
    """
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
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(
        bind=test_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the gateway app, sharing the test session."""
    from services.gateway_service.app.main import app

    app.dependency_overrides[get_async_db] = lambda: db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def create_user(db_session: AsyncSession, role: Role = Role.B2C, **overrides):
    user = UserFactory.create(role=role, **overrides)
    db_session.add(user)
    await db_session.commit()
    return user


def auth_headers(user) -> dict[str, str]:
    tokens = issue_tokens(user_id=user.id, email=user.email, role=user.role.value)
    return {"Authorization": f"Bearer {tokens.access_token}"}


@pytest_asyncio.fixture
async def customer(db_session):
    return await create_user(db_session, Role.B2C)


@pytest_asyncio.fixture
async def business(db_session):
    return await create_user(db_session, Role.B2B, company_name="Corner Bakery")


@pytest_asyncio.fixture
async def admin(db_session):
    return await create_user(
        db_session, Role.ADMIN, email="ops@naturalfoodsinc.com"
    )
