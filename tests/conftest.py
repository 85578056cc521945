"""
Pytest configuration and fixtures
Shared test setup for all test modules
"""

import pytest
from typing import AsyncGenerator
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from autevo.main import app
from autevo.core.rbac import Role
from autevo.core.tenant import RequestContext
from autevo.db import models  # noqa: F401
from autevo.db.base import Base
from autevo.db.database import get_db
from autevo.db.models.tenant import Tenant
from autevo.db.models.user import User

from factories import ctx_for, make_tenant, make_user

# In-memory database shared by every connection of one test
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def test_engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create clean database for each test"""
    session_factory = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ==================== Seed data ====================

@pytest.fixture
async def tenant_a(db_session: AsyncSession) -> Tenant:
    return await make_tenant(db_session, "Brilho Auto", "brilho-auto")


@pytest.fixture
async def tenant_b(db_session: AsyncSession) -> Tenant:
    return await make_tenant(db_session, "Estetica Norte", "estetica-norte")


@pytest.fixture
async def owner_a(db_session: AsyncSession, tenant_a: Tenant) -> User:
    return await make_user(db_session, "owner@brilho.com", Role.OWNER, tenant_a)


@pytest.fixture
async def manager_a(db_session: AsyncSession, tenant_a: Tenant) -> User:
    return await make_user(db_session, "manager@brilho.com", Role.MANAGER, tenant_a)


@pytest.fixture
async def member_a(db_session: AsyncSession, tenant_a: Tenant) -> User:
    return await make_user(db_session, "member@brilho.com", Role.MEMBER, tenant_a)


@pytest.fixture
async def owner_b(db_session: AsyncSession, tenant_b: Tenant) -> User:
    return await make_user(db_session, "owner@norte.com", Role.OWNER, tenant_b)


@pytest.fixture
async def platform_admin(db_session: AsyncSession) -> User:
    return await make_user(db_session, "admin@autevo.com", Role.PLATFORM_ADMIN)


@pytest.fixture
def owner_ctx(owner_a: User, tenant_a: Tenant) -> RequestContext:
    return ctx_for(owner_a, tenant_a)


@pytest.fixture
def member_ctx(member_a: User, tenant_a: Tenant) -> RequestContext:
    return ctx_for(member_a, tenant_a)


@pytest.fixture
def owner_b_ctx(owner_b: User, tenant_b: Tenant) -> RequestContext:
    return ctx_for(owner_b, tenant_b)


@pytest.fixture
def admin_ctx(platform_admin: User) -> RequestContext:
    return ctx_for(platform_admin)
