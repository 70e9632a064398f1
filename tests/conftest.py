"""Pytest configuration and fixtures for Task API tests"""

import os

# Settings and the engine are built at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key-with-at-least-32-characters"
os.environ["ENVIRONMENT"] = "development"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"
os.environ["AUTH_STRATEGY"] = "auto"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from taskapi.auth.dependencies import get_token_codec
from taskapi.auth.password import generate_api_key, hash_password
from taskapi.database import get_db
from taskapi.main import app
from taskapi.models import Base, Task, User


# ==================== Database Fixtures ====================


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Create an in-memory SQLite engine shared by every connection of one test"""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    """Session factory bound to the test engine"""
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a database session for arranging and inspecting test data"""
    async with session_factory() as session:
        yield session


# ==================== Test Client Fixtures ====================


@pytest_asyncio.fixture
async def client(session_factory):
    """Create an async test client; each request gets its own session"""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ==================== Sample Data Fixtures ====================


async def create_user(session: AsyncSession, name: str, username: str, password: str = "SecurePass123!") -> User:
    """Insert a user directly, bypassing the registration endpoint"""
    user = User(
        name=name,
        username=username,
        password_hash=hash_password(password),
        api_key=generate_api_key(),
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def alice(db_session) -> User:
    """Primary test user"""
    return await create_user(db_session, "Alice", "alice")


@pytest_asyncio.fixture
async def bob(db_session) -> User:
    """Second user, owner of tasks Alice must not see"""
    return await create_user(db_session, "Bob", "bob")


@pytest.fixture
def alice_headers(alice) -> dict:
    """API key headers for Alice"""
    return {"X-API-Key": alice.api_key}


@pytest.fixture
def bob_headers(bob) -> dict:
    """API key headers for Bob"""
    return {"X-API-Key": bob.api_key}


@pytest.fixture
def alice_token(alice) -> str:
    """Access token for Alice signed with the application codec"""
    return get_token_codec().issue_access_token(alice.id, alice.name)


@pytest_asyncio.fixture
async def bob_task(db_session, bob) -> Task:
    """A task owned by Bob"""
    task = Task(name="Bob's secret task", priority=1, is_completed=False, user_id=bob.id)
    db_session.add(task)
    await db_session.commit()
    await db_session.refresh(task)
    return task


@pytest.fixture
def sample_task_data():
    """Sample task payload"""
    return {
        "name": "Buy milk",
        "priority": 2,
        "is_completed": False,
    }
