"""
Pytest configuration and shared fixtures

Every test gets its own SQLite database file; the app's get_db dependency
is pointed at it for HTTP tests.
"""
import os

# Set before the app and database modules are imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_trade_ledger.db")
os.environ.setdefault("API_SECRET_KEY", "test-secret-key")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from database import Base, get_db
from database.models import User

API_KEY = os.environ["API_SECRET_KEY"]


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """Create tables in a fresh database and dispose of it afterwards."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Provide a database session for each test."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def sample_user(session_factory):
    """Create a sample user for testing."""
    async with session_factory() as session:
        user = User(telegram_id="123456789")
        session.add(user)
        await session.commit()
        return user


@pytest_asyncio.fixture
async def client(session_factory):
    """HTTP client against the real app, authenticated with the test key."""
    from main import app

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test", headers={"X-API-Key": API_KEY}
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
