"""
Pytest configuration and fixtures for library catalog tests.
"""

import sys
from datetime import date
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from libcatalog.api.main import create_app
from libcatalog.api.dependencies import Settings, get_db
from libcatalog.schemas import BookRequest
from libcatalog.storage.base import Book
from libcatalog.storage.models import Base
from tests.fakes import TickingClock


# =============================================================================
# Test Settings
# =============================================================================

def get_test_settings() -> Settings:
    """Return settings configured for testing."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        database_echo=False,
        api_prefix="/api",
        seed_on_startup=False,
        environment="test",
        debug=True,
    )


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture(scope="function")
async def async_engine():
    """Create an in-memory database shared by every session in the test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def session_factory(async_engine) -> async_sessionmaker:
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture(scope="function")
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Provide database session for tests."""
    async with session_factory() as session:
        yield session


# =============================================================================
# Application Fixtures
# =============================================================================

@pytest_asyncio.fixture(scope="function")
async def app(session_factory):
    """Create FastAPI application wired to the test database."""
    application = create_app(get_test_settings())

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db] = override_get_db

    yield application

    application.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API tests."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# =============================================================================
# Data Fixtures
# =============================================================================

@pytest.fixture
def clock() -> TickingClock:
    """Deterministic clock advancing one second per reading."""
    return TickingClock()


@pytest.fixture
def sample_book_data() -> dict:
    """Sample book payload as a client would send it."""
    return {
        "title": "The Left Hand of Darkness",
        "author": "Ursula K. Le Guin",
        "isbn": "9780441478125",
        "publisher": "Ace Books",
        "publish_date": "1969-03-01",
        "description": "An envoy visits a world whose people have no fixed sex.",
        "copies": 4,
    }


@pytest.fixture
def sample_request(sample_book_data) -> BookRequest:
    return BookRequest(**sample_book_data)


@pytest.fixture
def sample_book() -> Book:
    """Sample entity without identity or timestamps."""
    return Book(
        title="Dune",
        author="Frank Herbert",
        isbn="9780441172719",
        publisher="Chilton Books",
        publish_date=date(1965, 8, 1),
        description="A desert planet, a noble family and a spice.",
        copies=3,
    )
