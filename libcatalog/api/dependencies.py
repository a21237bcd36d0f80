"""
Settings, database lifecycle and the per-request book service.

Handlers receive a BookService bound to a BookRepository bound to one
AsyncSession; the engine behind it lives for the application lifespan.
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import AsyncGenerator, Optional

from fastapi import Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from libcatalog.services.book_service import BookService, CatalogService
from libcatalog.storage.book_repository import BookRepository


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class Settings:
    """Catalog settings; every field can be overridden from the environment."""

    # Database
    database_url: str = "sqlite+aiosqlite:///./libcatalog.db"
    database_echo: bool = False

    # HTTP
    api_prefix: str = "/api"
    host: str = "0.0.0.0"
    port: int = 8000

    # Startup
    seed_on_startup: bool = True

    # Environment
    environment: str = "development"
    debug: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(
            database_url=os.getenv("DATABASE_URL", cls.database_url),
            database_echo=_env_flag("DATABASE_ECHO", "false"),
            api_prefix=os.getenv("API_PREFIX", cls.api_prefix).rstrip("/"),
            host=os.getenv("HOST", cls.host),
            port=int(os.getenv("PORT", cls.port)),
            seed_on_startup=_env_flag("SEED_ON_STARTUP", "true"),
            environment=os.getenv("LIBCATALOG_ENV", cls.environment),
            debug=_env_flag("DEBUG", "true"),
        )


@lru_cache()
def get_settings() -> Settings:
    """Settings from the environment, read once per process."""
    return Settings.from_env()


# =============================================================================
# Database
# =============================================================================

# Global engine and session factory (initialized in lifespan)
_engine: Optional[AsyncEngine] = None
_async_session_factory: Optional[async_sessionmaker] = None


def init_database(settings: Settings, **engine_kwargs) -> None:
    """Create the engine and session factory for the catalog database."""
    global _engine, _async_session_factory

    _engine = create_async_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_pre_ping=True,
        **engine_kwargs,
    )

    _async_session_factory = async_sessionmaker(
        _engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


def get_session_factory() -> async_sessionmaker:
    """Session factory for work outside a request (startup, scripts)."""
    if _async_session_factory is None:
        raise RuntimeError("Database not initialized. Call init_database first.")
    return _async_session_factory


async def dispose_database() -> None:
    """Close all pooled connections."""
    global _engine, _async_session_factory

    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _async_session_factory = None


async def create_tables() -> None:
    """Create the books table (and its index) if missing."""
    from libcatalog.storage.models import Base
    if _engine is None:
        raise RuntimeError("Database not initialized.")

    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def check_database() -> bool:
    """Run a trivial query to see whether the database answers."""
    if _engine is None:
        return False
    try:
        async with _engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    One session per request.

    Repositories commit their own writes; anything left open when the
    request fails is rolled back.

    Yields:
        AsyncSession for database operations.
    """
    session_factory = get_session_factory()

    async with session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


# =============================================================================
# Book Dependencies
# =============================================================================

def get_book_repository(
    db: AsyncSession = Depends(get_db),
) -> BookRepository:
    """BookRepository bound to the request session."""
    return BookRepository(db)


def get_book_service(
    repo: BookRepository = Depends(get_book_repository),
) -> CatalogService:
    """BookService over the request repository."""
    return BookService(repo)
