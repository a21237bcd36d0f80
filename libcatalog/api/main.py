"""
Library Catalog API application.

``create_app`` assembles the HTTP surface; the module-level ``app`` is what
uvicorn serves, and ``main`` is the ``libcatalog`` console script.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from dotenv import load_dotenv

# .env must be read before settings are first loaded
load_dotenv()

from fastapi import FastAPI

from libcatalog import __version__
from libcatalog.errors import StorageError
from libcatalog.storage.seed import seed_books
from .schemas import HealthResponse
from .routes import books
from .middleware import (
    setup_cors,
    setup_logging,
    setup_exception_handlers,
    LoggingConfig,
    get_cors_config,
)
from .dependencies import (
    get_settings,
    get_session_factory,
    init_database,
    create_tables,
    check_database,
    dispose_database,
    Settings,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def run_seed() -> int:
    """Load the reference books. A failure is logged and startup continues."""
    async with get_session_factory()() as session:
        try:
            inserted = await seed_books(session)
        except StorageError as e:
            logger.error(f"Seeding reference books failed, starting without them: {e}")
            return 0

    if inserted:
        logger.info(f"Catalog seeded with {inserted} reference books")
    return inserted


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the database before the first request and release it after the last.

    Startup creates the ``books`` table if it is missing and, unless
    ``seed_on_startup`` is off, fills an empty catalog with reference books.
    """
    settings: Settings = app.state.settings
    logger.info(f"Library catalog starting ({settings.environment}) on {settings.database_url.split('://')[0]}")

    init_database(settings)
    try:
        await create_tables()
        if settings.seed_on_startup:
            await run_seed()
        yield
    finally:
        await dispose_database()
        logger.info("Library catalog stopped, database connections closed")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the catalog application.

    Args:
        settings: Explicit settings, e.g. from tests. Defaults to the
            environment-derived ``get_settings()``.
    """
    settings = settings or get_settings()
    docs_enabled = settings.debug

    app = FastAPI(
        title="Library Catalog",
        description="Create, list, fetch, replace and delete books.",
        version=__version__,
        docs_url="/docs" if docs_enabled else None,
        redoc_url=None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Middleware added last runs first: access logging wraps CORS
    setup_exception_handlers(app)
    setup_cors(app, config=get_cors_config(settings.environment))
    setup_logging(
        app,
        config=LoggingConfig(log_request_body=settings.debug),
        structured=settings.environment != "development",
    )

    app.include_router(books.router, prefix=settings.api_prefix)

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "name": "Library Catalog",
            "version": __version__,
            "books": f"{settings.api_prefix}{books.router.prefix}",
            "docs": "/docs" if docs_enabled else None,
        }

    @app.get("/health", response_model=HealthResponse, tags=["System"])
    async def health_check() -> HealthResponse:
        """Report whether the catalog database answers."""
        database_up = await check_database()
        return HealthResponse(
            status="healthy" if database_up else "degraded",
            version=__version__,
            components={"database": "healthy" if database_up else "unavailable"},
        )

    return app


app = create_app()


def main():
    """Serve the catalog with uvicorn."""
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "libcatalog.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
