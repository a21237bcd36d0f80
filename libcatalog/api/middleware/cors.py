"""
Cross-origin access to the catalog API.

Browsers calling the catalog from another origin need the book verbs
allowed and ``Location`` exposed, since that header is how a client learns
the id of a book it just created.
"""

import os
from dataclasses import dataclass, field, replace
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

CATALOG_METHODS = ("GET", "POST", "PUT", "DELETE", "OPTIONS")
CATALOG_HEADERS = ("Accept", "Content-Type", "X-Request-ID")
EXPOSED_HEADERS = ("Location", "X-Request-ID")

LOCAL_FRONTENDS = (
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
)


@dataclass
class CORSConfig:
    """Origins allowed to call the API, and how long preflights are cached."""

    allowed_origins: list = field(default_factory=list)
    allow_all_origins: bool = False
    allow_credentials: bool = True
    max_age: int = 3600


CORS_CONFIGS = {
    "development": CORSConfig(allowed_origins=list(LOCAL_FRONTENDS), allow_all_origins=True),
    "test": CORSConfig(allow_all_origins=True),
    "production": CORSConfig(max_age=7200),
}


def get_cors_config(environment: Optional[str] = None) -> CORSConfig:
    """
    CORS settings for an environment.

    Unknown environments get the development settings. Origins listed in
    ``CORS_ALLOWED_ORIGINS`` (comma separated) are appended; the shared
    per-environment defaults are never modified.
    """
    environment = environment or os.getenv("LIBCATALOG_ENV", "development")
    base = CORS_CONFIGS.get(environment, CORS_CONFIGS["development"])

    extra = [o.strip() for o in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",") if o.strip()]
    return replace(base, allowed_origins=[*base.allowed_origins, *extra])


def setup_cors(app: FastAPI, config: Optional[CORSConfig] = None) -> None:
    config = config or get_cors_config()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if config.allow_all_origins else config.allowed_origins,
        # Credentials cannot be combined with a wildcard origin
        allow_credentials=config.allow_credentials and not config.allow_all_origins,
        allow_methods=list(CATALOG_METHODS),
        allow_headers=list(CATALOG_HEADERS),
        expose_headers=list(EXPOSED_HEADERS),
        max_age=config.max_age,
    )
