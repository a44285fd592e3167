"""Folio API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map FolioError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Services container built on startup, database disposed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Services live on app.state: handlers reach them through get_services,
      tests replace them with an in-memory build
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from folio.api.error_handlers import register_error_handlers
from folio.api.routes import (
    contents, devices, emails, events, health, metrics, organizations,
    tokens, tuids, users,
)
from folio.config import get_settings
from folio.infrastructure.database import DatabaseSessionManager
from folio.infrastructure.observability import setup_logging
from folio.services.registry import build_services

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format, settings.service_name)
    db = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    app.state.services = build_services(db, settings)
    logger.info(f"{settings.service_name} {settings.service_version} started")
    yield
    logger.info(f"{settings.service_name} shutting down")
    await db.dispose()


settings = get_settings()

app = FastAPI(
    title="Folio API", version=settings.service_version, lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Location"],
)

register_error_handlers(app)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(tuids.router)
app.include_router(contents.router)
app.include_router(organizations.router)
app.include_router(users.router)
app.include_router(emails.router)
app.include_router(devices.router)
app.include_router(tokens.router)
app.include_router(metrics.router)
app.include_router(events.router)
