"""Roster API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery, ExMA anti-pattern)
    - Global error handlers map RosterError → {"error", "detail"} JSON responses
    - CORS configured from settings (all origins by default)
    - Settings resolved at import: a missing DATABASE_URL aborts startup
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py (ADR: ExMA import fan-out < 10)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from roster_api.api.error_handlers import register_error_handlers
from roster_api.api.routes import attendance_history, health, users
from roster_api.config import get_settings
from roster_api.infrastructure.database import init_db
from roster_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Roster API started")
    yield
    await manager.dispose()
    logger.info("Roster API shutting down")


app = FastAPI(title="Roster API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(attendance_history.router)

register_error_handlers(app)
