"""Student Roster API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery, ExMA anti-pattern)
    - Global error handlers map every failure to the ErrorResponse shape
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - RawBodyCaptureMiddleware added last so it runs first: the body is classified
      before any other layer can consume it
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from roster.api.error_handlers import register_error_handlers
from roster.api.raw_body import RawBodyCaptureMiddleware
from roster.api.routes import admin_students, health, students
from roster.config import get_settings
from roster.infrastructure import database
from roster.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Student Roster API started")
    yield
    logger.info("Student Roster API shutting down")
    if database.db_manager:
        await database.db_manager.dispose()


app = FastAPI(
    title="Student Roster API", version="1.0.0", lifespan=lifespan,
)

# CORS: configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RawBodyCaptureMiddleware)

register_error_handlers(app)

# Routes: explicit registration (ExMA: no convention-over-config)
app.include_router(health.router)
app.include_router(students.router)
app.include_router(admin_students.router)
