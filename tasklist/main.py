"""Task List API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TaskListError → structured JSON responses
    - Every response carries wildcard CORS headers; OPTIONS always answers 200
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Schema auto-creation is a setting: on for SQLite development, off when Alembic owns it

Run with: uvicorn tasklist.main:app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from tasklist.api.error_handlers import register_error_handlers
from tasklist.api.middleware import register_middleware
from tasklist.api.routes import auth, health, tasks
from tasklist.config import get_settings
from tasklist.infrastructure.database import init_db
from tasklist.infrastructure.observability import setup_logging

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
    if settings.database_create_schema:
        await manager.create_schema()
    logger.info("Task list API started")
    yield
    logger.info("Task list API shutting down")
    await manager.dispose()


app = FastAPI(title="Task List API", version="1.0.0", lifespan=lifespan)

register_middleware(app)
register_error_handlers(app)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(tasks.router)
