"""Employee API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly, optionally under settings.api_prefix
    - Global error handlers (api/error_handlers.py) produce every failure body
    - CORS configured from settings
    - Logging and the database manager initialized on startup via lifespan
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from employee_api.api.error_handlers import register_error_handlers
from employee_api.api.routes import employees, health
from employee_api.config import get_settings
from employee_api.infrastructure.database import close_db, init_db
from employee_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        echo=settings.database_echo,
    )
    logger.info("Employee API started")
    yield
    await close_db()
    logger.info("Employee API shutting down")


settings = get_settings()

app = FastAPI(
    title="Employee API", version=settings.app_version, lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(employees.router, prefix=settings.api_prefix)

register_error_handlers(app)
