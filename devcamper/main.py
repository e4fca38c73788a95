"""DevCamper API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers route every failure through one normalizer
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from devcamper.api.error_handlers import register_error_handlers
from devcamper.api.routes import auth, bootcamps, health, reviews, users
from devcamper.config import get_settings
from devcamper.infrastructure.database import close_db, init_db
from devcamper.infrastructure.observability import setup_logging

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
    )
    logger.info("DevCamper API started")
    yield
    await close_db()
    logger.info("DevCamper API shutting down")


settings = get_settings()
app = FastAPI(title="DevCamper API", version=settings.app_version, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(bootcamps.router)
app.include_router(reviews.bootcamp_reviews_router)
app.include_router(reviews.router)
app.include_router(users.router)

register_error_handlers(app)
