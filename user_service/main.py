"""User Records API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to the {success, result} envelope
    - Record store built on startup, held on app.state, disposed on shutdown
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from user_service.api.error_handlers import register_error_handlers
from user_service.api.routes import health, users
from user_service.config import get_settings
from user_service.infrastructure.observability import setup_logging
from user_service.infrastructure.record_store import create_record_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.record_store = create_record_store(settings)
    logger.info("User Records API started")
    yield
    logger.info("User Records API shutting down")
    await app.state.record_store.dispose()


app = FastAPI(title="User Records API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)

register_error_handlers(app)
