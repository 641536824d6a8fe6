"""Museum Catalog API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map MuseumError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - The container is built on startup and closed on shutdown via lifespan
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from museum.api.error_handlers import register_error_handlers
from museum.api.routes import health, objects
from museum.config import get_settings
from museum.container import build_container
from museum.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    container = build_container(settings)
    app.state.container = container
    if settings.prefetch_on_startup:
        container.repository.initialize(container.scope)
    logger.info("Museum API started")
    yield
    logger.info("Museum API shutting down")
    await container.close()


app = FastAPI(
    title="Museum Catalog API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(objects.router)

register_error_handlers(app)
