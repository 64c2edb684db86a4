"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from utility_dashboard.api.routes import electricity, health, meters, water
from utility_dashboard.core.config import settings
from utility_dashboard.core.database import Base, engine
from utility_dashboard.core.logging import configure_logging

# Import models for Base.metadata.create_all
from utility_dashboard.models import meter  # noqa: F401

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    configure_logging()
    # Startup: Create database tables
    Base.metadata.create_all(bind=engine)
    log.info("%s %s started", settings.PROJECT_NAME, settings.VERSION)
    yield
    # Shutdown: cleanup if needed


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Electricity and water consumption dashboard API",
    lifespan=lifespan,
)

# Include API routers
app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(meters.router, prefix="/api")
app.include_router(electricity.router, prefix="/api")
app.include_router(water.router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "utility_dashboard.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
