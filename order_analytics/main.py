"""
FastAPI Production Application

Main entry point for the Order Analytics API.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
import structlog

from order_analytics.config.logging import configure_logging
from order_analytics.database.connection import init_database, close_database
from order_analytics.serving.api import create_api_app

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    configure_logging()
    logger.info("Starting Order Analytics API")

    try:
        await init_database()
    except Exception as e:
        # Serve anyway; health checks report the database as unavailable
        logger.warning("Database init failed", error=str(e))

    yield

    logger.info("Shutting down...")
    await close_database()


app = create_api_app(lifespan=lifespan)


if __name__ == "__main__":
    import uvicorn
    from order_analytics.config import get_settings

    settings = get_settings()
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
