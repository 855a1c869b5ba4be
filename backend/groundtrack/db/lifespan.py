import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from groundtrack.db.database import database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Context manager for FastAPI startup and shutdown logic."""
    logger.info("Application startup sequence initiated...")

    logger.info("Database initialization sequence...")
    await database.connect()
    app.state.database = database

    logger.info("Application startup complete.")

    yield

    logger.info("Closing database connection...")
    await database.disconnect()
    logger.info("Application shutdown complete.")
