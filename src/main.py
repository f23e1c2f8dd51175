"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from src.api.health import router as health_router
from src.api.preview import router as preview_router
from src.config import settings
from src.core.logging import get_logger, setup_logging

setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    if settings.CHECK_RNG_SEED is not None:
        logger.info("Dice checks seeded with %d", settings.CHECK_RNG_SEED)
    logger.info("Preview service ready.")

    yield

    logger.info("Shutting down...")


app = FastAPI(title="Narrative State Preview", debug=settings.DEBUG, lifespan=lifespan)

app.include_router(health_router)
app.include_router(preview_router)
