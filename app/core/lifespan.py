"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (logging, local
media root, DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.shared.telemetry import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging, local media root. Shutdown: SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    setup_logging()
    Path(settings.storage_root).mkdir(parents=True, exist_ok=True)
    if settings.primary_store_enabled:
        logger.info("Primary store: bucket %s", settings.s3_bucket)
    else:
        logger.warning(
            "S3_BUCKET not set; images will be stored on the local fallback tier only"
        )

    yield

    # ---- Shutdown ----
    from app.infrastructure.persistence import database

    await database.dispose_engine()
    logger.info("Database engine disposed")
