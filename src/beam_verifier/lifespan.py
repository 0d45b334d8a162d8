"""
Application lifecycle management.

Handles startup and shutdown events for the FastAPI application.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from beam_verifier.config import load_shared_secret


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Warns at startup when no shared secret is configured. This is only a
    hint: the secret is read again on every request, so it may still be
    provided later.

    Args:
        app: FastAPI application instance
    """
    logger.info(" Starting beam verifier...")
    logger.info(f"Application version: {app.version}")

    if not load_shared_secret():
        logger.warning(
            "SORACOM_BEAM_SHARED_SECRET is not set; "
            "protected requests will be rejected until it is configured"
        )

    yield

    logger.info(" Shutting down beam verifier...")
