"""
Routes registration for the FastAPI application.

Centralizes all router registrations for clean application setup.
"""

from fastapi import FastAPI

from beam_verifier.api.v1.beam.router import router as beam_router
from beam_verifier.api.v1.health.api import router as health_router


def register_routes(app: FastAPI) -> None:
    """
    Register all application routers.

    Args:
        app: FastAPI application instance
    """
    # Health check endpoints (no prefix, exempt from signature verification)
    app.include_router(health_router)

    # Beam endpoint (signature verified by BeamSignatureMiddleware)
    app.include_router(beam_router)
