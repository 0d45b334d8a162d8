"""
Application setup utilities.

Provides common setup functions for both main.py and lambda_main.py
to avoid code duplication.
"""

from fastapi import FastAPI

from beam_verifier import __version__
from beam_verifier.config import get_settings
from beam_verifier.di import get_signature_verifier
from beam_verifier.middleware import BeamSignatureMiddleware, TraceIDMiddleware


def setup_app(app: FastAPI) -> None:
    """
    Install request middleware on the application.

    The middleware added last runs first. TraceIDMiddleware therefore wraps
    the Beam signature gate, so rejected requests also get an X-Trace-ID
    header and the gate's logs carry the trace id.

    Args:
        app: FastAPI application instance to configure
    """
    settings = get_settings()

    # Inner layer: only verified requests reach the routes
    app.add_middleware(
        BeamSignatureMiddleware,
        verifier=get_signature_verifier(),
        exempt_paths=settings.get_beam_exempt_paths(),
    )

    # Outer layer: trace id for every request, accepted or not
    app.add_middleware(TraceIDMiddleware)


def add_root_endpoint(app: FastAPI) -> None:
    """
    Add root endpoint to the application.

    Args:
        app: FastAPI application instance
    """
    settings = get_settings()

    @app.get("/")
    async def root() -> dict[str, str | None]:
        """Root endpoint with API information."""
        return {
            "message": settings.project_name,
            "version": __version__,
            "docs": "/docs" if settings.enable_docs else None,
        }
