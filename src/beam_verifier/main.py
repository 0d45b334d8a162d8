"""
Main FastAPI application entry point.

This module creates the FastAPI application using the application factory
pattern and installs the Beam signature gate.

Run with:
    SORACOM_BEAM_SHARED_SECRET=... SERVER_PORT=8080 python -m beam_verifier.main
"""

from beam_verifier.app_setup import add_root_endpoint, setup_app
from beam_verifier.application import create_app
from beam_verifier.config import get_settings
from beam_verifier.core.logging import intercept_standard_logging

# Intercept logs from uvicorn and other libraries
intercept_standard_logging()

# Create FastAPI application using factory
app = create_app()

# Install signature verification
setup_app(app)

# Add root endpoint
add_root_endpoint(app)


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "beam_verifier.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="info" if settings.debug else "warning",
    )
