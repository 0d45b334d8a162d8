"""
FastAPI application factory.

create_app builds the routed application with its RFC 7807 exception
handlers and OpenAPI document. Request middleware (Beam signature gate and
trace id) is layered on top by app_setup.setup_app, in the order the
entry points need.
"""

from fastapi import FastAPI

from beam_verifier import __version__
from beam_verifier.config import Settings, get_settings
from beam_verifier.core.logging import logger
from beam_verifier.exception_handlers import EXCEPTION_HANDLERS
from beam_verifier.lifespan import lifespan
from beam_verifier.openapi import configure_openapi
from beam_verifier.routes import register_routes


def _docs_urls(settings: Settings) -> dict[str, str | None]:
    """Docs, ReDoc and schema URLs; all None when docs are disabled."""
    if not settings.enable_docs:
        return {"docs_url": None, "redoc_url": None, "openapi_url": None}
    return {"docs_url": "/docs", "redoc_url": "/redoc", "openapi_url": "/openapi.json"}


def create_app() -> FastAPI:
    """
    Create the routed FastAPI application.

    Returns:
        FastAPI application without request middleware
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.project_name,
        description=settings.project_description,
        version=__version__,
        lifespan=lifespan,
        **_docs_urls(settings),
    )

    for exc_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exc_class, handler)

    register_routes(app)
    configure_openapi(app)

    logger.info(
        f" {settings.project_name} v{__version__} created "
        f"(docs {'enabled' if settings.enable_docs else 'disabled'})"
    )

    return app
