"""Global exception handlers for standardized error responses.

Routing errors (404/405 for signed requests to unknown paths or methods)
and HTTPExceptions raised by dependencies are rendered as the same RFC 7807
body the Beam signature gate returns.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from beam_verifier.core.logging import logger
from beam_verifier.models.errors import SERVER_ERROR_DETAIL, ProblemDetail


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:  # noqa: ASYNC100
    """Handle HTTPException with RFC 7807 ProblemDetail response.

    Args:
        request: The FastAPI request object.
        exc: The HTTPException that was raised.

    Returns:
        JSONResponse with ProblemDetail body.
    """
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(f"HTTPException: {exc.status_code} - {exc.detail} ({request.url.path})")

    problem = ProblemDetail.for_status(
        exc.status_code, detail=str(exc.detail), instance=str(request.url.path)
    )
    return problem.to_response(headers=exc.headers)


async def general_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:  # noqa: ASYNC100
    """Handle unexpected exceptions with 500 Internal Server Error.

    The exception text is logged only; the body is generic.
    """
    logger.exception(
        f"Unexpected error: {type(exc).__name__} on {request.method} {request.url.path}"
    )

    problem = ProblemDetail.for_status(
        500, detail=SERVER_ERROR_DETAIL, instance=str(request.url.path)
    )
    return problem.to_response()


EXCEPTION_HANDLERS = {
    StarletteHTTPException: http_exception_handler,
    Exception: general_exception_handler,
}
