"""
SORACOM Beam signature gate.

Every request that is not on an exempt path must carry a valid Beam
signature. Valid requests are passed on untouched; invalid ones never
reach the route handler.

Response mapping:
- Shared secret not configured -> 500, generic message
- Any other failure            -> 400, generic message

The specific failure kind is logged but never returned to the client.
"""

from collections.abc import Callable, Iterable
from typing import Any

from fastapi import Request, Response, status
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from beam_verifier.beam.verifier import BeamSignatureVerifier, VerificationOutcome
from beam_verifier.models.errors import (
    CLIENT_ERROR_DETAIL,
    SERVER_ERROR_DETAIL,
    ProblemDetail,
)

FailureHook = Callable[[VerificationOutcome, Request], None]


class BeamSignatureMiddleware(BaseHTTPMiddleware):
    """
    Middleware to verify SORACOM Beam signatures.

    Attributes:
        verifier: Signature verifier (reads the shared secret per request)
        exempt_paths: URL paths that bypass verification
        on_failure: Optional callback invoked with each failure outcome
    """

    def __init__(
        self,
        app: Any,
        verifier: BeamSignatureVerifier | None = None,
        exempt_paths: Iterable[str] = (),
        on_failure: FailureHook | None = None,
    ):
        """
        Initialize Beam signature middleware.

        Args:
            app: ASGI application
            verifier: Verifier to use, defaults to one reading the environment
            exempt_paths: Exact paths that skip verification
            on_failure: Callback for rejected requests (observability only)
        """
        super().__init__(app)
        self.verifier = verifier or BeamSignatureVerifier()
        self.exempt_paths = set(exempt_paths)
        self.on_failure = on_failure

        logger.info(
            f"Initialized BeamSignatureMiddleware (exempt: {sorted(self.exempt_paths)})"
        )

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Verify the request signature before handing it on.

        Args:
            request: Incoming HTTP request
            call_next: Next middleware/handler in chain

        Returns:
            Response from next handler or 400/500 error
        """
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        result = self.verifier.verify_request(request.headers)

        if not result.is_valid:
            return self._reject(request, result.outcome)

        request.state.beam_device = result.identity

        logger.debug(
            f"Beam signature verified: type={result.identity.device_type}, "
            f"device={result.identity.device_id}"
        )

        return await call_next(request)

    def _reject(self, request: Request, outcome: VerificationOutcome) -> JSONResponse:
        """
        Build the rejection response for a failed verification.

        Args:
            request: Rejected request
            outcome: Failure kind

        Returns:
            JSONResponse with a generic ProblemDetail body
        """
        if outcome.is_server_error:
            logger.error(
                f"Beam signature verification unavailable: {outcome.description}"
            )
            problem = ProblemDetail.for_status(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=SERVER_ERROR_DETAIL,
                instance=request.url.path,
            )
        else:
            logger.warning(
                f"Beam signature verification failed: {outcome.value} "
                f"({outcome.description}) for {request.method} {request.url.path}"
            )
            problem = ProblemDetail.for_status(
                status.HTTP_400_BAD_REQUEST,
                detail=CLIENT_ERROR_DETAIL,
                instance=request.url.path,
            )

        if self.on_failure is not None:
            try:
                self.on_failure(outcome, request)
            except Exception:
                # The hook must not change the response
                logger.exception(f"Beam on_failure hook raised for {outcome.value}")

        return problem.to_response()
