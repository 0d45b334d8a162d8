"""
Trace id middleware.

Outermost layer of the request stack. Every request, including those the
Beam signature gate rejects, gets a trace id in its logs and in the
X-Trace-ID response header.
"""

import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from beam_verifier.core.logging import logger
from beam_verifier.core.trace_context import trace_id_context

TRACE_ID_HEADER = "X-Trace-ID"


def _describe_device(request: Request) -> str:
    device = getattr(request.state, "beam_device", None)
    if device is None:
        return "unverified"
    return f"{device.device_type} {device.device_id}"


class TraceIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that tags each request with a trace id.

    Flow:
    1. Request arrives, a UUID4 trace id is stored in trace_id_context
    2. Inner layers (signature gate, routes) log with that trace id
    3. Response leaves with the X-Trace-ID header
    4. The previous context value is restored
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Run the rest of the stack under a fresh trace id.

        Args:
            request: HTTP request
            call_next: Signature gate or route handler

        Returns:
            Response with X-Trace-ID header
        """
        trace_id = str(uuid.uuid4())
        token = trace_id_context.set(trace_id)

        logger.info(f"Request started: {request.method} {request.url.path}")

        try:
            response = await call_next(request)

            # Rejected responses carry it too
            response.headers[TRACE_ID_HEADER] = trace_id

            # The gate has run by now, so the verified device is known
            logger.info(
                f"Request completed: {request.method} {request.url.path} "
                f"- Status: {response.status_code} - Device: {_describe_device(request)}"
            )
            return response

        except Exception:
            logger.exception(f"Request failed: {request.method} {request.url.path}")
            raise

        finally:
            trace_id_context.reset(token)
