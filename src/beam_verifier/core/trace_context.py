"""Per-request trace id shared by TraceIDMiddleware and the log filter."""

import contextvars

# None outside a request; the log filter renders it as "N/A"
trace_id_context: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "beam_verifier_trace_id", default=None
)
