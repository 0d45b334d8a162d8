"""
Request middleware.

- TraceIDMiddleware: outer layer, tags every request with a trace id
- BeamSignatureMiddleware: inner layer, rejects requests without a valid
  Beam signature
"""

from beam_verifier.middleware.beam_signature import BeamSignatureMiddleware
from beam_verifier.middleware.trace_id import TraceIDMiddleware

__all__ = ["TraceIDMiddleware", "BeamSignatureMiddleware"]
