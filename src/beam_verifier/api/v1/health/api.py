"""
Health check endpoint.

Exempt from the Beam signature gate (see BEAM_EXEMPT_PATHS), so load
balancers and operators can probe it without signing.
"""

from fastapi import APIRouter

from beam_verifier import __version__
from beam_verifier.api.v1.health.models import HealthResponse
from beam_verifier.beam.signature import SUPPORTED_SIGNATURE_VERSIONS
from beam_verifier.config import load_shared_secret
from beam_verifier.di import SettingsDep

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: SettingsDep) -> HealthResponse:
    """
    Report whether the verifier can accept Beam requests.

    The shared secret is checked on each call, like the gate does, so the
    status follows secret rotation. Always answers 200.

    Returns:
        Service status, version and signature configuration
    """
    secret_configured = bool(load_shared_secret())
    return HealthResponse(
        status="ok" if secret_configured else "degraded",
        service=settings.project_name,
        version=__version__,
        shared_secret_configured=secret_configured,
        signature_versions=sorted(SUPPORTED_SIGNATURE_VERSIONS),
    )
