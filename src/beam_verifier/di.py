"""
Dependency injection for beam_verifier.

Centralizes FastAPI dependencies using typing.Annotated. app_setup uses
get_signature_verifier to build the gate; route handlers receive the
device it verified through BeamDeviceDep.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from beam_verifier.beam.signature import DeviceIdentity
from beam_verifier.beam.verifier import BeamSignatureVerifier
from beam_verifier.config import Settings, get_settings, load_shared_secret
from beam_verifier.models.errors import CLIENT_ERROR_DETAIL

# ============================================================================
# Settings Dependencies
# ============================================================================

SettingsDep = Annotated[Settings, Depends(get_settings)]
"""Injected Settings instance (cached via lru_cache)."""

# ============================================================================
# Verification Dependencies
# ============================================================================

def get_signature_verifier() -> BeamSignatureVerifier:
    """
    Get the Beam signature verifier.

    The verifier holds no per-request state; the shared secret is read
    from the environment on every verification.

    Returns:
        BeamSignatureVerifier
    """
    return BeamSignatureVerifier(secret_provider=load_shared_secret)


def get_beam_device(request: Request) -> DeviceIdentity:
    """
    Get the device identity verified by BeamSignatureMiddleware.

    Args:
        request: Current request

    Returns:
        Verified device identity

    Raises:
        HTTPException: 400 if the request did not pass signature verification
    """
    device = getattr(request.state, "beam_device", None)
    if device is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=CLIENT_ERROR_DETAIL
        )
    return device

BeamDeviceDep = Annotated[DeviceIdentity, Depends(get_beam_device)]
"""Injected verified device identity."""
