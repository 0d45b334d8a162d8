"""
Beam endpoint.

Receives requests forwarded by SORACOM Beam. Only requests that passed
BeamSignatureMiddleware reach these handlers.
"""

from fastapi import APIRouter
from loguru import logger

from beam_verifier.api.v1.beam.models import BeamReceipt
from beam_verifier.di import BeamDeviceDep

router = APIRouter()


@router.api_route("", methods=["GET", "POST", "PUT"], response_model=BeamReceipt)
async def receive(device: BeamDeviceDep) -> BeamReceipt:
    """
    Acknowledge a verified Beam request.

    Args:
        device: Device identity verified from the signature headers

    Returns:
        Receipt naming the verified device
    """
    logger.info(f"Beam request accepted from {device.device_type} {device.device_id}")
    return BeamReceipt(device_type=device.device_type, device_id=device.device_id)
