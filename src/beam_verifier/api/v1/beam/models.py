"""Beam endpoint response models."""

from pydantic import BaseModel, Field


class BeamReceipt(BaseModel):
    """Acknowledgement returned for a verified Beam request."""

    status: str = Field(default="valid", description="Verification status")
    device_type: str = Field(
        ..., description="Device connectivity (cellular, sigfox, lorawan, inventory)"
    )
    device_id: str = Field(..., description="IMSI or device ID from the relay headers")
