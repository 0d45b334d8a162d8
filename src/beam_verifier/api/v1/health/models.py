"""Health check response models."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Verifier health. Served without signature verification."""

    status: Literal["ok", "degraded"] = Field(
        ..., description='"degraded" while no shared secret is configured'
    )
    service: str = Field(..., description="Project name")
    version: str = Field(..., description="beam_verifier version")
    shared_secret_configured: bool = Field(
        ...,
        description=(
            "SORACOM_BEAM_SHARED_SECRET is set; "
            "protected requests are answered with 500 otherwise"
        ),
    )
    signature_versions: list[str] = Field(
        ..., description="Accepted X-SORACOM-SIGNATURE-VERSION values"
    )
