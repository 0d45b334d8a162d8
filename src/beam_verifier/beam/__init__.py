"""
SORACOM Beam signature verification.

Pure, synchronous building blocks used by the HTTP gate:
- signature: device identity variants and versioned digest algorithms
- verifier: header extraction, outcome taxonomy and verification
"""

from beam_verifier.beam.signature import (
    SIGNATURE_ALGORITHMS,
    SUPPORTED_SIGNATURE_VERSIONS,
    CellularIdentity,
    DeviceIdentity,
    InventoryIdentity,
    LoRaWANIdentity,
    SigfoxIdentity,
    UnsupportedSignatureVersionError,
    compute_signature_v20151001,
    resolve_device_identity,
    sign_headers,
)
from beam_verifier.beam.verifier import (
    BeamSignatureVerifier,
    SignatureRequest,
    VerificationOutcome,
    VerificationResult,
)

__all__ = [
    "SIGNATURE_ALGORITHMS",
    "SUPPORTED_SIGNATURE_VERSIONS",
    "BeamSignatureVerifier",
    "CellularIdentity",
    "DeviceIdentity",
    "InventoryIdentity",
    "LoRaWANIdentity",
    "SigfoxIdentity",
    "SignatureRequest",
    "UnsupportedSignatureVersionError",
    "VerificationOutcome",
    "VerificationResult",
    "compute_signature_v20151001",
    "resolve_device_identity",
    "sign_headers",
]
