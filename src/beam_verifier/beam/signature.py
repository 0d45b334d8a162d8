"""
SORACOM Beam signature computation.

Beam signs each forwarded request with a SHA-256 digest over a canonical
string built from the shared secret, the device identity headers and the
timestamp header.

Algorithms are versioned by the X-SORACOM-SIGNATURE-VERSION tag. A new
version is added as a sibling function registered in SIGNATURE_ALGORITHMS;
existing versions must never change, otherwise already deployed signers
stop verifying.
"""

import hashlib
from collections.abc import Callable, Mapping
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from beam_verifier.beam.constants import (
    DEVICE_ID_HEADER,
    DEVICE_ID_KEY,
    IMEI_HEADER,
    IMEI_KEY,
    IMSI_HEADER,
    IMSI_KEY,
    LORA_DEVICE_ID_HEADER,
    LORA_DEVICE_ID_KEY,
    SIGFOX_DEVICE_ID_HEADER,
    SIGFOX_DEVICE_ID_KEY,
    SIGNATURE_HEADER,
    SIGNATURE_VERSION_20151001,
    SIGNATURE_VERSION_HEADER,
    TIMESTAMP_HEADER,
    TIMESTAMP_KEY,
)


class UnsupportedSignatureVersionError(ValueError):
    """Raised when signing with a version that has no registered algorithm."""


# ============================================================================
# DEVICE IDENTITY
# ============================================================================


class CellularIdentity(BaseModel):
    """Cellular device, identified by IMSI with an optional IMEI."""

    model_config = ConfigDict(frozen=True)

    device_type: Literal["cellular"] = "cellular"
    imsi: str = Field(..., min_length=1, description="Subscriber identity")
    imei: str | None = Field(None, description="Equipment identity")

    @property
    def device_id(self) -> str:
        return self.imsi


class SigfoxIdentity(BaseModel):
    """Sigfox device."""

    model_config = ConfigDict(frozen=True)

    device_type: Literal["sigfox"] = "sigfox"
    device_id: str = Field(..., min_length=1, description="Sigfox device ID")


class LoRaWANIdentity(BaseModel):
    """LoRaWAN device."""

    model_config = ConfigDict(frozen=True)

    device_type: Literal["lorawan"] = "lorawan"
    device_id: str = Field(..., min_length=1, description="LoRaWAN device ID")


class InventoryIdentity(BaseModel):
    """Device reporting through SORACOM Inventory notifications."""

    model_config = ConfigDict(frozen=True)

    device_type: Literal["inventory"] = "inventory"
    device_id: str = Field(..., min_length=1, description="Inventory device ID")


DeviceIdentity = CellularIdentity | SigfoxIdentity | LoRaWANIdentity | InventoryIdentity


def resolve_device_identity(
    imsi: str | None = None,
    imei: str | None = None,
    sigfox_device_id: str | None = None,
    lora_device_id: str | None = None,
    device_id: str | None = None,
) -> DeviceIdentity | None:
    """
    Pick the device identity from the identity header values.

    The headers are mutually exclusive in practice. When several are sent
    anyway, the first non-empty one in this order wins:
    IMSI, Sigfox device ID, LoRaWAN device ID, Inventory device ID.

    Returns:
        The resolved identity, or None when every identity value is empty
    """
    if imsi:
        return CellularIdentity(imsi=imsi, imei=imei or None)
    if sigfox_device_id:
        return SigfoxIdentity(device_id=sigfox_device_id)
    if lora_device_id:
        return LoRaWANIdentity(device_id=lora_device_id)
    if device_id:
        return InventoryIdentity(device_id=device_id)
    return None


# ============================================================================
# VERSION 20151001
# ============================================================================


def build_canonical_string_v20151001(
    secret: str, identity: DeviceIdentity, timestamp: str
) -> str:
    """
    Build the string hashed by signature version 20151001.

    Key/value pairs are concatenated without separators, starting with the
    shared secret and ending with the timestamp.

    Args:
        secret: Shared secret (non-empty)
        identity: Resolved device identity
        timestamp: Timestamp header value, used verbatim

    Returns:
        Canonical string
    """
    canonical = secret
    if isinstance(identity, CellularIdentity):
        if identity.imei:
            # Rebuilt from the secret, not appended; deployed signers do this.
            canonical = secret + IMEI_KEY + identity.imei
        canonical = canonical + IMSI_KEY + identity.imsi
    elif isinstance(identity, SigfoxIdentity):
        canonical = canonical + SIGFOX_DEVICE_ID_KEY + identity.device_id
    elif isinstance(identity, LoRaWANIdentity):
        canonical = canonical + LORA_DEVICE_ID_KEY + identity.device_id
    elif isinstance(identity, InventoryIdentity):
        canonical = canonical + DEVICE_ID_KEY + identity.device_id
    else:
        raise TypeError(f"Unknown device identity: {identity!r}")
    return canonical + TIMESTAMP_KEY + timestamp


def compute_signature_v20151001(
    secret: str, identity: DeviceIdentity, timestamp: str
) -> str:
    """
    Compute a version 20151001 signature.

    Args:
        secret: Shared secret (non-empty)
        identity: Resolved device identity
        timestamp: Timestamp header value, used verbatim

    Returns:
        Lowercase hex SHA-256 digest of the canonical string
    """
    canonical = build_canonical_string_v20151001(secret, identity, timestamp)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


# ============================================================================
# REGISTRY
# ============================================================================

SignatureAlgorithm = Callable[[str, DeviceIdentity, str], str]

SIGNATURE_ALGORITHMS: Mapping[str, SignatureAlgorithm] = {
    SIGNATURE_VERSION_20151001: compute_signature_v20151001,
}

SUPPORTED_SIGNATURE_VERSIONS: frozenset[str] = frozenset(SIGNATURE_ALGORITHMS)


def sign_headers(
    secret: str,
    identity: DeviceIdentity,
    timestamp: str,
    version: str = SIGNATURE_VERSION_20151001,
) -> dict[str, str]:
    """
    Produce the headers Beam attaches to a forwarded request.

    Useful for simulating the relay in tests and local tooling.

    Args:
        secret: Shared secret
        identity: Device identity to sign for
        timestamp: Timestamp value
        version: Signature version tag

    Returns:
        Header name to value mapping, including the signature

    Raises:
        UnsupportedSignatureVersionError: If no algorithm is registered
            for the version
    """
    algorithm = SIGNATURE_ALGORITHMS.get(version)
    if algorithm is None:
        raise UnsupportedSignatureVersionError(
            f"Unsupported signature version: {version}"
        )

    headers: dict[str, str] = {}
    if isinstance(identity, CellularIdentity):
        headers[IMSI_HEADER] = identity.imsi
        if identity.imei:
            headers[IMEI_HEADER] = identity.imei
    elif isinstance(identity, SigfoxIdentity):
        headers[SIGFOX_DEVICE_ID_HEADER] = identity.device_id
    elif isinstance(identity, LoRaWANIdentity):
        headers[LORA_DEVICE_ID_HEADER] = identity.device_id
    else:
        headers[DEVICE_ID_HEADER] = identity.device_id

    headers[TIMESTAMP_HEADER] = timestamp
    headers[SIGNATURE_VERSION_HEADER] = version
    headers[SIGNATURE_HEADER] = algorithm(secret, identity, timestamp)
    return headers
