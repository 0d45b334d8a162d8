"""
SORACOM Beam request verification.

Decision sequence for one request (first failure wins):
1. Shared secret configured           -> SHARED_SECRET_MISSING
2. Timestamp, signature, version sent -> COMMON_PARAMETER_MISSING
3. A device identity header sent      -> DEVICE_DETECT_FAILED
4. Signature version supported        -> UNSUPPORTED_SIGNATURE_VERSION
5. Computed digest matches            -> SIGNATURE_VERIFY_FAILED

Verification is synchronous and stateless. Each call builds its own
SignatureRequest snapshot and reads the shared secret again, so a rotated
secret is picked up without a restart.
"""

import hmac
from collections.abc import Callable, Mapping
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from starlette.datastructures import Headers

from beam_verifier.beam.constants import (
    DEVICE_ID_HEADER,
    IMEI_HEADER,
    IMSI_HEADER,
    LORA_DEVICE_ID_HEADER,
    SIGFOX_DEVICE_ID_HEADER,
    SIGNATURE_HEADER,
    SIGNATURE_VERSION_HEADER,
    TIMESTAMP_HEADER,
)
from beam_verifier.beam.signature import (
    SIGNATURE_ALGORITHMS,
    DeviceIdentity,
    SignatureAlgorithm,
    resolve_device_identity,
)
from beam_verifier.config import load_shared_secret

SecretProvider = Callable[[], str | None]


class VerificationOutcome(str, Enum):
    """Result of verifying one request."""

    VALID = "valid"
    SHARED_SECRET_MISSING = "shared_secret_missing"
    COMMON_PARAMETER_MISSING = "common_parameter_missing"
    DEVICE_DETECT_FAILED = "device_detect_failed"
    UNSUPPORTED_SIGNATURE_VERSION = "unsupported_signature_version"
    SIGNATURE_VERIFY_FAILED = "signature_verify_failed"

    @property
    def is_valid(self) -> bool:
        return self is VerificationOutcome.VALID

    @property
    def is_server_error(self) -> bool:
        """True when the failure is a server misconfiguration."""
        return self is VerificationOutcome.SHARED_SECRET_MISSING

    @property
    def description(self) -> str:
        """Log-friendly explanation. Never send this to the client."""
        return _OUTCOME_DESCRIPTIONS[self]


_OUTCOME_DESCRIPTIONS: dict[VerificationOutcome, str] = {
    VerificationOutcome.VALID: "Signature verified",
    VerificationOutcome.SHARED_SECRET_MISSING: (
        "Shared secret is missing, please check SORACOM_BEAM_SHARED_SECRET "
        "environment variable"
    ),
    VerificationOutcome.COMMON_PARAMETER_MISSING: (
        "timestamp, signature or signature version are missing"
    ),
    VerificationOutcome.DEVICE_DETECT_FAILED: (
        "imsi, sigfox device id, lora device id or device id are missing"
    ),
    VerificationOutcome.UNSUPPORTED_SIGNATURE_VERSION: (
        "Unsupported SORACOM Beam signature version detected"
    ),
    VerificationOutcome.SIGNATURE_VERIFY_FAILED: (
        "Failed to verify the provided signature"
    ),
}


class SignatureRequest(BaseModel):
    """
    Snapshot of everything needed to verify one request.

    Attributes:
        secret: Shared secret read for this request (hidden from repr)
        identity: Resolved device identity, None if no identity header
        timestamp: Timestamp header value, opaque
        provided_signature: Signature header value
        signature_version: Signature version header value
    """

    model_config = ConfigDict(frozen=True)

    secret: str = Field(default="", repr=False)
    identity: DeviceIdentity | None = None
    timestamp: str = ""
    provided_signature: str = ""
    signature_version: str = ""

    @classmethod
    def from_headers(
        cls, headers: Mapping[str, str], secret: str | None
    ) -> "SignatureRequest":
        """
        Build a snapshot from request headers.

        Header names are matched case-insensitively. For repeated headers
        the first value is used. Values read from starlette Headers are
        turned back into the UTF-8 text that was signed.

        Args:
            headers: Request headers
            secret: Shared secret, may be empty

        Returns:
            SignatureRequest
        """
        lookup = _case_insensitive(headers)
        return cls(
            secret=secret or "",
            identity=resolve_device_identity(
                imsi=lookup.get(IMSI_HEADER.lower()),
                imei=lookup.get(IMEI_HEADER.lower()),
                sigfox_device_id=lookup.get(SIGFOX_DEVICE_ID_HEADER.lower()),
                lora_device_id=lookup.get(LORA_DEVICE_ID_HEADER.lower()),
                device_id=lookup.get(DEVICE_ID_HEADER.lower()),
            ),
            timestamp=lookup.get(TIMESTAMP_HEADER.lower()) or "",
            provided_signature=lookup.get(SIGNATURE_HEADER.lower()) or "",
            signature_version=lookup.get(SIGNATURE_VERSION_HEADER.lower()) or "",
        )


class VerificationResult(BaseModel):
    """Outcome plus the identity it was computed for."""

    model_config = ConfigDict(frozen=True)

    outcome: VerificationOutcome
    identity: DeviceIdentity | None = None

    @property
    def is_valid(self) -> bool:
        return self.outcome.is_valid


_BEAM_HEADERS = tuple(
    name.lower()
    for name in (
        IMSI_HEADER,
        IMEI_HEADER,
        SIGFOX_DEVICE_ID_HEADER,
        LORA_DEVICE_ID_HEADER,
        DEVICE_ID_HEADER,
        TIMESTAMP_HEADER,
        SIGNATURE_HEADER,
        SIGNATURE_VERSION_HEADER,
    )
)


def _from_wire(value: str) -> str:
    """
    Undo starlette's latin-1 header decoding.

    Beam hashes the header bytes it sends, and those bytes are UTF-8 text.
    Values that are not valid UTF-8 are kept as decoded.
    """
    raw = value.encode("latin-1")
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return value


def _case_insensitive(headers: Mapping[str, str]) -> dict[str, str]:
    if isinstance(headers, Headers):
        lookup: dict[str, str] = {}
        for name in _BEAM_HEADERS:
            value = headers.get(name)
            if value is not None:
                lookup[name] = _from_wire(value)
        return lookup

    lowered: dict[str, str] = {}
    for key, value in headers.items():
        lowered.setdefault(key.lower(), value)
    return lowered


def check_signature_request(
    request: SignatureRequest,
    algorithms: Mapping[str, SignatureAlgorithm] = SIGNATURE_ALGORITHMS,
) -> VerificationOutcome:
    """
    Run the decision sequence over a snapshot.

    Args:
        request: Snapshot to verify
        algorithms: Signature version to algorithm registry

    Returns:
        VerificationOutcome
    """
    if not request.secret:
        return VerificationOutcome.SHARED_SECRET_MISSING

    if (
        not request.timestamp
        or not request.provided_signature
        or not request.signature_version
    ):
        return VerificationOutcome.COMMON_PARAMETER_MISSING

    if request.identity is None:
        return VerificationOutcome.DEVICE_DETECT_FAILED

    algorithm = algorithms.get(request.signature_version)
    if algorithm is None:
        return VerificationOutcome.UNSUPPORTED_SIGNATURE_VERSION

    calculated = algorithm(request.secret, request.identity, request.timestamp)
    if not hmac.compare_digest(
        calculated.encode("utf-8"), request.provided_signature.encode("utf-8")
    ):
        return VerificationOutcome.SIGNATURE_VERIFY_FAILED

    return VerificationOutcome.VALID


class BeamSignatureVerifier:
    """
    Verifies SORACOM Beam signatures on inbound request headers.

    Attributes:
        secret_provider: Callable returning the current shared secret,
            invoked on every verification
        algorithms: Signature version to algorithm registry
    """

    def __init__(
        self,
        secret_provider: SecretProvider | None = None,
        algorithms: Mapping[str, SignatureAlgorithm] | None = None,
    ):
        self.secret_provider = secret_provider or load_shared_secret
        self.algorithms = algorithms if algorithms is not None else SIGNATURE_ALGORITHMS

    def verify(self, headers: Mapping[str, str]) -> VerificationOutcome:
        """
        Verify request headers.

        Args:
            headers: Request headers (case-insensitive names)

        Returns:
            VerificationOutcome.VALID or the first failure kind
        """
        return self.verify_request(headers).outcome

    def verify_request(self, headers: Mapping[str, str]) -> VerificationResult:
        """
        Verify request headers and keep the resolved device identity.

        Args:
            headers: Request headers (case-insensitive names)

        Returns:
            VerificationResult; identity is only set when the outcome is VALID
        """
        request = SignatureRequest.from_headers(headers, self.secret_provider())
        outcome = check_signature_request(request, self.algorithms)
        return VerificationResult(
            outcome=outcome,
            identity=request.identity if outcome.is_valid else None,
        )
