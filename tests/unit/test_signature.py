"""
Unit tests for Beam signature computation.

Digests are the reference vectors produced by SORACOM Beam for the
shared secret "secret" and timestamp 1443571200000.
"""

import pytest
from pydantic import ValidationError

from beam_verifier.beam.signature import (
    SIGNATURE_ALGORITHMS,
    SUPPORTED_SIGNATURE_VERSIONS,
    CellularIdentity,
    InventoryIdentity,
    LoRaWANIdentity,
    SigfoxIdentity,
    UnsupportedSignatureVersionError,
    build_canonical_string_v20151001,
    compute_signature_v20151001,
    resolve_device_identity,
    sign_headers,
)

SECRET = "secret"
TIMESTAMP = "1443571200000"


class TestResolveDeviceIdentity:
    """Test identity selection from header values."""

    def test_cellular_without_imei(self):
        identity = resolve_device_identity(imsi="295100000000001")

        assert identity == CellularIdentity(imsi="295100000000001")
        assert identity.imei is None
        assert identity.device_id == "295100000000001"

    def test_cellular_with_imei(self):
        identity = resolve_device_identity(
            imsi="295100000000001", imei="012345678901234"
        )

        assert identity == CellularIdentity(
            imsi="295100000000001", imei="012345678901234"
        )

    def test_empty_imei_is_ignored(self):
        identity = resolve_device_identity(imsi="295100000000001", imei="")

        assert identity.imei is None

    def test_imei_alone_does_not_resolve(self):
        """IMEI is only meaningful together with IMSI."""
        assert resolve_device_identity(imei="012345678901234") is None

    def test_sigfox(self):
        assert resolve_device_identity(sigfox_device_id="FFFFFF") == SigfoxIdentity(
            device_id="FFFFFF"
        )

    def test_lorawan(self):
        identity = resolve_device_identity(lora_device_id="0123456789abcdef")

        assert identity == LoRaWANIdentity(device_id="0123456789abcdef")

    def test_inventory(self):
        identity = resolve_device_identity(device_id="d-0123456789acbdefghij")

        assert identity == InventoryIdentity(device_id="d-0123456789acbdefghij")

    def test_nothing_resolves(self):
        assert resolve_device_identity() is None
        assert resolve_device_identity(imsi="", sigfox_device_id="") is None

    def test_precedence_cellular_over_sigfox(self):
        identity = resolve_device_identity(
            imsi="295100000000001", sigfox_device_id="FFFFFF"
        )

        assert isinstance(identity, CellularIdentity)

    def test_precedence_order(self):
        assert isinstance(
            resolve_device_identity(
                sigfox_device_id="FFFFFF",
                lora_device_id="0123456789abcdef",
                device_id="d-1",
            ),
            SigfoxIdentity,
        )
        assert isinstance(
            resolve_device_identity(lora_device_id="0123456789abcdef", device_id="d-1"),
            LoRaWANIdentity,
        )

    def test_identities_are_immutable(self):
        identity = SigfoxIdentity(device_id="FFFFFF")

        with pytest.raises(ValidationError):
            identity.device_id = "000000"


class TestCanonicalString:
    """Test canonical string layout for version 20151001."""

    def test_cellular_without_imei(self):
        canonical = build_canonical_string_v20151001(
            SECRET, CellularIdentity(imsi="295100000000001"), TIMESTAMP
        )

        assert canonical == (
            "secretx-soracom-imsi=295100000000001x-soracom-timestamp=1443571200000"
        )

    def test_cellular_with_imei(self):
        canonical = build_canonical_string_v20151001(
            SECRET,
            CellularIdentity(imsi="295100000000001", imei="012345678901234"),
            TIMESTAMP,
        )

        assert canonical == (
            "secretx-soracom-imei=012345678901234"
            "x-soracom-imsi=295100000000001"
            "x-soracom-timestamp=1443571200000"
        )

    def test_sigfox(self):
        canonical = build_canonical_string_v20151001(
            SECRET, SigfoxIdentity(device_id="FFFFFF"), TIMESTAMP
        )

        assert canonical == (
            "secretx-soracom-sigfox-device-id=FFFFFFx-soracom-timestamp=1443571200000"
        )

    def test_inventory(self):
        canonical = build_canonical_string_v20151001(
            SECRET, InventoryIdentity(device_id="d-1"), TIMESTAMP
        )

        assert canonical == "secretx-device-id=d-1x-soracom-timestamp=1443571200000"

    def test_unknown_identity_rejected(self):
        with pytest.raises(TypeError):
            build_canonical_string_v20151001(SECRET, object(), TIMESTAMP)


class TestComputeSignature:
    """Test digests against the reference vectors."""

    @pytest.mark.parametrize(
        ("identity", "expected"),
        [
            (
                CellularIdentity(imsi="295100000000001"),
                "a15174afa6e4a4ffa0f9c44e6085e9b6f2b5f0cf2c3437bf46bdd9bf8514f51b",
            ),
            (
                CellularIdentity(imsi="295100000000001", imei="012345678901234"),
                "125d84ef000ed210da7a4de94fe601589295370c9e465982c8ddb84dcb7e779e",
            ),
            (
                SigfoxIdentity(device_id="FFFFFF"),
                "f9e3364679192f572318101e7fea3186d01c2f751b661735875116463a2db466",
            ),
            (
                LoRaWANIdentity(device_id="0123456789abcdef"),
                "4eed6b68e7ac8093c375ef6d2346e510ccaa08afc8292f5e613271aaa5b13a28",
            ),
            (
                InventoryIdentity(device_id="d-0123456789acbdefghij"),
                "ab59fbf1a5b68cf7d3547342c40f6f170ed5a2d07017d810e3a39ee4a654aa6d",
            ),
        ],
        ids=["cellular", "cellular_imei", "sigfox", "lorawan", "inventory"],
    )
    def test_reference_vectors(self, identity, expected):
        assert compute_signature_v20151001(SECRET, identity, TIMESTAMP) == expected

    def test_deterministic(self):
        identity = SigfoxIdentity(device_id="FFFFFF")

        first = compute_signature_v20151001(SECRET, identity, TIMESTAMP)
        second = compute_signature_v20151001(SECRET, identity, TIMESTAMP)

        assert first == second

    def test_lowercase_hex(self):
        digest = compute_signature_v20151001(
            SECRET, SigfoxIdentity(device_id="FFFFFF"), TIMESTAMP
        )

        assert len(digest) == 64
        assert digest == digest.lower()

    def test_timestamp_is_opaque(self):
        identity = SigfoxIdentity(device_id="FFFFFF")

        digest = compute_signature_v20151001(SECRET, identity, "not a time")

        assert digest != compute_signature_v20151001(SECRET, identity, TIMESTAMP)

    def test_secret_changes_digest(self):
        identity = SigfoxIdentity(device_id="FFFFFF")

        assert compute_signature_v20151001(
            "other", identity, TIMESTAMP
        ) != compute_signature_v20151001(SECRET, identity, TIMESTAMP)


class TestRegistry:
    """Test the signature version registry."""

    def test_only_20151001_supported(self):
        assert SUPPORTED_SIGNATURE_VERSIONS == frozenset({"20151001"})
        assert SIGNATURE_ALGORITHMS["20151001"] is compute_signature_v20151001


class TestSignHeaders:
    """Test relay header generation."""

    def test_cellular_with_imei(self):
        headers = sign_headers(
            SECRET,
            CellularIdentity(imsi="295100000000001", imei="012345678901234"),
            TIMESTAMP,
        )

        assert headers == {
            "X-SORACOM-IMSI": "295100000000001",
            "X-SORACOM-IMEI": "012345678901234",
            "X-SORACOM-TIMESTAMP": TIMESTAMP,
            "X-SORACOM-SIGNATURE-VERSION": "20151001",
            "X-SORACOM-SIGNATURE": (
                "125d84ef000ed210da7a4de94fe601589295370c9e465982c8ddb84dcb7e779e"
            ),
        }

    def test_lorawan(self):
        headers = sign_headers(
            SECRET, LoRaWANIdentity(device_id="0123456789abcdef"), TIMESTAMP
        )

        assert headers["X-SORACOM-LORA-DEVICE-ID"] == "0123456789abcdef"
        assert headers["X-SORACOM-SIGNATURE"] == (
            "4eed6b68e7ac8093c375ef6d2346e510ccaa08afc8292f5e613271aaa5b13a28"
        )

    def test_inventory(self):
        headers = sign_headers(SECRET, InventoryIdentity(device_id="d-1"), TIMESTAMP)

        assert headers["X-DEVICE-ID"] == "d-1"
        assert "X-SORACOM-IMSI" not in headers

    def test_unsupported_version(self):
        with pytest.raises(UnsupportedSignatureVersionError):
            sign_headers(
                SECRET, SigfoxIdentity(device_id="FFFFFF"), TIMESTAMP, version="20141001"
            )

    def test_unsupported_version_is_value_error(self):
        assert issubclass(UnsupportedSignatureVersionError, ValueError)
