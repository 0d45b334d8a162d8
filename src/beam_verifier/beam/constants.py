"""Shared constants for SORACOM Beam signature handling."""

# Request header names (lookup is case-insensitive)
IMSI_HEADER = "X-SORACOM-IMSI"
IMEI_HEADER = "X-SORACOM-IMEI"
SIGFOX_DEVICE_ID_HEADER = "X-SORACOM-SIGFOX-DEVICE-ID"
LORA_DEVICE_ID_HEADER = "X-SORACOM-LORA-DEVICE-ID"
DEVICE_ID_HEADER = "X-DEVICE-ID"
TIMESTAMP_HEADER = "X-SORACOM-TIMESTAMP"
SIGNATURE_HEADER = "X-SORACOM-SIGNATURE"
SIGNATURE_VERSION_HEADER = "X-SORACOM-SIGNATURE-VERSION"

# Signature versions
SIGNATURE_VERSION_20151001 = "20151001"

# Canonical string keys for version 20151001
IMEI_KEY = "x-soracom-imei="
IMSI_KEY = "x-soracom-imsi="
SIGFOX_DEVICE_ID_KEY = "x-soracom-sigfox-device-id="
LORA_DEVICE_ID_KEY = "x-soracom-lora-device-id="
DEVICE_ID_KEY = "x-device-id="
TIMESTAMP_KEY = "x-soracom-timestamp="
