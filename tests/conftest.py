"""Global pytest configuration and fixtures for all tests."""

import os

import pytest

SHARED_SECRET = "secret"
TIMESTAMP = "1443571200000"


@pytest.fixture(scope="session", autouse=True)
def set_test_env_vars():
    """
    Set environment variables for testing.

    Provides the shared secret used by the reference signature vectors and
    keeps docs disabled. Tests that need a different secret override
    SORACOM_BEAM_SHARED_SECRET with monkeypatch; it is read per request.
    """
    original_env = {}

    test_env_vars = {
        "SORACOM_BEAM_SHARED_SECRET": SHARED_SECRET,
        "ENABLE_DOCS": "false",
    }

    for key, value in test_env_vars.items():
        original_env[key] = os.environ.get(key)
        os.environ[key] = value

    yield

    for key, original_value in original_env.items():
        if original_value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = original_value


@pytest.fixture
def cellular_headers():
    """Reference cellular request without IMEI (signed with "secret")."""
    return {
        "X-SORACOM-IMSI": "295100000000001",
        "X-SORACOM-TIMESTAMP": TIMESTAMP,
        "X-SORACOM-SIGNATURE-VERSION": "20151001",
        "X-SORACOM-SIGNATURE": (
            "a15174afa6e4a4ffa0f9c44e6085e9b6f2b5f0cf2c3437bf46bdd9bf8514f51b"
        ),
    }


@pytest.fixture
def cellular_imei_headers():
    """Reference cellular request with IMEI (signed with "secret")."""
    return {
        "X-SORACOM-IMSI": "295100000000001",
        "X-SORACOM-IMEI": "012345678901234",
        "X-SORACOM-TIMESTAMP": TIMESTAMP,
        "X-SORACOM-SIGNATURE-VERSION": "20151001",
        "X-SORACOM-SIGNATURE": (
            "125d84ef000ed210da7a4de94fe601589295370c9e465982c8ddb84dcb7e779e"
        ),
    }


@pytest.fixture
def sigfox_headers():
    """Reference Sigfox request (signed with "secret")."""
    return {
        "X-SORACOM-SIGFOX-DEVICE-ID": "FFFFFF",
        "X-SORACOM-TIMESTAMP": TIMESTAMP,
        "X-SORACOM-SIGNATURE-VERSION": "20151001",
        "X-SORACOM-SIGNATURE": (
            "f9e3364679192f572318101e7fea3186d01c2f751b661735875116463a2db466"
        ),
    }
