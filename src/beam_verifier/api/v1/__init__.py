"""
API v1 endpoints.

Route prefix constants for consistent API versioning.
"""

API_V1_PREFIX: str = ""

# Module-specific prefixes
BEAM_PREFIX: str = f"{API_V1_PREFIX}/beam"

__all__ = [
    "API_V1_PREFIX",
    "BEAM_PREFIX",
]
