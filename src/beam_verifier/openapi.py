"""OpenAPI schema customization for the Beam signature verifier."""

from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

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
from beam_verifier.models.errors import ProblemDetail


def custom_openapi(app: FastAPI) -> dict[str, Any]:
    """Generate customized OpenAPI schema for the API.

    Args:
        app: The FastAPI application instance.

    Returns:
        Customized OpenAPI schema dictionary.
    """
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=f"""
# Beam Signature Verifier

Accepts requests forwarded by SORACOM Beam and verifies that they were
signed with the shared secret configured in the Beam console.

## Signature headers

| Header | Required |
|---|---|
| `{IMSI_HEADER}` | cellular devices |
| `{IMEI_HEADER}` | optional, cellular only |
| `{SIGFOX_DEVICE_ID_HEADER}` | Sigfox devices |
| `{LORA_DEVICE_ID_HEADER}` | LoRaWAN devices |
| `{DEVICE_ID_HEADER}` | Inventory devices |
| `{TIMESTAMP_HEADER}` | always |
| `{SIGNATURE_VERSION_HEADER}` | always (`20151001`) |
| `{SIGNATURE_HEADER}` | always |

## Error Handling

Rejected requests receive an
[RFC 7807 Problem Details](https://datatracker.ietf.org/doc/html/rfc7807)
body. The body never says which check failed:

- `400` for every signature problem
- `500` when the server has no shared secret configured
        """,
        routes=app.routes,
    )

    openapi_schema["tags"] = [
        {
            "name": "Health",
            "description": "Health check endpoints (no signature required)",
        },
        {
            "name": "Beam",
            "description": "Endpoints protected by SORACOM Beam signatures",
        },
    ]

    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "BeamSignature": {
            "type": "apiKey",
            "in": "header",
            "name": SIGNATURE_HEADER,
            "description": "SHA-256 signature over the Beam headers and shared secret",
        },
    }

    for operations in openapi_schema["paths"].values():
        for operation in operations.values():
            if not isinstance(operation, dict) or "responses" not in operation:
                continue
            if "Beam" in operation.get("tags", []):
                operation["security"] = [{"BeamSignature": []}]
                operation["responses"]["400"] = {
                    "description": "Signature verification failed",
                    "content": {
                        "application/json": {
                            "schema": {"$ref": "#/components/schemas/ProblemDetail"}
                        }
                    },
                }
            operation["responses"]["500"] = {
                "description": "Internal Server Error",
                "content": {
                    "application/json": {
                        "schema": {"$ref": "#/components/schemas/ProblemDetail"}
                    }
                },
            }

    problem_schema = ProblemDetail.model_json_schema(
        ref_template="#/components/schemas/{model}"
    )
    schemas = openapi_schema["components"].setdefault("schemas", {})
    schemas.update(problem_schema.pop("$defs", {}))
    schemas["ProblemDetail"] = problem_schema

    app.openapi_schema = openapi_schema
    return app.openapi_schema


def configure_openapi(app: FastAPI) -> None:
    """Configure the FastAPI app to use custom OpenAPI schema.

    Args:
        app: The FastAPI application instance.
    """
    app.openapi = lambda: custom_openapi(app)  # type: ignore[method-assign]
