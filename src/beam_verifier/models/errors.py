"""Error response models following RFC 7807 Problem Details.

Every error this service returns uses the same body, whether it comes from
the Beam signature gate or from an exception handler.
"""

from http import HTTPStatus

from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

RFC7231_SECTION_URL = "https://datatracker.ietf.org/doc/html/rfc7231#section-"

# Generic details; the specific failure is only logged
CLIENT_ERROR_DETAIL = "invalid"
SERVER_ERROR_DETAIL = "Something went wrong"

# Statuses this service answers with
STATUS_SECTIONS: dict[int, str] = {
    400: "6.5.1",
    404: "6.5.4",
    405: "6.5.5",
    500: "6.6.1",
}


def get_rfc_section_url(status: int) -> str:
    """Get the problem type URI for a status.

    Statuses without a known section point at 500 Internal Server Error.
    """
    return RFC7231_SECTION_URL + STATUS_SECTIONS.get(status, STATUS_SECTIONS[500])


def get_status_title(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return "An error occurred"


class ProblemDetail(BaseModel):
    """Problem Detail response as defined in RFC 7807.

    Beam rejections only ever carry the generic details "invalid" (400) and
    "Something went wrong" (500), so the body never tells a caller which
    check failed.

    Example:
        ```python
        ProblemDetail.for_status(400, detail="invalid", instance="/beam")
        ```
    """

    type: str = Field(
        ...,
        description="URI reference to the problem type (RFC 7807)",
        json_schema_extra={"example": RFC7231_SECTION_URL + "6.5.1"},
    )
    title: str = Field(
        ...,
        description="Short, human-readable summary",
        json_schema_extra={"example": "Bad Request"},
    )
    status: int = Field(
        ..., description="HTTP status code", json_schema_extra={"example": 400}
    )
    detail: str | None = Field(
        default=None,
        description="Human-readable explanation",
        json_schema_extra={"example": "invalid"},
    )
    instance: str | None = Field(
        default=None,
        description="Request path the problem occurred on",
        json_schema_extra={"example": "/beam"},
    )

    @classmethod
    def for_status(
        cls, status: int, detail: str | None = None, instance: str | None = None
    ) -> "ProblemDetail":
        """Build a problem whose type and title follow from the status.

        Args:
            status: HTTP status code.
            detail: Client-facing explanation.
            instance: Request path.

        Returns:
            ProblemDetail
        """
        return cls(
            type=get_rfc_section_url(status),
            title=get_status_title(status),
            status=status,
            detail=detail,
            instance=instance,
        )

    def to_response(self, headers: dict[str, str] | None = None) -> JSONResponse:
        """Render as a JSON response with the problem's status code."""
        return JSONResponse(
            status_code=self.status,
            content=self.model_dump(exclude_none=True),
            headers=headers,
        )
