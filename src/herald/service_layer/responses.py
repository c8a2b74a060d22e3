"""Translate HERALD errors into transport-neutral error responses.

Any outer surface (the CLI, an HTTP layer) renders failures through
`to_error_response`, so status codes and messages stay consistent.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from herald.domain.errors import ErrorCode, HeraldError

STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.PROVIDER_NOT_FOUND: 404,
    ErrorCode.INVALID_CHANNEL: 400,
    ErrorCode.MISSING_CREDENTIALS: 400,
    ErrorCode.INVALID_CREDENTIALS: 400,
    ErrorCode.INVALID_PATCH: 400,
    ErrorCode.FIELD_TOO_LONG: 400,
    ErrorCode.IDENTIFIER_CONFLICT: 409,
    ErrorCode.INVALID_ENVIRONMENT: 400,
    ErrorCode.ENVIRONMENT_CONFLICT: 409,
    ErrorCode.INTEGRATION_NOT_FOUND: 404,
    ErrorCode.ACTIVE_PROVIDER_CONFLICT: 409,
    ErrorCode.PROVIDER_CHECK_FAILED: 400,
    ErrorCode.STORE_UNAVAILABLE: 503,
    ErrorCode.INTERNAL: 500,
}

INTERNAL_MESSAGE = "Internal error"


@dataclass(frozen=True, slots=True)
class ErrorResponse:
    """A failure as seen by a caller.

    Attributes:
        status_code: HTTP-style status (400, 404, 409, 503, 500).
        error: Machine-readable `ErrorCode` value.
        message: Human-readable message.
    """

    status_code: int
    error: str
    message: str

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-serializable representation."""
        return asdict(self)


def to_error_response(exc: BaseException) -> ErrorResponse:
    """Map an exception to an ErrorResponse.

    HERALD errors keep their message; anything else becomes an opaque 500 so
    internals never leak to callers.
    """
    if isinstance(exc, HeraldError):
        return ErrorResponse(
            status_code=STATUS_BY_CODE.get(exc.code, 500),
            error=exc.code.value,
            message=str(exc),
        )
    return ErrorResponse(
        status_code=500, error=ErrorCode.INTERNAL.value, message=INTERNAL_MESSAGE
    )
