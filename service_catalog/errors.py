"""Normalized error type for API failures."""

from typing import Any

import httpx


class ApiError(Exception):
    """A failed API call, mapped once at the transport boundary.

    Attributes:
        status: HTTP status code, or None for network-level failures
        code: Machine-readable error code from the response body, if any
        message: Human-readable message
        payload: Decoded response body, if any
        reported: Message a client recorded for this failure, if one did
    """

    def __init__(
        self,
        message: str,
        status: int | None = None,
        code: str | None = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.payload = payload
        self.reported: str | None = None

    def __repr__(self) -> str:
        return f"ApiError(status={self.status!r}, code={self.code!r}, message={self.message!r})"

    @classmethod
    def from_http_error(cls, exc: httpx.HTTPStatusError) -> "ApiError":
        """Build an ApiError from a non-2xx response.

        The backend is not consistent about where it puts the error details,
        so the body is searched in the usual locations: top-level fields and a
        nested ``error`` object.
        """
        response = exc.response
        try:
            body = response.json()
        except ValueError:
            body = None

        status = response.status_code
        code = None
        message = None
        if isinstance(body, dict):
            nested = body.get("error") if isinstance(body.get("error"), dict) else {}
            code = body.get("code") or nested.get("code")
            message = (
                body.get("statusMessage")
                or body.get("message")
                or nested.get("message")
                or body.get("detail")
                or (body.get("error") if isinstance(body.get("error"), str) else None)
            )
            body_status = body.get("statusCode") or body.get("status")
            if not status and isinstance(body_status, int):
                status = body_status
        elif isinstance(body, str) and body:
            message = body

        if not message:
            message = response.reason_phrase or f"HTTP {status}"

        return cls(str(message), status=status, code=str(code) if code else None, payload=body)

    @classmethod
    def from_request_error(cls, exc: httpx.RequestError) -> "ApiError":
        """Build an ApiError from a network-level failure."""
        return cls(str(exc), status=None, code=None)
