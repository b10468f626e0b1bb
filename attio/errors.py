"""Exception hierarchy for the Attio SDK.

Caller mistakes raise InvalidArgumentError, lifecycle mistakes raise
InvalidOperationError, and every non-2xx response is mapped to an APIError
subclass by HTTP status.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from attio.utils.logging import redact_headers

if TYPE_CHECKING:
    from attio.http.request_builder import Request

MAX_BODY_LENGTH = 1000


class AttioError(Exception):
    """Base class for all SDK errors."""


class InvalidArgumentError(AttioError, ValueError):
    """Raised when a caller passes a bad value (missing id, wrong params shape)."""


class ConfigurationError(InvalidArgumentError):
    """Raised when the SDK configuration is incomplete or invalid."""


class InvalidOperationError(AttioError):
    """Raised when an operation is attempted in the wrong resource lifecycle state."""


class SignatureVerificationError(AttioError):
    """Raised when a webhook signature cannot be verified."""


class APIError(AttioError):
    """An error returned by (or while talking to) the Attio API."""

    default_message = "An error occurred while communicating with Attio"

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        request_id: str | None = None,
        http_status: int | None = None,
        http_body: str | None = None,
        json_body: Any = None,
        request_url: str | None = None,
        request_method: str | None = None,
        request_params: Any = None,
        request_headers: Mapping[str, str] | None = None,
        response_headers: Mapping[str, str] | None = None,
    ):
        self.message = message or self.default_message
        self.code = code
        self.request_id = request_id
        self.http_status = http_status
        self.http_body = http_body
        self.json_body = json_body
        self.request_url = request_url
        self.request_method = request_method
        self.request_params = request_params
        self.request_headers = dict(request_headers) if request_headers else None
        self.response_headers = dict(response_headers) if response_headers else None
        self.occurred_at = datetime.now(UTC)
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        parts = [self.message]
        if self.code:
            parts.append(f"(Code: {self.code})")
        if self.http_status:
            parts.append(f"(Status: {self.http_status})")
        if self.request_id:
            parts.append(f"(Request ID: {self.request_id})")
        return " ".join(parts)

    def _truncated_body(self) -> str | None:
        if self.http_body is None:
            return None
        if len(self.http_body) > MAX_BODY_LENGTH:
            return f"{self.http_body[:MAX_BODY_LENGTH]}... (truncated)"
        return self.http_body

    def to_dict(self) -> dict[str, Any]:
        error = {
            "type": type(self).__name__,
            "message": self.message,
            "code": self.code,
            "request_id": self.request_id,
            "http_status": self.http_status,
            "occurred_at": self.occurred_at.isoformat(),
        }
        request = {
            "url": self.request_url,
            "method": self.request_method,
            "params": self.request_params,
            "headers": redact_headers(self.request_headers) if self.request_headers else None,
        }
        response = {
            "headers": self.response_headers,
            "body": self._truncated_body(),
        }

        result: dict[str, Any] = {}
        for section, values in (("error", error), ("request", request), ("response", response)):
            compact = {k: v for k, v in values.items() if v is not None}
            if compact:
                result[section] = compact
        return result

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, code={self.code!r}, "
            f"http_status={self.http_status!r}, request_id={self.request_id!r})"
        )

    @classmethod
    def from_response(
        cls,
        status: int,
        headers: Mapping[str, str] | None,
        body: str | None,
        request: Request | None = None,
        **extra: Any,
    ) -> APIError:
        """Build an error from a raw HTTP response."""
        headers = headers or {}
        json_body = _parse_json(body)
        message, code = _extract_error_data(json_body, body)
        lowered = {str(k).lower(): v for k, v in headers.items()}

        return cls(
            message,
            code=code,
            request_id=lowered.get("x-request-id") or lowered.get("request-id"),
            http_status=status,
            http_body=body,
            json_body=json_body,
            request_url=request.url if request else None,
            request_method=request.method if request else None,
            request_params=request.params if request else None,
            request_headers=request.headers if request else None,
            response_headers=headers,
            **extra,
        )


class ClientError(APIError):
    """Generic client error for 4xx statuses without a dedicated class."""

    default_message = "Client error occurred"


class InvalidRequestError(ClientError):
    """400 Bad Request."""

    default_message = "The request was invalid or cannot be served"


BadRequestError = InvalidRequestError


class AuthenticationError(ClientError):
    """401 Unauthorized, or no API key available."""

    default_message = "Authentication failed. Please check your API key"


class ForbiddenError(ClientError):
    """403 Forbidden."""

    default_message = "You do not have permission to access this resource"


class NotFoundError(ClientError):
    """404 Not Found."""

    default_message = "The requested resource could not be found"


class ConflictError(ClientError):
    """409 Conflict."""

    default_message = "The request conflicts with the current state of the resource"


class UnprocessableEntityError(InvalidRequestError):
    """422 Unprocessable Entity."""

    default_message = "The request was well-formed but contains semantic errors"


class ValidationError(UnprocessableEntityError):
    """422 with field-level validation details."""

    default_message = "Validation failed"

    def __init__(self, message: str | None = None, *, errors: Mapping[str, Any] | None = None, **kwargs: Any):
        self.errors = dict(errors or {})
        base = message or self.default_message
        if self.errors:
            details = []
            for field, messages in self.errors.items():
                if not isinstance(messages, list):
                    messages = [messages]
                details.append(f"{field}: {', '.join(str(m) for m in messages)}")
            base = f"{base} - {'; '.join(details)}"
        super().__init__(base, **kwargs)


class RateLimitError(ClientError):
    """429 Too Many Requests."""

    default_message = "Rate limit exceeded"

    def __init__(self, message: str | None = None, *, retry_after: float | None = None, **kwargs: Any):
        self.retry_after = retry_after
        super().__init__(message, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.retry_after is not None:
            result.setdefault("error", {})["retry_after"] = self.retry_after
        return result


class ServerError(APIError):
    """Generic 5xx error."""

    default_message = "Server error occurred"


class InternalServerError(ServerError):
    """500 Internal Server Error."""

    default_message = "An internal server error occurred"


class BadGatewayError(ServerError):
    """502 Bad Gateway."""

    default_message = "Bad gateway error occurred"


class ServiceUnavailableError(ServerError):
    """503 Service Unavailable."""

    default_message = "Service is temporarily unavailable"

    def __init__(self, message: str | None = None, *, retry_after: float | None = None, **kwargs: Any):
        self.retry_after = retry_after
        super().__init__(message, **kwargs)


class GatewayTimeoutError(ServerError):
    """504 Gateway Timeout."""

    default_message = "Gateway timeout occurred"


class ConnectionError(APIError):  # noqa: A001
    """Network-level failure before a response was received."""

    default_message = "Network connection error occurred"


class TimeoutError(ConnectionError):  # noqa: A001
    default_message = "Request timed out"


class SSLError(ConnectionError):
    default_message = "SSL/TLS connection error occurred"


class InvalidResponseError(APIError):
    """A 2xx response whose body could not be decoded."""

    default_message = "Invalid response from Attio"


_STATUS_ERRORS: dict[int, type[APIError]] = {
    400: InvalidRequestError,
    401: AuthenticationError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: UnprocessableEntityError,
    429: RateLimitError,
    500: InternalServerError,
    502: BadGatewayError,
    503: ServiceUnavailableError,
    504: GatewayTimeoutError,
}


def error_class_for_status(status: int) -> type[APIError]:
    """Map an HTTP status code to the error class raised for it."""
    if status in _STATUS_ERRORS:
        return _STATUS_ERRORS[status]
    if 400 <= status < 500:
        return ClientError
    if 500 <= status < 600:
        return ServerError
    return APIError


def _parse_json(body: str | None) -> Any:
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        return None


def _extract_error_data(json_body: Any, raw_body: str | None) -> tuple[str | None, str | None]:
    if not isinstance(json_body, dict):
        return raw_body or None, None

    message = json_body.get("message") or json_body.get("error_description")
    error = json_body.get("error")
    if isinstance(error, dict):
        message = message or error.get("message")
    elif error and not message:
        message = str(error)

    errors = json_body.get("errors")
    if isinstance(errors, list) and errors:
        details = []
        for item in errors:
            if isinstance(item, dict):
                field = item.get("field") or item.get("attribute")
                text = item.get("message") or item.get("error")
                details.append(f"{field}: {text}" if field else str(text))
            else:
                details.append(str(item))
        message = ", ".join(details)
    elif isinstance(errors, dict) and errors:
        details = []
        for field, messages in errors.items():
            if not isinstance(messages, list):
                messages = [messages]
            details.append(f"{field}: {', '.join(str(m) for m in messages)}")
        message = ", ".join(details)

    code = json_body.get("code") or json_body.get("error_code")
    return message or raw_body or None, code
