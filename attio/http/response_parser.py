"""Turn raw HTTP responses into plain dicts, or raise the mapped APIError."""

from typing import Any

import requests

from attio.errors import (
    APIError,
    InvalidResponseError,
    RateLimitError,
    ServiceUnavailableError,
    error_class_for_status,
)
from attio.http.request_builder import Request
from attio.utils.logging import get_logger
from attio.utils.timestamp import parse_retry_after

logger = get_logger(__name__)

PAGINATION_DEFAULTS: dict[str, Any] = {
    "has_next_page": False,
    "has_previous_page": False,
    "next_cursor": None,
    "previous_cursor": None,
    "total_count": None,
    "page_size": None,
}


class ResponseParser:
    @classmethod
    def parse(cls, response: requests.Response, request: Request | None = None) -> Any:
        """Decode a response body.

        Returns {} for an empty 2xx body. Paginated bodies (`data` plus
        `pagination`) get their pagination block normalized.

        Raises:
            InvalidResponseError: 2xx body is not JSON
            APIError: subclass chosen by status for any non-2xx response
        """
        status = response.status_code
        if not 200 <= status < 300:
            raise cls.build_error(response, request)

        if not response.content:
            return {}

        try:
            body = response.json()
        except ValueError as e:
            raise InvalidResponseError(
                f"Invalid JSON in response: {e}",
                http_status=status,
                http_body=response.text,
                request_id=_request_id(response, request),
            ) from e

        if isinstance(body, dict) and "data" in body and "pagination" in body:
            body = dict(body)
            body["pagination"] = normalize_pagination(body.get("pagination"))
        return body

    @classmethod
    def build_error(cls, response: requests.Response, request: Request | None = None) -> APIError:
        status = response.status_code
        headers = dict(response.headers)
        error_class = error_class_for_status(status)

        extra: dict[str, Any] = {}
        if error_class in (RateLimitError, ServiceUnavailableError):
            extra["retry_after"] = parse_retry_after(response.headers.get("Retry-After"))

        error = error_class.from_response(status, headers, response.text, request, **extra)
        if error.request_id is None and request is not None:
            error.request_id = request.request_id

        logger.debug(
            "Attio API error",
            status=status,
            error=type(error).__name__,
            request_id=error.request_id,
        )
        return error


def normalize_pagination(pagination: Any) -> dict[str, Any]:
    """Fill in missing pagination keys so callers never see a KeyError."""
    normalized = dict(PAGINATION_DEFAULTS)
    if isinstance(pagination, dict):
        normalized.update({str(k): v for k, v in pagination.items()})
    return normalized


def _request_id(response: requests.Response, request: Request | None) -> str | None:
    request_id = response.headers.get("X-Request-ID")
    if request_id:
        return request_id
    return request.request_id if request else None
