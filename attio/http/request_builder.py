"""Build transport-ready requests for the Attio REST API."""

import json
import secrets
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from attio.config import AttioConfig
from attio.errors import AuthenticationError
from attio.version import __version__

QUERY_METHODS = frozenset({"GET", "DELETE", "HEAD"})

BASE_HEADERS = {
    "User-Agent": f"attio-python/{__version__}",
    "Accept": "application/json",
    "Content-Type": "application/json",
}


class Request(BaseModel):
    """A fully-resolved HTTP request."""

    method: str
    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    query: list[tuple[str, str]] = Field(default_factory=list)
    body: str | None = None
    params: Any = None

    @property
    def request_id(self) -> str | None:
        return self.headers.get("X-Request-ID")


class RequestBuilder:
    """Turns (method, path, params) into a Request.

    GET/DELETE/HEAD send params as a bracketed query string; POST/PATCH/PUT
    send them as a JSON body.
    """

    @classmethod
    def build(
        cls,
        method: str,
        path: str,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, Any] | None = None,
        api_key: str | None = None,
        config: AttioConfig | None = None,
    ) -> Request:
        config = config or AttioConfig()
        method = method.upper()
        key = api_key or config.api_key
        if not key:
            raise AuthenticationError("No API key provided. Set ATTIO_API_KEY or pass api_key")

        normalized = normalize_params(params) if params else None

        query: list[tuple[str, str]] = []
        body: str | None = None
        if method in QUERY_METHODS:
            if normalized:
                query = flatten_params(normalized)
        elif normalized:
            body = json.dumps(normalized)

        return Request(
            method=method,
            url=f"{config.base_url}{ensure_leading_slash(path)}",
            headers=build_headers(key, headers),
            query=query,
            body=body,
            params=normalized,
        )


def ensure_leading_slash(path: str) -> str:
    return path if path.startswith("/") else f"/{path}"


def build_headers(api_key: str, extra: Mapping[str, Any] | None = None) -> dict[str, str]:
    headers = dict(BASE_HEADERS)
    headers["Authorization"] = f"Bearer {api_key}"
    headers["X-Request-ID"] = generate_request_id()
    for key, value in (extra or {}).items():
        headers[normalize_header_key(key)] = str(value)
    return headers


def normalize_header_key(key: str) -> str:
    """"x_request_id" / "x-request-id" -> "X-Request-Id"."""
    return "-".join(part.capitalize() for part in str(key).replace("_", "-").split("-"))


def generate_request_id() -> str:
    return f"req_{secrets.token_hex(16)}"


def normalize_params(params: Any) -> Any:
    """Recursively stringify mapping keys and enum values."""
    if isinstance(params, Mapping):
        return {str(k): normalize_params(v) for k, v in params.items()}
    if isinstance(params, (list, tuple)):
        return [normalize_params(v) for v in params]
    if isinstance(params, Enum):
        return params.value
    return params


def flatten_params(params: Mapping[str, Any], parent_key: str | None = None) -> list[tuple[str, str]]:
    """Flatten nested params into query pairs: {"filter": {"a": 1}} -> [("filter[a]", "1")]."""
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        full_key = f"{parent_key}[{key}]" if parent_key else str(key)
        if isinstance(value, Mapping):
            pairs.extend(flatten_params(value, full_key))
        elif isinstance(value, list):
            for index, item in enumerate(value):
                item_key = f"{full_key}[{index}]"
                if isinstance(item, Mapping):
                    pairs.extend(flatten_params(item, item_key))
                else:
                    pairs.append((item_key, _query_value(item)))
        elif value is not None:
            pairs.append((full_key, _query_value(value)))
    return pairs


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
