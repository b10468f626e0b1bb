"""
Attio API client.

Based on Attio REST API v2: https://docs.attio.com/
Rate limits: 100 reads/sec, 25 writes/sec
"""

from collections.abc import Mapping
from typing import Any

from attio.config import AttioConfig
from attio.http.connection import ConnectionManager
from attio.http.request_builder import RequestBuilder
from attio.http.response_parser import ResponseParser
from attio.utils.logging import get_logger
from attio.utils.rate_limiter import call_with_rate_limit_retry

logger = get_logger(__name__)


class AttioClient:
    """A client for interacting with the Attio REST API.

    Every resource operation goes through `request`, which builds the request,
    sends it and parses the response. Rate-limited requests (429) are retried
    with exponential backoff up to `config.max_retries` times.
    """

    def __init__(
        self,
        config: AttioConfig | None = None,
        *,
        api_key: str | None = None,
        connection: ConnectionManager | None = None,
    ):
        config = config or AttioConfig.from_env()
        if api_key:
            config = config.merge(api_key=api_key)
        self.config = config
        self.connection = connection or ConnectionManager(config)

    @property
    def session(self):
        return self.connection.session

    def request(
        self,
        method: str,
        path: str,
        params: Mapping[str, Any] | None = None,
        *,
        headers: Mapping[str, Any] | None = None,
        api_key: str | None = None,
    ) -> Any:
        """Make a request to the Attio API.

        Args:
            method: HTTP method (GET, POST, PATCH, PUT, DELETE)
            path: API path relative to the versioned base URL (e.g. "objects/people/records")
            params: Query params for GET/DELETE, JSON body for everything else
            headers: Extra request headers
            api_key: Per-request API key overriding the configured one

        Returns:
            Parsed response body

        Raises:
            APIError: Any mapped error, after retries are exhausted for 429s
        """
        return call_with_rate_limit_retry(
            self._send,
            method,
            path,
            params,
            headers,
            api_key,
            max_retries=self.config.max_retries,
            base_delay=self.config.retry_base_delay,
        )

    def _send(
        self,
        method: str,
        path: str,
        params: Mapping[str, Any] | None,
        headers: Mapping[str, Any] | None,
        api_key: str | None,
    ) -> Any:
        request = RequestBuilder.build(
            method, path, params=params, headers=headers, api_key=api_key, config=self.config
        )
        response = self.connection.execute(request)
        return ResponseParser.parse(response, request)

    def get(self, path: str, params: Mapping[str, Any] | None = None, **kwargs: Any) -> Any:
        return self.request("GET", path, params, **kwargs)

    def post(self, path: str, params: Mapping[str, Any] | None = None, **kwargs: Any) -> Any:
        return self.request("POST", path, params, **kwargs)

    def patch(self, path: str, params: Mapping[str, Any] | None = None, **kwargs: Any) -> Any:
        return self.request("PATCH", path, params, **kwargs)

    def put(self, path: str, params: Mapping[str, Any] | None = None, **kwargs: Any) -> Any:
        return self.request("PUT", path, params, **kwargs)

    def delete(self, path: str, params: Mapping[str, Any] | None = None, **kwargs: Any) -> Any:
        return self.request("DELETE", path, params, **kwargs)

    def close(self) -> None:
        self.connection.close()

    def __enter__(self) -> "AttioClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
