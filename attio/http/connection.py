"""HTTP transport backed by a single requests.Session."""

import requests

from attio.config import AttioConfig
from attio.errors import ConnectionError, InvalidArgumentError, SSLError, TimeoutError
from attio.http.request_builder import Request
from attio.utils.logging import get_logger, redact_headers

logger = get_logger(__name__)

SUPPORTED_METHODS = frozenset({"GET", "POST", "PATCH", "PUT", "DELETE", "HEAD"})


class ConnectionManager:
    """Sends Requests over a pooled requests.Session."""

    def __init__(self, config: AttioConfig | None = None, session: requests.Session | None = None):
        self.config = config or AttioConfig()
        self.session = session or requests.Session()

    @property
    def verify(self) -> bool | str:
        if not self.config.verify_ssl_certs:
            return False
        return self.config.ca_bundle_path or True

    def execute(self, request: Request) -> requests.Response:
        if request.method not in SUPPORTED_METHODS:
            raise InvalidArgumentError(f"Unsupported HTTP method: {request.method}")

        if self.config.debug:
            logger.debug(
                "Attio request",
                method=request.method,
                url=request.url,
                headers=redact_headers(request.headers),
                request_id=request.request_id,
            )
        else:
            logger.debug(
                "Attio request", method=request.method, url=request.url, request_id=request.request_id
            )

        try:
            response = self.session.request(
                request.method,
                request.url,
                params=request.query or None,
                data=request.body,
                headers=request.headers,
                timeout=(self.config.open_timeout, self.config.timeout),
                verify=self.verify,
            )
        except requests.Timeout as e:
            raise TimeoutError(f"Request timed out: {e}", request_id=request.request_id) from e
        except requests.exceptions.SSLError as e:
            raise SSLError(f"SSL error: {e}", request_id=request.request_id) from e
        except requests.RequestException as e:
            raise ConnectionError(f"Connection failed: {e}", request_id=request.request_id) from e

        logger.debug(
            "Attio response",
            method=request.method,
            url=request.url,
            status=response.status_code,
            request_id=request.request_id,
        )
        return response

    def close(self) -> None:
        self.session.close()
