"""
Attio OAuth 2.0 client.

Covers the authorization-code flow: build the consent URL, exchange the code
for a token, refresh, revoke and introspect. Token endpoints take
form-encoded bodies.
"""

import secrets
from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import urlencode

from attio.config import AttioConfig
from attio.errors import APIError, InvalidArgumentError
from attio.http.connection import ConnectionManager
from attio.http.request_builder import Request, generate_request_id
from attio.http.response_parser import ResponseParser
from attio.oauth.scopes import ScopeValidator
from attio.oauth.token import Token
from attio.utils.logging import get_logger
from attio.version import __version__

logger = get_logger(__name__)

OAUTH_BASE_URL = "https://app.attio.com/authorize"
DEFAULT_SCOPES = (
    "record:read",
    "record:write",
    "object:read",
    "object:write",
    "list:read",
    "list:write",
    "webhook:read",
    "webhook:write",
    "user:read",
)


class OAuthClient:
    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        connection: ConnectionManager | None = None,
        config: AttioConfig | None = None,
    ):
        if not client_id:
            raise InvalidArgumentError("client_id is required")
        if not client_secret:
            raise InvalidArgumentError("client_secret is required")
        if not redirect_uri:
            raise InvalidArgumentError("redirect_uri is required")
        if not redirect_uri.startswith(("http://", "https://")):
            raise InvalidArgumentError("redirect_uri must be a valid HTTP(S) URL")

        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.config = config or (connection.config if connection else AttioConfig())
        self.connection = connection or ConnectionManager(self.config)

    @property
    def token_url(self) -> str:
        return f"{self.config.base_url}/oauth/token"

    def authorization_url(
        self,
        scopes: Iterable[str] | None = None,
        state: str | None = None,
        extras: Mapping[str, Any] | None = None,
    ) -> dict[str, str]:
        """Build the consent URL to redirect the user to.

        Returns:
            {"url": ..., "state": ...}. Keep `state` to check it on the callback.
        """
        state = state or secrets.token_urlsafe(32)
        scopes = ScopeValidator.validate(scopes) if scopes else list(DEFAULT_SCOPES)
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": " ".join(scopes),
            "state": state,
            **(extras or {}),
        }
        return {"url": f"{OAUTH_BASE_URL}?{urlencode(params)}", "state": state}

    def exchange_code_for_token(self, code: str) -> Token:
        if not code:
            raise InvalidArgumentError("Authorization code is required")
        response = self._token_request(
            {
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": self.redirect_uri,
                "client_id": self.client_id,
                "client_secret": self.client_secret,
            }
        )
        return Token.from_response(response, client=self)

    def refresh_token(self, refresh_token: str) -> Token:
        if not refresh_token:
            raise InvalidArgumentError("Refresh token is required")
        response = self._token_request(
            {
                "grant_type": "refresh_token",
                "refresh_token": refresh_token,
                "client_id": self.client_id,
                "client_secret": self.client_secret,
            }
        )
        return Token.from_response(response, client=self)

    def revoke_token(self, token: Token | str) -> bool:
        """Revoke a token. Failures (e.g. already revoked) are logged and reported as False."""
        try:
            self._form_post(f"{self.config.base_url}/oauth/revoke", self._token_params(token))
        except APIError as e:
            logger.warning("Failed to revoke Attio OAuth token", error=str(e))
            return False
        return True

    def introspect_token(self, token: Token | str) -> dict[str, Any]:
        return self._form_post(f"{self.config.base_url}/oauth/introspect", self._token_params(token))

    def _token_params(self, token: Token | str) -> dict[str, Any]:
        token_value = token.access_token if isinstance(token, Token) else token
        return {"token": token_value, "client_id": self.client_id, "client_secret": self.client_secret}

    def _token_request(self, params: Mapping[str, Any]) -> dict[str, Any]:
        return self._form_post(self.token_url, params)

    def _form_post(self, url: str, params: Mapping[str, Any]) -> Any:
        request = Request(
            method="POST",
            url=url,
            headers={
                "Content-Type": "application/x-www-form-urlencoded",
                "Accept": "application/json",
                "User-Agent": f"attio-python/{__version__}",
                "X-Request-ID": generate_request_id(),
            },
            body=urlencode(params),
            params={k: v for k, v in params.items() if k not in ("client_secret", "code", "refresh_token", "token")},
        )
        response = self.connection.execute(request)
        return ResponseParser.parse(response, request)
