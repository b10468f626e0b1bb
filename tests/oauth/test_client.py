"""Tests for the OAuth client."""

import json
from unittest.mock import MagicMock
from urllib.parse import parse_qs, urlparse

import pytest
import requests

from attio.config import AttioConfig
from attio.errors import AuthenticationError, InvalidArgumentError
from attio.http.connection import ConnectionManager
from attio.oauth.client import DEFAULT_SCOPES, OAuthClient
from attio.oauth.scopes import InvalidScopeError
from attio.oauth.token import Token

TOKEN_BODY = {
    "access_token": "at_1",
    "refresh_token": "rt_1",
    "token_type": "Bearer",
    "expires_in": 3600,
    "scope": "record:read",
}


def make_response(status: int = 200, body: object = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.encoding = "utf-8"
    response._content = b"" if body is None else json.dumps(body).encode()
    return response


@pytest.fixture
def connection():
    connection = MagicMock(spec=ConnectionManager)
    connection.execute.return_value = make_response(body=TOKEN_BODY)
    return connection


@pytest.fixture
def oauth(connection):
    return OAuthClient(
        "client_1", "secret_1", "https://example.com/callback", connection=connection, config=AttioConfig()
    )


def sent_request(connection):
    return connection.execute.call_args.args[0]


class TestConstruction:
    @pytest.mark.parametrize(
        "args,message",
        [
            (("", "s", "https://x"), "client_id is required"),
            (("c", "", "https://x"), "client_secret is required"),
            (("c", "s", ""), "redirect_uri is required"),
            (("c", "s", "example.com/callback"), "valid HTTP"),
        ],
    )
    def test_validation(self, connection, args, message):
        with pytest.raises(InvalidArgumentError, match=message):
            OAuthClient(*args, connection=connection)

    def test_token_url(self, oauth):
        assert oauth.token_url == "https://api.attio.com/v2/oauth/token"


class TestAuthorizationUrl:
    def test_defaults(self, oauth):
        result = oauth.authorization_url()

        url = urlparse(result["url"])
        query = parse_qs(url.query)
        assert f"{url.scheme}://{url.netloc}{url.path}" == "https://app.attio.com/authorize"
        assert query["client_id"] == ["client_1"]
        assert query["redirect_uri"] == ["https://example.com/callback"]
        assert query["response_type"] == ["code"]
        assert query["scope"] == [" ".join(DEFAULT_SCOPES)]
        assert query["state"] == [result["state"]]
        assert len(result["state"]) >= 32

    def test_explicit_scopes_state_and_extras(self, oauth):
        result = oauth.authorization_url(["record:read"], state="abc", extras={"prompt": "consent"})

        query = parse_qs(urlparse(result["url"]).query)
        assert result["state"] == "abc"
        assert query["scope"] == ["record:read"]
        assert query["prompt"] == ["consent"]

    def test_invalid_scopes(self, oauth):
        with pytest.raises(InvalidScopeError):
            oauth.authorization_url(["admin"])


class TestTokenEndpoints:
    def test_exchange_code_for_token(self, oauth, connection):
        token = oauth.exchange_code_for_token("code_1")

        request = sent_request(connection)
        assert request.method == "POST"
        assert request.url == "https://api.attio.com/v2/oauth/token"
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert parse_qs(request.body) == {
            "grant_type": ["authorization_code"],
            "code": ["code_1"],
            "redirect_uri": ["https://example.com/callback"],
            "client_id": ["client_1"],
            "client_secret": ["secret_1"],
        }
        assert "client_secret" not in request.params
        assert "code" not in request.params
        assert isinstance(token, Token)
        assert token.access_token == "at_1"
        assert token.client is oauth

    def test_exchange_requires_code(self, oauth):
        with pytest.raises(InvalidArgumentError, match="Authorization code is required"):
            oauth.exchange_code_for_token("")

    def test_refresh_token(self, oauth, connection):
        token = oauth.refresh_token("rt_1")

        body = parse_qs(sent_request(connection).body)
        assert body["grant_type"] == ["refresh_token"]
        assert body["refresh_token"] == ["rt_1"]
        assert token.refresh_token == "rt_1"

    def test_refresh_requires_token(self, oauth):
        with pytest.raises(InvalidArgumentError, match="Refresh token is required"):
            oauth.refresh_token(None)

    def test_error_response_raises(self, oauth, connection):
        connection.execute.return_value = make_response(401, {"message": "invalid_client"})

        with pytest.raises(AuthenticationError):
            oauth.exchange_code_for_token("code_1")

    def test_revoke_token(self, oauth, connection):
        connection.execute.return_value = make_response(200)

        assert oauth.revoke_token(Token(access_token="at_9")) is True

        request = sent_request(connection)
        assert request.url == "https://api.attio.com/v2/oauth/revoke"
        assert parse_qs(request.body)["token"] == ["at_9"]

    def test_revoke_failure_returns_false(self, oauth, connection):
        connection.execute.return_value = make_response(400, {"message": "already revoked"})

        assert oauth.revoke_token("at_9") is False

    def test_introspect_token(self, oauth, connection):
        connection.execute.return_value = make_response(body={"active": True, "scope": "record:read"})

        assert oauth.introspect_token("at_9") == {"active": True, "scope": "record:read"}
        assert sent_request(connection).url == "https://api.attio.com/v2/oauth/introspect"
