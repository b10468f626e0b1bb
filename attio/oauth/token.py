from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

from attio.errors import AttioError

if TYPE_CHECKING:
    from attio.oauth.client import OAuthClient

VALID_TOKEN_TYPES = ("Bearer", "bearer")


class InvalidTokenError(AttioError):
    """Raised for a token that is missing required values or cannot be refreshed."""


def _parse_scope(scope: Any) -> list[str]:
    if isinstance(scope, str):
        return scope.split()
    if isinstance(scope, (list, tuple)):
        return [str(s) for s in scope]
    return []


@dataclass(repr=False)
class Token:
    """An OAuth access token issued by Attio."""

    access_token: str | None
    refresh_token: str | None = None
    token_type: str = "Bearer"
    expires_in: int | None = None
    scope: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    client: OAuthClient | None = None
    expires_at: datetime | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        self.scope = _parse_scope(self.scope)
        if self.expires_in is not None:
            self.expires_in = int(self.expires_in)
        self._calculate_expiration()
        self._validate()

    @classmethod
    def from_response(cls, data: Mapping[str, Any], client: OAuthClient | None = None) -> Token:
        return cls(
            access_token=data.get("access_token"),
            refresh_token=data.get("refresh_token"),
            token_type=data.get("token_type") or "Bearer",
            expires_in=data.get("expires_in"),
            scope=data.get("scope"),
            client=client,
        )

    def _calculate_expiration(self) -> None:
        if self.expires_in is None:
            self.expires_at = None
        else:
            self.expires_at = self.created_at + timedelta(seconds=self.expires_in)

    def _validate(self) -> None:
        if not self.access_token:
            raise InvalidTokenError("Access token is required")
        if self.token_type not in VALID_TOKEN_TYPES:
            raise InvalidTokenError("Invalid token type")

    @property
    def expired(self) -> bool:
        if self.expires_at is None:
            return False
        return datetime.now(UTC) >= self.expires_at

    def expires_soon(self, threshold: int = 300) -> bool:
        if self.expires_at is None:
            return False
        return datetime.now(UTC) >= self.expires_at - timedelta(seconds=threshold)

    def refresh(self) -> Token:
        """Exchange the refresh token for a new access token, updating this token in place."""
        if not self.refresh_token:
            raise InvalidTokenError("No refresh token available")
        if self.client is None:
            raise InvalidTokenError("No OAuth client configured")

        new_token = self.client.refresh_token(self.refresh_token)
        self.access_token = new_token.access_token
        if new_token.refresh_token:
            self.refresh_token = new_token.refresh_token
        self.token_type = new_token.token_type
        self.expires_in = new_token.expires_in
        self.expires_at = new_token.expires_at
        self.scope = new_token.scope
        self.created_at = new_token.created_at
        return self

    def revoke(self) -> bool:
        if self.client is None:
            raise InvalidTokenError("No OAuth client configured")
        self.client.revoke_token(self)
        self.access_token = None
        self.refresh_token = None
        return True

    @property
    def authorization_header(self) -> str:
        return f"{self.token_type} {self.access_token}"

    def has_scope(self, scope: str) -> bool:
        return str(scope) in self.scope

    def to_dict(self) -> dict[str, Any]:
        data = {
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "token_type": self.token_type,
            "expires_in": self.expires_in,
            "expires_at": self.expires_at.isoformat() if self.expires_at else None,
            "scope": list(self.scope),
            "created_at": self.created_at.isoformat(),
        }
        return {k: v for k, v in data.items() if v is not None}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    def __repr__(self) -> str:
        masked = f"***{self.access_token[-4:]}" if self.access_token else None
        expires = self.expires_at.isoformat() if self.expires_at else None
        return f"<Token token={masked} expires_at={expires} scope={' '.join(self.scope)!r}>"
