from attio.oauth.client import DEFAULT_SCOPES, OAuthClient
from attio.oauth.scopes import InvalidScopeError, ScopeValidator
from attio.oauth.token import InvalidTokenError, Token

__all__ = ["DEFAULT_SCOPES", "InvalidScopeError", "InvalidTokenError", "OAuthClient", "ScopeValidator", "Token"]
