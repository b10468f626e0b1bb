from collections.abc import Iterable

from attio.errors import InvalidArgumentError

SCOPE_DEFINITIONS = {
    "record:read": "Read access to records",
    "record:write": "Write access to records (includes read)",
    "object:read": "Read access to objects and their configuration",
    "object:write": "Write access to objects (includes read)",
    "list:read": "Read access to lists and list entries",
    "list:write": "Write access to lists (includes read)",
    "webhook:read": "Read access to webhooks",
    "webhook:write": "Write access to webhooks (includes read)",
    "user:read": "Read access to workspace members",
    "note:read": "Read access to notes",
    "note:write": "Write access to notes (includes read)",
    "attribute:read": "Read access to attributes",
    "attribute:write": "Write access to attributes (includes read)",
    "comment:read": "Read access to comments",
    "comment:write": "Write access to comments (includes read)",
    "task:read": "Read access to tasks",
    "task:write": "Write access to tasks (includes read)",
}

VALID_SCOPES = tuple(SCOPE_DEFINITIONS)

# Write scopes imply the matching read scope
SCOPE_HIERARCHY = {
    "record:write": ("record:read",),
    "object:write": ("object:read",),
    "list:write": ("list:read",),
    "webhook:write": ("webhook:read",),
    "note:write": ("note:read",),
    "attribute:write": ("attribute:read",),
    "comment:write": ("comment:read",),
    "task:write": ("task:read",),
}


class InvalidScopeError(InvalidArgumentError):
    pass


def _as_list(scopes: str | Iterable[str] | None) -> list[str]:
    if scopes is None:
        return []
    if isinstance(scopes, str):
        return scopes.split()
    return [str(scope) for scope in scopes]


class ScopeValidator:
    VALID_SCOPES = VALID_SCOPES

    @classmethod
    def validate(cls, scopes: str | Iterable[str] | None) -> list[str]:
        scopes = _as_list(scopes)
        invalid = [scope for scope in scopes if scope not in SCOPE_DEFINITIONS]
        if invalid:
            raise InvalidScopeError(f"Invalid scopes: {', '.join(invalid)}")
        return scopes

    @classmethod
    def is_valid(cls, scope: str) -> bool:
        return str(scope) in SCOPE_DEFINITIONS

    @classmethod
    def description(cls, scope: str) -> str | None:
        return SCOPE_DEFINITIONS.get(str(scope))

    @classmethod
    def includes(cls, scopes: str | Iterable[str] | None, required_scope: str) -> bool:
        """True if `scopes` grants `required_scope`, directly or through a write scope."""
        scopes = _as_list(scopes)
        required = str(required_scope)
        if required in scopes:
            return True
        return any(required in SCOPE_HIERARCHY.get(scope, ()) for scope in scopes)

    @classmethod
    def expand(cls, scopes: str | Iterable[str] | None) -> list[str]:
        scopes = _as_list(scopes)
        expanded = set(scopes)
        for scope in scopes:
            expanded.update(SCOPE_HIERARCHY.get(scope, ()))
        return sorted(expanded)

    @classmethod
    def minimize(cls, scopes: str | Iterable[str] | None) -> list[str]:
        """Drop read scopes already implied by a write scope in the set."""
        minimized = set(_as_list(scopes))
        for write_scope, read_scopes in SCOPE_HIERARCHY.items():
            if write_scope in minimized:
                minimized.difference_update(read_scopes)
        return sorted(minimized)

    @classmethod
    def group_by_resource(cls, scopes: str | Iterable[str] | None) -> dict[str, list[str]]:
        grouped: dict[str, list[str]] = {}
        for scope in _as_list(scopes):
            grouped.setdefault(scope.split(":", 1)[0], []).append(scope)
        return grouped

    @classmethod
    def sufficient_for(cls, scopes: str | Iterable[str] | None, resource: str, operation: str) -> bool:
        return cls.includes(scopes, f"{resource}:{operation}")
