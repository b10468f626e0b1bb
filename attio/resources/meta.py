"""Identity of the API token in use: which workspace it belongs to and what it may do."""

from typing import Any

from attio.client import AttioClient
from attio.errors import InvalidOperationError
from attio.resources.base import APIResource, request_options


class Meta(APIResource):
    RESOURCE_PATH = "self"

    @classmethod
    def identify(cls, client: AttioClient, **opts: Any) -> "Meta":
        """GET /self for the configured token, or for `api_key=` when given."""
        response = client.get(cls.resource_path(), **request_options(opts))
        return cls.construct_from(response, client, **opts)

    current = identify

    @property
    def active(self) -> bool:
        return bool(self.get("active"))

    @property
    def workspace_id(self) -> str | None:
        return self.get("workspace_id")

    @property
    def workspace_name(self) -> str | None:
        return self.get("workspace_name")

    @property
    def workspace_slug(self) -> str | None:
        return self.get("workspace_slug")

    @property
    def token_id(self) -> str | None:
        return self.get("client_id")

    @property
    def token_type(self) -> str | None:
        return self.get("token_type")

    @property
    def workspace(self) -> dict[str, Any] | None:
        if not self.workspace_id:
            return None
        workspace = {
            "id": self.workspace_id,
            "name": self.workspace_name,
            "slug": self.workspace_slug,
            "logo_url": self.get("workspace_logo_url"),
        }
        return {key: value for key, value in workspace.items() if value is not None}

    @property
    def token(self) -> dict[str, Any] | None:
        if not self.token_id:
            return None
        token = {"id": self.token_id, "type": self.token_type or "Bearer", "scope": self.get("scope")}
        return {key: value for key, value in token.items() if value is not None}

    @property
    def actor(self) -> dict[str, Any] | None:
        member_id = self.get("authorized_by_workspace_member_id")
        if not member_id:
            return None
        return {"type": "workspace-member", "id": member_id}

    @property
    def scopes(self) -> list[str]:
        return (self.get("scope") or "").split()

    def has_scope(self, scope: str) -> bool:
        """Scopes may be written either way: "record_permission_read" or "record_permission:read"."""
        scope = str(scope)
        if ":" not in scope and "_" in scope:
            head, _, tail = scope.rpartition("_")
            scope = f"{head}:{tail}"
        return scope in self.scopes

    def can_read(self, resource: str) -> bool:
        return self.has_scope(f"{resource}:read") or self.has_scope(f"{resource}:read-write")

    def can_write(self, resource: str) -> bool:
        return self.has_scope(f"{resource}:write") or self.has_scope(f"{resource}:read-write")

    def save(self, **opts: Any):
        raise InvalidOperationError("Meta information is read-only")

    def destroy(self, **opts: Any):
        raise InvalidOperationError("Meta information is read-only")

    def to_dict(self) -> dict[str, Any]:
        summary = {"workspace": self.workspace, "token": self.token, "actor": self.actor}
        return {key: value for key, value in summary.items() if value is not None}
