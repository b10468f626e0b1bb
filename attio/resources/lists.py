from typing import Any

from attio.client import AttioClient
from attio.errors import InvalidArgumentError, NotFoundError
from attio.resources.base import APIResource
from attio.resources.operations import Creatable, Listable, Retrievable, Updatable


class AttioList(Creatable, Retrievable, Listable, Updatable, APIResource):
    """An Attio list: a curated collection of records from one object."""

    RESOURCE_PATH = "lists"
    ID_KEY = "list_id"

    @property
    def name(self) -> str | None:
        return self.get("name")

    @property
    def api_slug(self) -> str | None:
        return self.get("api_slug")

    @property
    def parent_object(self) -> Any:
        return self.get("parent_object")

    def entries(self, params: dict[str, Any] | None = None, **opts: Any):
        from attio.resources.list_entries import ListEntry

        return ListEntry.list(self._require_client(), params, list=self.id_value, **opts)

    def add_record(self, record_id: str, parent_object: str | None = None, **opts: Any):
        from attio.resources.list_entries import ListEntry

        params = {"parent_record_id": record_id, "parent_object": parent_object or self._parent_object_slug()}
        return ListEntry.create(self._require_client(), params, list=self.id_value, **opts)

    def remove_record(self, entry_id: str, **opts: Any) -> bool:
        from attio.resources.list_entries import ListEntry

        return ListEntry.delete(self._require_client(), entry_id, list=self.id_value, **opts)

    def contains_record(self, record_id: str, **opts: Any) -> bool:
        return bool(self.entries({"filter": {"record_id": record_id}, "limit": 1}, **opts))

    def entry_count(self, **opts: Any) -> int | None:
        return self.entries({"limit": 1}, **opts).total_count

    def _parent_object_slug(self) -> str | None:
        parent = self.parent_object
        if isinstance(parent, list):
            parent = parent[0] if parent else None
        return parent

    @classmethod
    def prepare_params_for_create(cls, params: dict[str, Any]) -> dict[str, Any]:
        parent_object = params.get("parent_object") or params.get("object")
        if not parent_object:
            raise InvalidArgumentError("Object identifier is required")
        data = {
            "name": params.get("name"),
            "api_slug": params.get("api_slug"),
            "parent_object": parent_object,
            "workspace_access": params.get("workspace_access"),
            "workspace_member_access": params.get("workspace_member_access"),
        }
        return {"data": {k: v for k, v in data.items() if v is not None}}

    @classmethod
    def find_by_slug(cls, client: AttioClient, slug: str, **opts: Any) -> "AttioList":
        for attio_list in cls.each(client, **opts):
            if attio_list.api_slug == slug:
                return attio_list
        raise NotFoundError(f"List with slug '{slug}' not found")
