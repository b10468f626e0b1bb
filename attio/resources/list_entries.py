from typing import Any

from attio.client import AttioClient
from attio.errors import InvalidArgumentError
from attio.resources.base import APIResource, request_options
from attio.resources.operations import Creatable, Deletable, Listable, Retrievable, Updatable


class ListEntry(Creatable, Retrievable, Listable, Updatable, Deletable, APIResource):
    """A record's membership in a list. Always addressed through `list=<list id or slug>`."""

    RESOURCE_PATH = "lists/{list}/entries"
    ID_KEY = "entry_id"
    LIST_METHOD = "POST"
    LIST_PATH_SUFFIX = "/query"

    @property
    def parent_record_id(self) -> str | None:
        return self.get("parent_record_id")

    @property
    def parent_object(self) -> str | None:
        return self.get("parent_object")

    def record(self, **opts: Any):
        from attio.resources.records import Record

        if not self.parent_record_id or not self.parent_object:
            return None
        return Record.retrieve(self._require_client(), self.parent_record_id, object=self.parent_object, **opts)

    @classmethod
    def prepare_params_for_create(cls, params: dict[str, Any]) -> dict[str, Any]:
        if not params.get("parent_record_id"):
            raise InvalidArgumentError("parent_record_id is required")
        if not params.get("parent_object"):
            raise InvalidArgumentError("parent_object is required")
        data = dict(params)
        data.setdefault("entry_values", {})
        return {"data": data}

    @classmethod
    def create_batch(
        cls, client: AttioClient, record_ids: list[str], parent_object: str, **opts: Any
    ) -> list["ListEntry"]:
        if not isinstance(record_ids, list):
            raise InvalidArgumentError("record_ids must be a list")
        if not record_ids:
            raise InvalidArgumentError("record_ids cannot be empty")
        body = {
            "data": [
                {"parent_record_id": record_id, "parent_object": parent_object, "entry_values": {}}
                for record_id in record_ids
            ]
        }
        response = client.post(f"{cls.resource_path(**opts)}/batch", body, **request_options(opts))
        return [cls(item, client, **opts) for item in response.get("data") or []]

    @classmethod
    def assert_by_parent(
        cls,
        client: AttioClient,
        parent_record_id: str,
        parent_object: str,
        entry_values: dict[str, Any] | None = None,
        **opts: Any,
    ) -> "ListEntry":
        """Upsert by parent record: create the entry if the record is not in the list, else update its values."""
        body = cls.prepare_params_for_create(
            {"parent_record_id": parent_record_id, "parent_object": parent_object, "entry_values": entry_values or {}}
        )
        response = client.put(cls.resource_path(**opts), body, **request_options(opts))
        return cls.construct_from(response, client, **opts)
