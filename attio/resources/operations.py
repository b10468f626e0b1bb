"""CRUD capabilities a resource class opts into.

A resource lists the capabilities it supports ahead of APIResource in its
bases, e.g. `class Webhook(Creatable, Retrievable, Listable, Updatable,
Deletable, APIResource)`. Class-level operations take the AttioClient as their
first argument; the remaining keyword options are `headers`, `api_key` and any
path parameters the resource's RESOURCE_PATH needs (e.g. `object="people"`).
"""

from collections.abc import Iterator, Mapping
from typing import Any, ClassVar
from urllib.parse import quote

from attio.client import AttioClient
from attio.errors import InvalidArgumentError, InvalidOperationError
from attio.resources.base import request_options, unwrap_data
from attio.resources.list_object import ListObject
from attio.utils.logging import get_logger

logger = get_logger(__name__)


def validate_id(id: Any) -> None:
    if id is None or str(id) == "":
        raise InvalidArgumentError("ID is required")


def validate_params(params: Any) -> None:
    if not isinstance(params, Mapping):
        raise InvalidArgumentError(f"Params must be a mapping, got {type(params).__name__}")


def _id_path(cls, id: Any, opts: Mapping[str, Any]) -> str:
    id_value = cls.extract_id(id)
    validate_id(id_value)
    path_params = dict(opts)
    if isinstance(id, Mapping):
        # A structured id carries its parents, e.g. {"object_id": ..., "record_id": ...}
        for name in cls.path_param_names():
            if path_params.get(name) is None and id.get(f"{name}_id") is not None:
                path_params[name] = id[f"{name}_id"]
    return f"{cls.resource_path(**path_params)}/{quote(str(id_value), safe='')}"


class Creatable:
    @classmethod
    def create(cls, client: AttioClient, params: Mapping[str, Any], **opts: Any):
        """POST a new resource and return it constructed from the response."""
        validate_params(params)
        body = cls.prepare_params_for_create(dict(params))
        response = client.post(cls.resource_path(**opts), body, **request_options(opts))
        return cls.construct_from(response, client, **opts)

    @classmethod
    def prepare_params_for_create(cls, params: dict[str, Any]) -> dict[str, Any]:
        return {"data": params}

    def _save_new(self, **opts: Any):
        cls = type(self)
        client = self._require_client()
        body = cls.prepare_params_for_create(dict(self._attributes))
        path = cls.resource_path(**{**self._opts, **opts, **self.path_params()})
        response = client.post(path, body, **self._request_options(opts))
        self.update_from(unwrap_data(response))
        return self


class Retrievable:
    @classmethod
    def retrieve(cls, client: AttioClient, id: Any, **opts: Any):
        response = client.get(_id_path(cls, id, opts), **request_options(opts))
        return cls.construct_from(response, client, **opts)

    def refresh(self, **opts: Any):
        """Reload this resource's attributes from the server."""
        self._ensure_active()
        if not self.persisted:
            raise InvalidOperationError("Cannot refresh a resource without an ID")
        response = self._require_client().get(self.instance_path(), **self._request_options(opts))
        return self.update_from(unwrap_data(response))


class Listable:
    LIST_METHOD: ClassVar[str] = "GET"
    LIST_PATH_SUFFIX: ClassVar[str] = ""

    @classmethod
    def list(cls, client: AttioClient, params: Mapping[str, Any] | None = None, **opts: Any) -> ListObject:
        """Fetch one page. Use the returned ListObject to walk further pages."""
        if params is not None:
            validate_params(params)
        params = dict(params or {})
        path = f"{cls.resource_path(**opts)}{cls.LIST_PATH_SUFFIX}"
        response = client.request(
            cls.LIST_METHOD, path, cls.prepare_params_for_list(params) or None, **request_options(opts)
        )
        return ListObject(response, cls, client, params, opts)

    @classmethod
    def prepare_params_for_list(cls, params: dict[str, Any]) -> dict[str, Any]:
        return params

    @classmethod
    def each(cls, client: AttioClient, params: Mapping[str, Any] | None = None, **opts: Any) -> Iterator[Any]:
        """Lazily yield every resource across all pages, starting from the first."""
        yield from cls.list(client, params, **opts).auto_paging_iter()

    @classmethod
    def each_page(
        cls, client: AttioClient, params: Mapping[str, Any] | None = None, **opts: Any
    ) -> Iterator[ListObject]:
        yield from cls.list(client, params, **opts).auto_paging_pages()


class Updatable:
    @classmethod
    def update(cls, client: AttioClient, id: Any, params: Mapping[str, Any], **opts: Any):
        validate_params(params)
        path = _id_path(cls, id, opts)
        body = cls.prepare_params_for_update(dict(params))
        response = client.patch(path, body, **request_options(opts))
        return cls.construct_from(response, client, **opts)

    @classmethod
    def prepare_params_for_update(cls, params: dict[str, Any]) -> dict[str, Any]:
        return {"data": params}

    def _save_changes(self, **opts: Any):
        # Nothing tracked as changed means the caller wants everything sent.
        params = self.changed_attributes or dict(self._attributes)
        body = type(self).prepare_params_for_update(params)
        response = self._require_client().patch(self.instance_path(), body, **self._request_options(opts))
        self.update_from(unwrap_data(response))
        return self


class Deletable:
    @classmethod
    def delete(cls, client: AttioClient, id: Any, **opts: Any) -> bool:
        client.delete(_id_path(cls, id, opts), **request_options(opts))
        return True

    def destroy(self, **opts: Any) -> bool:
        """DELETE this resource. Afterwards every mutating call raises InvalidOperationError."""
        self._ensure_active()
        if not self.persisted:
            raise InvalidOperationError("Cannot delete a resource without an ID")
        self._require_client().delete(self.instance_path(), **self._request_options(opts))
        self._mark_deleted()
        logger.debug("Deleted resource", resource=type(self).__name__, id=self.id_value)
        return True
