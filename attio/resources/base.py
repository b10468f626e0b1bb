"""Base model for Attio API resources.

An APIResource keeps two copies of its attributes: the current values and a
deep-copied snapshot of what the server last returned. Everything about
"what changed" is derived by comparing the two, so setting a value back to its
original removes it from `changed_attributes`.

`update_from` is the only place the snapshot is rewritten from server data;
create, retrieve, save and refresh all funnel through it.
"""

from __future__ import annotations

import copy
import json
import string
from collections.abc import Iterator, Mapping
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar
from urllib.parse import quote

from attio.errors import InvalidArgumentError, InvalidOperationError
from attio.utils.timestamp import parse_timestamp

if TYPE_CHECKING:
    from attio.client import AttioClient

RESERVED_KEYS = frozenset({"id", "created_at", "_metadata"})
REQUEST_OPTION_KEYS = ("headers", "api_key")


class ResourceState(Enum):
    ACTIVE = "active"
    DELETED = "deleted"


def normalize_keys(value: Any) -> Any:
    """Recursively convert mapping keys to str."""
    if isinstance(value, Mapping):
        return {str(k): normalize_keys(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [normalize_keys(v) for v in value]
    return value


def unwrap_value(value: Any) -> Any:
    """Unwrap Attio's {"value": x} attribute form to x."""
    if isinstance(value, Mapping):
        if "value" in value:
            return value["value"]
        return dict(value)
    if isinstance(value, list):
        return [unwrap_value(v) for v in value]
    return value


def unwrap_data(response: Any) -> Any:
    """Strip the {"data": {...}} envelope single-object responses come in."""
    if isinstance(response, Mapping) and isinstance(response.get("data"), Mapping):
        return response["data"]
    return response


def request_options(opts: Mapping[str, Any]) -> dict[str, Any]:
    """Pick the per-request transport options (headers, api_key) out of opts."""
    return {key: opts[key] for key in REQUEST_OPTION_KEYS if opts.get(key) is not None}


class APIResource:
    """A client-side model of one Attio entity.

    Subclasses set RESOURCE_PATH (a template that may reference path parameters
    such as "{object}") and ID_KEY (the component of the structured id that
    goes in the URL, e.g. "record_id").
    """

    RESOURCE_PATH: ClassVar[str] = ""
    ID_KEY: ClassVar[str | None] = None

    def __init__(self, attributes: Mapping[str, Any] | None = None, client: AttioClient | None = None, **opts: Any):
        if attributes is None:
            attributes = {}
        if not isinstance(attributes, Mapping):
            raise InvalidArgumentError(f"Attributes must be a mapping, got {type(attributes).__name__}")

        self._client = client
        self._opts = dict(opts)
        self._state = ResourceState.ACTIVE
        self._id: Any = None
        self.created_at: datetime | None = None
        self.metadata: dict[str, Any] = {}
        self._attributes: dict[str, Any] = {}
        self._original_attributes: dict[str, Any] = {}
        self._populate(normalize_keys(attributes))

    @classmethod
    def construct_from(cls, response: Any, client: AttioClient | None = None, **opts: Any):
        return cls(unwrap_data(response), client, **opts)

    def _populate(self, normalized: dict[str, Any]) -> None:
        if normalized.get("id") is not None:
            self._id = normalized["id"]
        if normalized.get("created_at") is not None:
            self.created_at = parse_timestamp(normalized["created_at"])
        if "_metadata" in normalized:
            self.metadata = dict(normalized["_metadata"] or {})

        self._attributes = self._extract_attributes(normalized)
        self._original_attributes = copy.deepcopy(self._attributes)

    def _extract_attributes(self, normalized: dict[str, Any]) -> dict[str, Any]:
        return {key: unwrap_value(value) for key, value in normalized.items() if key not in RESERVED_KEYS}

    # Identity and lifecycle

    @property
    def id(self) -> Any:
        """The server-assigned identifier, often a mapping like {"workspace_id": ..., "record_id": ...}."""
        return self._id

    @property
    def id_value(self) -> Any:
        """The scalar id component used in URLs."""
        return self.extract_id(self._id)

    @classmethod
    def extract_id(cls, id: Any) -> Any:
        if isinstance(id, Mapping):
            if cls.ID_KEY and cls.ID_KEY in id:
                return id[cls.ID_KEY]
            return None
        return id

    @property
    def persisted(self) -> bool:
        return self._id is not None

    @property
    def state(self) -> ResourceState:
        return self._state

    @property
    def deleted(self) -> bool:
        return self._state is ResourceState.DELETED

    def _ensure_active(self) -> None:
        if self._state is ResourceState.DELETED:
            raise InvalidOperationError(f"Cannot modify a deleted {type(self).__name__}")

    def _mark_deleted(self) -> None:
        self._state = ResourceState.DELETED

    # Attribute access

    def get(self, key: str, default: Any = None) -> Any:
        return self._attributes.get(str(key), default)

    def __getitem__(self, key: str) -> Any:
        return self._attributes.get(str(key))

    def fetch(self, key: str, *default: Any) -> Any:
        """Like dict access, but raises KeyError for a missing key unless a default is given."""
        key = str(key)
        if key in self._attributes:
            return self._attributes[key]
        if default:
            return default[0]
        raise KeyError(key)

    def set(self, key: str, value: Any) -> None:
        self._ensure_active()
        key = str(key)
        if key in RESERVED_KEYS:
            raise InvalidArgumentError(f"{key} is managed by the server and cannot be set")
        self._attributes[key] = self._process_value(normalize_keys(value))

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def _process_value(self, value: Any) -> Any:
        return unwrap_value(value)

    def update_attributes(self, attributes: Mapping[str, Any]):
        if not isinstance(attributes, Mapping):
            raise InvalidArgumentError("Attributes must be a mapping")
        for key, value in attributes.items():
            self.set(key, value)
        return self

    def __contains__(self, key: object) -> bool:
        return str(key) in self._attributes

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._attributes))

    def __len__(self) -> int:
        return len(self._attributes)

    def keys(self) -> list[str]:
        return list(self._attributes.keys())

    def values(self) -> list[Any]:
        return list(self._attributes.values())

    def items(self) -> list[tuple[str, Any]]:
        return list(self._attributes.items())

    @property
    def attributes(self) -> dict[str, Any]:
        return dict(self._attributes)

    @property
    def original_attributes(self) -> dict[str, Any]:
        return copy.deepcopy(self._original_attributes)

    # Change tracking

    @property
    def changed_attributes(self) -> dict[str, Any]:
        return {
            key: value
            for key, value in self._attributes.items()
            if key not in self._original_attributes or self._original_attributes[key] != value
        }

    @property
    def changed(self) -> bool:
        return bool(self.changed_attributes)

    @property
    def changed_keys(self) -> list[str]:
        return list(self.changed_attributes)

    @property
    def changes(self) -> dict[str, tuple[Any, Any]]:
        return {key: (self._original_attributes.get(key), value) for key, value in self.changed_attributes.items()}

    def reset_changes(self) -> None:
        self._ensure_active()
        self._original_attributes = copy.deepcopy(self._attributes)

    def revert(self) -> None:
        self._ensure_active()
        self._attributes = copy.deepcopy(self._original_attributes)

    def update_from(self, server_attributes: Mapping[str, Any]):
        """Replace local state with what the server returned."""
        self._ensure_active()
        if not isinstance(server_attributes, Mapping):
            raise InvalidArgumentError(f"Expected a mapping from the server, got {type(server_attributes).__name__}")
        self._attributes = {}
        self._original_attributes = {}
        self._populate(normalize_keys(server_attributes))
        return self

    # Paths

    @classmethod
    def path_param_names(cls) -> list[str]:
        return [name for _, name, _, _ in string.Formatter().parse(cls.RESOURCE_PATH) if name]

    @classmethod
    def resource_path(cls, **path_params: Any) -> str:
        if not cls.RESOURCE_PATH:
            raise NotImplementedError(f"{cls.__name__} does not define RESOURCE_PATH")

        values = {}
        for name in cls.path_param_names():
            value = path_params.get(name)
            if value is None or str(value) == "":
                raise InvalidArgumentError(f"{name} is required for {cls.__name__}")
            values[name] = quote(str(value), safe="")
        return cls.RESOURCE_PATH.format(**values)

    def path_params(self) -> dict[str, Any]:
        """Path parameters for this instance: explicit opts first, then the structured id.

        "{object}" falls back to id["object_id"], "{list}" to id["list_id"].
        """
        params = {}
        for name in self.path_param_names():
            if self._opts.get(name) is not None:
                params[name] = self._opts[name]
            elif isinstance(self._id, Mapping) and self._id.get(f"{name}_id") is not None:
                params[name] = self._id[f"{name}_id"]
        return params

    def instance_path(self) -> str:
        id_value = self.id_value
        if id_value is None or str(id_value) == "":
            raise InvalidOperationError(f"{type(self).__name__} has no ID")
        return f"{self.resource_path(**self.path_params())}/{quote(str(id_value), safe='')}"

    def _require_client(self) -> AttioClient:
        if self._client is None:
            raise InvalidOperationError(f"{type(self).__name__} is not bound to an AttioClient")
        return self._client

    def _request_options(self, opts: Mapping[str, Any]) -> dict[str, Any]:
        return request_options({**self._opts, **opts})

    # Persistence hooks, filled in by the operation mixins

    def save(self, **opts: Any):
        """Create the resource if it has no id, otherwise PATCH its changed attributes."""
        self._ensure_active()
        if not self.persisted:
            return self._save_new(**opts)
        return self._save_changes(**opts)

    def _save_new(self, **opts: Any):
        raise InvalidOperationError("Cannot update a resource without an ID")

    def _save_changes(self, **opts: Any):
        raise InvalidOperationError(f"{type(self).__name__} does not support updates")

    # Serialization

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self._id is not None:
            result["id"] = self._id
        if self.created_at is not None:
            result["created_at"] = self.created_at.isoformat()
        result.update(self._attributes)
        return result

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self.to_dict(), default=str, **kwargs)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._id == other._id and self._attributes == other._attributes

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        attrs = ", ".join(f"{key}={value!r}" for key, value in self._attributes.items())
        return f"<{type(self).__name__} id={self._id!r} {attrs}>"
