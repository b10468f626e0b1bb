import re
from typing import Any

from attio.errors import InvalidArgumentError
from attio.resources.base import APIResource
from attio.resources.operations import Creatable, Listable, Retrievable, Updatable

TYPES = (
    "text",
    "number",
    "checkbox",
    "date",
    "timestamp",
    "rating",
    "currency",
    "status",
    "select",
    "multiselect",
    "email",
    "phone",
    "url",
    "user",
    "record_reference",
    "location",
)

REQUIRES_OPTIONS = frozenset({"status", "select", "multiselect"})
SUPPORTS_UNIQUE = frozenset({"number", "email"})
UPDATABLE_FIELDS = ("title", "description", "is_required", "is_unique", "default_value", "config")


class Attribute(Creatable, Retrievable, Listable, Updatable, APIResource):
    """An attribute (column) on an Attio object. Listed and created per object."""

    RESOURCE_PATH = "objects/{object}/attributes"
    ID_KEY = "attribute_id"

    @property
    def api_slug(self) -> str | None:
        return self.get("api_slug")

    @property
    def type(self) -> str | None:
        return self.get("type")

    @property
    def title(self) -> str | None:
        return self.get("title")

    @property
    def is_required(self) -> bool:
        return bool(self.get("is_required"))

    @property
    def is_unique(self) -> bool:
        return bool(self.get("is_unique"))

    @property
    def is_archived(self) -> bool:
        return bool(self.get("is_archived"))

    @classmethod
    def prepare_params_for_create(cls, params: dict[str, Any]) -> dict[str, Any]:
        attr_type = params.get("type")
        if not attr_type:
            raise InvalidArgumentError("Attribute type is required")
        if attr_type not in TYPES:
            raise InvalidArgumentError(f"Invalid attribute type: {attr_type}. Valid types: {', '.join(TYPES)}")
        if attr_type in REQUIRES_OPTIONS and not params.get("options") and not params.get("config"):
            raise InvalidArgumentError(f"Attribute type '{attr_type}' requires options")
        if params.get("is_unique") and attr_type not in SUPPORTS_UNIQUE:
            raise InvalidArgumentError(f"Attribute type '{attr_type}' does not support unique constraint")

        title = params.get("title") or params.get("name")
        if not title:
            raise InvalidArgumentError("Attribute title is required")
        api_slug = params.get("api_slug") or re.sub(r"[^a-z0-9]+", "_", title.lower()).strip("_")

        data = {
            "title": title,
            "api_slug": api_slug,
            "type": attr_type,
            "description": params.get("description"),
            "is_required": bool(params.get("is_required", False)),
            "is_unique": bool(params.get("is_unique", False)),
            "is_multiselect": bool(params.get("is_multiselect", False)),
            "default_value": params.get("default_value"),
            "config": params.get("config") or {},
        }
        return {"data": {k: v for k, v in data.items() if v is not None}}

    @classmethod
    def prepare_params_for_update(cls, params: dict[str, Any]) -> dict[str, Any]:
        data = {k: v for k, v in params.items() if k in UPDATABLE_FIELDS}
        if "name" in params and "title" not in data:
            data["title"] = params["name"]
        return {"data": data}
