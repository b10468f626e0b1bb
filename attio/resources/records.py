"""Records: the rows of an Attio object (people, companies, custom objects).

Record values arrive nested under "values" in Attio's wrapped form; they are
flattened into plain attributes so `record["name"]` reads naturally, and
wrapped again by `normalize_values` on the way out.
"""

from collections.abc import Mapping
from typing import Any

from attio.client import AttioClient
from attio.errors import InvalidArgumentError
from attio.resources.base import APIResource, RESERVED_KEYS, request_options
from attio.resources.operations import Creatable, Deletable, Listable, Retrievable, Updatable

SCALAR_TYPES = (str, int, float, bool, type(None))


def normalize_values(values: Mapping[str, Any]) -> dict[str, Any]:
    """Wrap plain values in the {"value": x} form the API accepts."""
    if not isinstance(values, Mapping):
        raise InvalidArgumentError("Values must be a mapping")

    normalized: dict[str, Any] = {}
    for key, value in values.items():
        if isinstance(value, SCALAR_TYPES):
            normalized[str(key)] = {"value": value}
        elif isinstance(value, (list, tuple)):
            normalized[str(key)] = [v if isinstance(v, Mapping) else {"value": v} for v in value]
        elif isinstance(value, Mapping):
            normalized[str(key)] = dict(value) if "value" in value else {"value": dict(value)}
        else:
            normalized[str(key)] = {"value": str(value)}
    return normalized


def extract_value(value_data: Any) -> Any:
    if isinstance(value_data, Mapping):
        if "value" in value_data:
            return value_data["value"]
        if "target_object" in value_data and len(value_data) == 1:
            return value_data["target_object"]
        return dict(value_data)
    if isinstance(value_data, list):
        return [extract_value(v) for v in value_data]
    return value_data


def _values_of(params: Mapping[str, Any]) -> Mapping[str, Any]:
    """Accept either {"values": {...}} or the values mapping itself."""
    values = params.get("values")
    return values if isinstance(values, Mapping) else params


def build_sort(sort: Any) -> Any:
    """"created_at:desc" -> {"field": "created_at", "direction": "desc"}."""
    if isinstance(sort, str):
        if ":" in sort:
            field, direction = sort.split(":", 1)
            return {"field": field, "direction": direction}
        return {"field": sort, "direction": "asc"}
    if isinstance(sort, list):
        return [build_sort(s) for s in sort]
    return sort


def parse_filter_string(filter_string: str) -> dict[str, str]:
    """"status:active,stage:won" -> {"status": "active", "stage": "won"}."""
    filters = {}
    for condition in filter_string.split(","):
        key, sep, value = condition.partition(":")
        if sep and key.strip():
            filters[key.strip()] = value.strip()
    return filters


class Record(Creatable, Retrievable, Listable, Updatable, Deletable, APIResource):
    RESOURCE_PATH = "objects/{object}/records"
    ID_KEY = "record_id"
    LIST_METHOD = "POST"
    LIST_PATH_SUFFIX = "/query"

    def _extract_attributes(self, normalized: dict[str, Any]) -> dict[str, Any]:
        attributes: dict[str, Any] = {}
        for key, value in normalized.items():
            if key in RESERVED_KEYS or key == "values":
                continue
            attributes[key] = value
        values = normalized.get("values")
        if isinstance(values, Mapping):
            for key, value_data in values.items():
                attributes[key] = extract_value(value_data)
        return attributes

    @property
    def object_id(self) -> str | None:
        if isinstance(self.id, Mapping):
            return self.id.get("object_id")
        return None

    @property
    def object_api_slug(self) -> str | None:
        return self._opts.get("object")

    @classmethod
    def prepare_params_for_create(cls, params: dict[str, Any]) -> dict[str, Any]:
        return {"data": {"values": normalize_values(_values_of(params))}}

    @classmethod
    def prepare_params_for_update(cls, params: dict[str, Any]) -> dict[str, Any]:
        values = _values_of(params)
        return {"data": {"values": normalize_values(values)}}

    @classmethod
    def prepare_params_for_list(cls, params: dict[str, Any]) -> dict[str, Any]:
        query = dict(params)
        if isinstance(query.get("filter"), str):
            query["filter"] = parse_filter_string(query["filter"])
        sort = query.pop("sort", None) or query.pop("order_by", None)
        if sort is not None:
            query["sort"] = build_sort(sort)
        return query

    @classmethod
    def search(cls, client: AttioClient, query: str, attributes: list[str] | None = None, **opts: Any):
        params: dict[str, Any] = {"q": query}
        if attributes:
            params["attributes"] = attributes
        return cls.list(client, params, **opts)

    @classmethod
    def create_batch(cls, client: AttioClient, records: list[Mapping[str, Any]], **opts: Any) -> list["Record"]:
        if not isinstance(records, list):
            raise InvalidArgumentError("Records must be a list")
        body = {"data": [{"values": normalize_values(_values_of(r))} for r in records]}
        response = client.post(f"{cls.resource_path(**opts)}/batch", body, **request_options(opts))
        return [cls(item, client, **opts) for item in response.get("data") or []]

    def add_to_list(self, list_id: str, **opts: Any):
        from attio.resources.list_entries import ListEntry

        object_slug = self.object_api_slug or self.object_id
        params = {"parent_record_id": self.id_value, "parent_object": object_slug}
        return ListEntry.create(self._require_client(), params, list=list_id, **opts)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.object_api_slug:
            result["object_api_slug"] = self.object_api_slug
        return result
