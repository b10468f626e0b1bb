from typing import Any, ClassVar

from attio.client import AttioClient
from attio.errors import InvalidArgumentError
from attio.resources.base import REQUEST_OPTION_KEYS
from attio.resources.records import Record

# Returned by a filter_by_<field> hook to ask find_by to use full-text search instead
USE_SEARCH = object()


class TypedRecord(Record):
    """A Record bound to one Attio object, so callers never pass `object=`.

    Subclasses set OBJECT_TYPE. Field-specific lookups used by `find_by` are
    defined as `filter_by_<field>` classmethods.
    """

    OBJECT_TYPE: ClassVar[str] = ""

    def __init_subclass__(cls, **kwargs: Any):
        super().__init_subclass__(**kwargs)
        if cls.OBJECT_TYPE:
            cls.RESOURCE_PATH = f"objects/{cls.OBJECT_TYPE}/records"

    @classmethod
    def resource_path(cls, **path_params: Any) -> str:
        if not cls.OBJECT_TYPE:
            raise NotImplementedError(f"{cls.__name__} must define OBJECT_TYPE")
        return super().resource_path(**path_params)

    @property
    def object_api_slug(self) -> str | None:
        return self.OBJECT_TYPE

    @classmethod
    def find_by(cls, client: AttioClient, **conditions: Any):
        """Return the first record matching every condition, or None.

        find_by(client, name="Acme") -> list(filter={"name": "Acme"}).first()
        """
        opts = {key: conditions.pop(key) for key in REQUEST_OPTION_KEYS if key in conditions}
        if not conditions:
            raise InvalidArgumentError("find_by requires at least one condition")

        filters = []
        search_query = None
        for field, value in conditions.items():
            hook = getattr(cls, f"filter_by_{field}", None)
            result = hook(value) if hook else {field: value}
            if result is USE_SEARCH:
                search_query = value
            else:
                filters.append(result)

        if search_query is not None:
            return cls.search(client, search_query, **opts).first()

        final_filter = filters[0] if len(filters) == 1 else {"$and": filters}
        return cls.list(client, {"filter": final_filter}, **opts).first()
