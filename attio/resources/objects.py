from typing import Any

from attio.client import AttioClient
from attio.errors import NotFoundError
from attio.resources.base import APIResource
from attio.resources.operations import Creatable, Listable, Retrievable, Updatable


class AttioObject(Creatable, Retrievable, Listable, Updatable, APIResource):
    """Attio object (standard or custom) metadata, e.g. people or companies."""

    RESOURCE_PATH = "objects"
    ID_KEY = "object_id"

    @property
    def api_slug(self) -> str | None:
        return self.get("api_slug")

    @property
    def singular_noun(self) -> str | None:
        return self.get("singular_noun")

    @property
    def plural_noun(self) -> str | None:
        return self.get("plural_noun")

    @property
    def identifier(self) -> Any:
        return self.api_slug or self.id_value

    def records(self, params: dict[str, Any] | None = None, **opts: Any):
        from attio.resources.records import Record

        return Record.list(self._require_client(), params, object=self.identifier, **opts)

    def attributes_list(self, **opts: Any):
        from attio.resources.attributes import Attribute

        return Attribute.list(self._require_client(), object=self.identifier, **opts)

    @classmethod
    def find_by_slug(cls, client: AttioClient, slug: str, **opts: Any) -> "AttioObject | None":
        """Retrieve by slug, falling back to scanning the object list."""
        try:
            return cls.retrieve(client, slug, **opts)
        except NotFoundError:
            for obj in cls.each(client, **opts):
                if obj.api_slug == slug:
                    return obj
            return None
