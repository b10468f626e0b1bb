import re
from typing import Any

from attio.client import AttioClient
from attio.errors import InvalidArgumentError, InvalidOperationError
from attio.resources.base import APIResource
from attio.resources.operations import Creatable, Deletable, Listable, Retrievable

FORMATS = ("plaintext", "markdown", "html")

_TAG = re.compile(r"<[^>]+>")
_WHITESPACE = re.compile(r"\s+")


def strip_html(html: Any) -> Any:
    if not isinstance(html, str):
        return html
    return _WHITESPACE.sub(" ", _TAG.sub(" ", html)).strip()


class Note(Creatable, Retrievable, Listable, Deletable, APIResource):
    """A note attached to a record. Notes are immutable once created."""

    RESOURCE_PATH = "notes"
    ID_KEY = "note_id"

    @property
    def parent_object(self) -> str | None:
        return self.get("parent_object")

    @property
    def parent_record_id(self) -> str | None:
        return self.get("parent_record_id")

    @property
    def title(self) -> str | None:
        return self.get("title")

    @property
    def content(self) -> str | None:
        return self.get("content") or self.get("content_markdown")

    @property
    def format(self) -> str:
        return self.get("format") or "plaintext"

    @property
    def is_html(self) -> bool:
        return self.format == "html"

    @property
    def is_plaintext(self) -> bool:
        return self.format == "plaintext"

    def to_plaintext(self) -> str | None:
        return self.get("content_plaintext") or strip_html(self.content)

    def parent_record(self, **opts: Any):
        from attio.resources.records import Record

        if not self.parent_object or not self.parent_record_id:
            return None
        return Record.retrieve(self._require_client(), self.parent_record_id, object=self.parent_object, **opts)

    @classmethod
    def prepare_params_for_create(cls, params: dict[str, Any]) -> dict[str, Any]:
        if not params.get("parent_object"):
            raise InvalidArgumentError("parent_object is required")
        if not params.get("parent_record_id"):
            raise InvalidArgumentError("parent_record_id is required")
        content = params.get("content")
        if content is None or not str(content).strip():
            raise InvalidArgumentError("content cannot be empty")
        note_format = params.get("format", "plaintext")
        if note_format not in FORMATS:
            raise InvalidArgumentError(f"Invalid format: {note_format}. Valid formats: {', '.join(FORMATS)}")

        data = {
            "parent_object": params["parent_object"],
            "parent_record_id": params["parent_record_id"],
            "title": params.get("title", ""),
            "format": note_format,
            "content": content,
        }
        if params.get("created_at"):
            data["created_at"] = params["created_at"]
        return {"data": data}

    @classmethod
    def for_record(
        cls, client: AttioClient, object: str, record_id: str, params: dict[str, Any] | None = None, **opts: Any
    ):
        query = {**(params or {}), "parent_object": object, "parent_record_id": record_id}
        return cls.list(client, query, **opts)

    def _save_changes(self, **opts: Any):
        raise InvalidOperationError("Notes cannot be updated. Create a new note instead.")

    @classmethod
    def update(cls, client: AttioClient, id: Any, params: Any = None, **opts: Any):
        raise InvalidOperationError("Notes cannot be updated. Create a new note instead.")
