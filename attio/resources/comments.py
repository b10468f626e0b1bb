from datetime import datetime
from typing import Any

from attio.errors import InvalidArgumentError, InvalidOperationError
from attio.resources.base import APIResource
from attio.resources.operations import Creatable, Deletable, Retrievable
from attio.utils.timestamp import parse_timestamp


class Comment(Creatable, Retrievable, Deletable, APIResource):
    """A comment in a thread. Comments can be created and deleted but never edited."""

    RESOURCE_PATH = "comments"
    ID_KEY = "comment_id"

    @property
    def content(self) -> str | None:
        return self.get("content_plaintext")

    @property
    def thread_id(self) -> str | None:
        return self.get("thread_id")

    @property
    def author(self) -> dict[str, Any] | None:
        return self.get("author")

    @property
    def record(self) -> dict[str, Any] | None:
        return self.get("record")

    @property
    def entry(self) -> dict[str, Any] | None:
        return self.get("entry")

    @property
    def resolved_at(self) -> datetime | None:
        return parse_timestamp(self.get("resolved_at"))

    @property
    def resolved_by(self) -> dict[str, Any] | None:
        return self.get("resolved_by")

    @property
    def resolved(self) -> bool:
        return self.get("resolved_at") is not None

    @classmethod
    def prepare_params_for_create(cls, params: dict[str, Any]) -> dict[str, Any]:
        content = params.get("content")
        if content is None or str(content) == "":
            raise InvalidArgumentError("Content is required")
        if not params.get("thread_id"):
            raise InvalidArgumentError("Thread ID is required")
        if params.get("author") is None:
            raise InvalidArgumentError("Author is required")

        data = {
            "format": params.get("format", "plaintext"),
            "content": content,
            "author": params["author"],
            "thread_id": params["thread_id"],
        }
        if params.get("created_at"):
            data["created_at"] = params["created_at"]
        return {"data": data}

    def save(self, **opts: Any):
        raise InvalidOperationError("Comments are immutable and cannot be updated")
