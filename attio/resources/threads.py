from typing import Any

from attio.client import AttioClient
from attio.errors import InvalidOperationError
from attio.resources.base import APIResource
from attio.resources.comments import Comment
from attio.resources.operations import Listable, Retrievable

LIST_FILTERS = ("record_id", "object", "entry_id", "list", "limit", "offset")


class Thread(Retrievable, Listable, APIResource):
    """A comment thread on a record or list entry. Read-only; add to it by creating a Comment."""

    RESOURCE_PATH = "threads"
    ID_KEY = "thread_id"

    @property
    def comments(self) -> list[Comment]:
        return [Comment(comment, self._client, **self._opts) for comment in self.get("comments") or []]

    @property
    def comment_count(self) -> int:
        return len(self.get("comments") or [])

    @property
    def has_comments(self) -> bool:
        return self.comment_count > 0

    @property
    def first_comment(self) -> Comment | None:
        comments = self.comments
        return comments[0] if comments else None

    @property
    def last_comment(self) -> Comment | None:
        comments = self.comments
        return comments[-1] if comments else None

    @classmethod
    def prepare_params_for_list(cls, params: dict[str, Any]) -> dict[str, Any]:
        return {k: v for k, v in params.items() if k in LIST_FILTERS or k == "cursor"}

    @classmethod
    def for_record(cls, client: AttioClient, object: str, record_id: str, **opts: Any):
        return cls.list(client, {"object": object, "record_id": record_id}, **opts)

    @classmethod
    def for_entry(cls, client: AttioClient, list: str, entry_id: str, **opts: Any):
        return cls.list(client, {"list": list, "entry_id": entry_id}, **opts)

    def save(self, **opts: Any):
        raise InvalidOperationError("Threads are read-only and cannot be modified")

    def destroy(self, **opts: Any):
        raise InvalidOperationError("Threads are read-only and cannot be deleted")
