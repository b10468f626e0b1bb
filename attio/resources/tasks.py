from datetime import datetime
from typing import Any

from attio.errors import InvalidArgumentError, InvalidOperationError
from attio.resources.base import APIResource, unwrap_data
from attio.resources.operations import Creatable, Deletable, Listable, Retrievable, Updatable
from attio.utils.timestamp import parse_timestamp

TASK_FIELDS = ("content", "format", "deadline_at", "is_completed", "linked_records", "assignees")
LIST_FILTERS = ("limit", "offset", "sort", "linked_object", "linked_record_id", "assignee", "is_completed")


class Task(Creatable, Retrievable, Listable, Updatable, Deletable, APIResource):
    RESOURCE_PATH = "tasks"
    ID_KEY = "task_id"

    @property
    def content(self) -> str | None:
        return self.get("content_plaintext") or self.get("content")

    @property
    def is_completed(self) -> bool:
        return bool(self.get("is_completed"))

    @property
    def deadline_at(self) -> datetime | None:
        return parse_timestamp(self.get("deadline_at"))

    @property
    def linked_records(self) -> list[Any]:
        return self.get("linked_records") or []

    @property
    def assignees(self) -> list[Any]:
        return self.get("assignees") or []

    @classmethod
    def prepare_params_for_create(cls, params: dict[str, Any]) -> dict[str, Any]:
        content = params.get("content")
        if content is None or str(content) == "":
            raise InvalidArgumentError("Content is required")
        data = {
            "content": content,
            "format": params.get("format", "plaintext"),
            "is_completed": bool(params.get("is_completed", False)),
            "linked_records": params.get("linked_records") or [],
            "assignees": params.get("assignees") or [],
        }
        if params.get("deadline_at"):
            data["deadline_at"] = _format_deadline(params["deadline_at"])
        return {"data": data}

    @classmethod
    def prepare_params_for_update(cls, params: dict[str, Any]) -> dict[str, Any]:
        data = {k: v for k, v in params.items() if k in TASK_FIELDS and v is not None}
        if "deadline_at" in data:
            data["deadline_at"] = _format_deadline(data["deadline_at"])
        return {"data": data}

    @classmethod
    def prepare_params_for_list(cls, params: dict[str, Any]) -> dict[str, Any]:
        return {k: v for k, v in params.items() if k in LIST_FILTERS or k == "cursor"}

    def complete(self, **opts: Any) -> "Task":
        """Mark the task completed on the server."""
        self._ensure_active()
        if not self.persisted:
            raise InvalidOperationError("Cannot complete a task without an ID")
        response = self._require_client().patch(
            self.instance_path(), {"data": {"is_completed": True}}, **self._request_options(opts)
        )
        return self.update_from(unwrap_data(response))


def _format_deadline(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value
