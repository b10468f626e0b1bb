"""
Attio webhook event models.

Attio webhooks have a wrapper structure:
{
    "webhook_id": "...",
    "events": [
        {"event_type": "...", "id": {...}, "actor": {...}}
    ]
}
"""

import json
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from attio.utils.logging import get_logger

logger = get_logger(__name__)

ID_KEYS = ("workspace_id", "object_id", "record_id", "note_id", "task_id", "attribute_id", "list_id", "entry_id")


class WebhookEvent(BaseModel):
    """One event inside a webhook delivery. Event-specific fields are kept as extras."""

    model_config = ConfigDict(extra="allow")

    event_type: str
    id: dict[str, Any] = Field(default_factory=dict)
    actor: dict[str, Any] | None = None

    @property
    def record_id(self) -> str | None:
        return self.id.get("record_id")

    @property
    def object_id(self) -> str | None:
        return self.id.get("object_id")

    @property
    def workspace_id(self) -> str | None:
        return self.id.get("workspace_id")

    @property
    def is_record_event(self) -> bool:
        return self.event_type.startswith("record.")

    @property
    def is_created(self) -> bool:
        return self.event_type.endswith(".created")

    @property
    def is_updated(self) -> bool:
        return self.event_type.endswith(".updated")

    @property
    def is_deleted(self) -> bool:
        return self.event_type.endswith(".deleted")

    @property
    def is_list_entry_event(self) -> bool:
        return self.event_type.startswith(("list-entry.", "list_entry."))

    @property
    def is_note_event(self) -> bool:
        return self.event_type.startswith("note.")

    @property
    def is_task_event(self) -> bool:
        return self.event_type.startswith("task.")


class WebhookPayload(BaseModel):
    """A full webhook delivery."""

    webhook_id: str | None = None
    events: list[WebhookEvent] = Field(default_factory=list)

    @classmethod
    def from_json(cls, body: str | bytes) -> "WebhookPayload":
        return cls.model_validate_json(body)


def extract_webhook_metadata(headers: Mapping[str, str], body_str: str) -> dict[str, str | int | bool]:
    """Extract metadata from an Attio webhook for observability.

    Safely extracts key information without failing webhook processing.

    Args:
        headers: Webhook headers
        body_str: Webhook body as string

    Returns:
        Dictionary containing extracted metadata with at least payload_size
    """
    metadata: dict[str, str | int | bool] = {
        "payload_size": len(body_str),
        "signed": any(str(k).lower().replace("_", "-").endswith("attio-signature") for k in headers),
    }

    try:
        payload = json.loads(body_str)
    except ValueError:
        metadata["parse_error"] = "Failed to parse JSON"
        return metadata

    if not isinstance(payload, dict):
        metadata["parse_error"] = "Payload is not an object"
        return metadata

    if webhook_id := payload.get("webhook_id"):
        metadata["webhook_id"] = webhook_id

    events = payload.get("events") or []
    if not isinstance(events, list):
        metadata["parse_error"] = "events is not a list"
        return metadata
    metadata["event_count"] = len(events)

    # First event only, for observability
    if events and isinstance(events[0], dict):
        first_event = events[0]
        if event_type := first_event.get("event_type"):
            metadata["event_type"] = event_type

        actor = first_event.get("actor") or {}
        if isinstance(actor, dict) and actor:
            metadata["actor_type"] = actor.get("type", "")
            if actor_id := actor.get("id"):
                metadata["actor_id"] = actor_id

        id_obj = first_event.get("id") or {}
        if isinstance(id_obj, dict):
            for key in ID_KEYS:
                if value := id_obj.get(key):
                    metadata[key] = value

    return metadata
