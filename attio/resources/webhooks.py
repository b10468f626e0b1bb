from datetime import datetime
from typing import Any
from urllib.parse import urlparse

from attio.errors import InvalidArgumentError, InvalidOperationError
from attio.resources.base import APIResource
from attio.resources.operations import Creatable, Deletable, Listable, Retrievable, Updatable
from attio.utils.timestamp import parse_timestamp

EVENTS = (
    "record.created",
    "record.updated",
    "record.deleted",
    "record.merged",
    "list-entry.created",
    "list-entry.updated",
    "list-entry.deleted",
    "note.created",
    "note.updated",
    "note.deleted",
    "task.created",
    "task.updated",
    "task.deleted",
    "object-attribute.created",
    "object-attribute.updated",
    "list.created",
    "list.updated",
    "list.deleted",
    "workspace-member.created",
)


def validate_target_url(url: Any) -> None:
    if not url:
        raise InvalidArgumentError("target_url is required")
    parsed = urlparse(str(url))
    if parsed.scheme != "https" or not parsed.netloc:
        raise InvalidArgumentError("Webhook target_url must use HTTPS")


def validate_subscriptions(subscriptions: Any) -> None:
    if not subscriptions:
        raise InvalidArgumentError("subscriptions are required")
    if not isinstance(subscriptions, list):
        raise InvalidArgumentError("subscriptions must be a list")
    for subscription in subscriptions:
        if not isinstance(subscription, dict) or not subscription.get("event_type"):
            raise InvalidArgumentError("Each subscription must have an event_type")


class Webhook(Creatable, Retrievable, Listable, Updatable, Deletable, APIResource):
    RESOURCE_PATH = "webhooks"
    ID_KEY = "webhook_id"
    EVENTS = EVENTS

    @property
    def target_url(self) -> str | None:
        return self.get("target_url")

    @property
    def subscriptions(self) -> list[dict[str, Any]]:
        return self.get("subscriptions") or []

    @property
    def status(self) -> str | None:
        return self.get("status")

    @property
    def secret(self) -> str | None:
        return self.get("secret")

    @property
    def last_event_at(self) -> datetime | None:
        return parse_timestamp(self.get("last_event_at"))

    @property
    def active(self) -> bool:
        return self.status == "active"

    @property
    def paused(self) -> bool:
        return self.status == "paused"

    def pause(self, **opts: Any) -> "Webhook":
        self["status"] = "paused"
        return self.save(**opts)

    def resume(self, **opts: Any) -> "Webhook":
        self["status"] = "active"
        return self.save(**opts)

    def deliveries(self, params: dict[str, Any] | None = None, **opts: Any) -> list[Any]:
        if not self.persisted:
            raise InvalidOperationError("Cannot get deliveries for a webhook without an ID")
        client = self._require_client()
        response = client.get(f"{self.instance_path()}/deliveries", params, **self._request_options(opts))
        return response.get("data") or []

    @classmethod
    def prepare_params_for_create(cls, params: dict[str, Any]) -> dict[str, Any]:
        validate_target_url(params.get("target_url"))
        validate_subscriptions(params.get("subscriptions"))
        return {"data": {"target_url": params["target_url"], "subscriptions": list(params["subscriptions"])}}

    @classmethod
    def prepare_params_for_update(cls, params: dict[str, Any]) -> dict[str, Any]:
        if "target_url" in params:
            validate_target_url(params["target_url"])
        if "subscriptions" in params:
            validate_subscriptions(params["subscriptions"])
        return {"data": params}
