"""Tests for webhook event models and metadata extraction."""

import json

from attio.webhooks.events import WebhookEvent, WebhookPayload, extract_webhook_metadata


class TestWebhookEvent:
    def test_ids_and_predicates(self):
        event = WebhookEvent(
            event_type="record.created",
            id={"workspace_id": "ws_1", "object_id": "obj_1", "record_id": "rec_1"},
            actor={"type": "workspace-member", "id": "wm_1"},
        )

        assert event.record_id == "rec_1"
        assert event.object_id == "obj_1"
        assert event.workspace_id == "ws_1"
        assert event.is_record_event is True
        assert event.is_created is True
        assert event.is_updated is False
        assert event.is_deleted is False

    def test_other_event_families(self):
        assert WebhookEvent(event_type="list-entry.deleted").is_list_entry_event is True
        assert WebhookEvent(event_type="note.updated").is_note_event is True
        assert WebhookEvent(event_type="task.deleted").is_task_event is True
        assert WebhookEvent(event_type="task.deleted").record_id is None

    def test_extra_fields_are_kept(self):
        event = WebhookEvent.model_validate({"event_type": "record.merged", "duplicate_record_id": "rec_2"})

        assert event.model_extra == {"duplicate_record_id": "rec_2"}


class TestWebhookPayload:
    def test_from_json(self):
        body = json.dumps({"webhook_id": "wh_1", "events": [{"event_type": "record.updated", "id": {}}]})

        payload = WebhookPayload.from_json(body)

        assert payload.webhook_id == "wh_1"
        assert payload.events[0].is_updated is True

    def test_defaults(self):
        payload = WebhookPayload()

        assert payload.webhook_id is None
        assert payload.events == []


class TestExtractWebhookMetadata:
    def test_full_payload(self):
        body = json.dumps(
            {
                "webhook_id": "wh_1",
                "events": [
                    {
                        "event_type": "record.created",
                        "id": {"workspace_id": "ws_1", "object_id": "obj_1", "record_id": "rec_1"},
                        "actor": {"type": "api-token", "id": "tok_1"},
                    },
                    {"event_type": "record.updated"},
                ],
            }
        )

        metadata = extract_webhook_metadata({"X-Attio-Signature": "v1=abc"}, body)

        assert metadata == {
            "payload_size": len(body),
            "signed": True,
            "webhook_id": "wh_1",
            "event_count": 2,
            "event_type": "record.created",
            "actor_type": "api-token",
            "actor_id": "tok_1",
            "workspace_id": "ws_1",
            "object_id": "obj_1",
            "record_id": "rec_1",
        }

    def test_unsigned_invalid_json(self):
        metadata = extract_webhook_metadata({}, "not json")

        assert metadata == {"payload_size": 8, "signed": False, "parse_error": "Failed to parse JSON"}

    def test_non_object_payload(self):
        assert extract_webhook_metadata({}, "[]")["parse_error"] == "Payload is not an object"

    def test_events_not_a_list(self):
        metadata = extract_webhook_metadata({"HTTP_X_ATTIO_SIGNATURE": "v1=abc"}, '{"events": {}}')

        assert metadata["signed"] is True
        assert "event_count" not in metadata
