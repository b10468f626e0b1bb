"""Tests for Record and its value helpers."""

from unittest.mock import MagicMock

import pytest

from attio.client import AttioClient
from attio.errors import InvalidArgumentError
from attio.resources.records import Record, build_sort, extract_value, normalize_values, parse_filter_string

RECORD_RESPONSE = {
    "data": {
        "id": {"workspace_id": "ws_1", "object_id": "obj_people", "record_id": "rec_1"},
        "created_at": "2024-01-15T10:00:00Z",
        "values": {
            "name": [{"first_name": "Ada", "last_name": "Lovelace", "full_name": "Ada Lovelace"}],
            "email_addresses": [{"email_address": "ada@example.com"}],
            "job_title": [{"value": "Engineer"}],
        },
    }
}


@pytest.fixture
def client():
    return MagicMock(spec=AttioClient)


class TestValueHelpers:
    def test_normalize_values(self):
        assert normalize_values(
            {
                "name": "Acme",
                "employee_count": 12,
                "domains": ["acme.com", {"domain": "acme.io"}],
                "wrapped": {"value": 1},
                "location": {"city": "Paris"},
                "empty": None,
            }
        ) == {
            "name": {"value": "Acme"},
            "employee_count": {"value": 12},
            "domains": [{"value": "acme.com"}, {"domain": "acme.io"}],
            "wrapped": {"value": 1},
            "location": {"value": {"city": "Paris"}},
            "empty": {"value": None},
        }

    def test_normalize_values_rejects_non_mapping(self):
        with pytest.raises(InvalidArgumentError):
            normalize_values(["name"])

    def test_extract_value(self):
        assert extract_value({"value": "x"}) == "x"
        assert extract_value([{"value": 1}, {"value": 2}]) == [1, 2]
        assert extract_value({"target_object": "companies"}) == "companies"
        assert extract_value({"target_object": "companies", "target_record_id": "c1"}) == {
            "target_object": "companies",
            "target_record_id": "c1",
        }
        assert extract_value("plain") == "plain"

    def test_build_sort(self):
        assert build_sort("created_at:desc") == {"field": "created_at", "direction": "desc"}
        assert build_sort("name") == {"field": "name", "direction": "asc"}
        assert build_sort(["a", "b:desc"]) == [
            {"field": "a", "direction": "asc"},
            {"field": "b", "direction": "desc"},
        ]
        assert build_sort({"attribute": "name"}) == {"attribute": "name"}

    def test_parse_filter_string(self):
        assert parse_filter_string("status:active, stage : won,bogus") == {"status": "active", "stage": "won"}


class TestRecord:
    def test_values_are_flattened(self):
        record = Record.construct_from(RECORD_RESPONSE, object="people")

        assert record.id_value == "rec_1"
        assert record.object_id == "obj_people"
        assert record.object_api_slug == "people"
        assert record["job_title"] == ["Engineer"]
        assert record["email_addresses"] == [{"email_address": "ada@example.com"}]
        assert "values" not in record

    def test_create(self, client):
        client.post.return_value = RECORD_RESPONSE

        record = Record.create(client, {"values": {"job_title": "Engineer"}}, object="people")

        client.post.assert_called_once_with(
            "objects/people/records", {"data": {"values": {"job_title": {"value": "Engineer"}}}}
        )
        assert record.id_value == "rec_1"

    def test_create_accepts_bare_values(self, client):
        client.post.return_value = RECORD_RESPONSE

        Record.create(client, {"job_title": "Engineer"}, object="people")

        assert client.post.call_args.args[1] == {"data": {"values": {"job_title": {"value": "Engineer"}}}}

    def test_create_requires_object(self, client):
        with pytest.raises(InvalidArgumentError, match="object is required"):
            Record.create(client, {"values": {}})

    def test_list_posts_query(self, client):
        client.request.return_value = {"data": [RECORD_RESPONSE["data"]]}

        records = Record.list(
            client, {"filter": "status:active", "sort": "created_at:desc", "limit": 10}, object="people"
        )

        client.request.assert_called_once_with(
            "POST",
            "objects/people/records/query",
            {
                "filter": {"status": "active"},
                "sort": {"field": "created_at", "direction": "desc"},
                "limit": 10,
            },
        )
        assert records.first().id_value == "rec_1"
        assert records.first().object_api_slug == "people"

    def test_retrieve_and_update(self, client):
        client.get.return_value = RECORD_RESPONSE
        client.patch.return_value = RECORD_RESPONSE

        record = Record.retrieve(client, "rec_1", object="people")
        record["job_title"] = "CTO"
        record.save()

        client.get.assert_called_once_with("objects/people/records/rec_1")
        client.patch.assert_called_once_with(
            "objects/people/records/rec_1", {"data": {"values": {"job_title": {"value": "CTO"}}}}
        )

    def test_path_falls_back_to_object_id(self, client):
        record = Record(RECORD_RESPONSE["data"], client)

        assert record.instance_path() == "objects/obj_people/records/rec_1"

    def test_search(self, client):
        client.request.return_value = {"data": []}

        Record.search(client, "ada", attributes=["name"], object="people")

        client.request.assert_called_once_with(
            "POST", "objects/people/records/query", {"q": "ada", "attributes": ["name"]}
        )

    def test_create_batch(self, client):
        client.post.return_value = {"data": [RECORD_RESPONSE["data"], RECORD_RESPONSE["data"]]}

        records = Record.create_batch(client, [{"values": {"name": "A"}}, {"name": "B"}], object="companies")

        client.post.assert_called_once_with(
            "objects/companies/records/batch",
            {"data": [{"values": {"name": {"value": "A"}}}, {"values": {"name": {"value": "B"}}}]},
        )
        assert len(records) == 2

    def test_create_batch_requires_list(self, client):
        with pytest.raises(InvalidArgumentError):
            Record.create_batch(client, {"name": "A"}, object="companies")

    def test_add_to_list(self, client):
        client.post.return_value = {"data": {"id": {"list_id": "lst_1", "entry_id": "ent_1"}}}
        record = Record(RECORD_RESPONSE["data"], client, object="people")

        entry = record.add_to_list("lst_1")

        client.post.assert_called_once_with(
            "lists/lst_1/entries",
            {"data": {"parent_record_id": "rec_1", "parent_object": "people", "entry_values": {}}},
        )
        assert entry.id_value == "ent_1"

    def test_destroy(self, client):
        record = Record(RECORD_RESPONSE["data"], client, object="people")

        record.destroy()

        client.delete.assert_called_once_with("objects/people/records/rec_1")

    def test_to_dict_includes_object_slug(self):
        record = Record(RECORD_RESPONSE["data"], object="people")

        assert record.to_dict()["object_api_slug"] == "people"
        assert record.to_dict()["job_title"] == ["Engineer"]
