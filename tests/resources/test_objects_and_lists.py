"""Tests for AttioObject, Attribute, AttioList, ListEntry and WorkspaceMember."""

from unittest.mock import MagicMock

import pytest

from attio.client import AttioClient
from attio.errors import InvalidArgumentError, NotFoundError
from attio.resources.attributes import Attribute
from attio.resources.list_entries import ListEntry
from attio.resources.lists import AttioList
from attio.resources.objects import AttioObject
from attio.resources.workspace_members import WorkspaceMember


@pytest.fixture
def client():
    return MagicMock(spec=AttioClient)


class TestAttioObject:
    def test_properties(self):
        obj = AttioObject(
            {"id": {"object_id": "obj_1"}, "api_slug": "people", "singular_noun": "Person", "plural_noun": "People"}
        )

        assert obj.api_slug == "people"
        assert obj.singular_noun == "Person"
        assert obj.plural_noun == "People"
        assert obj.identifier == "people"

    def test_identifier_falls_back_to_id(self):
        assert AttioObject({"id": {"object_id": "obj_1"}}).identifier == "obj_1"

    def test_records(self, client):
        client.request.return_value = {"data": []}
        obj = AttioObject({"id": {"object_id": "obj_1"}, "api_slug": "people"}, client)

        obj.records({"limit": 5})

        client.request.assert_called_once_with("POST", "objects/people/records/query", {"limit": 5})

    def test_attributes_list(self, client):
        client.request.return_value = {"data": [{"id": {"attribute_id": "a1"}, "api_slug": "name"}]}
        obj = AttioObject({"api_slug": "people"}, client)

        attributes = obj.attributes_list()

        client.request.assert_called_once_with("GET", "objects/people/attributes", None)
        assert attributes.first().api_slug == "name"

    def test_find_by_slug_retrieves(self, client):
        client.get.return_value = {"data": {"id": {"object_id": "obj_1"}, "api_slug": "deals"}}

        assert AttioObject.find_by_slug(client, "deals").api_slug == "deals"
        client.get.assert_called_once_with("objects/deals")

    def test_find_by_slug_falls_back_to_listing(self, client):
        client.get.side_effect = NotFoundError()
        client.request.return_value = {"data": [{"api_slug": "people"}, {"api_slug": "deals"}]}

        assert AttioObject.find_by_slug(client, "deals").api_slug == "deals"
        assert AttioObject.find_by_slug(client, "missing") is None


class TestAttribute:
    def test_create(self, client):
        client.post.return_value = {"data": {"id": {"attribute_id": "a1"}, "api_slug": "deal_size"}}

        Attribute.create(client, {"title": "Deal Size!", "type": "number", "is_unique": True}, object="deals")

        client.post.assert_called_once_with(
            "objects/deals/attributes",
            {
                "data": {
                    "title": "Deal Size!",
                    "api_slug": "deal_size",
                    "type": "number",
                    "is_required": False,
                    "is_unique": True,
                    "is_multiselect": False,
                    "config": {},
                }
            },
        )

    @pytest.mark.parametrize(
        "params,message",
        [
            ({"title": "x"}, "type is required"),
            ({"title": "x", "type": "blob"}, "Invalid attribute type"),
            ({"title": "x", "type": "select"}, "requires options"),
            ({"title": "x", "type": "text", "is_unique": True}, "does not support unique"),
            ({"type": "text"}, "title is required"),
        ],
    )
    def test_create_validation(self, client, params, message):
        with pytest.raises(InvalidArgumentError, match=message):
            Attribute.create(client, params, object="deals")

        client.post.assert_not_called()

    def test_update_filters_fields(self, client):
        client.patch.return_value = {"data": {"id": {"attribute_id": "a1"}}}

        Attribute.update(client, "a1", {"name": "Size", "type": "text", "is_required": True}, object="deals")

        client.patch.assert_called_once_with(
            "objects/deals/attributes/a1", {"data": {"is_required": True, "title": "Size"}}
        )

    def test_predicates(self):
        attribute = Attribute({"type": "text", "is_required": True, "is_archived": False})

        assert attribute.type == "text"
        assert attribute.is_required is True
        assert attribute.is_unique is False
        assert attribute.is_archived is False


class TestAttioList:
    def test_create_requires_parent_object(self, client):
        with pytest.raises(InvalidArgumentError, match="Object identifier is required"):
            AttioList.create(client, {"name": "Pipeline"})

    def test_create(self, client):
        client.post.return_value = {"data": {"id": {"list_id": "lst_1"}, "name": "Pipeline"}}

        attio_list = AttioList.create(client, {"name": "Pipeline", "object": "companies"})

        client.post.assert_called_once_with("lists", {"data": {"name": "Pipeline", "parent_object": "companies"}})
        assert attio_list.id_value == "lst_1"

    def test_entries_and_membership(self, client):
        client.request.return_value = {
            "data": [{"id": {"entry_id": "ent_1"}}],
            "pagination": {"total_count": 7},
        }
        attio_list = AttioList({"id": {"list_id": "lst_1"}, "parent_object": ["companies"]}, client)

        assert attio_list.contains_record("rec_1") is True
        assert attio_list.entry_count() == 7
        client.request.assert_any_call(
            "POST", "lists/lst_1/entries/query", {"filter": {"record_id": "rec_1"}, "limit": 1}
        )

    def test_add_and_remove_record(self, client):
        client.post.return_value = {"data": {"id": {"entry_id": "ent_1"}}}
        attio_list = AttioList({"id": {"list_id": "lst_1"}, "parent_object": ["companies"]}, client)

        attio_list.add_record("rec_1")
        assert attio_list.remove_record("ent_1") is True

        client.post.assert_called_once_with(
            "lists/lst_1/entries",
            {"data": {"parent_record_id": "rec_1", "parent_object": "companies", "entry_values": {}}},
        )
        client.delete.assert_called_once_with("lists/lst_1/entries/ent_1")

    def test_find_by_slug(self, client):
        client.request.return_value = {"data": [{"id": {"list_id": "lst_1"}, "api_slug": "pipeline"}]}

        assert AttioList.find_by_slug(client, "pipeline").id_value == "lst_1"
        with pytest.raises(NotFoundError):
            AttioList.find_by_slug(client, "missing")


class TestListEntry:
    def test_create_validation(self, client):
        with pytest.raises(InvalidArgumentError, match="parent_record_id is required"):
            ListEntry.create(client, {"parent_object": "people"}, list="lst_1")
        with pytest.raises(InvalidArgumentError, match="parent_object is required"):
            ListEntry.create(client, {"parent_record_id": "rec_1"}, list="lst_1")

    def test_record(self, client):
        client.get.return_value = {"data": {"id": {"record_id": "rec_1"}}}
        entry = ListEntry(
            {"id": {"list_id": "lst_1", "entry_id": "ent_1"}, "parent_record_id": "rec_1", "parent_object": "people"},
            client,
        )

        record = entry.record()

        client.get.assert_called_once_with("objects/people/records/rec_1")
        assert record.id_value == "rec_1"

    def test_create_batch(self, client):
        client.post.return_value = {"data": [{"id": {"entry_id": "e1"}}, {"id": {"entry_id": "e2"}}]}

        entries = ListEntry.create_batch(client, ["r1", "r2"], "people", list="lst_1")

        client.post.assert_called_once_with(
            "lists/lst_1/entries/batch",
            {
                "data": [
                    {"parent_record_id": "r1", "parent_object": "people", "entry_values": {}},
                    {"parent_record_id": "r2", "parent_object": "people", "entry_values": {}},
                ]
            },
        )
        assert [e.id_value for e in entries] == ["e1", "e2"]

    @pytest.mark.parametrize("record_ids", [[], "r1"])
    def test_create_batch_validation(self, client, record_ids):
        with pytest.raises(InvalidArgumentError):
            ListEntry.create_batch(client, record_ids, "people", list="lst_1")

    def test_assert_by_parent(self, client):
        client.put.return_value = {
            "data": {"id": {"list_id": "lst_1", "entry_id": "ent_1"}, "parent_record_id": "rec_1"}
        }

        entry = ListEntry.assert_by_parent(client, "rec_1", "people", {"stage": "Lead"}, list="lst_1", api_key="k2")

        client.put.assert_called_once_with(
            "lists/lst_1/entries",
            {"data": {"parent_record_id": "rec_1", "parent_object": "people", "entry_values": {"stage": "Lead"}}},
            api_key="k2",
        )
        assert entry.id_value == "ent_1"
        assert entry.path_params() == {"list": "lst_1"}

    def test_assert_by_parent_validation(self, client):
        with pytest.raises(InvalidArgumentError, match="parent_object is required"):
            ListEntry.assert_by_parent(client, "rec_1", "", list="lst_1")
        with pytest.raises(InvalidArgumentError, match="list is required"):
            ListEntry.assert_by_parent(client, "rec_1", "people")
        client.put.assert_not_called()


class TestWorkspaceMember:
    def test_properties(self):
        member = WorkspaceMember(
            {"email_address": "ada@example.com", "first_name": "Ada", "last_name": "Lovelace", "access_level": "admin"}
        )

        assert member.email == "ada@example.com"
        assert member.full_name == "Ada Lovelace"
        assert member.is_admin is True

    def test_find_by_email(self, client):
        client.request.return_value = {"data": [{"email_address": "ada@example.com"}]}

        assert WorkspaceMember.find_by_email(client, "ada@example.com").email == "ada@example.com"
        with pytest.raises(NotFoundError):
            WorkspaceMember.find_by_email(client, "nobody@example.com")

    def test_is_read_only(self):
        assert not hasattr(WorkspaceMember, "create")
        assert not hasattr(WorkspaceMember, "destroy")
