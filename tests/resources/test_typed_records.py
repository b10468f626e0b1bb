"""Tests for Person, Company and Deal."""

from unittest.mock import MagicMock

import pytest

from attio.client import AttioClient
from attio.errors import InvalidArgumentError
from attio.resources.companies import Company, normalize_domain
from attio.resources.deals import Deal
from attio.resources.people import Person, company_reference
from attio.resources.typed_records import TypedRecord


@pytest.fixture
def client():
    client = MagicMock(spec=AttioClient)
    client.request.return_value = {"data": []}
    return client


def record_data(record_id, **values):
    return {"id": {"object_id": "obj", "record_id": record_id}, "values": values}


class TestTypedRecord:
    def test_resource_path_is_fixed_per_subclass(self):
        assert Person.resource_path() == "objects/people/records"
        assert Company.resource_path() == "objects/companies/records"
        assert Deal.resource_path() == "objects/deals/records"

    def test_base_class_has_no_object_type(self):
        with pytest.raises(NotImplementedError):
            TypedRecord.resource_path()

    def test_object_api_slug(self):
        assert Person().object_api_slug == "people"

    def test_find_by_builds_filter(self, client):
        client.request.return_value = {"data": [record_data("rec_1")]}

        person = Person.find_by(client, job_title="CTO")

        client.request.assert_called_once_with(
            "POST", "objects/people/records/query", {"filter": {"job_title": "CTO"}}
        )
        assert person.id_value == "rec_1"

    def test_find_by_combines_conditions(self, client):
        Person.find_by(client, email="ada@example.com", job_title="CTO", api_key="k2")

        client.request.assert_called_once_with(
            "POST",
            "objects/people/records/query",
            {"filter": {"$and": [{"email_addresses": {"$contains": "ada@example.com"}}, {"job_title": "CTO"}]}},
            api_key="k2",
        )

    def test_find_by_name_uses_search(self, client):
        assert Person.find_by(client, name="Ada") is None

        client.request.assert_called_once_with("POST", "objects/people/records/query", {"q": "Ada"})

    def test_find_by_requires_condition(self, client):
        with pytest.raises(InvalidArgumentError):
            Person.find_by(client)


class TestPerson:
    def test_set_name(self):
        person = Person()

        person.set_name(first="Ada", last="Lovelace")

        assert person["name"] == [{"first_name": "Ada", "last_name": "Lovelace", "full_name": "Ada Lovelace"}]
        assert person.full_name == "Ada Lovelace"
        assert person.first_name == "Ada"
        assert person.last_name == "Lovelace"

    def test_emails(self):
        person = Person(record_data("rec_1", email_addresses=[{"email_address": "ada@example.com"}]))

        assert person.email == "ada@example.com"

        fresh = Person()
        fresh.add_email("a@example.com")
        fresh.add_email("a@example.com")
        assert fresh["email_addresses"] == ["a@example.com"]
        assert fresh.email == "a@example.com"

    def test_phones(self):
        person = Person()

        person.add_phone("+15551234567")

        assert person["phone_numbers"] == [{"original_phone_number": "+15551234567", "country_code": "US"}]
        assert person.phone == "+15551234567"

    def test_set_company(self):
        person = Person()

        person.set_company(Company({"id": {"record_id": "comp_1"}}))

        assert person["company"] == [{"target_object": "companies", "target_record_id": "comp_1"}]

    def test_company_reference_rejects_other_types(self):
        with pytest.raises(InvalidArgumentError):
            company_reference(42)

    def test_build_values(self):
        values = Person.build_values(
            first_name="Ada",
            last_name="Lovelace",
            email="ada@example.com",
            job_title="Engineer",
            company="comp_1",
            values={"job_title": "Countess"},
        )

        assert values == {
            "job_title": "Countess",
            "name": [{"first_name": "Ada", "last_name": "Lovelace", "full_name": "Ada Lovelace"}],
            "email_addresses": ["ada@example.com"],
            "company": [{"target_object": "companies", "target_record_id": "comp_1"}],
        }

    def test_find_by_email(self, client):
        Person.find_by_email(client, "ada@example.com")

        client.request.assert_called_once_with(
            "POST",
            "objects/people/records/query",
            {"filter": {"email_addresses": {"$contains": "ada@example.com"}}},
        )

    def test_save_new_person(self, client):
        client.post.return_value = {"data": record_data("rec_9")}
        person = Person({}, client)
        person.set_name(first="Ada")

        person.save()

        client.post.assert_called_once_with(
            "objects/people/records",
            {"data": {"values": {"name": [{"first_name": "Ada", "full_name": "Ada"}]}}},
        )
        assert person.id_value == "rec_9"


class TestCompany:
    @pytest.mark.parametrize(
        "raw,expected", [("https://acme.com", "acme.com"), (" http://acme.io ", "acme.io"), ("acme.dev", "acme.dev")]
    )
    def test_normalize_domain(self, raw, expected):
        assert normalize_domain(raw) == expected

    def test_domains(self):
        company = Company(record_data("c1", domains=[{"domain": "acme.com"}]))

        company.add_domain("https://acme.io")
        company.add_domain("acme.com")

        assert company.domains_list == ["acme.com", "acme.io"]
        assert company.domain == "acme.com"

    def test_build_values(self):
        values = Company.build_values(
            "Acme", domain="https://acme.com", domains=["acme.com", "acme.io"], employee_count=50
        )

        assert values == {"name": "Acme", "domains": ["acme.com", "acme.io"], "employee_count": "50"}

    def test_find_by_domain(self, client):
        Company.find_by_domain(client, "https://acme.com")

        client.request.assert_called_once_with(
            "POST", "objects/companies/records/query", {"filter": {"domains": {"$contains": "acme.com"}}}
        )

    def test_find_by_size(self, client):
        Company.find_by_size(client, 10, 100)

        client.request.assert_called_once_with(
            "POST",
            "objects/companies/records/query",
            {"filter": {"employee_count": {"$gte": "10", "$lte": "100"}}},
        )

    def test_team_members(self, client):
        Company(record_data("c1"), client).team_members()

        client.request.assert_called_once_with(
            "POST", "objects/people/records/query", {"filter": {"company": {"$references": "c1"}}}
        )

    def test_add_team_member(self, client):
        client.get.return_value = {"data": record_data("p1")}
        client.patch.return_value = {"data": record_data("p1")}
        company = Company(record_data("c1"), client)

        company.add_team_member("p1")

        client.get.assert_called_once_with("objects/people/records/p1")
        client.patch.assert_called_once_with(
            "objects/people/records/p1",
            {"data": {"values": {"company": [{"target_object": "companies", "target_record_id": "c1"}]}}},
        )


class TestDeal:
    @pytest.mark.parametrize(
        "stage,is_open,is_won,is_lost",
        [
            ("Lead", True, False, False),
            ("Won 🎉", False, True, False),
            ("Lost", False, False, True),
            ([{"status": {"title": "Won"}}], False, True, False),
            (None, False, False, False),
        ],
    )
    def test_stage_predicates(self, stage, is_open, is_won, is_lost):
        deal = Deal({"values": {"stage": stage}} if stage is not None else {})

        assert deal.is_open is is_open
        assert deal.is_won is is_won
        assert deal.is_lost is is_lost

    def test_status_alias(self):
        deal = Deal({"values": {"stage": "Lead"}})

        assert deal.status == deal.stage

    def test_update_stage(self, client):
        client.patch.return_value = {"data": record_data("d1", stage=[{"status": {"title": "Won"}}])}
        deal = Deal(record_data("d1", stage="Lead"), client)

        deal.update_status("Won")

        client.patch.assert_called_once_with(
            "objects/deals/records/d1", {"data": {"values": {"stage": {"value": "Won"}}}}
        )
        assert deal.is_won is True

    def test_find_by_value_range(self, client):
        Deal.find_by_value_range(client, min_value=1000, max_value=5000)

        client.request.assert_called_once_with(
            "POST",
            "objects/deals/records/query",
            {"filter": {"$and": [{"value": {"$gte": 1000}}, {"value": {"$lte": 5000}}]}},
        )

    def test_find_by_value_range_single_bound(self, client):
        Deal.find_by_value_range(client, min_value=1000)

        assert client.request.call_args.args[2] == {"filter": {"value": {"$gte": 1000}}}

    def test_company_record(self, client):
        client.get.return_value = {"data": record_data("c1")}
        deal = Deal(record_data("d1", company=[{"target_object": "companies", "target_record_id": "c1"}]), client)

        company = deal.company_record()

        client.get.assert_called_once_with("objects/companies/records/c1")
        assert isinstance(company, Company)

    def test_build_values(self):
        values = Deal.build_values("Big deal", value=5000, status="Lead", associated_company="acme.com")

        assert values == {
            "name": "Big deal",
            "value": 5000,
            "stage": "Lead",
            "associated_company": {"target_object": "companies", "domains": [{"domain": "acme.com"}]},
        }
