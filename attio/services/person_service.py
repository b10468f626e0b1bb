import re
from collections.abc import Mapping
from typing import Any

from attio.builders.name_builder import NameBuilder
from attio.client import AttioClient
from attio.resources.list_object import ListObject
from attio.resources.notes import Note
from attio.resources.people import company_reference
from attio.resources.records import Record
from attio.services.base_service import BaseService

_UUID = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)

MERGE_SKIP_KEYS = ("id", "created_at")


def _is_blank(value: Any) -> bool:
    return value is None or value == "" or value == [] or value == {}


class PersonService(BaseService):
    def __init__(self, client: AttioClient):
        super().__init__(client, "people")

    def find_by_email(self, email: str) -> Record | None:
        return self.search_by_attribute("email_addresses", email).first()

    def find_or_create_by_email(self, email: str, defaults: Mapping[str, Any] | None = None) -> Record:
        return self.find_or_create_by("email_addresses", email, defaults)

    def create_person(
        self,
        name: Any = None,
        email: str | None = None,
        phone: str | None = None,
        company: str | None = None,
        title: str | None = None,
        **attributes: Any,
    ) -> Record:
        """Create a person.

        `company` may be a company record id or a company name; a name is
        looked up and created if missing.
        """
        values: dict[str, Any] = {}
        if name:
            values["name"] = NameBuilder.from_input(name)
        if email:
            values["email_addresses"] = [email]
        if phone:
            values["phone_numbers"] = [phone]
        if title:
            values["job_title"] = title
        if company:
            values["company"] = [self._company_value(company)]
        values.update(attributes)
        return self.create_record(values)

    def _company_value(self, company: str) -> dict[str, Any]:
        if _UUID.match(company):
            return company_reference(company)
        from attio.services.company_service import CompanyService

        company_record = CompanyService(self.client).find_or_create_by_name(company)
        return company_reference(company_record.id_value)

    def search_by_name(self, name: str, limit: int = 20) -> ListObject:
        return self.search(query=name, limit=limit)

    def by_company(self, company_id: str) -> ListObject:
        return self.search(filters={"company": company_id})

    def add_note(self, person_id: str, content: str, format: str = "plaintext", title: str = "") -> Note:
        params = {
            "parent_object": self.object_slug,
            "parent_record_id": person_id,
            "content": content,
            "format": format,
            "title": title,
        }
        return Note.create(self.client, params)

    def notes(self, person_id: str) -> ListObject:
        return Note.for_record(self.client, self.object_slug, person_id)

    def merge(self, primary_id: str, duplicate_ids: list[str]) -> Record:
        """Copy values the primary lacks from each duplicate, then delete the duplicates."""
        with self.transaction():
            primary = Record.retrieve(self.client, primary_id, object=self.object_slug)
            for duplicate in self.find_by_ids(duplicate_ids):
                self._merge_values(primary, duplicate)
                duplicate.destroy()
            return primary

    def _merge_values(self, primary: Record, duplicate: Record) -> None:
        for key, value in duplicate.items():
            if key in MERGE_SKIP_KEYS or key.startswith("_"):
                continue
            if _is_blank(primary.get(key)) and not _is_blank(value):
                primary[key] = value
        if primary.changed:
            primary.save()
