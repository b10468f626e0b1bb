from typing import Any

from attio.client import AttioClient
from attio.errors import InvalidArgumentError
from attio.resources.typed_records import USE_SEARCH, TypedRecord


def _first_mapping(value: Any) -> dict[str, Any] | None:
    if isinstance(value, list) and value and isinstance(value[0], dict):
        return value[0]
    if isinstance(value, dict):
        return value
    return None


def company_reference(company: Any) -> dict[str, Any]:
    """Build a record-reference value pointing at a company record."""
    from attio.resources.companies import Company

    if isinstance(company, Company):
        company_id = company.id_value
    elif isinstance(company, str):
        company_id = company
    else:
        raise InvalidArgumentError("Company must be a Company instance or ID string")
    return {"target_object": "companies", "target_record_id": company_id}


class Person(TypedRecord):
    OBJECT_TYPE = "people"

    def set_name(
        self, first: str | None = None, last: str | None = None, middle: str | None = None, full: str | None = None
    ):
        name_data: dict[str, str] = {}
        if first:
            name_data["first_name"] = first
        if last:
            name_data["last_name"] = last
        if middle:
            name_data["middle_name"] = middle
        if full:
            name_data["full_name"] = full
        elif first or last:
            name_data["full_name"] = " ".join(p for p in (first, middle, last) if p)

        # Attio stores personal names as a single-element list
        if name_data:
            self["name"] = [name_data]

    def _name_part(self, part: str) -> str | None:
        name = _first_mapping(self.get("name"))
        return name.get(part) if name else None

    @property
    def full_name(self) -> str | None:
        return self._name_part("full_name")

    @property
    def first_name(self) -> str | None:
        return self._name_part("first_name")

    @property
    def last_name(self) -> str | None:
        return self._name_part("last_name")

    def add_email(self, email: str) -> None:
        emails = self.get("email_addresses") or []
        if not isinstance(emails, list):
            emails = [emails]
        if email not in emails:
            emails = [*emails, email]
        self["email_addresses"] = emails

    @property
    def email(self) -> str | None:
        emails = self.get("email_addresses")
        if not emails:
            return None
        if isinstance(emails, list):
            first = emails[0]
            return first.get("email_address") if isinstance(first, dict) else first
        if isinstance(emails, dict):
            return emails.get("email_address")
        return str(emails)

    def add_phone(self, number: str, country_code: str = "US") -> None:
        phones = self.get("phone_numbers") or []
        if not isinstance(phones, list):
            phones = [phones]
        self["phone_numbers"] = [*phones, {"original_phone_number": number, "country_code": country_code}]

    @property
    def phone(self) -> str | None:
        phone = _first_mapping(self.get("phone_numbers"))
        if phone is not None:
            return phone.get("original_phone_number")
        phones = self.get("phone_numbers")
        if isinstance(phones, list) and phones:
            return str(phones[0])
        return None

    def set_job_title(self, title: str) -> None:
        self["job_title"] = title

    def set_company(self, company: Any) -> None:
        if company is None:
            self["company"] = None
        else:
            self["company"] = [company_reference(company)]

    @classmethod
    def build_values(
        cls,
        first_name: str | None = None,
        last_name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        job_title: str | None = None,
        company: Any = None,
        values: dict[str, Any] | None = None,
        country_code: str = "US",
    ) -> dict[str, Any]:
        """Assemble a values mapping from friendly person fields. Explicit `values` win."""
        values = dict(values or {})
        if (first_name or last_name) and "name" not in values:
            name_data = {}
            if first_name:
                name_data["first_name"] = first_name
            if last_name:
                name_data["last_name"] = last_name
            name_data["full_name"] = " ".join(p for p in (first_name, last_name) if p)
            values["name"] = [name_data]
        if email and "email_addresses" not in values:
            values["email_addresses"] = [email]
        if phone and "phone_numbers" not in values:
            values["phone_numbers"] = [{"original_phone_number": phone, "country_code": country_code}]
        if job_title and "job_title" not in values:
            values["job_title"] = job_title
        if company and "company" not in values:
            values["company"] = [company_reference(company)]
        return values

    @classmethod
    def filter_by_email(cls, value: str) -> dict[str, Any]:
        return {"email_addresses": {"$contains": value}}

    @classmethod
    def filter_by_name(cls, value: str) -> object:
        return USE_SEARCH

    @classmethod
    def find_by_email(cls, client: AttioClient, email: str, **opts: Any) -> "Person | None":
        return cls.list(client, {"filter": cls.filter_by_email(email)}, **opts).first()

    @classmethod
    def find_by_name(cls, client: AttioClient, name: str, **opts: Any) -> "Person | None":
        return cls.search(client, name, **opts).first()
