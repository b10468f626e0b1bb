import re
from typing import Any

from attio.client import AttioClient
from attio.errors import InvalidArgumentError
from attio.resources.typed_records import USE_SEARCH, TypedRecord

_SCHEME = re.compile(r"^https?://")


def normalize_domain(domain: str) -> str:
    return _SCHEME.sub("", domain.strip())


class Company(TypedRecord):
    OBJECT_TYPE = "companies"

    @property
    def name(self) -> Any:
        return self.get("name")

    def set_name(self, name: str) -> None:
        self["name"] = name

    def set_description(self, description: str) -> None:
        self["description"] = description

    def set_employee_count(self, count: int | str) -> None:
        self["employee_count"] = str(count)

    def add_domain(self, domain: str) -> None:
        domain = normalize_domain(domain)
        if domain not in self.domains_list:
            domains = self.get("domains") or []
            if not isinstance(domains, list):
                domains = [domains]
            self["domains"] = [*domains, domain]

    @property
    def domain(self) -> str | None:
        domains = self.domains_list
        return domains[0] if domains else None

    @property
    def domains_list(self) -> list[str]:
        domains = self.get("domains")
        if not domains:
            return []
        if not isinstance(domains, list):
            domains = [domains]
        return [d.get("domain") if isinstance(d, dict) else str(d) for d in domains if d]

    def team_members(self, **opts: Any):
        from attio.resources.people import Person

        params = {"filter": {"company": {"$references": self.id_value}}}
        return Person.list(self._require_client(), params, **opts)

    def add_team_member(self, person: Any, **opts: Any):
        from attio.resources.people import Person

        if isinstance(person, str):
            person = Person.retrieve(self._require_client(), person, **opts)
        elif not isinstance(person, Person):
            raise InvalidArgumentError("Team member must be a Person instance or ID string")
        person.set_company(self)
        return person.save(**opts)

    @classmethod
    def build_values(
        cls,
        name: str,
        domain: str | None = None,
        domains: list[str] | None = None,
        description: str | None = None,
        employee_count: int | str | None = None,
        values: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        values = dict(values or {})
        values["name"] = name
        domain_list = ([domain] if domain else []) + list(domains or [])
        if domain_list:
            values["domains"] = list(dict.fromkeys(normalize_domain(d) for d in domain_list))
        if description:
            values["description"] = description
        if employee_count is not None:
            values["employee_count"] = str(employee_count)
        return values

    @classmethod
    def filter_by_domain(cls, value: str) -> dict[str, Any]:
        return {"domains": {"$contains": normalize_domain(value)}}

    @classmethod
    def filter_by_name(cls, value: str) -> object:
        return USE_SEARCH

    @classmethod
    def find_by_domain(cls, client: AttioClient, domain: str, **opts: Any) -> "Company | None":
        return cls.list(client, {"filter": cls.filter_by_domain(domain)}, **opts).first()

    @classmethod
    def find_by_name(cls, client: AttioClient, name: str, **opts: Any) -> "Company | None":
        return cls.search(client, name, **opts).first()

    @classmethod
    def find_by_size(cls, client: AttioClient, min_count: int, max_count: int | None = None, **opts: Any):
        bounds = {"$gte": str(min_count)}
        if max_count is not None:
            bounds["$lte"] = str(max_count)
        return cls.list(client, {"filter": {"employee_count": bounds}}, **opts)
