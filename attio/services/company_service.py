from collections.abc import Mapping
from typing import Any

from attio.client import AttioClient
from attio.resources.list_object import ListObject
from attio.resources.records import Record
from attio.services.base_service import BaseService


def normalize_domain(domain: str | None) -> str | None:
    """"https://www.Acme.com/about" -> "acme.com"."""
    if not domain:
        return None
    normalized = domain.strip().lower()
    for scheme in ("https://", "http://"):
        normalized = normalized.removeprefix(scheme)
    normalized = normalized.removeprefix("www.")
    return normalized.split("/", 1)[0]


class CompanyService(BaseService):
    def __init__(self, client: AttioClient):
        super().__init__(client, "companies")

    def find_by_name(self, name: str) -> Record | None:
        return self.search_by_attribute("name", name).first()

    def find_by_domain(self, domain: str) -> Record | None:
        return self.search_by_attribute("domains", normalize_domain(domain)).first()

    def find_or_create_by_name(self, name: str, defaults: Mapping[str, Any] | None = None) -> Record:
        return self.find_or_create_by("name", name, defaults)

    def find_or_create_by_domain(self, domain: str, defaults: Mapping[str, Any] | None = None) -> Record:
        existing = self.find_by_domain(domain)
        if existing is not None:
            return existing
        return self.create_record({**(defaults or {}), "domains": [normalize_domain(domain)]})

    def create_company(
        self,
        name: str,
        domain: str | None = None,
        industry: str | None = None,
        size: str | None = None,
        location: str | None = None,
        **attributes: Any,
    ) -> Record:
        values: dict[str, Any] = {"name": name}
        if domain:
            values["domains"] = [normalize_domain(domain)]
        if industry:
            values["industry"] = industry
        if size:
            values["company_size"] = size
        if location:
            values["location"] = location
        values.update(attributes)
        return self.create_record(values)

    def add_domains(self, company_id: str, domains: list[str]) -> Record:
        """Append domains to a company, keeping existing ones and dropping duplicates."""
        company = Record.retrieve(self.client, company_id, object=self.object_slug)
        existing = company.get("domains") or []
        if not isinstance(existing, list):
            existing = [existing]
        all_domains = [d.get("domain") if isinstance(d, Mapping) else d for d in existing]
        for domain in domains:
            normalized = normalize_domain(domain)
            if normalized and normalized not in all_domains:
                all_domains.append(normalized)
        company["domains"] = [d for d in all_domains if d]
        return company.save()

    def by_size(self, min_size: int | None = None, max_size: int | None = None, limit: int = 50) -> ListObject:
        size_filter: dict[str, Any] = {}
        if min_size is not None:
            size_filter["$gte"] = min_size
        if max_size is not None:
            size_filter["$lte"] = max_size
        return self.search(filters={"company_size": size_filter} if size_filter else None, limit=limit)
