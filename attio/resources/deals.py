from typing import Any

from attio.client import AttioClient
from attio.resources.typed_records import TypedRecord

WON_MARKER = "won"
LOST_STAGE = "lost"


class Deal(TypedRecord):
    """A deal record. Attio calls the pipeline position "stage"; "status" is accepted as an alias."""

    OBJECT_TYPE = "deals"

    @property
    def name(self) -> Any:
        return self.get("name")

    @property
    def value(self) -> Any:
        return self.get("value")

    @property
    def stage(self) -> Any:
        return self.get("stage")

    status = stage

    @property
    def owner(self) -> Any:
        return self.get("owner")

    @property
    def company(self) -> Any:
        return self.get("company")

    def _stage_title(self) -> str | None:
        stage = self.stage
        if isinstance(stage, list):
            stage = stage[0] if stage else None
        if isinstance(stage, dict):
            status = stage.get("status")
            return status.get("title") if isinstance(status, dict) else stage.get("title")
        return stage

    @property
    def is_open(self) -> bool:
        title = self._stage_title()
        return bool(title) and WON_MARKER not in title.lower() and title.lower() != LOST_STAGE

    @property
    def is_won(self) -> bool:
        title = self._stage_title()
        return bool(title) and WON_MARKER in title.lower()

    @property
    def is_lost(self) -> bool:
        title = self._stage_title()
        return bool(title) and title.lower() == LOST_STAGE

    def update_stage(self, new_stage: str, **opts: Any) -> "Deal":
        self["stage"] = new_stage
        return self.save(**opts)

    update_status = update_stage

    def update_value(self, new_value: Any, **opts: Any) -> "Deal":
        self["value"] = new_value
        return self.save(**opts)

    def company_record(self, **opts: Any):
        from attio.resources.companies import Company

        company = self.company
        if isinstance(company, list):
            company = company[0] if company else None
        company_id = company.get("target_record_id") if isinstance(company, dict) else company
        if not company_id:
            return None
        return Company.retrieve(self._require_client(), company_id, **opts)

    def owner_record(self, **opts: Any):
        from attio.resources.workspace_members import WorkspaceMember

        owner = self.owner
        if isinstance(owner, list):
            owner = owner[0] if owner else None
        if isinstance(owner, dict):
            owner = owner.get("referenced_actor_id") or owner.get("target_record_id")
        if not owner:
            return None
        return WorkspaceMember.retrieve(self._require_client(), owner, **opts)

    @classmethod
    def build_values(
        cls,
        name: str,
        value: Any = None,
        stage: str | None = None,
        status: str | None = None,
        owner: str | None = None,
        associated_people: list[str] | None = None,
        associated_company: str | list[str] | None = None,
        values: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        values = dict(values or {})
        values.setdefault("name", name)
        if value is not None:
            values.setdefault("value", value)
        if stage or status:
            values.setdefault("stage", stage or status)
        if owner:
            values.setdefault("owner", owner)
        if associated_people:
            values.setdefault(
                "associated_people",
                [{"target_object": "people", "email_addresses": [{"email_address": e}]} for e in associated_people],
            )
        if associated_company:
            domains = associated_company if isinstance(associated_company, list) else [associated_company]
            values.setdefault(
                "associated_company",
                {"target_object": "companies", "domains": [{"domain": d} for d in domains]},
            )
        return values

    @classmethod
    def filter_by_status(cls, value: str) -> dict[str, Any]:
        return {"stage": value}

    @classmethod
    def find_by_value_range(cls, client: AttioClient, min_value: Any = None, max_value: Any = None, **opts: Any):
        filters = []
        if min_value is not None:
            filters.append({"value": {"$gte": min_value}})
        if max_value is not None:
            filters.append({"value": {"$lte": max_value}})

        if len(filters) == 1:
            filter_ = filters[0]
        elif filters:
            filter_ = {"$and": filters}
        else:
            filter_ = {}
        return cls.list(client, {"filter": filter_} if filter_ else None, **opts)

    @classmethod
    def find_by_owner(cls, client: AttioClient, owner_id: str, **opts: Any):
        params = {"filter": {"owner": {"target_object": "workspace_members", "target_record_id": owner_id}}}
        return cls.list(client, params, **opts)
