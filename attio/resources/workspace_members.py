from typing import Any

from attio.client import AttioClient
from attio.errors import NotFoundError
from attio.resources.base import APIResource
from attio.resources.operations import Listable, Retrievable


class WorkspaceMember(Retrievable, Listable, APIResource):
    """A member of the workspace. Read-only through the API."""

    RESOURCE_PATH = "workspace_members"
    ID_KEY = "workspace_member_id"

    @property
    def email(self) -> str | None:
        return self.get("email_address")

    @property
    def first_name(self) -> str | None:
        return self.get("first_name")

    @property
    def last_name(self) -> str | None:
        return self.get("last_name")

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    @property
    def access_level(self) -> str | None:
        return self.get("access_level")

    @property
    def is_admin(self) -> bool:
        return self.access_level == "admin"

    @classmethod
    def find_by_email(cls, client: AttioClient, email: str, **opts: Any) -> "WorkspaceMember":
        for member in cls.each(client, **opts):
            if member.email == email:
                return member
        raise NotFoundError(f"Workspace member with email '{email}' not found")
